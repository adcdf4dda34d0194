"""
Session commands — one model per operation.

The class-level ``tag`` is the wire discriminator: a command travels as
``{tag: {<camelCase fields>}}`` with exactly one tag present.
"""

from typing import Any, ClassVar, Optional, Union

from pydantic import BaseModel, Field


class CommandBase(BaseModel):
    tag: ClassVar[str]
    # Attribute names concatenated (in this order) into the external signing payload.
    signed_fields: ClassVar[tuple[str, ...]] = ()
    # Attribute that carries the external-chain signature, if the command has one.
    signature_field: ClassVar[Optional[str]] = None

    model_config = {"populate_by_name": True, "frozen": True}

    @property
    def external_signature(self) -> Optional[str]:
        if self.signature_field is None:
            return None
        return getattr(self, self.signature_field)

    def to_wire(self) -> dict[str, Any]:
        return {self.tag: self.model_dump(by_alias=True)}


class CreateSession(CommandBase):
    """Create a session owned by an Ethereum address."""

    tag: ClassVar[str] = "CreateSession"
    signed_fields: ClassVar[tuple[str, ...]] = (
        "access_id", "access_provider", "access_obj", "end_snapshot_ordinal",
    )
    signature_field: ClassVar[Optional[str]] = "signature"

    access_provider: str = Field(alias="accessProvider")
    access_id: str = Field(alias="accessId")
    access_obj: str = Field(alias="accessObj")
    end_snapshot_ordinal: int = Field(alias="endSnapshotOrdinal")
    signature: str = Field(default="", alias="hash")


class CreateSolSession(CommandBase):
    """Create a session owned by a Solana address."""

    tag: ClassVar[str] = "CreateSolSession"
    signed_fields: ClassVar[tuple[str, ...]] = (
        "solana_address", "access_provider", "access_obj", "end_snapshot_ordinal",
    )
    signature_field: ClassVar[Optional[str]] = "solana_signature"

    access_provider: str = Field(alias="accessProvider")
    solana_address: str = Field(alias="solanaAddress")
    access_obj: str = Field(alias="accessObj")
    end_snapshot_ordinal: int = Field(alias="endSnapshotOrdinal")
    solana_signature: str = Field(default="", alias="solanaSignature")


class CreateNotarizedSession(CommandBase):
    """Create a session vouched for by the validator proof alone."""

    tag: ClassVar[str] = "CreateNotarizedSession"
    signed_fields: ClassVar[tuple[str, ...]] = (
        "access_id", "access_provider", "access_obj", "end_snapshot_ordinal",
    )

    access_provider: str = Field(alias="accessProvider")
    access_id: str = Field(alias="accessId")
    access_obj: str = Field(alias="accessObj")
    end_snapshot_ordinal: int = Field(alias="endSnapshotOrdinal")
    metadata: dict[str, Any] = Field(default_factory=dict)


class CreateSessionWithId(CommandBase):
    """Create a session under a caller-chosen id, vouched for by the validator proof.

    Shares the ``CreateSession`` wire tag with the Ethereum variant; the two
    are told apart by their fields.
    """

    tag: ClassVar[str] = "CreateSession"
    signed_fields: ClassVar[tuple[str, ...]] = ("creator", "id", "end_snapshot_ordinal")

    creator: str
    id: str
    end_snapshot_ordinal: int = Field(alias="endSnapshotOrdinal")


class ExtendSession(CommandBase):
    tag: ClassVar[str] = "ExtendSession"
    signed_fields: ClassVar[tuple[str, ...]] = ("id", "access_provider", "end_snapshot_ordinal")

    id: str
    access_provider: str = Field(alias="accessProvider")
    end_snapshot_ordinal: int = Field(alias="endSnapshotOrdinal")


class CloseSession(CommandBase):
    tag: ClassVar[str] = "CloseSession"
    signed_fields: ClassVar[tuple[str, ...]] = ("id", "access_provider")

    id: str
    access_provider: str = Field(alias="accessProvider")


Command = Union[
    CreateSession, CreateSolSession, CreateNotarizedSession, CreateSessionWithId, ExtendSession, CloseSession,
]

COMMAND_TYPES: dict[str, type[CommandBase]] = {
    cls.tag: cls
    for cls in (CreateSession, CreateSolSession, CreateNotarizedSession, ExtendSession, CloseSession)
}


def parse_command(wire: dict[str, Any]) -> Command:
    """Decode ``{tag: {...}}`` back into its command model."""
    if not isinstance(wire, dict) or len(wire) != 1:
        raise ValueError("Command must have exactly one variant tag")
    tag, fields = next(iter(wire.items()))
    cls = COMMAND_TYPES.get(tag)
    if cls is CreateSession and isinstance(fields, dict) and "creator" in fields:
        cls = CreateSessionWithId
    if cls is None:
        raise ValueError(f"Unknown command tag: {tag}")
    return cls.model_validate(fields)  # type: ignore[return-value]
