"""
Transaction envelope — the exact body POSTed to ``<endpoint>/data``.
"""

from typing import Any

from pydantic import BaseModel

from metagraph_sessions.models.commands import Command, parse_command


class Proof(BaseModel):
    id: str  # uncompressed public key hex, no 04 prefix
    signature: str

    model_config = {"frozen": True}


class TransactionEnvelope(BaseModel):
    value: dict[str, Any]
    proofs: list[Proof]

    @classmethod
    def build(cls, command: Command, proofs: list[Proof]) -> "TransactionEnvelope":
        return cls(value=command.to_wire(), proofs=list(proofs))

    def command(self) -> Command:
        return parse_command(self.value)
