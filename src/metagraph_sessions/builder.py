"""
Canonical payload builder.

Each builder returns a fresh command with its signature placeholder set to
an empty string. Pure: no I/O, no validation beyond the model's types and the chain name.
"""

from typing import Any, Union

from metagraph_sessions.constants import ETHEREUM, SOLANA
from metagraph_sessions.errors import ConfigurationError
from metagraph_sessions.models.commands import (
    CloseSession,
    CreateNotarizedSession,
    CreateSession,
    CreateSessionWithId,
    CreateSolSession,
    ExtendSession,
)


def build_create_session(
    access_provider: str, access_id: str, access_obj: str, end_snapshot_ordinal: int,
) -> CreateSession:
    return CreateSession(
        access_provider=access_provider,
        access_id=access_id,
        access_obj=access_obj,
        end_snapshot_ordinal=end_snapshot_ordinal,
        signature="",
    )


def build_create_sol_session(
    access_provider: str, solana_address: str, access_obj: str, end_snapshot_ordinal: int,
) -> CreateSolSession:
    return CreateSolSession(
        access_provider=access_provider,
        solana_address=solana_address,
        access_obj=access_obj,
        end_snapshot_ordinal=end_snapshot_ordinal,
        solana_signature="",
    )


def build_create_command(
    chain: str, access_provider: str, access_id: str, access_obj: str, end_snapshot_ordinal: int,
) -> Union[CreateSession, CreateSolSession]:
    """Pick the create variant whose signature scheme matches ``chain``."""
    if chain == SOLANA:
        return build_create_sol_session(access_provider, access_id, access_obj, end_snapshot_ordinal)
    if chain == ETHEREUM:
        return build_create_session(access_provider, access_id, access_obj, end_snapshot_ordinal)
    raise ConfigurationError(f"Unsupported external chain: {chain}")


def build_create_notarized_session(
    access_provider: str,
    access_id: str,
    access_obj: str,
    end_snapshot_ordinal: int,
    metadata: dict[str, Any],
) -> CreateNotarizedSession:
    return CreateNotarizedSession(
        access_provider=access_provider,
        access_id=access_id,
        access_obj=access_obj,
        end_snapshot_ordinal=end_snapshot_ordinal,
        metadata=dict(metadata),
    )


def build_create_session_with_id(creator: str, session_id: str, end_snapshot_ordinal: int) -> CreateSessionWithId:
    return CreateSessionWithId(creator=creator, id=session_id, end_snapshot_ordinal=end_snapshot_ordinal)


def build_extend_session(session_id: str, access_provider: str, end_snapshot_ordinal: int) -> ExtendSession:
    return ExtendSession(id=session_id, access_provider=access_provider, end_snapshot_ordinal=end_snapshot_ordinal)


def build_close_session(session_id: str, access_provider: str) -> CloseSession:
    return CloseSession(id=session_id, access_provider=access_provider)
