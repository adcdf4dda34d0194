"""
Sessions API — runs the signing pipeline for each session command.

build → serialize → external sign → embed → validator proof → submit.
Every step awaits the previous one; nothing is retried.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from metagraph_sessions.builder import (
    build_close_session,
    build_create_command,
    build_create_notarized_session,
    build_create_session_with_id,
    build_extend_session,
)
from metagraph_sessions.embedder import embed_signature
from metagraph_sessions.errors import ConfigurationError
from metagraph_sessions.models.commands import Command
from metagraph_sessions.serializer import signable_payload
from metagraph_sessions.signers.base import ExternalSigner
from metagraph_sessions.submitter import TransactionSubmitter
from metagraph_sessions.validator.proof import ValidatorKeySystem, generate_proof


class SessionsAPI:
    def __init__(
        self,
        submitter: TransactionSubmitter,
        account: ValidatorKeySystem,
        validator_private_key: str,
        signer: Optional[ExternalSigner] = None,
        external_private_key: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._submitter = submitter
        self._account = account
        self._validator_key = validator_private_key
        self._signer = signer
        self._external_key = external_private_key
        self._logger = logger or logging.getLogger(__name__)

    @property
    def access_provider(self) -> str:
        """DAG address of the validator account; owns every command sent."""
        address = getattr(self._account, "address", None)
        if not address:
            raise ConfigurationError("Validator account has no address. Log in with WALLET_PRIVATE_KEY first.")
        return address

    @property
    def external_address(self) -> str:
        signer, key = self._require_external_wallet()
        return signer.address_of(key)

    def _require_external_wallet(self) -> tuple[ExternalSigner, str]:
        if self._signer is None or not self._external_key:
            raise ConfigurationError("No external wallet configured for session creation")
        return self._signer, self._external_key

    async def sign_external(self, command: Command) -> Command:
        """Sign the command's fixed field subset and embed the signature."""
        signer, key = self._require_external_wallet()
        if command.tag != signer.command_tag:
            raise ConfigurationError(f"{signer.chain} signer cannot sign {command.tag}")
        payload = signable_payload(command)
        self._logger.debug("Data to sign with %s wallet (hex): %s", signer.chain, payload.hex())
        signature = await signer.sign(payload, key)
        return embed_signature(command, signature)

    async def submit(self, command: Command) -> Any:
        """Attach the validator proof to a finalized command and send it."""
        proof = await generate_proof(command, self._validator_key, self._account)
        return await self._submitter.submit(command, proof)

    async def create(self, access_obj: str, end_snapshot_ordinal: int) -> Any:
        """Create a session owned by the configured external wallet.

        Returns the endpoint's response; the new session id is under ``hash``.
        """
        signer, _ = self._require_external_wallet()
        access_id = self.external_address
        command = build_create_command(
            signer.chain, self.access_provider, access_id, access_obj, end_snapshot_ordinal,
        )
        self._logger.info("Creating %s for %s (ends at ordinal %d)", command.tag, access_id, end_snapshot_ordinal)
        return await self.submit(await self.sign_external(command))

    async def create_notarized(
        self, access_id: str, access_obj: str, end_snapshot_ordinal: int, metadata: dict[str, Any],
    ) -> Any:
        """Create a session backed only by the validator proof."""
        command = build_create_notarized_session(
            self.access_provider, access_id, access_obj, end_snapshot_ordinal, metadata,
        )
        self._logger.info("Creating %s for %s", command.tag, access_id)
        return await self.submit(command)

    async def create_with_id(self, creator: str, session_id: str, end_snapshot_ordinal: int) -> Any:
        """Create a session under a chosen id, backed only by the validator proof."""
        command = build_create_session_with_id(creator, session_id, end_snapshot_ordinal)
        self._logger.info("Creating session %s for %s (ends at ordinal %d)", session_id, creator, end_snapshot_ordinal)
        return await self.submit(command)

    async def extend(self, session_id: str, end_snapshot_ordinal: int) -> Any:
        command = build_extend_session(session_id, self.access_provider, end_snapshot_ordinal)
        self._logger.info("Extending session %s to ordinal %d", session_id, end_snapshot_ordinal)
        return await self.submit(command)

    async def close(self, session_id: str) -> Any:
        command = build_close_session(session_id, self.access_provider)
        self._logger.info("Closing session %s", session_id)
        return await self.submit(command)
