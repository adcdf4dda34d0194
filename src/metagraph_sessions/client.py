"""
AsyncMetagraphSessions / MetagraphSessions — main clients.

Wire settings into the collaborators once: validator account, external-chain
signer, HTTP transport, submitter, sessions pipeline.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

import httpx

from metagraph_sessions.app_logging import LOGGER_NAME
from metagraph_sessions.config import Settings, load_settings
from metagraph_sessions.lifecycle import SessionLifecycle
from metagraph_sessions.sessions import SessionsAPI
from metagraph_sessions.signers.base import ExternalSigner
from metagraph_sessions.signers.registry import get_signer
from metagraph_sessions.submitter import TransactionSubmitter
from metagraph_sessions.transport.http import HttpClient
from metagraph_sessions.validator.account import ValidatorAccount
from metagraph_sessions.validator.proof import ValidatorKeySystem


class AsyncMetagraphSessions:
    """Async client (primary)."""

    def __init__(
        self,
        settings: Settings,
        *,
        account: Optional[ValidatorKeySystem] = None,
        signer: Optional[ExternalSigner] = None,
        external_private_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        logger: Optional[logging.Logger] = None,
    ):
        self.settings = settings
        self._logger = logger or logging.getLogger(LOGGER_NAME)
        self._sleep = sleep

        if account is None:
            validator = ValidatorAccount.from_private_key(settings.wallet_private_key)
            validator.connect(settings.network_config())
            account = validator
        self.account = account
        self.signer = signer or get_signer(settings.external_chain)

        self.http = HttpClient(
            settings.metagraph_l1_data_url, timeout=settings.request_timeout_seconds, transport=transport,
        )
        self.submitter = TransactionSubmitter(self.http, logger=self._logger.getChild("submitter"))
        self.sessions = SessionsAPI(
            self.submitter,
            self.account,
            settings.wallet_private_key,
            signer=self.signer,
            external_private_key=external_private_key or settings.external_private_key,
            logger=self._logger.getChild("sessions"),
        )

    @classmethod
    def from_env(cls, env_file: Optional[str] = ".env", **kwargs: Any) -> "AsyncMetagraphSessions":
        return cls(load_settings(env_file), **kwargs)

    def lifecycle(self) -> SessionLifecycle:
        return SessionLifecycle(
            self.sessions,
            delay_seconds=self.settings.lifecycle_delay_seconds,
            sleep=self._sleep,
            logger=self._logger.getChild("lifecycle"),
        )

    async def run_lifecycle(self) -> SessionLifecycle:
        """Create, extend and close one session using the configured parameters."""
        lifecycle = self.lifecycle()
        await lifecycle.run(
            self.settings.access_obj,
            self.settings.end_snapshot_ordinal,
            self.settings.extended_snapshot_ordinal,
        )
        return lifecycle

    async def aclose(self) -> None:
        await self.http.close()

    async def __aenter__(self) -> "AsyncMetagraphSessions":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()


class MetagraphSessions:
    """Sync wrapper around AsyncMetagraphSessions. Runs the event loop internally."""

    def __init__(self, settings: Settings, **kwargs: Any):
        self._async = AsyncMetagraphSessions(settings, **kwargs)
        self._loop = asyncio.new_event_loop()

    def _run(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    @property
    def sessions(self) -> SessionsAPI:
        return self._async.sessions

    @property
    def settings(self) -> Settings:
        return self._async.settings

    def create(self, access_obj: Optional[str] = None, end_snapshot_ordinal: Optional[int] = None) -> Any:
        return self._run(self._async.sessions.create(
            access_obj or self.settings.access_obj,
            self.settings.end_snapshot_ordinal if end_snapshot_ordinal is None else end_snapshot_ordinal,
        ))

    def create_notarized(
        self, access_id: str, access_obj: str, end_snapshot_ordinal: int, metadata: dict[str, Any],
    ) -> Any:
        return self._run(self._async.sessions.create_notarized(access_id, access_obj, end_snapshot_ordinal, metadata))

    def create_with_id(self, creator: str, session_id: str, end_snapshot_ordinal: int) -> Any:
        return self._run(self._async.sessions.create_with_id(creator, session_id, end_snapshot_ordinal))

    def extend(self, session_id: str, end_snapshot_ordinal: int) -> Any:
        return self._run(self._async.sessions.extend(session_id, end_snapshot_ordinal))

    def close_session(self, session_id: str) -> Any:
        return self._run(self._async.sessions.close(session_id))

    def run_lifecycle(self) -> SessionLifecycle:
        return self._run(self._async.run_lifecycle())

    def close(self) -> None:
        self._run(self._async.aclose())
        self._loop.close()
