"""
Session lifecycle driver: create → wait → extend → wait → close.

Linear state machine, in memory only. A failing step halts the run; steps
already accepted by the validator network are left as they are.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Optional

from metagraph_sessions.constants import DEFAULT_LIFECYCLE_DELAY_SECONDS
from metagraph_sessions.errors import MetagraphError, SessionError
from metagraph_sessions.models.session import SessionHandle
from metagraph_sessions.sessions import SessionsAPI


class SessionState(str, Enum):
    NOT_STARTED = "not_started"
    CREATED = "created"
    EXTENDED = "extended"
    CLOSED = "closed"


class SessionLifecycle:
    def __init__(
        self,
        sessions: SessionsAPI,
        delay_seconds: float = DEFAULT_LIFECYCLE_DELAY_SECONDS,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        logger: Optional[logging.Logger] = None,
    ):
        self._sessions = sessions
        self._delay_seconds = delay_seconds
        self._sleep = sleep
        self._logger = logger or logging.getLogger(__name__)
        self.state = SessionState.NOT_STARTED
        self.handle: Optional[SessionHandle] = None
        self.extensions = 0
        self.responses: list[tuple[str, Any]] = []

    def _require(self, *allowed: SessionState) -> SessionHandle:
        if self.state not in allowed or (self.state is not SessionState.NOT_STARTED and self.handle is None):
            raise SessionError(
                f"Cannot move from {self.state.value}",
                code="invalid_transition",
                details={"allowed_from": [s.value for s in allowed]},
            )
        return self.handle  # type: ignore[return-value]

    async def _stage(self, stage: str, operation: Awaitable[Any]) -> Any:
        try:
            response = await operation
        except MetagraphError as e:
            if e.stage is None:
                e.stage = stage
            self._logger.error("Session %s failed (%s): %s", stage, e.code, e.message)
            raise
        self.responses.append((stage, response))
        return response

    async def _wait(self) -> None:
        if self._delay_seconds > 0:
            self._logger.info("Waiting %.0fs for the validator network to settle", self._delay_seconds)
            await self._sleep(self._delay_seconds)

    async def create(self, access_obj: str, end_snapshot_ordinal: int) -> SessionHandle:
        self._require(SessionState.NOT_STARTED)
        response = await self._stage("create", self._sessions.create(access_obj, end_snapshot_ordinal))
        try:
            self.handle = SessionHandle.from_response(response)
        except SessionError as e:
            e.stage = "create"
            raise
        self.state = SessionState.CREATED
        self._logger.info("Session created: %s", self.handle.id)
        return self.handle

    async def extend(self, end_snapshot_ordinal: int) -> Any:
        handle = self._require(SessionState.CREATED, SessionState.EXTENDED)
        await self._wait()
        response = await self._stage("extend", self._sessions.extend(handle.id, end_snapshot_ordinal))
        self.state = SessionState.EXTENDED
        self.extensions += 1
        return response

    async def close(self) -> Any:
        handle = self._require(SessionState.CREATED, SessionState.EXTENDED)
        await self._wait()
        response = await self._stage("close", self._sessions.close(handle.id))
        self.state = SessionState.CLOSED
        self._logger.info("Session closed: %s", handle.id)
        return response

    async def run(self, access_obj: str, end_snapshot_ordinal: int, extended_snapshot_ordinal: int) -> SessionHandle:
        """Drive one session through its whole lifecycle."""
        handle = await self.create(access_obj, end_snapshot_ordinal)
        await self.extend(extended_snapshot_ordinal)
        await self.close()
        return handle
