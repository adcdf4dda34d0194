"""
Session handle models.
"""

from typing import Any

from pydantic import BaseModel

from metagraph_sessions.errors import SessionError


class SessionHandle(BaseModel):
    id: str

    @classmethod
    def from_response(cls, response: Any) -> "SessionHandle":
        """The endpoint reports the new session's identifier under ``hash``."""
        session_id: Any = response.get("hash") if isinstance(response, dict) else None
        if not isinstance(session_id, str) or not session_id:
            raise SessionError(
                "Create response did not include a session id",
                code="missing_session_id",
                details={"response": response},
            )
        return cls(id=session_id)
