"""
Error types for the session command pipeline.

Every stage fails fast with one of these; the lifecycle driver records which
stage raised in ``stage`` before re-raising.
"""

from enum import Enum
from typing import Any, Optional


class MetagraphError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details
        self.stage: Optional[str] = None


class ConfigurationError(MetagraphError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("configuration_error", message, details)


class SigningError(MetagraphError):
    def __init__(self, message: str, code: str = "signing_error"):
        super().__init__(code, message)


class ProofGenerationError(MetagraphError):
    def __init__(self, message: str):
        super().__init__("proof_generation_error", message)


class SubmissionKind(str, Enum):
    REJECTED = "rejected"
    UNREACHABLE = "unreachable"


class SubmissionError(MetagraphError):
    """Endpoint refused the envelope (REJECTED) or never answered (UNREACHABLE)."""

    def __init__(
        self,
        kind: SubmissionKind,
        detail: str,
        status_code: Optional[int] = None,
        body: Any = None,
    ):
        super().__init__(
            f"submission_{kind.value}",
            detail,
            {"status_code": status_code, "body": body} if status_code is not None else None,
        )
        self.kind = kind
        self.detail = detail
        self.status_code = status_code
        self.body = body


class SessionError(MetagraphError):
    def __init__(self, message: str, code: str = "session_error", details: Optional[dict[str, Any]] = None):
        super().__init__(code, message, details)
