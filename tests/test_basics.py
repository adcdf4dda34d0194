"""Basic unit tests for metagraph-sessions package."""

from metagraph_sessions import (
    AsyncMetagraphSessions,
    MetagraphSessions,
    MetagraphError,
    ConfigurationError,
    SigningError,
    ProofGenerationError,
    SubmissionError,
    SubmissionKind,
    SessionError,
    __version__,
)
from metagraph_sessions.constants import SUPPORTED_CHAINS


def test_version():
    assert __version__ == "0.1.0"


def test_public_exports():
    assert MetagraphSessions is not None
    assert AsyncMetagraphSessions is not None


def test_error_hierarchy():
    for cls in (ConfigurationError, SigningError, ProofGenerationError, SubmissionError, SessionError):
        assert issubclass(cls, MetagraphError)


def test_error_attributes():
    err = MetagraphError(code="test_code", message="something broke")
    assert err.code == "test_code"
    assert str(err) == "something broke"
    assert err.details is None
    assert err.stage is None

    err_with_details = SessionError("bad session", details={"id": "123"})
    assert err_with_details.code == "session_error"
    assert err_with_details.details == {"id": "123"}


def test_submission_error_kinds():
    rejected = SubmissionError(SubmissionKind.REJECTED, "session not found", status_code=404, body={"error": "x"})
    assert rejected.code == "submission_rejected"
    assert rejected.details == {"status_code": 404, "body": {"error": "x"}}

    unreachable = SubmissionError(SubmissionKind.UNREACHABLE, "connection refused")
    assert unreachable.code == "submission_unreachable"
    assert unreachable.status_code is None
    assert unreachable.details is None


def test_supported_chains():
    assert SUPPORTED_CHAINS == ("ethereum", "solana")
