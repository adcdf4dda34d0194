"""
metagraph-sessions — signed session commands for metagraph data endpoints.

Builds session commands, signs them with an external-chain wallet
(Ethereum or Solana), adds a validator proof and submits the envelope.
"""

from metagraph_sessions.client import MetagraphSessions, AsyncMetagraphSessions
from metagraph_sessions.config import Settings, load_settings
from metagraph_sessions.lifecycle import SessionLifecycle, SessionState
from metagraph_sessions.sessions import SessionsAPI
from metagraph_sessions.errors import (
    MetagraphError,
    ConfigurationError,
    SigningError,
    ProofGenerationError,
    SubmissionError,
    SubmissionKind,
    SessionError,
)

__version__ = "0.1.0"
__all__ = [
    "MetagraphSessions",
    "AsyncMetagraphSessions",
    "Settings",
    "load_settings",
    "SessionLifecycle",
    "SessionState",
    "SessionsAPI",
    "MetagraphError",
    "ConfigurationError",
    "SigningError",
    "ProofGenerationError",
    "SubmissionError",
    "SubmissionKind",
    "SessionError",
]
