"""
Signature embedding.
"""

from typing import TypeVar

from metagraph_sessions.errors import SigningError
from metagraph_sessions.models.commands import CommandBase

C = TypeVar("C", bound=CommandBase)


def embed_signature(command: C, signature: str) -> C:
    """Return a copy of ``command`` whose signature field holds ``signature``.

    Every other field is carried over untouched. Embedding again replaces the
    previous signature; signatures never accumulate.
    """
    field = command.signature_field
    if field is None:
        raise SigningError(f"{command.tag} does not carry an external signature", code="no_signature_field")
    return command.model_copy(update={field: signature})
