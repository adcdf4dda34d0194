"""
Validator proof generation.

The proof covers the entire finalized command: its stable JSON, base64
encoded, data-signed by the validator key system.
"""

import base64
from typing import Optional, Protocol

from metagraph_sessions.constants import UNCOMPRESSED_KEY_PREFIX
from metagraph_sessions.errors import ProofGenerationError
from metagraph_sessions.models.commands import Command
from metagraph_sessions.models.envelope import Proof
from metagraph_sessions.serializer import stable_json


class ValidatorKeySystem(Protocol):
    @property
    def public_key(self) -> Optional[str]:
        ...

    async def sign(self, private_key: str, payload: str) -> str:
        ...


def normalize_public_key(public_key: str) -> str:
    """Proof ``id``: the uncompressed public key without its ``04`` prefix.

    A 130-char ``04``-prefixed key loses the prefix; any other key is
    prefixed and then trimmed by one byte, leaving it unchanged. A 130-char
    key without the prefix is not an uncompressed point and is rejected.
    """
    if len(public_key) == 130:
        if not public_key.startswith(UNCOMPRESSED_KEY_PREFIX):
            raise ProofGenerationError("130-char public key must start with 04")
        uncompressed = public_key
    else:
        uncompressed = UNCOMPRESSED_KEY_PREFIX + public_key
    return uncompressed[2:]


def encode_for_proof(command: Command) -> str:
    return base64.b64encode(stable_json(command).encode("utf-8")).decode("ascii")


async def generate_proof(command: Command, private_key: str, account: ValidatorKeySystem) -> Proof:
    public_key = account.public_key
    if not public_key:
        raise ProofGenerationError("Validator account is not authenticated")
    proof_id = normalize_public_key(public_key)
    payload = encode_for_proof(command)
    try:
        signature = await account.sign(private_key, payload)
    except Exception as e:
        raise ProofGenerationError(f"Validator signing failed: {e}") from e
    return Proof(id=proof_id, signature=signature)
