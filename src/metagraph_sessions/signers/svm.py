"""Solana detached signer (ed25519)."""

import base58
from solders.keypair import Keypair  # type: ignore
from solders.pubkey import Pubkey  # type: ignore
from solders.signature import Signature  # type: ignore

from metagraph_sessions.constants import SOLANA
from metagraph_sessions.errors import SigningError
from metagraph_sessions.models.commands import CreateSolSession

SECRET_KEY_LENGTH = 64


class SolanaDetachedSigner:
    """Signs the raw payload bytes with the wallet's ed25519 secret key.

    Keys are the base58 encoding of the 64-byte secret (seed ‖ public key),
    as exported by Solana wallets. Signatures are base58.
    """

    chain = SOLANA
    command_tag = CreateSolSession.tag

    @staticmethod
    def _keypair(private_key: str) -> Keypair:
        try:
            raw = base58.b58decode(private_key)
        except ValueError as e:
            raise SigningError("Solana secret key is not valid base58") from e
        if len(raw) != SECRET_KEY_LENGTH:
            raise SigningError(f"Solana secret key must be {SECRET_KEY_LENGTH} bytes, got {len(raw)}")
        keypair = Keypair.from_seed(raw[:32])
        if bytes(keypair.pubkey()) != raw[32:]:
            raise SigningError("Solana secret key does not match its embedded public key")
        return keypair

    async def sign(self, payload: bytes, private_key: str) -> str:
        keypair = self._keypair(private_key)
        return str(keypair.sign_message(payload))

    def address_of(self, private_key: str) -> str:
        return str(self._keypair(private_key).pubkey())

    def verify(self, payload: bytes, signature: str, address: str) -> bool:
        try:
            return Signature.from_string(signature).verify(Pubkey.from_string(address), payload)
        except Exception:
            return False

    def new_private_key(self) -> str:
        return str(Keypair())
