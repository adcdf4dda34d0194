"""
Validator account — secp256k1 key system used for envelope proofs.

Mirrors the DAG keystore: uncompressed ``04``-prefixed public keys, DAG
addresses derived from the PKCS-wrapped key, and "data sign" signatures
(SHA-512 of the prefixed payload, ECDSA, DER hex).
"""

import hashlib
import logging
from dataclasses import dataclass
from typing import Optional

import base58
from coincurve import PrivateKey, PublicKey

from metagraph_sessions.constants import (
    DAG_ADDRESS_PREFIX,
    DATA_SIGN_PREFIX,
    PKCS_PUBLIC_KEY_PREFIX,
    UNCOMPRESSED_KEY_PREFIX,
)
from metagraph_sessions.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NetworkConfig:
    network_version: str
    l0_url: Optional[str] = None
    testnet: bool = False


def _private_key(private_key: str) -> PrivateKey:
    hex_key = private_key[2:] if private_key.startswith("0x") else private_key
    secret = bytes.fromhex(hex_key)
    if len(secret) != 32:
        raise ValueError(f"secp256k1 private key must be 32 bytes, got {len(secret)}")
    return PrivateKey(secret)


def public_key_from_private(private_key: str) -> str:
    """Uncompressed public key hex, ``04`` prefix included (130 chars)."""
    return _private_key(private_key).public_key.format(compressed=False).hex()


def dag_address_from_public_key(public_key: str) -> str:
    if len(public_key) == 128:
        public_key = UNCOMPRESSED_KEY_PREFIX + public_key
    digest = hashlib.sha256(bytes.fromhex(PKCS_PUBLIC_KEY_PREFIX + public_key)).digest()
    tail = base58.b58encode(digest).decode("ascii")[-36:]
    parity = sum(int(c) for c in tail if c.isdigit()) % 9
    return f"{DAG_ADDRESS_PREFIX}{parity}{tail}"


def data_sign_digest(payload: str) -> bytes:
    message = f"{DATA_SIGN_PREFIX}{len(payload)}\n{payload}"
    # ECDSA over secp256k1 keeps the leftmost 256 bits of the SHA-512 digest.
    return hashlib.sha512(message.encode("utf-8")).digest()[:32]


def sign_data(private_key: str, payload: str) -> str:
    return _private_key(private_key).sign(data_sign_digest(payload), hasher=None).hex()


def verify_data_signature(public_key: str, payload: str, signature: str) -> bool:
    if len(public_key) == 128:
        public_key = UNCOMPRESSED_KEY_PREFIX + public_key
    try:
        return PublicKey(bytes.fromhex(public_key)).verify(
            bytes.fromhex(signature), data_sign_digest(payload), hasher=None,
        )
    except ValueError:
        return False


class ValidatorAccount:
    """Long-lived validator identity. Authenticated once, then read-only."""

    def __init__(self) -> None:
        self._public_key: Optional[str] = None
        self.network: Optional[NetworkConfig] = None

    @classmethod
    def from_private_key(cls, private_key: str) -> "ValidatorAccount":
        account = cls()
        account.login_private_key(private_key)
        return account

    def login_private_key(self, private_key: str) -> None:
        try:
            self._public_key = public_key_from_private(private_key)
        except ValueError as e:
            raise ConfigurationError(f"Validator private key is invalid: {e}") from e

    def connect(self, network: NetworkConfig) -> None:
        self.network = network
        logger.debug(
            "Validator account bound to network %s (l0=%s, testnet=%s)",
            network.network_version, network.l0_url, network.testnet,
        )

    @property
    def authenticated(self) -> bool:
        return self._public_key is not None

    @property
    def public_key(self) -> Optional[str]:
        return self._public_key

    @property
    def address(self) -> Optional[str]:
        if self._public_key is None:
            return None
        return dag_address_from_public_key(self._public_key)

    async def sign(self, private_key: str, payload: str) -> str:
        if not self.authenticated:
            raise RuntimeError("Validator account is not logged in")
        return sign_data(private_key, payload)
