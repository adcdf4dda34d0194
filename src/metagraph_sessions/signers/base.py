"""External-chain signer interface."""

from typing import Protocol


class ExternalSigner(Protocol):
    """Signs the serializer's payload with an external-chain wallet key.

    Implementations never touch the network or disk; a malformed key or a
    rejected input surfaces as ``SigningError``.
    """

    chain: str
    command_tag: str

    async def sign(self, payload: bytes, private_key: str) -> str:
        ...

    def address_of(self, private_key: str) -> str:
        ...

    def verify(self, payload: bytes, signature: str, address: str) -> bool:
        ...

    def new_private_key(self) -> str:
        ...
