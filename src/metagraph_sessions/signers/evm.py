"""Ethereum personal-message signer (secp256k1, EIP-191)."""

from eth_account import Account
from eth_account.messages import encode_defunct
from eth_account.signers.local import LocalAccount

from metagraph_sessions.constants import ETHEREUM
from metagraph_sessions.errors import SigningError
from metagraph_sessions.models.commands import CreateSession


class EthPersonalSigner:
    """Signs like ``wallet.signMessage(bytes)``: the payload is wrapped in the
    ``\\x19Ethereum Signed Message:\\n<len>`` prefix before hashing. Returns a
    0x-prefixed 65-byte hex signature.
    """

    chain = ETHEREUM
    command_tag = CreateSession.tag

    @staticmethod
    def _account(private_key: str) -> LocalAccount:
        try:
            return Account.from_key(private_key)
        except Exception as e:
            raise SigningError(f"Invalid Ethereum private key ({type(e).__name__})") from e

    async def sign(self, payload: bytes, private_key: str) -> str:
        account = self._account(private_key)
        try:
            signed = account.sign_message(encode_defunct(primitive=payload))
        except Exception as e:
            raise SigningError(f"Ethereum signing failed: {e}") from e
        return "0x" + bytes(signed.signature).hex()

    def address_of(self, private_key: str) -> str:
        return self._account(private_key).address

    def verify(self, payload: bytes, signature: str, address: str) -> bool:
        try:
            recovered = Account.recover_message(encode_defunct(primitive=payload), signature=signature)
        except Exception:
            return False
        return recovered.lower() == address.lower()

    def new_private_key(self) -> str:
        return "0x" + bytes(Account.create().key).hex()
