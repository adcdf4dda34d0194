"""External-chain signers."""

import base58
import pytest

from conftest import ETH_ADDRESS, ETH_KEY, SOLANA_KEY, build_settings
from metagraph_sessions.builder import build_create_session
from metagraph_sessions.client import AsyncMetagraphSessions
from metagraph_sessions.errors import ConfigurationError, SigningError
from metagraph_sessions.signers.evm import EthPersonalSigner
from metagraph_sessions.signers.registry import get_signer
from metagraph_sessions.signers.svm import SolanaDetachedSigner

PAYLOAD = b"0xETHDAG_ADDROwner1750"


class TestEthPersonalSigner:
    def test_address(self):
        assert EthPersonalSigner().address_of(ETH_KEY) == ETH_ADDRESS

    @pytest.mark.asyncio
    async def test_sign_and_verify(self):
        signer = EthPersonalSigner()
        signature = await signer.sign(PAYLOAD, ETH_KEY)
        assert signature.startswith("0x")
        assert len(signature) == 2 + 65 * 2
        assert signer.verify(PAYLOAD, signature, ETH_ADDRESS)
        assert not signer.verify(PAYLOAD + b"1", signature, ETH_ADDRESS)

    @pytest.mark.asyncio
    async def test_deterministic(self):
        signer = EthPersonalSigner()
        assert await signer.sign(PAYLOAD, ETH_KEY) == await signer.sign(PAYLOAD, ETH_KEY)

    @pytest.mark.asyncio
    async def test_malformed_key(self):
        with pytest.raises(SigningError):
            await EthPersonalSigner().sign(PAYLOAD, "0xnot-a-key")

    def test_new_private_key(self):
        signer = EthPersonalSigner()
        key = signer.new_private_key()
        assert signer.address_of(key).startswith("0x")


class TestSolanaDetachedSigner:
    @pytest.mark.asyncio
    async def test_sign_and_verify(self):
        signer = SolanaDetachedSigner()
        address = signer.address_of(SOLANA_KEY)
        signature = await signer.sign(PAYLOAD, SOLANA_KEY)
        assert len(base58.b58decode(signature)) == 64
        assert signer.verify(PAYLOAD, signature, address)
        assert not signer.verify(b"other", signature, address)

    @pytest.mark.asyncio
    async def test_wrong_length(self):
        with pytest.raises(SigningError):
            await SolanaDetachedSigner().sign(PAYLOAD, base58.b58encode(b"\x01" * 32).decode())

    @pytest.mark.asyncio
    async def test_not_base58(self):
        with pytest.raises(SigningError):
            await SolanaDetachedSigner().sign(PAYLOAD, "0OIl")

    @pytest.mark.asyncio
    async def test_mismatched_public_half(self):
        raw = base58.b58decode(SOLANA_KEY)
        tampered = base58.b58encode(raw[:32] + bytes(32)).decode()
        with pytest.raises(SigningError):
            await SolanaDetachedSigner().sign(PAYLOAD, tampered)

    def test_verify_garbage_is_false(self):
        assert not SolanaDetachedSigner().verify(PAYLOAD, "garbage", "garbage")


def test_registry():
    assert isinstance(get_signer("ethereum"), EthPersonalSigner)
    assert isinstance(get_signer("SOLANA"), SolanaDetachedSigner)
    with pytest.raises(ConfigurationError):
        get_signer("bitcoin")


@pytest.mark.asyncio
async def test_malformed_key_fails_before_any_request(endpoint):
    client = AsyncMetagraphSessions(
        build_settings(), external_private_key="0xdeadbeef", transport=endpoint.transport(),
    )
    async with client:
        with pytest.raises(SigningError):
            await client.sessions.create("Owner1", 750)
    assert endpoint.requests == []


@pytest.mark.asyncio
async def test_signer_for_wrong_command_is_rejected(make_client):
    async with make_client(external_chain="solana") as client:
        with pytest.raises(ConfigurationError):
            await client.sessions.sign_external(build_create_session("DAG", "0xA", "o", 1))
