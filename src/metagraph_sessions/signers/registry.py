"""Signer selection by configured chain."""

from metagraph_sessions.constants import ETHEREUM, SOLANA
from metagraph_sessions.errors import ConfigurationError
from metagraph_sessions.signers.base import ExternalSigner
from metagraph_sessions.signers.evm import EthPersonalSigner
from metagraph_sessions.signers.svm import SolanaDetachedSigner

_SIGNERS: dict[str, type] = {
    ETHEREUM: EthPersonalSigner,
    SOLANA: SolanaDetachedSigner,
}


def get_signer(chain: str) -> ExternalSigner:
    try:
        return _SIGNERS[chain.lower()]()
    except KeyError:
        raise ConfigurationError(
            f"Unsupported external chain: {chain}",
            details={"supported": sorted(_SIGNERS)},
        )
