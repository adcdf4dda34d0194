"""Settings, built once at process start from the environment."""

import logging
from typing import Optional

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from metagraph_sessions.constants import (
    DEFAULT_ACCESS_OBJ,
    DEFAULT_LIFECYCLE_DELAY_SECONDS,
    DEFAULT_TIMEOUT_SECONDS,
    ETHEREUM,
    SOLANA,
    SUPPORTED_CHAINS,
)
from metagraph_sessions.errors import ConfigurationError
from metagraph_sessions.validator.account import NetworkConfig


class Settings(BaseSettings):
    """Settings loaded from environment variables and an optional ``.env`` file."""

    # Validator network
    wallet_private_key: str
    metagraph_l1_data_url: str
    global_l0_url: Optional[str] = None
    network_version: str = "2.0"
    testnet: bool = False

    # External wallet
    external_chain: str = ETHEREUM
    eth_private_key: Optional[str] = None
    solana_private_key: Optional[str] = None

    # Session parameters
    access_obj: str = DEFAULT_ACCESS_OBJ
    end_snapshot_ordinal: int = 750
    extended_snapshot_ordinal: int = 1500
    lifecycle_delay_seconds: float = DEFAULT_LIFECYCLE_DELAY_SECONDS

    # Validator-notarized create under a chosen id
    creator: Optional[str] = None
    session_id: Optional[str] = None

    request_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("wallet_private_key", "metagraph_l1_data_url")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value.strip()

    @field_validator("external_chain")
    @classmethod
    def _known_chain(cls, value: str) -> str:
        chain = value.strip().lower()
        if chain not in SUPPORTED_CHAINS:
            raise ValueError(f"must be one of {', '.join(SUPPORTED_CHAINS)}")
        return chain

    @field_validator("request_timeout_seconds")
    @classmethod
    def _finite_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("must be positive")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {value!r}")
        return level

    @property
    def external_private_key(self) -> Optional[str]:
        if self.external_chain == SOLANA:
            return self.solana_private_key or None
        return self.eth_private_key or None

    def network_config(self) -> NetworkConfig:
        return NetworkConfig(
            network_version=self.network_version,
            l0_url=self.global_l0_url,
            testnet=self.testnet,
        )


def load_settings(env_file: Optional[str] = ".env", **overrides: object) -> Settings:
    """Build settings, turning validation failures into ``ConfigurationError``.

    Error details name the offending variables but never echo their values.
    """
    try:
        return Settings(_env_file=env_file, **overrides)  # type: ignore[call-arg]
    except ValidationError as e:
        problems = {
            ".".join(str(part) for part in err["loc"]).upper(): err["msg"]
            for err in e.errors()
        }
        raise ConfigurationError(
            "Invalid or missing settings: " + ", ".join(sorted(problems)),
            details={"errors": problems},
        ) from e
