"""Shared test fixtures."""

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

import httpx
import pytest
from solders.keypair import Keypair  # type: ignore

from metagraph_sessions.client import AsyncMetagraphSessions
from metagraph_sessions.config import Settings

VALIDATOR_KEY = "11" * 32
ETH_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
ETH_ADDRESS = "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23"
SOLANA_KEY = str(Keypair.from_seed(bytes([7] * 32)))
ENDPOINT = "http://l1.test:9400"


@dataclass
class FakeEndpoint:
    """Records every POSTed envelope and answers per command tag."""

    responses: dict[str, tuple[int, Any]] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)
    error: Optional[Exception] = None

    @property
    def bodies(self) -> list[dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]

    @property
    def tags(self) -> list[str]:
        return [next(iter(b["value"])) for b in self.bodies]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        tag = next(iter(json.loads(request.content)["value"]))
        status, body = self.responses.get(tag, (200, {"hash": f"{tag.lower()}-ok"}))
        return httpx.Response(status, json=body)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def build_settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {
        "wallet_private_key": VALIDATOR_KEY,
        "metagraph_l1_data_url": ENDPOINT,
        "eth_private_key": ETH_KEY,
        "solana_private_key": SOLANA_KEY,
        "external_chain": "ethereum",
        "access_obj": "Owner1",
        "end_snapshot_ordinal": 750,
        "extended_snapshot_ordinal": 1500,
        "lifecycle_delay_seconds": 60,
        "request_timeout_seconds": 5,
        "log_level": "INFO",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)  # type: ignore[call-arg]


@dataclass
class SleepRecorder:
    calls: list[float] = field(default_factory=list)

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def endpoint() -> FakeEndpoint:
    return FakeEndpoint()


@pytest.fixture
def sleep() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def make_client(endpoint: FakeEndpoint, sleep: SleepRecorder) -> Callable[..., AsyncMetagraphSessions]:
    def _make(**overrides: Any) -> AsyncMetagraphSessions:
        return AsyncMetagraphSessions(build_settings(**overrides), transport=endpoint.transport(), sleep=sleep)

    return _make
