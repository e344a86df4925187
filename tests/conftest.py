from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import pytest

from polymesh_tvl.clients.base import BaseChainClient
from polymesh_tvl.settings import TvlSettings

ENV_VARS = (
    "RPC_ENDPOINT",
    "POLYMESH_RPC",
    "DEMO_MODE",
    "SILENT_MODE",
    "LOG_LEVEL",
    "TREASURY_ACCOUNT",
    "POLYMESH_TVL_CONFIG",
    "POLYMESH_TVL_DEMO_MODE",
    "POLYMESH_TVL_DECIMALS",
    "DECIMALS",
    "CHAIN_NAME",
    "FALLBACK_PRICE",
)


class FakeChainClient(BaseChainClient):
    """In-memory chain client. Pass an Exception as a value to make that query raise."""

    def __init__(
        self,
        *,
        total_issuance=1000_000000,
        has_staking=True,
        active_era=42,
        eras_total_stake=300_000000,
        free_balance=50_000000,
        disconnect_error: Exception | None = None,
    ):
        self._values = {
            "total_issuance": total_issuance,
            "has_staking": has_staking,
            "active_era": active_era,
            "eras_total_stake": eras_total_stake,
            "free_balance": free_balance,
        }
        self._disconnect_error = disconnect_error
        self.calls: list[tuple] = []
        self.disconnect_calls = 0

    def _answer(self, name: str, *args):
        self.calls.append((name, *args))
        value = self._values[name]
        if isinstance(value, Exception):
            raise value
        return value

    @property
    def endpoint(self) -> str:
        return "wss://fake"

    async def total_issuance(self) -> int:
        return self._answer("total_issuance")

    async def has_staking(self) -> bool:
        return self._answer("has_staking")

    async def active_era(self) -> int | None:
        return self._answer("active_era")

    async def eras_total_stake(self, era: int) -> int | None:
        return self._answer("eras_total_stake", era)

    async def free_balance(self, account: str) -> int:
        return self._answer("free_balance", account)

    async def disconnect(self) -> None:
        self.disconnect_calls += 1
        if self._disconnect_error is not None:
            raise self._disconnect_error

    def called(self, name: str) -> bool:
        return any(call[0] == name for call in self.calls)


def client_factory_for(client: FakeChainClient):
    """Scoped factory yielding ``client`` and disconnecting it on exit."""

    @asynccontextmanager
    async def _factory(_settings):
        try:
            yield client
        finally:
            await client.disconnect()

    return _factory


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # keep a stray .env / polymesh-tvl.toml in the repo root out of the tests
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings():
    return TvlSettings(
        price_max_tries=1,
        price_retry_interval=0,
    )


@pytest.fixture
def fake_client():
    return FakeChainClient()


@pytest.fixture
def make_client():
    return FakeChainClient


@pytest.fixture
def factory_for():
    return client_factory_for


@pytest.fixture(autouse=True)
def restore_root_logger():
    """setup_logging() replaces the root handlers; put pytest's back."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture(autouse=True)
def restore_package_logger():
    """configure_package_logging() mutates the package logger; undo it."""
    package = logging.getLogger("polymesh_tvl")
    handlers = package.handlers[:]
    level, propagate = package.level, package.propagate
    yield
    package.handlers[:] = handlers
    package.setLevel(level)
    package.propagate = propagate
