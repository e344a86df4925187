"""Substrate RPC client for Polymesh built on substrate-interface."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from substrateinterface import SubstrateInterface

from ..errors import ChainConnectionError
from ..logger import get_logger
from ..settings import TvlSettings
from .base import BaseChainClient

logger = get_logger(__name__)


def _to_int(value: Any) -> int:
    return int(str(value))


class SubstrateChainClient(BaseChainClient):
    """Chain client over a websocket ``SubstrateInterface``.

    substrate-interface is blocking, so every call runs in a worker thread.
    """

    def __init__(self, substrate: SubstrateInterface, endpoint: str):
        self._substrate = substrate
        self._endpoint = endpoint

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @classmethod
    async def connect(cls, url: str, timeout: float = 30.0) -> "SubstrateChainClient":
        """Open a websocket connection to ``url``.

        Raises:
            ChainConnectionError: If the endpoint cannot be reached or the
                runtime metadata cannot be loaded
        """
        logger.debug("Connecting to %s", url)
        try:
            substrate = await asyncio.to_thread(
                SubstrateInterface, url=url, ws_options={"timeout": timeout}
            )
        except Exception as e:
            raise ChainConnectionError(f"Failed to connect to {url}: {e}") from e
        return cls(substrate, url)

    async def _query(
        self, module: str, storage_function: str, params: list[Any] | None = None
    ) -> Any:
        result = await asyncio.to_thread(
            self._substrate.query, module, storage_function, params
        )
        logger.debug("%s.%s(%s) -> %s", module, storage_function, params, result)
        return result.value if result is not None else None

    async def total_issuance(self) -> int:
        value = await self._query("Balances", "TotalIssuance")
        if value is None:
            raise ValueError("Balances.TotalIssuance returned no value")
        return _to_int(value)

    async def has_staking(self) -> bool:
        module = await asyncio.to_thread(self._substrate.get_metadata_module, "Staking")
        return module is not None

    async def active_era(self) -> int | None:
        value = await self._query("Staking", "ActiveEra")
        if not value:
            return None
        if isinstance(value, dict):
            return _to_int(value["index"])
        return _to_int(value)

    async def eras_total_stake(self, era: int) -> int | None:
        value = await self._query("Staking", "ErasTotalStake", [era])
        if value is None:
            return None
        return _to_int(value)

    async def free_balance(self, account: str) -> int:
        value = await self._query("System", "Account", [account])
        free = (value or {}).get("data", {}).get("free")
        if free is None:
            return 0
        return _to_int(free)

    async def disconnect(self) -> None:
        await asyncio.to_thread(self._substrate.close)


@asynccontextmanager
async def connect_chain(settings: TvlSettings) -> AsyncIterator[BaseChainClient]:
    """Scoped chain connection.

    The client is disconnected exactly once on every exit path. A failing
    disconnect is swallowed so it never masks the result or the original error.
    """
    client = await SubstrateChainClient.connect(
        settings.rpc_endpoint, timeout=settings.connect_timeout
    )
    try:
        yield client
    finally:
        try:
            await client.disconnect()
        except Exception as e:
            logger.debug("Ignoring disconnect error: %s", e)
