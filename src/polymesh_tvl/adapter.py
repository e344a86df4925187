"""Export surface consumed by the TVL aggregation platform."""

from __future__ import annotations

from typing import Any

from .constants import CHAIN_NAME, MAINNET_LAUNCH_TIMESTAMP, METHODOLOGY
from .domain import AdapterResult
from .logger import configure_package_logging, get_logger
from .pipeline import run as pipeline_run
from .settings import load_settings

logger = get_logger(__name__)

# Flip once historical queries at a block height are supported
timetravel = False
misrepresented_tokens = False
methodology = METHODOLOGY
start = MAINNET_LAUNCH_TIMESTAMP


async def fetch() -> AdapterResult:
    """Current Polymesh TVL in USD, in the platform's ``{chain: usd}`` format."""
    settings = load_settings()
    configure_package_logging(settings.log_level, silent=settings.silent_mode)
    return await pipeline_run.fetch(settings)


async def tvl(timestamp: int | None = None, block: int | None = None) -> AdapterResult:
    """Platform ``tvl`` hook. Historical arguments are ignored; current TVL is returned."""
    if timestamp is not None or block is not None:
        logger.debug(
            "Historical TVL not supported (timestamp=%s, block=%s); returning current TVL",
            timestamp,
            block,
        )
    return await fetch()


polymesh = {
    "tvl": tvl,
    "fetch": fetch,
}

ADAPTER: dict[str, Any] = {
    "timetravel": timetravel,
    "misrepresentedTokens": misrepresented_tokens,
    "methodology": methodology,
    "start": start,
    CHAIN_NAME: polymesh,
}
