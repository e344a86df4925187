"""Chain data collection with per-query fault isolation."""

from __future__ import annotations

import asyncio
from typing import Awaitable

from ..clients.base import BaseChainClient
from ..domain import ChainData, QueryOutcome
from ..logger import get_logger
from ..settings import TvlSettings

logger = get_logger(__name__)


async def _attempt(name: str, query: Awaitable[int]) -> QueryOutcome:
    """Run a guarded sub-query, summarising any failure instead of raising."""
    try:
        value = await query
    except Exception as e:
        logger.warning("Unable to query %s: %s", name, e)
        return QueryOutcome.failed(name, str(e))
    return QueryOutcome.ok(name, value)


async def query_total_staked(client: BaseChainClient) -> int:
    """Aggregate stake of the active era, or 0 when staking data is unavailable."""
    if not await client.has_staking():
        logger.warning("Staking module not available")
        return 0

    era = await client.active_era()
    if era is None:
        logger.warning("No active era found")
        return 0

    # One aggregate read instead of summing every individual stake
    total_stake = await client.eras_total_stake(era)
    logger.debug("Era %d total stake: %s", era, total_stake)
    return total_stake or 0


async def query_treasury_balance(
    client: BaseChainClient, treasury_account: str | None
) -> int:
    """Free balance of the treasury account, or 0 when none is configured."""
    if not treasury_account:
        logger.info("Treasury account not configured, skipping")
        return 0

    return await client.free_balance(treasury_account)


async def query_chain_data(client: BaseChainClient, settings: TvlSettings) -> ChainData:
    """Collect total issuance, total stake and treasury balance concurrently.

    Staking and treasury failures degrade to 0. Total issuance is required:
    its failure is re-raised once the other sub-queries have settled.

    Args:
        client: Connected chain client
        settings: Loaded settings (treasury account)

    Returns:
        ChainData in the smallest unit

    Raises:
        Exception: Whatever the total issuance query raised
    """
    issuance_result, staked, treasury = await asyncio.gather(
        client.total_issuance(),
        _attempt("staking data", query_total_staked(client)),
        _attempt(
            "treasury balance",
            query_treasury_balance(client, settings.treasury_account),
        ),
        return_exceptions=True,
    )

    for result in (issuance_result, staked, treasury):
        if isinstance(result, BaseException):
            raise result

    return ChainData(
        total_issuance=issuance_result,
        total_staked=staked.value_or_zero,
        treasury_balance=treasury.value_or_zero,
    )
