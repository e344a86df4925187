"""High-level pipeline orchestration."""

from __future__ import annotations

import asyncio
from contextlib import AbstractAsyncContextManager
from typing import Callable

from ..clients import BaseChainClient, connect_chain
from ..domain import AdapterResult, RunMode, TvlRun
from ..logger import get_logger
from ..processors import calculate_tvl, demo_breakdown
from ..report import log_breakdown
from ..settings import TvlSettings, load_settings
from ..state import AppState
from .chain_data import query_chain_data
from .context import PipelineContext
from .pricing import get_price

ClientFactory = Callable[[TvlSettings], AbstractAsyncContextManager[BaseChainClient]]


async def fetch_inputs(ctx: PipelineContext, client: BaseChainClient) -> None:
    """Fetch the price and the chain data concurrently.

    Sets the price quote and chain data in the context. Both branches are
    awaited to completion before a failure from either one is re-raised.
    """
    s = ctx.state.settings
    price_quote, chain_data = await asyncio.gather(
        get_price(s),
        query_chain_data(client, s),
        return_exceptions=True,
    )

    for result in (price_quote, chain_data):
        if isinstance(result, BaseException):
            raise result

    ctx.price_quote = price_quote
    ctx.chain_data = chain_data


def calculate(ctx: PipelineContext) -> None:
    s = ctx.state.settings
    ctx.breakdown = calculate_tvl(
        ctx.chain_data_required, ctx.price_quote_required.price, s.decimals
    )


def _run_demo(state: AppState) -> TvlRun:
    """Build the deterministic mock result without touching the network."""
    s = state.settings
    log = state.logger

    log.info("Running in DEMO MODE - using mock data")
    log.info("To connect to the real network, unset the DEMO_MODE environment variable")

    breakdown = demo_breakdown(s.fallback_price, s.decimals)
    log_breakdown(log, breakdown)
    return TvlRun(mode=RunMode.DEMO, chain_name=s.chain_name, breakdown=breakdown)


async def run_tvl(
    state: AppState, client_factory: ClientFactory = connect_chain
) -> TvlRun:
    """Execute the TVL pipeline. Never raises ``Exception``.

    This is a thin orchestrator that sequences the pipeline steps:
    1. Connect to the chain
    2. Fetch price and chain data in parallel
    3. Calculate the breakdown
    4. Log the summary
    5. Disconnect (always)

    Any failure along the way is logged once as an error and the run falls
    back to the demo breakdown.

    Args:
        state: Application state containing settings and logger
        client_factory: Scoped connection factory, ``connect_chain`` by default

    Returns:
        TvlRun tagged LIVE or DEMO
    """
    s = state.settings
    log = state.logger

    if s.demo_mode:
        return _run_demo(state)

    ctx = PipelineContext(state=state)

    try:
        async with client_factory(s) as client:
            log.info("Connected to Polymesh at %s", client.endpoint)
            await fetch_inputs(ctx, client)
            calculate(ctx)
            log_breakdown(log, ctx.breakdown_required)
    except Exception as e:
        log.error("Error fetching Polymesh TVL: %s", e)
        log.info("Falling back to DEMO MODE...")
        return _run_demo(state)

    return TvlRun(
        mode=RunMode.LIVE, chain_name=s.chain_name, breakdown=ctx.breakdown_required
    )


async def fetch(
    settings: TvlSettings | None = None,
    client_factory: ClientFactory = connect_chain,
) -> AdapterResult:
    """Run the pipeline and return ``{chain_name: tvl_usd}``."""
    settings = settings or load_settings()
    state = AppState(settings=settings, logger=get_logger("polymesh_tvl"))
    run = await run_tvl(state, client_factory)
    state.logger.debug("TVL run finished in %s mode", run.mode.value)
    return run.as_adapter_result()
