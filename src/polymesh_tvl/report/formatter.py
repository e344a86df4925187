"""Human-readable TVL summary for the logs."""

from __future__ import annotations

import logging

from ..domain import TVLBreakdown
from ..units import format_amount


def _staked_share(breakdown: TVLBreakdown) -> str:
    if breakdown.total_issuance <= 0:
        return "n/a"
    return f"{breakdown.total_staked / breakdown.total_issuance * 100:.1f}%"


def format_breakdown(breakdown: TVLBreakdown, symbol: str = "POLYX") -> list[str]:
    """Render a breakdown as summary lines.

    The treasury line is omitted when the treasury holds nothing.
    """
    lines = [
        "Chain Data:",
        f"- Total Issuance: {format_amount(breakdown.total_issuance)} {symbol}",
        f"- Total Staked: {format_amount(breakdown.total_staked)} {symbol} "
        f"({_staked_share(breakdown)})",
    ]
    if breakdown.treasury_balance > 0:
        lines.append(f"- Treasury: {format_amount(breakdown.treasury_balance)} {symbol}")
    lines.append(f"Total TVL: {format_amount(breakdown.tvl_native)} {symbol}")
    lines.append(
        f"USD Value: ${format_amount(breakdown.tvl_usd)} "
        f"(@ ${breakdown.polyx_price}/{symbol})"
    )
    return lines


def log_breakdown(logger: logging.Logger, breakdown: TVLBreakdown) -> None:
    for line in format_breakdown(breakdown):
        logger.info(line)
