from __future__ import annotations

from ..constants import (
    DEMO_TOTAL_ISSUANCE,
    DEMO_TOTAL_STAKED,
    DEMO_TREASURY_BALANCE,
    POLYX_DECIMALS,
)
from ..domain import ChainData, TVLBreakdown
from ..units import to_native_units


def calculate_tvl(
    chain_data: ChainData, price: float, decimals: int = POLYX_DECIMALS
) -> TVLBreakdown:
    """Combine chain data and a USD price into a TVL breakdown.

    TVL = staked + treasury. Circulating issuance is reported for context
    only and never counted.

    Args:
        chain_data: Raw quantities in the smallest unit
        price: USD per whole POLYX
        decimals: Token decimal exponent

    Returns:
        TVLBreakdown with amounts in whole POLYX
    """
    locked = chain_data.total_staked + chain_data.treasury_balance
    tvl_native = to_native_units(locked, decimals)

    return TVLBreakdown(
        total_issuance=to_native_units(chain_data.total_issuance, decimals),
        total_staked=to_native_units(chain_data.total_staked, decimals),
        treasury_balance=to_native_units(chain_data.treasury_balance, decimals),
        tvl_native=tvl_native,
        tvl_usd=tvl_native * price,
        polyx_price=price,
    )


def demo_breakdown(price: float, decimals: int = POLYX_DECIMALS) -> TVLBreakdown:
    """Deterministic mock breakdown used in demo mode and as failure fallback."""
    unit = 10**decimals
    mock = ChainData(
        total_issuance=DEMO_TOTAL_ISSUANCE * unit,
        total_staked=DEMO_TOTAL_STAKED * unit,
        treasury_balance=DEMO_TREASURY_BALANCE * unit,
    )
    return calculate_tvl(mock, price, decimals)
