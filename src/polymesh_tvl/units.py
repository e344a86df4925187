from __future__ import annotations

from .constants import POLYX_DECIMALS


def to_native_units(amount: int, decimals: int = POLYX_DECIMALS) -> float:
    """Convert an amount in the chain's smallest unit to whole tokens.

    Args:
        amount: Non-negative integer amount in the smallest unit.
        decimals: Decimal exponent of the token (6 for POLYX).

    Returns:
        ``amount / 10**decimals`` as a float.

    Notes:
        - Aggregation/display conversion only; precision is whatever a
          float carries.
    """
    return amount / (10**decimals)


def format_amount(value: float) -> str:
    """Format a token or USD amount as ``1,234.56``."""
    return f"{value:,.2f}"
