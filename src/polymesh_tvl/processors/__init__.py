from __future__ import annotations

from .tvl import calculate_tvl, demo_breakdown

__all__ = [
    "calculate_tvl",
    "demo_breakdown",
]
