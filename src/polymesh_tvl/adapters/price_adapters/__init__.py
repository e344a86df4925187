from __future__ import annotations

from .coingecko import CoinGeckoAdapter

__all__ = ["CoinGeckoAdapter"]
