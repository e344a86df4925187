"""Exception types raised inside the TVL pipeline."""

from __future__ import annotations


class TvlError(Exception):
    """Base class for pipeline errors."""


class PriceFetchError(TvlError, ValueError):
    """Raised when the price API returns an unusable payload."""


class ChainConnectionError(TvlError, ConnectionError):
    """Raised when the chain RPC endpoint cannot be reached."""
