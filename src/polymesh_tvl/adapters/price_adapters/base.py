from __future__ import annotations

import math
from abc import ABC, abstractmethod

from ...errors import PriceFetchError
from ...settings import TvlSettings


class BasePriceAdapter(ABC):
    """Abstract base class for price adapters."""

    def __init__(self, config: TvlSettings):
        """Initialize the adapter with configuration."""
        self.config = config

    @property
    @abstractmethod
    def adapter_name(self) -> str:
        """Return the name of this adapter."""
        ...

    @abstractmethod
    async def fetch_price(self, asset_id: str) -> float:
        """Fetch the USD price of one whole unit of ``asset_id``.

        Raises on any failure; callers decide how to fall back.
        """
        ...

    def validate_price(self, asset_id: str, price: float) -> float:
        """Raise if the fetched price is not a finite, strictly positive number."""
        if not math.isfinite(price) or price <= 0:
            raise PriceFetchError(
                f"{self.adapter_name} returned invalid price for {asset_id}: {price}"
            )
        return price
