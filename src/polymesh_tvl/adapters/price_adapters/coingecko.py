from __future__ import annotations

import asyncio
import logging

import backoff
import requests

from ...errors import PriceFetchError
from ...settings import TvlSettings
from .base import BasePriceAdapter

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


def _is_permanent_http_error(exc: Exception) -> bool:
    return (
        isinstance(exc, requests.exceptions.HTTPError)
        and exc.response is not None
        and exc.response.status_code not in RETRYABLE_STATUS_CODES
    )


class CoinGeckoAdapter(BasePriceAdapter):
    """Adapter for the CoinGecko simple-price endpoint.

    Response shape: ``{"polymesh": {"usd": 0.31}}``.
    """

    def __init__(self, config: TvlSettings):
        super().__init__(config)
        self.api_url = config.price_api_url
        self.vs_currency = config.price_vs_currency
        self.timeout = config.price_timeout
        self.max_tries = config.price_max_tries
        self.retry_interval = config.price_retry_interval

    @property
    def adapter_name(self) -> str:
        return "coingecko"

    async def _http_get(self, params: dict[str, str]) -> requests.Response:
        response = await asyncio.to_thread(
            requests.get, self.api_url, params=params, timeout=self.timeout
        )
        response.raise_for_status()
        return response

    def _parse_price(self, data: object, asset_id: str) -> float:
        if not isinstance(data, dict):
            raise PriceFetchError(f"Invalid response structure: {data}")

        asset_entry = data.get(asset_id)
        if not isinstance(asset_entry, dict) or self.vs_currency not in asset_entry:
            raise PriceFetchError("Invalid response format from CoinGecko")

        price_value = asset_entry[self.vs_currency]
        if isinstance(price_value, bool):
            raise PriceFetchError(f"Invalid price value: {price_value}")
        try:
            price = float(price_value)
        except (TypeError, ValueError) as e:
            raise PriceFetchError(f"Invalid price value: {price_value}") from e

        return self.validate_price(asset_id, price)

    async def fetch_price(self, asset_id: str) -> float:
        """Fetch the USD price for ``asset_id``.

        Transient failures (connection errors, timeouts, 429 and 5xx) are
        retried up to ``price_max_tries`` attempts.

        Raises:
            PriceFetchError: If the payload is malformed or the price is not positive
            requests.exceptions.RequestException: If the request keeps failing
        """
        params = {"ids": asset_id, "vs_currencies": self.vs_currency}

        @backoff.on_exception(
            backoff.constant,
            requests.exceptions.RequestException,
            max_tries=self.max_tries,
            interval=self.retry_interval,
            giveup=_is_permanent_http_error,
            jitter=None,
        )
        async def _get_with_retry() -> requests.Response:
            logger.debug("Calling %s for %s", self.api_url, asset_id)
            return await self._http_get(params)

        response = await _get_with_retry()

        try:
            data = response.json()
        except ValueError as e:
            raise PriceFetchError("Invalid JSON from CoinGecko") from e

        return self._parse_price(data, asset_id)
