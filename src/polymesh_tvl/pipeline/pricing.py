"""Price fetching with static fallback."""

from __future__ import annotations

from ..adapters.price_adapters import CoinGeckoAdapter
from ..adapters.price_adapters.base import BasePriceAdapter
from ..domain import PriceQuote, PriceSource
from ..logger import get_logger
from ..settings import TvlSettings

logger = get_logger(__name__)


async def get_price(
    settings: TvlSettings,
    asset_id: str | None = None,
    adapter: BasePriceAdapter | None = None,
) -> PriceQuote:
    """Return the USD price of POLYX. Never raises.

    Any failure of the live source (network error, timeout, malformed
    payload, missing field, non-positive value) is logged as a warning and
    replaced by ``settings.fallback_price``, which is used as-is.

    Args:
        settings: Loaded settings
        asset_id: Price API asset identifier; defaults to ``settings.price_asset_id``
        adapter: Price adapter to query; defaults to CoinGecko

    Returns:
        PriceQuote tagged with the source that produced it
    """
    asset_id = asset_id or settings.price_asset_id
    adapter = adapter or CoinGeckoAdapter(settings)

    try:
        price = await adapter.fetch_price(asset_id)
    except Exception as e:
        logger.warning("%s price fetch failed: %s", adapter.adapter_name, e)
    else:
        logger.info("Using live POLYX price: $%s", price)
        return PriceQuote(price=price, source=PriceSource.LIVE)

    logger.warning("Using fallback POLYX price: $%s", settings.fallback_price)
    return PriceQuote(price=settings.fallback_price, source=PriceSource.FALLBACK)
