from __future__ import annotations

from dataclasses import dataclass

from ..domain import ChainData, PriceQuote, TVLBreakdown
from ..state import AppState


@dataclass
class PipelineContext:
    state: AppState
    price_quote: PriceQuote | None = None
    chain_data: ChainData | None = None
    breakdown: TVLBreakdown | None = None

    @property
    def price_quote_required(self) -> PriceQuote:
        if self.price_quote is None:
            raise RuntimeError(
                "Price quote has not been set. Ensure fetch_inputs() is called before accessing this property."
            )
        return self.price_quote

    @property
    def chain_data_required(self) -> ChainData:
        if self.chain_data is None:
            raise RuntimeError(
                "Chain data has not been set. Ensure fetch_inputs() is called before accessing this property."
            )
        return self.chain_data

    @property
    def breakdown_required(self) -> TVLBreakdown:
        if self.breakdown is None:
            raise RuntimeError(
                "Breakdown has not been set. Ensure calculate() is called before accessing this property."
            )
        return self.breakdown
