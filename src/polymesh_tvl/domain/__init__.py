"""Domain models for the TVL pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

AdapterResult = dict[str, float]


@dataclass(frozen=True)
class ChainData:
    """Raw chain quantities in the smallest unit. Missing data is 0."""

    total_issuance: int = 0
    total_staked: int = 0
    treasury_balance: int = 0

    def __post_init__(self) -> None:
        for name in ("total_issuance", "total_staked", "treasury_balance"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")


class PriceSource(str, Enum):
    LIVE = "live"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class PriceQuote:
    """USD price of one whole POLYX and where it came from."""

    price: float
    source: PriceSource


@dataclass(frozen=True)
class TVLBreakdown:
    """TVL figures in whole POLYX plus the USD valuation."""

    total_issuance: float
    total_staked: float
    treasury_balance: float
    tvl_native: float
    tvl_usd: float
    polyx_price: float


@dataclass(frozen=True)
class QueryOutcome:
    """Result of one guarded chain sub-query: a value or a failure."""

    name: str
    value: int | None = None
    error: str | None = None

    @classmethod
    def ok(cls, name: str, value: int) -> "QueryOutcome":
        return cls(name=name, value=value)

    @classmethod
    def failed(cls, name: str, reason: str) -> "QueryOutcome":
        return cls(name=name, error=reason)

    @property
    def value_or_zero(self) -> int:
        if self.error is not None or self.value is None:
            return 0
        return self.value


class RunMode(str, Enum):
    LIVE = "live"
    DEMO = "demo"


@dataclass(frozen=True)
class TvlRun:
    """Outcome of one pipeline run. ``mode`` is informational only."""

    mode: RunMode
    chain_name: str
    breakdown: TVLBreakdown

    def as_adapter_result(self) -> AdapterResult:
        return {self.chain_name: self.breakdown.tvl_usd}
