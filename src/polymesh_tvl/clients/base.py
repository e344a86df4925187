from __future__ import annotations

from abc import ABC, abstractmethod


class BaseChainClient(ABC):
    """Read-only view of the chain state the TVL pipeline needs.

    All amounts are integers in the smallest unit.
    """

    @property
    @abstractmethod
    def endpoint(self) -> str:
        """Return the RPC endpoint this client is connected to."""
        ...

    @abstractmethod
    async def total_issuance(self) -> int:
        """Total token issuance (Balances.TotalIssuance)."""
        ...

    @abstractmethod
    async def has_staking(self) -> bool:
        """Whether the runtime exposes the Staking pallet."""
        ...

    @abstractmethod
    async def active_era(self) -> int | None:
        """Index of the active staking era, or None if there is none."""
        ...

    @abstractmethod
    async def eras_total_stake(self, era: int) -> int | None:
        """Aggregate stake recorded for ``era``."""
        ...

    @abstractmethod
    async def free_balance(self, account: str) -> int:
        """Free balance of ``account`` (System.Account data.free)."""
        ...

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the underlying connection."""
        ...
