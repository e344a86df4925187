from __future__ import annotations

from .base import BaseChainClient
from .substrate import SubstrateChainClient, connect_chain

__all__ = ["BaseChainClient", "SubstrateChainClient", "connect_chain"]
