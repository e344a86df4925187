from __future__ import annotations

from .formatter import format_breakdown, log_breakdown

__all__ = ["format_breakdown", "log_breakdown"]
