"""Analytics helpers."""

from .summary import summarize, top_neighborhoods

__all__ = ["summarize", "top_neighborhoods"]
