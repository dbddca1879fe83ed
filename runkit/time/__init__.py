"""Periodic execution utilities."""

from .ticker import Ticker

__all__ = ["Ticker"]
