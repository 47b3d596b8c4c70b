"""Collaborator interfaces."""

from .price_source import PriceSource

__all__ = ["PriceSource"]
