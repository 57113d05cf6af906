"""Lookup application services."""

from .factory import LookupContextFactory

__all__ = ["LookupContextFactory"]
