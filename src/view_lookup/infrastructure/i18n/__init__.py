"""Internationalization infrastructure."""

from .locale_context import LocaleContext

__all__ = ["LocaleContext"]
