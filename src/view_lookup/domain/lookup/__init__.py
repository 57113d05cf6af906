"""Lookup bounded context - details, details keys, search paths and lookup contexts."""

from .details import (
    DetailDescriptor,
    DetailRegistry,
    DetailSet,
    normalize_detail_value,
    register_default_details,
    register_format_detail,
    register_locale_detail,
)
from .details_key import DetailsKey, DetailsKeyRegistry
from .lookup_context import LookupContext
from .search_path import SearchPath

__all__ = [
    "DetailDescriptor",
    "DetailRegistry",
    "DetailSet",
    "DetailsKey",
    "DetailsKeyRegistry",
    "LookupContext",
    "SearchPath",
    "normalize_detail_value",
    "register_default_details",
    "register_format_detail",
    "register_locale_detail",
]
