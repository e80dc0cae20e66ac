"""Data models for leasing listings."""

from .constants import (
    COLOR_PALETTE,
    DEFAULT_CACHE_DURATION,
    DEFAULT_MAX_PROBE_ATTEMPTS,
    DEFAULT_PAGE_SIZE,
    DEFAULT_SUGGESTION_LIMIT,
    EPOCH_DATE,
    KEY_BINDINGS,
    SCHEMA_KEY,
)
from .listing import BuildingSuggestion, Coordinates, ListingRecord, SearchOptions
from .selection import SelectionSet
from .viewer import PagingMode, ViewerSession

__all__ = [
    "BuildingSuggestion",
    "Coordinates",
    "ListingRecord",
    "SearchOptions",
    "SelectionSet",
    "PagingMode",
    "ViewerSession",
    "COLOR_PALETTE",
    "DEFAULT_CACHE_DURATION",
    "DEFAULT_MAX_PROBE_ATTEMPTS",
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_SUGGESTION_LIMIT",
    "EPOCH_DATE",
    "KEY_BINDINGS",
    "SCHEMA_KEY",
]
