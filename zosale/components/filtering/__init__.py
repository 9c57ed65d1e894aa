"""
Filtering component - Multi-field predicate filtering of service records.

Used by the record service for server-side queries and importable on
its own by any presentation layer that re-filters a fetched list.
"""

from ._impl import (
    collect_facets,
    filter_records,
    matches_date_range,
    matches_search,
    narrow_options,
    validate_filter_spec,
)
from .component import run_filter
from .models import (
    FilterFacets,
    FilterInput,
    FilterOutput,
    FilterSpec,
    FilterValidationError,
    InvalidFilterError,
)

__all__ = [
    # Entry points
    "run_filter",
    # Pure engine
    "filter_records",
    "validate_filter_spec",
    "matches_search",
    "matches_date_range",
    "collect_facets",
    "narrow_options",
    # Models
    "FilterSpec",
    "FilterInput",
    "FilterOutput",
    "FilterFacets",
    "FilterValidationError",
    "InvalidFilterError",
]
