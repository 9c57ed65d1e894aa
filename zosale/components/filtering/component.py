"""
Filtering component - ServiceRecord filter engine.

Shell Layer - converts engine failures into output models.
"""

from __future__ import annotations

import logging

from ._impl import filter_records
from .models import FilterInput, FilterOutput, InvalidFilterError

logger = logging.getLogger(__name__)


def run_filter(input_data: FilterInput) -> FilterOutput:
    """Filter records, reporting malformed bounds as errors."""
    try:
        matched = filter_records(
            input_data.records,
            input_data.spec,
            dayfirst=input_data.dayfirst,
        )
    except InvalidFilterError as e:
        logger.warning("Rejected filter: %s", e)
        return FilterOutput(records=(), errors=e.errors, success=False)

    return FilterOutput(records=tuple(matched), errors=(), success=True)
