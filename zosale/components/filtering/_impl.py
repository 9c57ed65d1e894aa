"""
Filter engine - narrows a ServiceRecord sequence by a FilterSpec.

Functional Core - pure business logic. Safe to call from any layer and
from any number of threads; nothing here touches I/O or shared state.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime

from zosale.domain.dates import parse_bound, parse_expiry
from zosale.domain.entities import CATEGORICAL_FIELDS, SEARCHABLE_FIELDS, ServiceRecord

from .models import FilterFacets, FilterSpec, FilterValidationError, InvalidFilterError

Predicate = Callable[[ServiceRecord], bool]


# --- Validation Functions ---


def validate_filter_spec(spec: FilterSpec, dayfirst: bool = False) -> list[FilterValidationError]:
    """Validate caller-supplied date bounds."""
    errors: list[FilterValidationError] = []

    for field_name in ("date_from", "date_to"):
        value = getattr(spec, field_name)
        try:
            parse_bound(value, dayfirst=dayfirst)
        except ValueError:
            errors.append(
                FilterValidationError(
                    code="invalid_date_bound",
                    message=f"Date bound '{value}' is not a valid date",
                    field=field_name,
                )
            )

    return errors


# --- Predicates ---


def matches_search(record: ServiceRecord, query: str | None) -> bool:
    """Case-insensitive substring match against any searchable field."""
    if not query:
        return True
    needle = query.lower()
    return any(needle in str(getattr(record, name)).lower() for name in SEARCHABLE_FIELDS)


def matches_categories(record: ServiceRecord, spec: FilterSpec) -> bool:
    """Exact, case-sensitive membership for each populated value set."""
    for name in CATEGORICAL_FIELDS:
        accepted = getattr(spec, name)
        if accepted and getattr(record, name) not in accepted:
            return False
    return True


def matches_pattern(value: str, pattern: str | None) -> bool:
    """Case-insensitive substring containment; empty pattern passes."""
    if not pattern:
        return True
    return pattern.lower() in value.lower()


def matches_date_range(
    record: ServiceRecord,
    date_from: datetime | None,
    date_to: datetime | None,
    dayfirst: bool = False,
) -> bool:
    """
    Inclusive range check on ``expires``.

    Records whose expiry cannot be parsed are kept.
    """
    if date_from is None and date_to is None:
        return True

    item_date = parse_expiry(record.expires, dayfirst=dayfirst)
    if item_date is None:
        return True

    if date_from is not None and item_date < date_from:
        return False
    if date_to is not None and item_date > date_to:
        return False
    return True


def build_predicates(spec: FilterSpec, dayfirst: bool = False) -> list[Predicate]:
    """
    Compile a spec into independent predicates.

    Raises:
        InvalidFilterError: If a date bound is malformed.
    """
    errors = validate_filter_spec(spec, dayfirst=dayfirst)
    if errors:
        raise InvalidFilterError(errors)

    predicates: list[Predicate] = []

    if spec.search_query:
        predicates.append(lambda r: matches_search(r, spec.search_query))

    if any(getattr(spec, name) for name in CATEGORICAL_FIELDS):
        predicates.append(lambda r: matches_categories(r, spec))

    if spec.ser_number:
        predicates.append(lambda r: matches_pattern(r.ser_number, spec.ser_number))

    if spec.ref_no:
        predicates.append(lambda r: matches_pattern(r.ref_no, spec.ref_no))

    if spec.has_date_range:
        date_from = parse_bound(spec.date_from, dayfirst=dayfirst)
        date_to = parse_bound(spec.date_to, dayfirst=dayfirst)
        predicates.append(lambda r: matches_date_range(r, date_from, date_to, dayfirst))

    return predicates


# --- Engine ---


def filter_records(
    records: Iterable[ServiceRecord],
    spec: FilterSpec,
    dayfirst: bool = False,
) -> list[ServiceRecord]:
    """
    Return the records matching every populated predicate, in input order.

    Raises:
        InvalidFilterError: If a date bound is malformed.
    """
    predicates = build_predicates(spec, dayfirst=dayfirst)
    return [record for record in records if all(p(record) for p in predicates)]


# --- Facets ---


def collect_facets(records: Iterable[ServiceRecord]) -> FilterFacets:
    """Distinct sorted values for each multi-select filter."""
    values: dict[str, set[str]] = {name: set() for name in CATEGORICAL_FIELDS}
    for record in records:
        for name in CATEGORICAL_FIELDS:
            values[name].add(getattr(record, name))

    return FilterFacets(**{name: tuple(sorted(found)) for name, found in values.items()})


def narrow_options(options: Iterable[str], term: str | None) -> list[str]:
    """Case-insensitive search within a facet's options."""
    if not term:
        return list(options)
    needle = term.lower()
    return [option for option in options if needle in option.lower()]
