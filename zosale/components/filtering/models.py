"""
Filtering component - Data models.

FilterSpec is the declarative predicate set narrowing a record sequence.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from zosale.domain.entities import ServiceRecord

# --- Validation Errors ---


@dataclass(frozen=True)
class FilterValidationError:
    """Filter validation error."""

    code: str
    message: str
    field: str | None = None


class InvalidFilterError(ValueError):
    """Raised by the pure engine when a filter cannot be evaluated."""

    def __init__(self, errors: Sequence[FilterValidationError]) -> None:
        super().__init__("; ".join(err.message for err in errors))
        self.errors = tuple(errors)


# --- Filter Spec ---


@dataclass(frozen=True)
class FilterSpec:
    """
    Predicates over ServiceRecord fields.

    Set-valued fields accept any listed value (empty = no restriction).
    Text patterns and date bounds are None when unset; an empty string
    is treated the same as None.
    """

    employee: frozenset[str] = field(default_factory=frozenset)
    type: frozenset[str] = field(default_factory=frozenset)
    vendor: frozenset[str] = field(default_factory=frozenset)
    status: frozenset[str] = field(default_factory=frozenset)
    package_name: frozenset[str] = field(default_factory=frozenset)
    ser_number: str | None = None
    ref_no: str | None = None
    date_from: str | None = None
    date_to: str | None = None
    search_query: str | None = None

    @classmethod
    def build(
        cls,
        employee: Iterable[str] = (),
        type: Iterable[str] = (),
        vendor: Iterable[str] = (),
        status: Iterable[str] = (),
        package_name: Iterable[str] = (),
        ser_number: str | None = None,
        ref_no: str | None = None,
        date_from: str | None = None,
        date_to: str | None = None,
        search_query: str | None = None,
    ) -> FilterSpec:
        """Build a spec from plain lists, normalising blank strings to None."""
        return cls(
            employee=frozenset(employee),
            type=frozenset(type),
            vendor=frozenset(vendor),
            status=frozenset(status),
            package_name=frozenset(package_name),
            ser_number=ser_number or None,
            ref_no=ref_no or None,
            date_from=date_from or None,
            date_to=date_to or None,
            search_query=search_query or None,
        )

    @property
    def has_date_range(self) -> bool:
        return bool(self.date_from) or bool(self.date_to)

    def active_filter_count(self) -> int:
        """Number of populated predicates, not counting the search box."""
        populated = [
            self.employee,
            self.type,
            self.vendor,
            self.status,
            self.package_name,
            self.ser_number,
            self.ref_no,
            self.date_from,
            self.date_to,
        ]
        return sum(1 for value in populated if value)

    def is_empty(self) -> bool:
        return self.active_filter_count() == 0 and not self.search_query


# --- Input Models ---


@dataclass(frozen=True)
class FilterInput:
    """Input for filtering a record sequence."""

    records: tuple[ServiceRecord, ...]
    spec: FilterSpec
    dayfirst: bool = False


# --- Output Models ---


@dataclass(frozen=True)
class FilterOutput:
    """Output from a filter run."""

    records: tuple[ServiceRecord, ...]
    errors: tuple[FilterValidationError, ...]
    success: bool

    @property
    def total(self) -> int:
        return len(self.records)


@dataclass(frozen=True)
class FilterFacets:
    """Sorted distinct values available for each multi-select filter."""

    employee: tuple[str, ...] = ()
    type: tuple[str, ...] = ()
    vendor: tuple[str, ...] = ()
    status: tuple[str, ...] = ()
    package_name: tuple[str, ...] = ()
