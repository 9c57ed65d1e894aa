"""
Services component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass

from zosale.components.filtering import FilterSpec
from zosale.domain.entities import ServiceRecord

# --- Validation Errors ---


@dataclass(frozen=True)
class ServiceValidationError:
    """Service operation error."""

    code: str
    message: str
    field: str | None = None


NOT_FOUND = "service_not_found"
INVALID_TRANSITION = "invalid_transition"
STORE_UNAVAILABLE = "store_unavailable"


# --- Input Models ---


@dataclass(frozen=True)
class CreateServiceInput:
    """Input for assigning a new service."""

    ref_no: str
    employee: str
    type: str
    package_name: str
    ser_number: str
    vendor: str
    expires: str


@dataclass(frozen=True)
class UpdateServiceInput:
    """Input for replacing every editable field of a service."""

    service_id: str
    ref_no: str
    employee: str
    type: str
    package_name: str
    ser_number: str
    vendor: str
    expires: str
    status: str = "Active"


@dataclass(frozen=True)
class ServiceIdInput:
    """Input for get, enable, disable and delete."""

    service_id: str


@dataclass(frozen=True)
class FilterListInput:
    """Input for a server-side filtered listing."""

    spec: FilterSpec


# --- Output Models ---


@dataclass(frozen=True)
class ServiceOperationOutput:
    """Output from a single-record operation."""

    service: ServiceRecord | None
    errors: tuple[ServiceValidationError, ...]
    success: bool

    @property
    def not_found(self) -> bool:
        return any(err.code == NOT_FOUND for err in self.errors)


@dataclass(frozen=True)
class ServiceListOutput:
    """Output from list and filter operations."""

    services: tuple[ServiceRecord, ...]
    total: int
    errors: tuple[ServiceValidationError, ...] = ()
    success: bool = True


@dataclass(frozen=True)
class ServiceSummary:
    """Headline counts per status."""

    total: int
    active: int
    exp_soon: int
    expired: int


@dataclass(frozen=True)
class ServiceSummaryOutput:
    """Output from the summary operation."""

    summary: ServiceSummary | None
    errors: tuple[ServiceValidationError, ...] = ()
    success: bool = True
