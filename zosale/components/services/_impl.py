"""
ServiceRecordService - Assignment, update, lifecycle and querying of
service records.

Functional Core - business rules over a repository port. Every
operation validates before it writes, and writes at most one record.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from uuid import uuid4

from zosale.components.filtering import FilterSpec, InvalidFilterError, filter_records
from zosale.domain.entities import EDITABLE_FIELDS, SERVICE_STATUSES, ServiceRecord
from zosale.domain.state import InvalidTransitionError, transition
from zosale.ports.clock import ClockPort

from .models import (
    INVALID_TRANSITION,
    NOT_FOUND,
    ServiceSummary,
    ServiceValidationError,
)
from .ports import ServiceRepoPort

logger = logging.getLogger(__name__)

_FIELD_LABELS = {
    "ref_no": "Reference number",
    "employee": "Employee",
    "type": "Type",
    "package_name": "Package name",
    "ser_number": "Service number",
    "vendor": "Vendor",
    "expires": "Expiry date",
}


# --- Validation Functions ---


def validate_service_fields(
    fields: dict[str, str],
    max_length: int = 200,
) -> list[ServiceValidationError]:
    """Validate the client-editable fields of a service record."""
    errors: list[ServiceValidationError] = []

    for name in EDITABLE_FIELDS:
        value = fields.get(name)
        label = _FIELD_LABELS[name]
        if value is None or not str(value).strip():
            errors.append(
                ServiceValidationError(
                    code=f"{name}_required",
                    message=f"{label} is required",
                    field=name,
                )
            )
        elif len(value) > max_length:
            errors.append(
                ServiceValidationError(
                    code=f"{name}_too_long",
                    message=f"{label} must be {max_length} characters or less",
                    field=name,
                )
            )

    return errors


def validate_status(status: str) -> list[ServiceValidationError]:
    """Status must be one of the closed set."""
    if status in SERVICE_STATUSES:
        return []
    return [
        ServiceValidationError(
            code="invalid_status",
            message=f"Status must be one of: {', '.join(SERVICE_STATUSES)}",
            field="status",
        )
    ]


def _not_found(service_id: str) -> list[ServiceValidationError]:
    return [
        ServiceValidationError(
            code=NOT_FOUND,
            message=f"Service with ID {service_id} not found",
        )
    ]


def sort_newest_first(records: list[ServiceRecord]) -> list[ServiceRecord]:
    """Order by created_at descending; ties keep their store order."""
    return sorted(records, key=lambda r: r.created_at, reverse=True)


# --- Service Record Service ---


class ServiceRecordService:
    """
    Record service.

    Orchestrates the repository, the filter engine and the status
    lifecycle. There is no optimistic concurrency token: concurrent
    read-modify-write sequences on one record resolve last-write-wins.
    """

    def __init__(
        self,
        repo: ServiceRepoPort,
        clock: ClockPort,
        id_prefix: str = "SER",
        max_field_length: int = 200,
        dayfirst: bool = False,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        """Initialize service."""
        self._repo = repo
        self._clock = clock
        self._id_prefix = id_prefix
        self._max_field_length = max_field_length
        self._dayfirst = dayfirst
        self._id_factory = id_factory or self._generate_id

    def _generate_id(self) -> str:
        return f"{self._id_prefix}-{uuid4().hex[:12].upper()}"

    # --- Queries ---

    def get_all(self) -> list[ServiceRecord]:
        """Get all records, newest first."""
        return sort_newest_first(self._repo.get_all())

    def get_by_id(self, service_id: str) -> ServiceRecord | None:
        """Get record by ID."""
        return self._repo.get_by_id(service_id)

    def filter_list(
        self, spec: FilterSpec
    ) -> tuple[list[ServiceRecord], list[ServiceValidationError]]:
        """
        Filter all records, newest first.

        Returns:
            Tuple of (records, errors). Records are empty if the spec is invalid.
        """
        try:
            matched = filter_records(self._repo.get_all(), spec, dayfirst=self._dayfirst)
        except InvalidFilterError as e:
            return [], [
                ServiceValidationError(code=err.code, message=err.message, field=err.field)
                for err in e.errors
            ]
        return sort_newest_first(matched), []

    def summary(self) -> ServiceSummary:
        """Count records per status."""
        records = self._repo.get_all()
        return ServiceSummary(
            total=len(records),
            active=sum(1 for r in records if r.status == "Active"),
            exp_soon=sum(1 for r in records if r.status == "Exp_soon"),
            expired=sum(1 for r in records if r.status == "Expired"),
        )

    # --- Mutations ---

    def create(
        self, fields: dict[str, str]
    ) -> tuple[ServiceRecord | None, list[ServiceValidationError]]:
        """
        Assign a new service.

        Returns:
            Tuple of (record, errors). Record is None if validation fails.
        """
        errors = validate_service_fields(fields, self._max_field_length)
        if errors:
            return None, errors

        now = self._clock.now()
        record = ServiceRecord(
            id=self._id_factory(),
            status="Active",
            created_at=now,
            updated_at=now,
            **{name: fields[name].strip() for name in EDITABLE_FIELDS},
        )

        saved = self._repo.save(record)
        logger.info("Created service %s for %s", saved.id, saved.employee)
        return saved, []

    def update(
        self,
        service_id: str,
        fields: dict[str, str],
        status: str,
    ) -> tuple[ServiceRecord | None, list[ServiceValidationError]]:
        """
        Replace every editable field and the status of a record.

        Returns:
            Tuple of (record, errors). Record is None if not found or invalid.
        """
        existing = self.get_by_id(service_id)
        if existing is None:
            return None, _not_found(service_id)

        errors = validate_service_fields(fields, self._max_field_length)
        errors.extend(validate_status(status))
        if errors:
            return None, errors

        updated = existing.model_copy(
            update={
                **{name: fields[name].strip() for name in EDITABLE_FIELDS},
                "status": status,
                "updated_at": max(self._clock.now(), existing.created_at),
            }
        )

        saved = self._repo.save(updated)
        logger.info("Updated service %s", saved.id)
        return saved, []

    def enable(self, service_id: str) -> tuple[ServiceRecord | None, list[ServiceValidationError]]:
        """Re-activate an expired or expiring service."""
        return self._set_status(service_id, "Active")

    def disable(self, service_id: str) -> tuple[ServiceRecord | None, list[ServiceValidationError]]:
        """Expire an active service."""
        return self._set_status(service_id, "Expired")

    def _set_status(
        self, service_id: str, new_status: str
    ) -> tuple[ServiceRecord | None, list[ServiceValidationError]]:
        existing = self.get_by_id(service_id)
        if existing is None:
            return None, _not_found(service_id)

        try:
            changed = transition(existing, new_status, self._clock.now())  # type: ignore[arg-type]
        except InvalidTransitionError as e:
            logger.warning("Rejected status change for %s: %s", service_id, e)
            return None, [
                ServiceValidationError(
                    code=INVALID_TRANSITION,
                    message=f"Service {service_id} is already {existing.status}"
                    if existing.status == new_status
                    else str(e),
                    field="status",
                )
            ]

        saved = self._repo.save(changed)
        logger.info("Service %s is now %s", saved.id, saved.status)
        return saved, []

    def delete(self, service_id: str) -> tuple[bool, list[ServiceValidationError]]:
        """
        Delete a record.

        Returns:
            Tuple of (success, errors).
        """
        if self.get_by_id(service_id) is None:
            return False, _not_found(service_id)

        self._repo.delete(service_id)
        logger.info("Deleted service %s", service_id)
        return True, []
