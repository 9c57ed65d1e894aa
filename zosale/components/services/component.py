"""
Services component - Service record management.

Handles assignment, update, enable/disable, deletion and querying.

Shell Layer - handles I/O and error conversion.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import asdict
from typing import TypeVar

from ._impl import ServiceRecordService
from .models import (
    NOT_FOUND,
    STORE_UNAVAILABLE,
    CreateServiceInput,
    FilterListInput,
    ServiceIdInput,
    ServiceListOutput,
    ServiceOperationOutput,
    ServiceSummaryOutput,
    ServiceValidationError,
    UpdateServiceInput,
)
from .ports import StoreUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_UNAVAILABLE = ServiceValidationError(
    code=STORE_UNAVAILABLE,
    message="Service store is unavailable, try again",
)


def _guard(action: Callable[[], T], on_unavailable: T) -> T:
    """Run an action, converting store outages into an error output."""
    try:
        return action()
    except StoreUnavailableError:
        logger.exception("Service store unavailable")
        return on_unavailable


def _failed() -> ServiceOperationOutput:
    return ServiceOperationOutput(service=None, errors=(_UNAVAILABLE,), success=False)


# --- Shell Layer Functions ---


def run_list(service: ServiceRecordService) -> ServiceListOutput:
    """List all services, newest first."""

    def action() -> ServiceListOutput:
        services = service.get_all()
        return ServiceListOutput(services=tuple(services), total=len(services))

    return _guard(
        action,
        ServiceListOutput(services=(), total=0, errors=(_UNAVAILABLE,), success=False),
    )


def run_get(input_data: ServiceIdInput, service: ServiceRecordService) -> ServiceOperationOutput:
    """Get a service by ID."""

    def action() -> ServiceOperationOutput:
        record = service.get_by_id(input_data.service_id)
        if record is None:
            return ServiceOperationOutput(
                service=None,
                errors=(
                    ServiceValidationError(
                        code=NOT_FOUND,
                        message=f"Service with ID {input_data.service_id} not found",
                    ),
                ),
                success=False,
            )
        return ServiceOperationOutput(service=record, errors=(), success=True)

    return _guard(action, _failed())


def run_create(
    input_data: CreateServiceInput,
    service: ServiceRecordService,
) -> ServiceOperationOutput:
    """Assign a new service."""

    def action() -> ServiceOperationOutput:
        record, errors = service.create(asdict(input_data))
        return ServiceOperationOutput(
            service=record,
            errors=tuple(errors),
            success=record is not None,
        )

    return _guard(action, _failed())


def run_update(
    input_data: UpdateServiceInput,
    service: ServiceRecordService,
) -> ServiceOperationOutput:
    """Replace an existing service's fields."""
    fields = asdict(input_data)
    service_id = fields.pop("service_id")
    status = fields.pop("status")

    def action() -> ServiceOperationOutput:
        record, errors = service.update(service_id, fields, status)
        return ServiceOperationOutput(
            service=record,
            errors=tuple(errors),
            success=record is not None,
        )

    return _guard(action, _failed())


def run_enable(input_data: ServiceIdInput, service: ServiceRecordService) -> ServiceOperationOutput:
    """Set a service back to Active."""

    def action() -> ServiceOperationOutput:
        record, errors = service.enable(input_data.service_id)
        return ServiceOperationOutput(
            service=record,
            errors=tuple(errors),
            success=record is not None,
        )

    return _guard(action, _failed())


def run_disable(
    input_data: ServiceIdInput,
    service: ServiceRecordService,
) -> ServiceOperationOutput:
    """Set an active service to Expired."""

    def action() -> ServiceOperationOutput:
        record, errors = service.disable(input_data.service_id)
        return ServiceOperationOutput(
            service=record,
            errors=tuple(errors),
            success=record is not None,
        )

    return _guard(action, _failed())


def run_delete(input_data: ServiceIdInput, service: ServiceRecordService) -> ServiceOperationOutput:
    """Delete a service."""

    def action() -> ServiceOperationOutput:
        success, errors = service.delete(input_data.service_id)
        return ServiceOperationOutput(service=None, errors=tuple(errors), success=success)

    return _guard(action, _failed())


def run_filter_list(
    input_data: FilterListInput,
    service: ServiceRecordService,
) -> ServiceListOutput:
    """Filter services server-side, newest first."""

    def action() -> ServiceListOutput:
        services, errors = service.filter_list(input_data.spec)
        return ServiceListOutput(
            services=tuple(services),
            total=len(services),
            errors=tuple(errors),
            success=not errors,
        )

    return _guard(
        action,
        ServiceListOutput(services=(), total=0, errors=(_UNAVAILABLE,), success=False),
    )


def run_summary(service: ServiceRecordService) -> ServiceSummaryOutput:
    """Count services per status."""
    return _guard(
        lambda: ServiceSummaryOutput(summary=service.summary()),
        ServiceSummaryOutput(summary=None, errors=(_UNAVAILABLE,), success=False),
    )
