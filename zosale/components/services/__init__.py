"""
Services component - Service record management.

Assign, update, enable/disable, delete, list and filter service records.
"""

from ._impl import ServiceRecordService, sort_newest_first, validate_service_fields
from .component import (
    run_create,
    run_delete,
    run_disable,
    run_enable,
    run_filter_list,
    run_get,
    run_list,
    run_summary,
    run_update,
)
from .models import (
    INVALID_TRANSITION,
    NOT_FOUND,
    STORE_UNAVAILABLE,
    CreateServiceInput,
    FilterListInput,
    ServiceIdInput,
    ServiceListOutput,
    ServiceOperationOutput,
    ServiceSummary,
    ServiceSummaryOutput,
    ServiceValidationError,
    UpdateServiceInput,
)
from .ports import ServiceRepoPort, StoreUnavailableError

__all__ = [
    # Entry points
    "run_list",
    "run_get",
    "run_create",
    "run_update",
    "run_enable",
    "run_disable",
    "run_delete",
    "run_filter_list",
    "run_summary",
    # Input models
    "CreateServiceInput",
    "UpdateServiceInput",
    "ServiceIdInput",
    "FilterListInput",
    # Output models
    "ServiceOperationOutput",
    "ServiceListOutput",
    "ServiceSummary",
    "ServiceSummaryOutput",
    "ServiceValidationError",
    # Error codes
    "NOT_FOUND",
    "INVALID_TRANSITION",
    "STORE_UNAVAILABLE",
    # Ports
    "ServiceRepoPort",
    "StoreUnavailableError",
    # Core
    "ServiceRecordService",
    "sort_newest_first",
    "validate_service_fields",
]
