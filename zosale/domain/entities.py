from datetime import datetime
from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# --- Enums / Literals ---
ServiceStatus = Literal["Active", "Exp_soon", "Expired"]

SERVICE_STATUSES: tuple[str, ...] = get_args(ServiceStatus)

# Fields matched by the free-text search box, in display order.
SEARCHABLE_FIELDS: tuple[str, ...] = (
    "id",
    "employee",
    "package_name",
    "vendor",
    "ser_number",
    "ref_no",
)

# Closed-vocabulary fields offered as multi-select filters.
CATEGORICAL_FIELDS: tuple[str, ...] = (
    "employee",
    "type",
    "vendor",
    "status",
    "package_name",
)

# Client-editable fields (everything but identity and timestamps).
EDITABLE_FIELDS: tuple[str, ...] = (
    "ref_no",
    "employee",
    "type",
    "package_name",
    "ser_number",
    "vendor",
    "expires",
)


# --- Service Records ---

class ServiceRecord(BaseModel):
    """A telecom service or package assigned to an employee."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    ref_no: str
    employee: str
    type: str
    package_name: str
    ser_number: str
    vendor: str
    status: ServiceStatus = "Active"
    expires: str  # Stored as entered, usually DD/MM/YYYY
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
