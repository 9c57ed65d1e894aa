"""Request/response models for the services API (camelCase on the wire)."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from zosale.components.filtering import FilterFacets, FilterSpec
from zosale.components.services import ServiceSummary, ServiceValidationError
from zosale.domain.entities import ServiceRecord, ServiceStatus


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Requests ---


class CreateServiceRequest(CamelModel):
    ref_no: str
    employee: str
    type: str
    package_name: str
    ser_number: str
    vendor: str
    expires: str


class UpdateServiceRequest(CreateServiceRequest):
    status: ServiceStatus = "Active"


class FilterRequest(CamelModel):
    employee: list[str] = Field(default_factory=list)
    type: list[str] = Field(default_factory=list)
    vendor: list[str] = Field(default_factory=list)
    status: list[str] = Field(default_factory=list)
    package_name: list[str] = Field(default_factory=list)
    ser_number: str = ""
    ref_no: str = ""
    date_from: str = ""
    date_to: str = ""
    search_query: str = ""

    def to_spec(self) -> FilterSpec:
        return FilterSpec.build(
            employee=self.employee,
            type=self.type,
            vendor=self.vendor,
            status=self.status,
            package_name=self.package_name,
            ser_number=self.ser_number,
            ref_no=self.ref_no,
            date_from=self.date_from,
            date_to=self.date_to,
            search_query=self.search_query,
        )


# --- Responses ---


class ServiceResponse(CamelModel):
    id: str
    ref_no: str
    employee: str
    type: str
    package_name: str
    ser_number: str
    vendor: str
    status: ServiceStatus
    expires: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, record: ServiceRecord) -> "ServiceResponse":
        return cls.model_validate(record.model_dump())


class MessageResponse(BaseModel):
    message: str


class SummaryResponse(CamelModel):
    total: int
    active: int
    exp_soon: int
    expired: int

    @classmethod
    def from_summary(cls, summary: ServiceSummary) -> "SummaryResponse":
        return cls(
            total=summary.total,
            active=summary.active,
            exp_soon=summary.exp_soon,
            expired=summary.expired,
        )


class FacetsResponse(CamelModel):
    employee: list[str]
    type: list[str]
    vendor: list[str]
    status: list[str]
    package_name: list[str]

    @classmethod
    def from_facets(cls, facets: FilterFacets) -> "FacetsResponse":
        return cls(
            employee=list(facets.employee),
            type=list(facets.type),
            vendor=list(facets.vendor),
            status=list(facets.status),
            package_name=list(facets.package_name),
        )


class ErrorDetail(BaseModel):
    code: str
    message: str
    field: str | None = None

    @classmethod
    def from_error(cls, err: ServiceValidationError) -> "ErrorDetail":
        return cls(code=err.code, message=err.message, field=err.field)
