"""Admin routes for managing assigned services."""

from collections.abc import Sequence

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import HTMLResponse, StreamingResponse

from zosale.adapters.clock import SystemClock
from zosale.api.deps import get_record_service, get_rules
from zosale.api.schemas import (
    CreateServiceRequest,
    ErrorDetail,
    FacetsResponse,
    FilterRequest,
    MessageResponse,
    ServiceResponse,
    SummaryResponse,
    UpdateServiceRequest,
)
from zosale.components.export import generate_csv, generate_report_html
from zosale.components.filtering import collect_facets
from zosale.components.services import (
    INVALID_TRANSITION,
    NOT_FOUND,
    STORE_UNAVAILABLE,
    CreateServiceInput,
    FilterListInput,
    ServiceIdInput,
    ServiceRecordService,
    ServiceValidationError,
    UpdateServiceInput,
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
from zosale.domain.entities import ServiceRecord
from zosale.rules.models import Rules

router = APIRouter()


def _raise_for_errors(errors: Sequence[ServiceValidationError]) -> None:
    """Map component error codes onto HTTP status codes."""
    codes = {err.code for err in errors}
    if NOT_FOUND in codes:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Service not found")
    if STORE_UNAVAILABLE in codes:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service store is unavailable",
        )

    detail = [ErrorDetail.from_error(err).model_dump() for err in errors]
    if INVALID_TRANSITION in codes:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=detail)
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def _filtered(data: FilterRequest, service: ServiceRecordService) -> tuple[ServiceRecord, ...]:
    result = run_filter_list(FilterListInput(spec=data.to_spec()), service)
    if not result.success:
        _raise_for_errors(result.errors)
    return result.services


# --- Routes ---


@router.get("", response_model=list[ServiceResponse])
def list_services(
    service: ServiceRecordService = Depends(get_record_service),
) -> list[ServiceResponse]:
    """List all services, newest first."""
    result = run_list(service)
    if not result.success:
        _raise_for_errors(result.errors)
    return [ServiceResponse.from_record(record) for record in result.services]


@router.get("/summary", response_model=SummaryResponse)
def get_summary(
    service: ServiceRecordService = Depends(get_record_service),
) -> SummaryResponse:
    """Service counts per status."""
    result = run_summary(service)
    if not result.success or result.summary is None:
        _raise_for_errors(result.errors)
    assert result.summary is not None
    return SummaryResponse.from_summary(result.summary)


@router.get("/facets", response_model=FacetsResponse)
def get_facets(
    service: ServiceRecordService = Depends(get_record_service),
) -> FacetsResponse:
    """Distinct values for each multi-select filter."""
    result = run_list(service)
    if not result.success:
        _raise_for_errors(result.errors)
    return FacetsResponse.from_facets(collect_facets(result.services))


@router.post("/filter", response_model=list[ServiceResponse])
def filter_services(
    data: FilterRequest,
    service: ServiceRecordService = Depends(get_record_service),
) -> list[ServiceResponse]:
    """Filter services, newest first."""
    return [ServiceResponse.from_record(record) for record in _filtered(data, service)]


@router.post("/export/csv")
def export_services_csv(
    data: FilterRequest,
    service: ServiceRecordService = Depends(get_record_service),
    rules: Rules = Depends(get_rules),
) -> StreamingResponse:
    """Export the filtered services as CSV."""
    content = generate_csv(_filtered(data, service))
    return StreamingResponse(
        iter([content]),
        media_type="text/csv",
        headers={
            "Content-Disposition": f"attachment; filename={rules.export.csv_filename}"
        },
    )


@router.post("/export/html", response_class=HTMLResponse)
def export_services_html(
    data: FilterRequest,
    service: ServiceRecordService = Depends(get_record_service),
    rules: Rules = Depends(get_rules),
) -> HTMLResponse:
    """Export the filtered services as a printable HTML report."""
    content = generate_report_html(
        _filtered(data, service),
        generated_on=SystemClock().now().date(),
        title=rules.export.report_title,
    )
    return HTMLResponse(
        content=content,
        headers={
            "Content-Disposition": f"inline; filename={rules.export.html_filename}"
        },
    )


@router.get("/{service_id}", response_model=ServiceResponse)
def get_service(
    service_id: str,
    service: ServiceRecordService = Depends(get_record_service),
) -> ServiceResponse:
    """Get a service by ID."""
    result = run_get(ServiceIdInput(service_id=service_id), service)
    if not result.success:
        _raise_for_errors(result.errors)
    assert result.service is not None
    return ServiceResponse.from_record(result.service)


@router.post("", response_model=ServiceResponse, status_code=201)
def create_service(
    data: CreateServiceRequest,
    service: ServiceRecordService = Depends(get_record_service),
) -> ServiceResponse:
    """Assign a new service."""
    input_data = CreateServiceInput(
        ref_no=data.ref_no,
        employee=data.employee,
        type=data.type,
        package_name=data.package_name,
        ser_number=data.ser_number,
        vendor=data.vendor,
        expires=data.expires,
    )
    result = run_create(input_data, service)
    if not result.success:
        _raise_for_errors(result.errors)
    assert result.service is not None  # Success guarantees a record
    return ServiceResponse.from_record(result.service)


@router.put("/{service_id}", response_model=ServiceResponse)
def update_service(
    service_id: str,
    data: UpdateServiceRequest,
    service: ServiceRecordService = Depends(get_record_service),
) -> ServiceResponse:
    """Replace a service's fields."""
    input_data = UpdateServiceInput(
        service_id=service_id,
        ref_no=data.ref_no,
        employee=data.employee,
        type=data.type,
        package_name=data.package_name,
        ser_number=data.ser_number,
        vendor=data.vendor,
        expires=data.expires,
        status=data.status,
    )
    result = run_update(input_data, service)
    if not result.success:
        _raise_for_errors(result.errors)
    assert result.service is not None
    return ServiceResponse.from_record(result.service)


@router.patch("/{service_id}/enable", response_model=MessageResponse)
def enable_service(
    service_id: str,
    service: ServiceRecordService = Depends(get_record_service),
) -> MessageResponse:
    """Set a service back to Active."""
    result = run_enable(ServiceIdInput(service_id=service_id), service)
    if not result.success:
        _raise_for_errors(result.errors)
    return MessageResponse(message="Service enabled successfully")


@router.patch("/{service_id}/disable", response_model=MessageResponse)
def disable_service(
    service_id: str,
    service: ServiceRecordService = Depends(get_record_service),
) -> MessageResponse:
    """Set an active service to Expired."""
    result = run_disable(ServiceIdInput(service_id=service_id), service)
    if not result.success:
        _raise_for_errors(result.errors)
    return MessageResponse(message="Service disabled successfully")


@router.delete("/{service_id}", response_model=MessageResponse)
def delete_service(
    service_id: str,
    service: ServiceRecordService = Depends(get_record_service),
) -> MessageResponse:
    """Delete a service."""
    result = run_delete(ServiceIdInput(service_id=service_id), service)
    if not result.success:
        _raise_for_errors(result.errors)
    return MessageResponse(message="Service deleted successfully")
