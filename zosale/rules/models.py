from pydantic import BaseModel, Field


class ServiceRules(BaseModel):
    id_prefix: str = Field(default="SER", min_length=1, max_length=10)
    max_field_length: int = Field(default=200, gt=0)


class DateRules(BaseModel):
    # Read ambiguous dates like 02/10/2026 day-first when true
    dayfirst: bool = False


class ExportRules(BaseModel):
    csv_filename: str = "services.csv"
    html_filename: str = "services.html"
    report_title: str = "Services Report"


class Rules(BaseModel):
    services: ServiceRules = Field(default_factory=ServiceRules)
    dates: DateRules = Field(default_factory=DateRules)
    export: ExportRules = Field(default_factory=ExportRules)
