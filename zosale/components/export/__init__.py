"""
Export component - CSV and HTML report renderings of service records.
"""

from ._impl import (
    EXPORT_HEADERS,
    STATUS_COLORS,
    export_row,
    generate_csv,
    generate_report_html,
    status_color,
)

__all__ = [
    "EXPORT_HEADERS",
    "STATUS_COLORS",
    "export_row",
    "generate_csv",
    "generate_report_html",
    "status_color",
]
