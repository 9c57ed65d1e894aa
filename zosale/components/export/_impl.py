"""
Export projections of a service record sequence.

Functional Core - pure rendering. Output rows follow input order and
no record is dropped or added.
"""

from __future__ import annotations

import csv
import html
import io
from collections.abc import Iterable
from datetime import date

from zosale.domain.entities import ServiceRecord

EXPORT_HEADERS: tuple[str, ...] = (
    "Ser_No",
    "Ref No",
    "Employee",
    "Type",
    "Package Name",
    "Service Number",
    "Vendor",
    "Status",
    "Expires",
)

STATUS_COLORS = {
    "Active": "#16a34a",
    "Exp_soon": "#ca8a04",
    "Expired": "#dc2626",
}
DEFAULT_STATUS_COLOR = "#000000"


def export_row(record: ServiceRecord) -> list[str]:
    """Column values for one record, in header order."""
    return [
        record.id,
        record.ref_no,
        record.employee,
        record.type,
        record.package_name,
        record.ser_number,
        record.vendor,
        record.status,
        record.expires,
    ]


def generate_csv(records: Iterable[ServiceRecord]) -> str:
    """
    Delimited text export.

    The header row is unquoted; every data field is quoted.
    """
    output = io.StringIO()
    output.write(",".join(EXPORT_HEADERS) + "\n")

    writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for record in records:
        writer.writerow(export_row(record))

    # No terminator after the last line
    return output.getvalue().removesuffix("\n")


def status_color(status: str) -> str:
    return STATUS_COLORS.get(status, DEFAULT_STATUS_COLOR)


def _cell(value: str, extra_style: str = "") -> str:
    style = "padding: 8px; border: 1px solid #ddd;" + extra_style
    return f'<td style="{style}">{html.escape(value)}</td>'


def _report_row(record: ServiceRecord) -> str:
    values = export_row(record)
    cells = [_cell(value) for value in values[:7]]
    cells.append(
        _cell(record.status, f" color: {status_color(record.status)}; font-weight: bold;")
    )
    cells.append(_cell(record.expires))
    return "<tr>" + "".join(cells) + "</tr>"


def generate_report_html(
    records: Iterable[ServiceRecord],
    generated_on: date,
    title: str = "Services Report",
) -> str:
    """Printable HTML table of the records."""
    header_cells = "".join(f"<th>{html.escape(h)}</th>" for h in EXPORT_HEADERS)
    rows = "\n".join(_report_row(r) for r in records)
    safe_title = html.escape(title)

    return f"""<!DOCTYPE html>
<html>
  <head>
    <meta charset="UTF-8">
    <title>{safe_title}</title>
    <style>
      body {{ font-family: Arial, sans-serif; margin: 20px; }}
      h1 {{ color: #333; }}
      table {{ width: 100%; border-collapse: collapse; margin-top: 20px; }}
      th {{ background-color: #f0f0f0; padding: 10px; text-align: left; border: 1px solid #ddd; font-weight: bold; }}
      td {{ padding: 8px; border: 1px solid #ddd; }}
      tr:nth-child(even) {{ background-color: #f9f9f9; }}
    </style>
  </head>
  <body>
    <h1>{safe_title}</h1>
    <p>Generated on: {generated_on.isoformat()}</p>
    <table>
      <thead>
        <tr>{header_cells}</tr>
      </thead>
      <tbody>
{rows}
      </tbody>
    </table>
  </body>
</html>
"""
