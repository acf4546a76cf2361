# app/services/export_service.py

import csv
import io
from datetime import datetime
from typing import Iterable

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill

from app.models.submission import Submission
from app.models.support_message import SupportMessage

CSV_MEDIA_TYPE = "text/csv"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

HEADER_FONT = Font(bold=True, color="FFFFFF")
HEADER_FILL = PatternFill(start_color="0A7D3B", end_color="0A7D3B", fill_type="solid")

SUBMISSION_COLUMNS = [
    "Name",
    "Course",
    "Call Up Number",
    "State of Origin",
    "State of Choices",
    "Service Type",
    "Amount",
    "Status",
    "Payment Verified",
    "NYSC Email",
    "Remarks",
    "Created At",
]

MESSAGE_COLUMNS = ["Subject", "Message", "Status", "Admin Response", "Created At"]


def _day(value: datetime) -> str:
    return value.strftime("%Y-%m-%d") if value else ""


def submission_rows(submissions: Iterable[Submission]) -> list[dict]:
    return [
        {
            "Name": s.name,
            "Course": s.course,
            "Call Up Number": s.call_up,
            "State of Origin": s.state_of_origin,
            "State of Choices": s.state_of_choices,
            "Service Type": getattr(s.service_type, "value", s.service_type) or "N/A",
            "Amount": s.calculated_amount or 0,
            "Status": getattr(s.status, "value", s.status),
            "Payment Verified": "Yes" if s.payment_verified else "No",
            "NYSC Email": s.nysc_email or "N/A",
            "Remarks": s.remarks or "",
            "Created At": _day(s.created_at),
        }
        for s in submissions
    ]


def message_rows(messages: Iterable[SupportMessage]) -> list[dict]:
    return [
        {
            "Subject": m.subject,
            "Message": m.message,
            "Status": getattr(m.status, "value", m.status),
            "Admin Response": m.admin_response or "No response yet",
            "Created At": _day(m.created_at),
        }
        for m in messages
    ]


def to_csv(rows: list[dict], columns: list[str]) -> bytes:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=columns)
    writer.writeheader()
    writer.writerows(rows)
    # BOM so Excel opens naira signs and accents correctly
    return buffer.getvalue().encode("utf-8-sig")


def to_xlsx(rows: list[dict], columns: list[str], sheet_title: str) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_title[:31]

    ws.append(columns)
    for cell in ws[1]:
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL

    for row in rows:
        ws.append([row[c] for c in columns])

    for index, header in enumerate(columns, start=1):
        width = max([len(str(header))] + [len(str(r[header])) for r in rows])
        ws.column_dimensions[ws.cell(row=1, column=index).column_letter].width = min(width + 2, 60)

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def export_file(rows: list[dict], columns: list[str], fmt: str, basename: str) -> tuple[bytes, str, str]:
    """Returns (content, media type, filename) for csv or xlsx. The header row is always written."""
    stamp = datetime.now().strftime("%Y-%m-%d")
    if fmt == "xlsx":
        return to_xlsx(rows, columns, basename.title()), XLSX_MEDIA_TYPE, f"{basename}_{stamp}.xlsx"
    return to_csv(rows, columns), CSV_MEDIA_TYPE, f"{basename}_{stamp}.csv"
