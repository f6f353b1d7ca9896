from __future__ import annotations

from ..models.parsed_upload import ParsedUpload
from ..models.student import NormalizedStudent
from ..models.upload_result import UploadResult

"""Text rendering for check/upload output: error list, preview, SUMMARY line."""

MAX_LISTED_ERRORS = 10

PREVIEW_HEADERS = ("Name", "Email", "Department", "Batch", "Roll No", "CGPA")


def render_error_lines(parsed: ParsedUpload, limit: int = MAX_LISTED_ERRORS) -> list[str]:
    lines = [err.describe() for err in parsed.errors[:limit]]
    remaining = parsed.error_count - limit
    if remaining > 0:
        lines.append(f"And {remaining} more errors...")
    return lines


def _preview_cells(student: NormalizedStudent) -> tuple[str, ...]:
    cgpa = f"{student.cgpa:.2f}" if student.cgpa is not None else "-"
    return (
        student.name.full_name,
        student.email,
        student.department,
        str(student.batch),
        student.roll_number,
        cgpa,
    )


def render_preview(parsed: ParsedUpload, limit: int = 10) -> list[str]:
    """Fixed-width table of the first ``limit`` students."""
    if not parsed.students:
        return []
    rows = [PREVIEW_HEADERS] + [_preview_cells(s) for s in parsed.students[:limit]]
    widths = [max(len(r[i]) for r in rows) for i in range(len(PREVIEW_HEADERS))]
    lines = ["  ".join(cell.ljust(w) for cell, w in zip(r, widths, strict=True)).rstrip() for r in rows]
    if len(parsed.students) > limit:
        lines.append(f"Showing first {limit} of {len(parsed.students)} students")
    return lines


def render_failed_lines(result: UploadResult) -> list[str]:
    return [f"{entry.label}: {entry.error}" for entry in result.failed]


def render_summary_body(parsed: ParsedUpload, result: UploadResult | None = None) -> str:
    """Render the SUMMARY fields without the label.

    Format:
    file={name} rows={rows} errors={errors}[ uploaded={ok} failed={failed}]
    """
    line = (
        f"file={parsed.file_name} "
        f"rows={parsed.row_count} "
        f"errors={parsed.error_count}"
    )
    if result is not None:
        line += f" uploaded={result.success_count} failed={result.failed_count}"
    return line


def render_summary_line(parsed: ParsedUpload, result: UploadResult | None = None) -> str:
    """Render the full SUMMARY line, as the log formatter prints it.

    >>> render_summary_line(ParsedUpload("s.xlsx", "Students", []))
    'SUMMARY file=s.xlsx rows=0 errors=0'
    """
    return f"SUMMARY {render_summary_body(parsed, result)}"
