from __future__ import annotations

from pathlib import Path

import pandas as pd

"""Upload template export.

Writes ``student_upload_template.xlsx``: one ``Students`` sheet with the
expected header row and a single example student. The example row has to pass
validation, so keep it in step with the rules in ``services.validator``.
"""

__all__ = [
    "TEMPLATE_FILE_NAME",
    "TEMPLATE_SHEET_NAME",
    "TEMPLATE_HEADERS",
    "TEMPLATE_SAMPLE",
    "template_rows",
    "export_template",
]

TEMPLATE_FILE_NAME = "student_upload_template.xlsx"
TEMPLATE_SHEET_NAME = "Students"

TEMPLATE_HEADERS = [
    "First Name", "Last Name", "Email", "Phone", "Gender",
    "Department", "Batch", "Roll Number", "CGPA", "Active Backlogs",
    "10th %", "12th %", "Skills",
]
TEMPLATE_SAMPLE = [
    "John", "Doe", "john@example.com", "9876543210", "male",
    "Computer Science", "2024", "CS001", "8.5", "0",
    "90", "88", "JavaScript, React, Node.js",
]


def template_rows() -> list[dict[str, str]]:
    """The sample row keyed by header, as the decoder would return it."""
    return [dict(zip(TEMPLATE_HEADERS, TEMPLATE_SAMPLE, strict=True))]


def export_template(directory: Path) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / TEMPLATE_FILE_NAME
    df = pd.DataFrame([TEMPLATE_SAMPLE], columns=TEMPLATE_HEADERS)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=TEMPLATE_SHEET_NAME, index=False)
    return path
