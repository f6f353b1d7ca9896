"""Builders shared by the test modules."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import httpx
import pandas as pd

STUDENT_HEADERS = [
    "First Name", "Last Name", "Email", "Phone", "Gender",
    "Department", "Batch", "Roll Number", "CGPA", "Active Backlogs",
    "10th %", "12th %", "Skills",
]


def make_excel(path: Path, sheets: dict[str, list[list[object]]]) -> Path:
    """Write raw rows (header included) to an .xlsx, one entry per sheet."""
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for sheet, rows in sheets.items():
            df = pd.DataFrame(rows)
            df.to_excel(writer, sheet_name=sheet, header=False, index=False)
    return path


def student_line(
    first: str = "John",
    email: str = "john@example.com",
    department: str = "Computer Science",
    roll: str = "CS001",
    cgpa: str = "8.5",
    skills: str = "Python, SQL",
) -> list[object]:
    return [first, "Doe", email, "9876543210", "Male", department, "2024", roll, cgpa, "0", "90", "88", skills]


def bulk_response(success: int = 0, failed: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    failed = failed or []
    return {
        "success": True,
        "message": f"Uploaded {success} students. {len(failed)} failed.",
        "data": {
            "success": [{"rollNumber": f"CS{i:03d}", "name": "John Doe"} for i in range(success)],
            "failed": failed,
        },
    }


def mock_transport(
    recorder: dict[str, Any], status_code: int = 201, body: Any = None
) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content) if request.content else None
        recorder["requests"].append({"request": request, "json": payload})
        if body is None:
            count = len(payload["students"]) if payload else 0
            return httpx.Response(status_code, json=bulk_response(success=count))
        return httpx.Response(status_code, json=body)
    return httpx.MockTransport(handler)
