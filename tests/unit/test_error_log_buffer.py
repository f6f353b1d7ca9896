from __future__ import annotations

import json
from pathlib import Path

from placement_bulk.logging.error_log import VALIDATION_FAILED, ErrorLogBuffer, ErrorRecord


def test_error_record_creation_and_json_line():
    rec = ErrorRecord.create("students.xlsx", 5, VALIDATION_FAILED, "Email is required")
    data = json.loads(rec.to_json_line())
    assert data["file"] == "students.xlsx"
    assert data["row"] == 5
    assert data["error_type"] == "VALIDATION_FAILED"
    assert data["timestamp"].endswith("Z")
    assert set(data.keys()) == {"timestamp", "file", "row", "error_type", "message"}


def test_non_ascii_message_kept():
    rec = ErrorRecord.create("छात्र.csv", -1, "PARSE_FAILED", "ファイル")
    assert "ファイル" in rec.to_json_line()


def test_error_log_buffer_flush(temp_workdir: Path):
    buf = ErrorLogBuffer(temp_workdir / "logs")
    buf.append(ErrorRecord.create("f.xlsx", 2, VALIDATION_FAILED, "a"))
    buf.append(ErrorRecord.create("f.xlsx", 3, VALIDATION_FAILED, "b"))
    path = buf.flush()
    assert path is not None and path.exists()
    assert path.parent == temp_workdir / "logs"
    assert path.name.startswith("errors-") and path.suffix == ".log"
    lines = path.read_text(encoding="utf-8").strip().splitlines()
    assert [json.loads(line)["row"] for line in lines] == [2, 3]
    assert len(buf) == 0


def test_empty_flush_creates_nothing(temp_workdir: Path):
    logs = temp_workdir / "fresh_logs"
    assert ErrorLogBuffer(logs).flush() is None
    assert not logs.exists()


def test_multiple_flushes_append_same_file(temp_workdir: Path):
    buf = ErrorLogBuffer(temp_workdir / "logs")
    buf.append(ErrorRecord.create("f.xlsx", 2, VALIDATION_FAILED, "a"))
    first = buf.flush()
    buf.append(ErrorRecord.create("f.xlsx", 3, VALIDATION_FAILED, "b"))
    second = buf.flush()
    assert first == second
    assert len(second.read_text(encoding="utf-8").splitlines()) == 2
