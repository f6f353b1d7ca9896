# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from placement_bulk.logging.init import reset_logging
from tests.helpers import STUDENT_HEADERS, make_excel


@pytest.fixture(autouse=True)
def _fresh_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _no_api_env(monkeypatch):
    monkeypatch.delenv("PLACEMENT_API_URL", raising=False)
    monkeypatch.delenv("PLACEMENT_API_TOKEN", raising=False)


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """api:
  base_url: http://portal.test/api
  token: secret-token
  timeout: 5
strict_zero_scores: false
keep_na_strings: []
logs_dir: ./logs
preview_rows: 10
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "upload.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def excel_factory(temp_workdir: Path) -> Callable[..., Path]:
    def _factory(name: str, data_rows: list[list[object]], headers: list[str] | None = None) -> Path:
        rows = [headers or STUDENT_HEADERS, *data_rows]
        return make_excel(temp_workdir / "data" / name, {"Students": rows})
    return _factory


@pytest.fixture()
def api_recorder() -> dict[str, Any]:
    """Collects requests seen by ``mock_transport``."""
    return {"requests": []}