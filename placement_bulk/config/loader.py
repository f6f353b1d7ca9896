from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import ApiConfig, UploadConfig

"""Config loader.

Responsibilities:
- Load the YAML config (``config/upload.yml`` by default)
- Validate it against the bundled JSON schema (unknown keys are rejected)
- Apply defaults
- Let PLACEMENT_API_URL / PLACEMENT_API_TOKEN override the api section
"""

SCHEMA_PATH = Path(__file__).parent / "upload_schema.json"
DEFAULT_CONFIG_PATH = Path("config/upload.yml")

ENV_API_URL = "PLACEMENT_API_URL"
ENV_API_TOKEN = "PLACEMENT_API_TOKEN"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing or unreadable, or the data violates it
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _apply_env_overrides(api_raw: dict[str, Any]) -> dict[str, Any]:
    merged = dict(api_raw)
    if os.getenv(ENV_API_URL):
        merged["base_url"] = os.environ[ENV_API_URL]
    if os.getenv(ENV_API_TOKEN):
        merged["token"] = os.environ[ENV_API_TOKEN]
    return merged


def load_config(path: Path, require_api: bool = True) -> UploadConfig:
    """Load and validate the YAML config.

    The api section is only mandatory when ``require_api`` is set; ``check``
    loads without it.
    """
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config validation failed: top level must be a mapping")

    # env may supply the URL the file leaves out, so merge before validating
    if "api" in data and isinstance(data["api"], dict):
        data["api"] = _apply_env_overrides(data["api"])
    elif os.getenv(ENV_API_URL):
        data["api"] = _apply_env_overrides({})

    if require_api and "api" not in data:
        raise ConfigError("config validation failed: 'api' is a required property")
    _validate_config_schema(data)

    api = None
    if "api" in data:
        api_raw = data["api"]
        api = ApiConfig(
            base_url=api_raw["base_url"],
            token=api_raw.get("token"),
            timeout=float(api_raw.get("timeout", 30.0)),
        )
    return UploadConfig(
        api=api,
        strict_zero_scores=data.get("strict_zero_scores", False),
        default_batch=data.get("default_batch"),
        keep_na_strings=list(data.get("keep_na_strings", [])),
        logs_dir=data.get("logs_dir", "./logs"),
        preview_rows=data.get("preview_rows", 10),
    )
