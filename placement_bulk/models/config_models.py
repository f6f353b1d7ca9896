from __future__ import annotations

from dataclasses import dataclass, field

from .validation import ValidationOptions

"""Config dataclasses for the bulk upload tool.

Built by ``placement_bulk.config.loader.load_config`` from the YAML file after
schema validation; environment variables take precedence over API settings.
"""

__all__ = [
    "ApiConfig",
    "UploadConfig",
]


@dataclass(frozen=True)
class ApiConfig:
    """College API connection settings."""
    base_url: str
    token: str | None = None
    timeout: float = 30.0


@dataclass(frozen=True)
class UploadConfig:
    """Root configuration object."""
    api: ApiConfig | None = None  # absent only for commands that never call the API
    strict_zero_scores: bool = False
    default_batch: int | None = None
    keep_na_strings: list[str] = field(default_factory=list)  # kept literally, e.g. surname "NA"
    logs_dir: str = "./logs"
    preview_rows: int = 10

    @property
    def validation_options(self) -> ValidationOptions:
        return ValidationOptions(
            strict_zero_scores=self.strict_zero_scores,
            default_batch=self.default_batch,
        )
