"""Environment-backed settings for Gibberish."""

from __future__ import annotations

import hashlib
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Literal, Mapping, Sequence

from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .distribution import DEFAULT_MAX_PASSES, DEFAULT_TOLERANCE
from .errors import SettingsError
from .words import DEFAULT_FINGERPRINT_ALGORITHM

APP_NAME = "Gibberish"


class GibberishConfig(BaseModel):
    """Schema describing all supported settings."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    GIBBERISH_MAX_PASSES: int = Field(
        default=DEFAULT_MAX_PASSES,
        ge=1,
        description="Descent passes the optimizer may follow before giving up.",
    )
    GIBBERISH_FUZZY_TOLERANCE: float = Field(
        default=DEFAULT_TOLERANCE,
        ge=0.0,
        description="Total mean phrase lengths closer than this compare equal.",
    )
    GIBBERISH_FINGERPRINT_ALGORITHM: str = Field(
        default=DEFAULT_FINGERPRINT_ALGORITHM,
        description="hashlib algorithm used for word corpus fingerprints.",
    )
    GIBBERISH_LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
    )

    @model_validator(mode="before")
    @classmethod
    def _normalise_names(cls, data: Any) -> Any:
        if isinstance(data, dict):
            algorithm = data.get("GIBBERISH_FINGERPRINT_ALGORITHM")
            if isinstance(algorithm, str):
                data["GIBBERISH_FINGERPRINT_ALGORITHM"] = algorithm.strip().lower()
            level = data.get("GIBBERISH_LOG_LEVEL")
            if isinstance(level, str):
                normalized = level.strip().upper()
                synonyms = {"WARN": "WARNING", "FATAL": "CRITICAL"}
                data["GIBBERISH_LOG_LEVEL"] = synonyms.get(normalized, normalized)
        return data

    @field_validator("GIBBERISH_FINGERPRINT_ALGORITHM")
    @classmethod
    def _check_algorithm(cls, value: str) -> str:
        if value not in hashlib.algorithms_available:
            raise ValueError(f"Unknown hash algorithm '{value}'.")
        return value


@lru_cache(maxsize=1)
def _load_settings(app_dir: Path | None = None) -> GibberishConfig:
    """Load settings layers once and cache the immutable model."""

    base_dir = app_dir or Path.cwd()
    combined: Dict[str, Any] = {}
    sources: Dict[str, str] = {}
    _merge_env_sources(combined, sources, app_dir=base_dir, schema=GibberishConfig)
    try:
        return GibberishConfig.model_validate(combined)
    except ValidationError as exc:
        raise SettingsError(_format_validation_errors(exc.errors(), sources)) from exc


def _merge_env_sources(
    target: Dict[str, Any],
    sources: Dict[str, str],
    *,
    app_dir: Path,
    schema: type[BaseModel],
) -> None:
    """Merge .env and process environment variables into the target mapping."""

    allowed = set(schema.model_fields.keys())

    def merge_values(values: Mapping[str, str], *, source_prefix: str) -> None:
        for key, value in sorted(values.items()):
            if value is None:
                continue
            if key not in allowed:
                continue
            target[key] = value
            sources[key] = f"env:{source_prefix}:{key}"

    dotenv_path = app_dir / ".env"
    if dotenv_path.exists():
        dotenv_content = dotenv_values(dotenv_path)
        merge_values(
            {k: v for k, v in dotenv_content.items() if v is not None},
            source_prefix=".env",
        )

    merge_values(
        {k: v for k, v in os.environ.items() if isinstance(v, str)},
        source_prefix="process",
    )


def _format_validation_errors(
    entries: Sequence[Mapping[str, Any]],
    sources: Mapping[str, str],
) -> str:
    details: list[str] = []
    for entry in entries:
        path = entry.get("loc") or ()
        location = ".".join(str(part) for part in path if part not in {None, ""})
        message = str(entry.get("msg") or "Invalid value")
        source = sources.get(str(path[0])) if path else None
        origin = f" (source: {source})" if source else ""
        prefix = f"{location}: " if location else ""
        details.append(f"- {prefix}{message}{origin}")
    return "Settings validation errors detected:\n" + "\n".join(details)


def get_settings(app_dir: Path | None = None) -> GibberishConfig:
    """Return the validated settings model."""

    return _load_settings(app_dir=app_dir)
