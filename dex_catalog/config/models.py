"""Pydantic models used across the dex-catalog configuration flow."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from ..engine.segments import MAX_RECORD_ID

DEFAULT_BASE_URL = "https://pokeapi.co/api/v2"


class ApiConfig(BaseModel):
    """Where and how to reach the remote catalog service."""

    base_url: str = DEFAULT_BASE_URL
    listing_limit: int = MAX_RECORD_ID
    timeout: float = 15.0
    user_agent: str | None = None

    @field_validator("base_url", mode="before")
    @classmethod
    def _strip_trailing_slash(cls, value: Any) -> str:
        text = str(value or "").strip()
        if not text:
            raise ValueError("base_url cannot be empty")
        return text.rstrip("/")

    @model_validator(mode="after")
    def _validate_limits(self) -> "ApiConfig":
        if not 1 <= self.listing_limit <= MAX_RECORD_ID:
            raise ValueError(f"listing_limit must be between 1 and {MAX_RECORD_ID}")
        if self.timeout <= 0:
            raise ValueError("timeout must be > 0")
        return self


class LoaderConfig(BaseModel):
    """Batch size and throttle used while filling the catalog."""

    batch_size: int = 50
    inter_batch_delay_ms: int = 100

    @model_validator(mode="after")
    def _validate_non_negative(self) -> "LoaderConfig":
        if self.batch_size < 1:
            raise ValueError("batch_size must be >= 1")
        if self.inter_batch_delay_ms < 0:
            raise ValueError("inter_batch_delay_ms must be >= 0")
        return self

    @property
    def inter_batch_delay(self) -> float:
        """Delay between batches in seconds."""
        return self.inter_batch_delay_ms / 1000


class GlobalConfig(BaseModel):
    """Global controls shared by the session and the CLI."""

    api: ApiConfig = Field(default_factory=ApiConfig)
    loader: LoaderConfig = Field(default_factory=LoaderConfig)
    enable_progress_bar: bool = True
    description_language: str = "en"
    max_rows_display: int = 200
    log_dir: Path | None = None

    @field_validator("log_dir", mode="before")
    @classmethod
    def _coerce_dir(cls, value: Any) -> Path | None:
        if value in (None, ""):
            return None
        return Path(value)

    @field_validator("description_language", mode="before")
    @classmethod
    def _normalise_language(cls, value: Any) -> str:
        text = str(value or "").strip().lower()
        if not text:
            raise ValueError("description_language cannot be empty")
        return text


__all__ = ["ApiConfig", "DEFAULT_BASE_URL", "GlobalConfig", "LoaderConfig"]
