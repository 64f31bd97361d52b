"""Centralized configuration via pydantic-settings.

All ``WAVEPREP_*`` environment variables are read, validated, and exposed here.
Logging env vars (``WAVEPREP_LOG_FORMAT``, ``WAVEPREP_LOG_LEVEL``) are
intentionally excluded — they stay in ``waveprep.logging`` for bootstrap-safety.

Usage::

    from waveprep.config.settings import get_settings

    settings = get_settings()
    print(settings.pipeline.freq_output)  # int, validated
    print(settings.artifact.output)       # Path

``.env`` files in the working directory are loaded automatically.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from waveprep._audio_constants import (
    DEFAULT_CHANNEL_INDEX,
    DEFAULT_FREQ_OUTPUT,
    DEFAULT_OUTPUT_PATH,
    DEFAULT_PREVIEW_PAUSE_PADDING_S,
    DEFAULT_RATE_VARIABLE,
    DEFAULT_SAMPLES_VARIABLE,
)


class PipelineSettings(BaseSettings):
    """Waveform preparation defaults."""

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    freq_output: int = Field(
        default=DEFAULT_FREQ_OUTPUT, ge=1, le=1_000_000, validation_alias="WAVEPREP_FREQ_OUTPUT"
    )
    channel_index: int = Field(
        default=DEFAULT_CHANNEL_INDEX, ge=0, validation_alias="WAVEPREP_CHANNEL_INDEX"
    )
    strict_rate_check: bool = Field(default=True, validation_alias="WAVEPREP_STRICT_RATE_CHECK")


class ArtifactSettings(BaseSettings):
    """Output artifact layout."""

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    output_path: str = Field(default=DEFAULT_OUTPUT_PATH, validation_alias="WAVEPREP_OUTPUT_PATH")
    samples_variable: str = Field(
        default=DEFAULT_SAMPLES_VARIABLE,
        min_length=1,
        validation_alias="WAVEPREP_SAMPLES_VARIABLE",
    )
    rate_variable: str = Field(
        default=DEFAULT_RATE_VARIABLE,
        min_length=1,
        validation_alias="WAVEPREP_RATE_VARIABLE",
    )

    @property
    def output(self) -> Path:
        """Expanded output path as a Path object."""
        return Path(self.output_path).expanduser()

    @model_validator(mode="after")
    def _distinct_variables(self) -> ArtifactSettings:
        if self.samples_variable == self.rate_variable:
            msg = "samples_variable and rate_variable must differ"
            raise ValueError(msg)
        return self


class PreviewSettings(BaseSettings):
    """Interactive audition of the original, filtered and resampled clips."""

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    enabled: bool = Field(default=False, validation_alias="WAVEPREP_PREVIEW")
    pause_padding_s: float = Field(
        default=DEFAULT_PREVIEW_PAUSE_PADDING_S,
        ge=0.0,
        le=60.0,
        validation_alias="WAVEPREP_PREVIEW_PAUSE_PADDING_S",
    )


class WaveprepSettings(BaseSettings):
    """Root settings — aggregates all subsystem settings.

    Loads ``.env`` from the current directory when present.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)
    artifact: ArtifactSettings = Field(default_factory=ArtifactSettings)
    preview: PreviewSettings = Field(default_factory=PreviewSettings)


@lru_cache(maxsize=1)
def get_settings() -> WaveprepSettings:
    """Return the singleton ``WaveprepSettings`` instance.

    The result is cached — subsequent calls return the same object.
    Call ``get_settings.cache_clear()`` in tests to reset.
    """
    return WaveprepSettings()
