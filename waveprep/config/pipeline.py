"""Waveform Preparation Pipeline configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, model_validator

from waveprep._audio_constants import DEFAULT_CHANNEL_INDEX, DEFAULT_FREQ_OUTPUT
from waveprep.coefficients import FilterCoefficients

if TYPE_CHECKING:
    from waveprep.config.settings import PipelineSettings


class PipelineConfig(BaseModel):
    """Explicit configuration record passed to the pipeline.

    When ``filter_numerator``/``filter_denominator`` are omitted the
    coefficients are taken from the preset table by input sample rate.
    ``filter_design_rate`` records which input rate explicit coefficients were
    designed for so the pipeline can check it against the loaded waveform.
    """

    freq_output: float = Field(default=DEFAULT_FREQ_OUTPUT, gt=0)
    input_channel_index: int = Field(default=DEFAULT_CHANNEL_INDEX, ge=0)
    filter_numerator: list[float] | None = None
    filter_denominator: list[float] | None = None
    filter_design_rate: float | None = Field(default=None, gt=0)
    strict_rate_check: bool = True

    @model_validator(mode="after")
    def _coefficients_complete(self) -> PipelineConfig:
        has_num = self.filter_numerator is not None
        has_den = self.filter_denominator is not None
        if has_num != has_den:
            msg = "filter_numerator and filter_denominator must be given together"
            raise ValueError(msg)
        if not has_num and self.filter_design_rate is not None:
            msg = "filter_design_rate requires explicit filter coefficients"
            raise ValueError(msg)
        if has_num:
            assert self.filter_numerator is not None
            assert self.filter_denominator is not None
            if not self.filter_numerator or not self.filter_denominator:
                msg = "filter coefficients must not be empty"
                raise ValueError(msg)
            if self.filter_denominator[0] == 0.0:
                msg = "filter_denominator[0] must be non-zero"
                raise ValueError(msg)
        return self

    @property
    def explicit_coefficients(self) -> FilterCoefficients | None:
        """Coefficients supplied in this config, or None to use the presets."""
        if self.filter_numerator is None or self.filter_denominator is None:
            return None
        return FilterCoefficients(
            numerator=tuple(self.filter_numerator),
            denominator=tuple(self.filter_denominator),
            design_rate=self.filter_design_rate,
            description="configured",
        )

    @classmethod
    def from_settings(cls, settings: PipelineSettings, **overrides: object) -> PipelineConfig:
        """Build a config from environment settings, with explicit overrides."""
        values: dict[str, object] = {
            "freq_output": settings.freq_output,
            "input_channel_index": settings.channel_index,
            "strict_rate_check": settings.strict_rate_check,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(values)
