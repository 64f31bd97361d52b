"""Waveform Preparation Pipeline.

Orchestrates the preparation stages in a fixed order:
load -> zero-phase filter -> peak normalize -> spline resample -> persist.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np

from waveprep._types import PipelineResult, Waveform
from waveprep.coefficients import FilterCoefficients, preset_for_rate
from waveprep.exceptions import CoefficientMismatchError
from waveprep.logging import get_logger
from waveprep.preprocessing.audio_io import load_waveform, save_artifact
from waveprep.preprocessing.normalize import peak_scaling_factor
from waveprep.preprocessing.resample import SplineResampleStage
from waveprep.preprocessing.zero_phase import ZeroPhaseFilterStage

if TYPE_CHECKING:
    from waveprep.config.pipeline import PipelineConfig
    from waveprep.preprocessing.stages import WaveformStage

logger = get_logger("preprocessing.pipeline")


class WaveformPreparationPipeline:
    """Turns one recorded waveform into one waveform at the control-loop rate.

    Stages run strictly in sequence, with no retries; any error aborts the
    run. Normalization scales the *unfiltered* waveform by the factor measured
    on the *filtered* one, so the two can be auditioned at the same loudness.
    The original may therefore peak slightly above 1.0.

    Args:
        config: Pipeline configuration (output rate, channel, coefficients).
    """

    def __init__(self, config: PipelineConfig) -> None:
        self._config = config

    @property
    def config(self) -> PipelineConfig:
        """Pipeline configuration."""
        return self._config

    def resolve_coefficients(self, sample_rate: float) -> FilterCoefficients:
        """Choose the anti-alias coefficients for a waveform sampled at ``sample_rate``.

        Explicit coefficients from the config win; otherwise the preset for
        the rate is used.

        Raises:
            UnsupportedSampleRateError: No explicit coefficients and no preset.
            CoefficientMismatchError: Explicit coefficients designed for another
                rate while ``strict_rate_check`` is on.
        """
        logger.info(
            "input_sample_rate",
            sample_rate=sample_rate,
            message=(
                f"Sampling frequency of waveform is {sample_rate:g} Hz. "
                "Make sure that filter coefficients are correct."
            ),
        )

        coefficients = self._config.explicit_coefficients
        if coefficients is None:
            return preset_for_rate(sample_rate)

        if coefficients.design_rate is None:
            logger.warning(
                "coefficient_rate_unverified",
                sample_rate=sample_rate,
                message="Design rate of the configured coefficients is unknown; verify manually.",
            )
        elif not coefficients.matches_rate(sample_rate):
            if self._config.strict_rate_check:
                raise CoefficientMismatchError(coefficients.design_rate, sample_rate)
            logger.warning(
                "coefficient_rate_mismatch",
                design_rate=coefficients.design_rate,
                sample_rate=sample_rate,
            )
        return coefficients

    def build_stages(self, sample_rate: float) -> tuple[ZeroPhaseFilterStage, SplineResampleStage]:
        """Create the filter and resample stages for an input rate."""
        return (
            ZeroPhaseFilterStage(self.resolve_coefficients(sample_rate)),
            SplineResampleStage(self._config.freq_output),
        )

    def process(self, waveform: Waveform) -> PipelineResult:
        """Filter, normalize and resample an already loaded waveform.

        Args:
            waveform: Mono input waveform.

        Returns:
            The scaled original, scaled filtered, and resampled waveforms.

        Raises:
            ConfigError: If no usable coefficients exist for the input rate.
            DegenerateSignalError: If the filtered signal is all zero.
            ResampleLengthError: If resampling yields no samples.
        """
        filter_stage, resample_stage = self.build_stages(waveform.sample_rate)

        filtered, rate = _run_stage(filter_stage, waveform.samples, waveform.sample_rate)

        logger.debug("stage_start", stage="peak_normalize", sample_rate=rate)
        scaling_factor = peak_scaling_factor(filtered)
        original = np.asarray(waveform.samples, dtype=np.float64) * scaling_factor
        filtered = filtered * scaling_factor
        logger.debug(
            "stage_complete",
            stage="peak_normalize",
            sample_rate=rate,
            samples=len(filtered),
            scaling_factor=scaling_factor,
        )

        resampled, out_rate = _run_stage(resample_stage, filtered, rate)

        return PipelineResult(
            original=Waveform(samples=original, sample_rate=waveform.sample_rate),
            filtered=Waveform(samples=filtered, sample_rate=rate),
            resampled=Waveform(samples=resampled, sample_rate=out_rate),
            scaling_factor=scaling_factor,
        )

    def run(
        self,
        input_path: Path,
        output_path: Path | None = None,
        *,
        sample_rate: float | None = None,
        samples_variable: str | None = None,
        rate_variable: str | None = None,
        overwrite: bool = False,
        **load_options: str,
    ) -> PipelineResult:
        """Load ``input_path``, process it, and persist the resampled waveform.

        Args:
            input_path: Audio file or ``.mat`` source.
            output_path: Artifact destination; nothing is written when None.
            sample_rate: Sample rate for ``.mat`` sources without one.
            samples_variable: Artifact key for the samples.
            rate_variable: Artifact key for the sample rate.
            overwrite: Replace an existing artifact.
            **load_options: Passed to :func:`load_waveform`
                (``mat_variable``, ``mat_rate_variable``).

        Returns:
            The pipeline result.
        """
        waveform = load_waveform(
            Path(input_path),
            self._config.input_channel_index,
            sample_rate=sample_rate,
            **load_options,
        )
        result = self.process(waveform)

        if output_path is not None:
            artifact_keys = {
                k: v
                for k, v in (
                    ("samples_variable", samples_variable),
                    ("rate_variable", rate_variable),
                )
                if v is not None
            }
            save_artifact(Path(output_path), result.resampled, overwrite=overwrite, **artifact_keys)

        logger.info(
            "pipeline_complete",
            input=str(input_path),
            input_samples=len(waveform),
            input_rate=waveform.sample_rate,
            output_samples=len(result.resampled),
            output_rate=result.resampled.sample_rate,
            scaling_factor=round(result.scaling_factor, 6),
        )
        return result


def _run_stage(
    stage: WaveformStage, audio: np.ndarray, sample_rate: float
) -> tuple[np.ndarray, float]:
    logger.debug("stage_start", stage=stage.name, sample_rate=sample_rate)
    audio, sample_rate = stage.process(audio, sample_rate)
    logger.debug(
        "stage_complete",
        stage=stage.name,
        sample_rate=sample_rate,
        samples=len(audio),
    )
    return audio, sample_rate
