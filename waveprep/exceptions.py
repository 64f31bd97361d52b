"""Typed exceptions for waveprep.

Hierarchy:
    WaveprepError (base)
    +-- ConfigError
    |   +-- InvalidCoefficientsError
    |   +-- UnsupportedSampleRateError
    |   +-- CoefficientMismatchError
    +-- AudioError
    |   +-- AudioLoadError
    |   +-- DegenerateSignalError
    |   +-- ResampleLengthError
    +-- ArtifactError
        +-- ArtifactFormatError
"""

from __future__ import annotations


class WaveprepError(Exception):
    """Base for all waveprep exceptions."""


# --- Configuration ---


class ConfigError(WaveprepError):
    """Pipeline configuration error."""


class InvalidCoefficientsError(ConfigError):
    """Filter coefficients do not describe a usable transfer function."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid filter coefficients: {reason}")


class UnsupportedSampleRateError(ConfigError):
    """No preset filter coefficients exist for the input sample rate."""

    def __init__(self, sample_rate: float, supported: tuple[int, ...]) -> None:
        self.sample_rate = sample_rate
        self.supported = supported
        rates = ", ".join(str(r) for r in supported)
        super().__init__(
            f"No filter coefficients for input sample rate {sample_rate:g} Hz "
            f"(presets exist for: {rates}). Supply coefficients designed for this rate."
        )


class CoefficientMismatchError(ConfigError):
    """Filter coefficients were designed for a different input sample rate."""

    def __init__(self, design_rate: float, sample_rate: float) -> None:
        self.design_rate = design_rate
        self.sample_rate = sample_rate
        super().__init__(
            f"Filter coefficients were designed for {design_rate:g} Hz "
            f"but the waveform is sampled at {sample_rate:g} Hz"
        )


# --- Audio ---


class AudioError(WaveprepError):
    """Waveform processing error."""


class AudioLoadError(AudioError):
    """Input audio could not be read."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Could not load audio '{path}': {reason}")


class DegenerateSignalError(AudioError):
    """Filtered waveform has no usable peak, so it cannot be normalized."""

    def __init__(self, peak: float) -> None:
        self.peak = peak
        super().__init__(
            f"Cannot normalize waveform: filtered peak amplitude is {peak!r} "
            "(all-zero, non-finite or too small to invert)"
        )


class ResampleLengthError(AudioError):
    """Resampling would produce no output samples."""

    def __init__(self, n_samples: int, source_rate: float, target_rate: float) -> None:
        self.n_samples = n_samples
        self.source_rate = source_rate
        self.target_rate = target_rate
        super().__init__(
            f"Resampling {n_samples} samples from {source_rate:g} Hz to "
            f"{target_rate:g} Hz yields 0 output samples"
        )


# --- Artifact ---


class ArtifactError(WaveprepError):
    """Output artifact error."""


class ArtifactFormatError(ArtifactError):
    """Unsupported output artifact format."""

    def __init__(self, path: str, supported: tuple[str, ...]) -> None:
        self.path = path
        self.supported = supported
        super().__init__(
            f"Unsupported artifact format for '{path}' (expected one of: {', '.join(supported)})"
        )
