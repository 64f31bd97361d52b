"""SplineResampleStage — converts a waveform to the target update rate.

Uses a natural cubic spline through the input samples, evaluated on the
output time grid. No band limiting happens here: the anti-alias filter must
already have removed energy above ``target_rate / 2``.
"""

from __future__ import annotations

import math
from fractions import Fraction

import numpy as np
from scipy.interpolate import CubicSpline

from waveprep._audio_constants import DEFAULT_FREQ_OUTPUT
from waveprep.exceptions import ResampleLengthError
from waveprep.preprocessing.stages import WaveformStage


def resampled_length(n_samples: int, source_rate: float, target_rate: float) -> int:
    """Exact ``floor(n_samples * target_rate / source_rate)``.

    Rational arithmetic keeps exact multiples (e.g. 44100 * 4000 / 44100)
    from rounding down by one.
    """
    ratio = Fraction(target_rate) / Fraction(source_rate)
    return math.floor(n_samples * ratio)


def spline_resample(audio: np.ndarray, source_rate: float, target_rate: float) -> np.ndarray:
    """Resample ``audio`` from ``source_rate`` to ``target_rate``.

    Sample ``k`` (1-based) of the input sits at ``k / source_rate`` seconds and
    sample ``j`` of the output at ``j / target_rate``, so both grids start one
    period after t=0 and cover the same duration.

    Args:
        audio: 1-D float signal.
        source_rate: Input sample rate in Hz.
        target_rate: Output sample rate in Hz.

    Returns:
        Float64 resampled audio of length ``resampled_length(...)``.

    Raises:
        ResampleLengthError: If the output would be empty.
    """
    n_in = len(audio)
    n_out = resampled_length(n_in, source_rate, target_rate)
    if n_out <= 0:
        raise ResampleLengthError(n_in, source_rate, target_rate)

    audio = np.asarray(audio, dtype=np.float64)

    # Same grid: spline evaluated at its own knots.
    if Fraction(source_rate) == Fraction(target_rate):
        return audio.copy()

    # A spline needs two knots; a single sample is a constant signal.
    if n_in == 1:
        return np.full(n_out, audio[0], dtype=np.float64)

    t_in = np.arange(1, n_in + 1, dtype=np.float64) / source_rate
    t_out = np.arange(1, n_out + 1, dtype=np.float64) / target_rate

    spline = CubicSpline(t_in, audio, bc_type="natural")
    return np.asarray(spline(t_out), dtype=np.float64)


class SplineResampleStage(WaveformStage):
    """Resampling stage for the preparation pipeline.

    Args:
        target_rate: Target sample rate in Hz (default: 4000).
    """

    def __init__(self, target_rate: float = DEFAULT_FREQ_OUTPUT) -> None:
        self._target_rate = target_rate

    @property
    def name(self) -> str:
        """Identifier name for the stage."""
        return "resample"

    @property
    def target_rate(self) -> float:
        """Output sample rate in Hz."""
        return self._target_rate

    def process(self, audio: np.ndarray, sample_rate: float) -> tuple[np.ndarray, float]:
        """Convert audio to the target sample rate.

        Args:
            audio: Numpy float array with audio samples (mono).
            sample_rate: Current sample rate in Hz.

        Returns:
            Tuple (resampled float64 audio, target sample rate).

        Raises:
            ResampleLengthError: If the output would be empty.
        """
        return spline_resample(audio, sample_rate, self._target_rate), self._target_rate
