"""Peak normalization — the factor that brings a waveform's peak to full scale.

The line-out range of the robot is +/-1 V, so a peak of 1.0 is maximally
loud without clipping.
"""

from __future__ import annotations

import numpy as np

from waveprep.exceptions import DegenerateSignalError


def peak_scaling_factor(audio: np.ndarray) -> float:
    """Return ``1 / max(|audio|)``.

    Raises:
        DegenerateSignalError: If the peak is zero or not finite, or its
            reciprocal overflows.
    """
    peak = float(np.max(np.abs(audio))) if len(audio) else 0.0

    if peak == 0.0 or not np.isfinite(peak):
        raise DegenerateSignalError(peak)

    factor = 1.0 / peak
    if not np.isfinite(factor):
        raise DegenerateSignalError(peak)

    return factor
