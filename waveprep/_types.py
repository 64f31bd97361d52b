"""Core types for waveprep.

Waveforms are immutable snapshots: every pipeline stage produces a new
instance instead of mutating its input.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, slots=True)
class Waveform:
    """Mono sample sequence bound to the rate it was sampled at.

    Invariants: at least one sample, every sample finite, rate > 0.
    """

    samples: np.ndarray
    sample_rate: float

    def __post_init__(self) -> None:
        samples = np.array(self.samples, dtype=np.float64)
        if samples.ndim != 1:
            msg = f"Waveform samples must be 1-D, got shape {samples.shape}"
            raise ValueError(msg)
        if samples.size == 0:
            msg = "Waveform must contain at least one sample"
            raise ValueError(msg)
        if not np.all(np.isfinite(samples)):
            msg = "Waveform samples must be finite"
            raise ValueError(msg)
        if not self.sample_rate > 0:
            msg = f"Sample rate must be positive, got {self.sample_rate!r}"
            raise ValueError(msg)
        samples.setflags(write=False)
        object.__setattr__(self, "samples", samples)

    def __len__(self) -> int:
        return int(self.samples.size)

    @property
    def duration_s(self) -> float:
        """Duration in seconds."""
        return len(self) / self.sample_rate

    @property
    def peak(self) -> float:
        """Largest absolute sample value."""
        return float(np.max(np.abs(self.samples)))


@dataclass(frozen=True, slots=True)
class PipelineResult:
    """Outputs of one pipeline run.

    ``original`` and ``filtered`` share the input rate and were both scaled by
    ``scaling_factor``; ``resampled`` is at the configured output rate.
    """

    original: Waveform
    filtered: Waveform
    resampled: Waveform
    scaling_factor: float
