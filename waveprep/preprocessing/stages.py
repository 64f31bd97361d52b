"""Base interface for Waveform Preparation Pipeline stages."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import numpy as np


class WaveformStage(ABC):
    """Individual waveform preparation stage.

    Each stage receives a float64 mono array and its sample rate, processes
    the samples, and returns the result with the (possibly new) sample rate.
    Stages are stateless: nothing carries over between calls.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Identifier name for the stage (e.g. 'zero_phase_filter', 'resample')."""
        ...

    @abstractmethod
    def process(self, audio: np.ndarray, sample_rate: float) -> tuple[np.ndarray, float]:
        """Process a whole waveform.

        Args:
            audio: Numpy float64 array with audio samples (mono).
            sample_rate: Current sample rate in Hz.

        Returns:
            Tuple (processed audio, new sample rate).
        """
        ...
