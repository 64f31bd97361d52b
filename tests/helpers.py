"""Shared test helpers.

Usage:
    from tests.helpers import make_impulse, make_sine, write_wav
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import soundfile as sf


def make_sine(
    frequency: float = 500.0,
    sample_rate: float = 44100,
    duration: float = 1.0,
    amplitude: float = 0.5,
) -> np.ndarray:
    """Float64 sine wave."""
    t = np.arange(int(sample_rate * duration)) / sample_rate
    return amplitude * np.sin(2 * np.pi * frequency * t)


def make_impulse(n_samples: int = 2001, position: int | None = None) -> np.ndarray:
    """Unit impulse, centered by default."""
    audio = np.zeros(n_samples)
    audio[n_samples // 2 if position is None else position] = 1.0
    return audio


def write_wav(path: Path, data: np.ndarray, sample_rate: int) -> Path:
    """Write a 32-bit float WAV (samples x channels) and return its path."""
    sf.write(str(path), data, sample_rate, subtype="FLOAT")
    return path
