"""Shared fixtures for all tests."""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure repo root is on sys.path so tests can import the `waveprep` package
# when running pytest from the repository root without an editable install.
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

import numpy as np  # noqa: E402
import pytest  # noqa: E402

from tests.helpers import make_sine, write_wav  # noqa: E402
from waveprep.config.settings import get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings are cached process-wide; start every test from the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sine_44khz() -> np.ndarray:
    """1 second, 500 Hz, amplitude 0.5 sine at 44.1 kHz."""
    return make_sine(frequency=500.0, sample_rate=44100, duration=1.0, amplitude=0.5)


@pytest.fixture
def wav_44khz(tmp_path: Path, sine_44khz: np.ndarray) -> Path:
    """Mono float WAV holding ``sine_44khz``."""
    return write_wav(tmp_path / "tone_44khz.wav", sine_44khz, 44100)


@pytest.fixture
def stereo_wav_44khz(tmp_path: Path, sine_44khz: np.ndarray) -> Path:
    """Stereo float WAV: channel 0 is ``sine_44khz``, channel 1 is noise."""
    rng = np.random.default_rng(7)
    right = 0.9 * rng.uniform(-1.0, 1.0, size=len(sine_44khz))
    return write_wav(
        tmp_path / "stereo_44khz.wav", np.column_stack([sine_44khz, right]), 44100
    )
