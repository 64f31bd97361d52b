"""waveprep — prepares recorded audio for playback on a fixed-rate control loop."""

from __future__ import annotations

__version__ = "0.1.0"
