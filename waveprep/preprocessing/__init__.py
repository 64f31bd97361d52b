"""Waveform Preparation Pipeline.

Prepares recorded audio for a fixed-rate control loop.
Pipeline: Load (mono) -> Zero-phase Filter -> Peak Normalize -> Spline Resample -> Artifact.
"""

from __future__ import annotations

from waveprep.preprocessing.pipeline import WaveformPreparationPipeline
from waveprep.preprocessing.stages import WaveformStage

__all__ = ["WaveformPreparationPipeline", "WaveformStage"]
