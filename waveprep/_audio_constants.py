"""Centralized audio constants for waveprep.

Single source of truth for target update rates, channel selection, artifact
layout and preview timing shared by settings, pipeline config, stages and CLI.
"""

from __future__ import annotations

# --- Target update rate ---
# Dexterit-E R2015a and later run task models at 4 kHz.
DEFAULT_FREQ_OUTPUT: int = 4000

# --- Input selection ---
# Multi-channel sources are reduced to this channel.
DEFAULT_CHANNEL_INDEX: int = 0

# Variable names used when reading a pre-decoded MATLAB .mat source.
DEFAULT_MAT_SAMPLES_VARIABLE: str = "y"
DEFAULT_MAT_RATE_VARIABLE: str = "Fs"

# --- Output artifact ---
DEFAULT_OUTPUT_PATH: str = "sampleSound.mat"
DEFAULT_SAMPLES_VARIABLE: str = "outputWaveform"
DEFAULT_RATE_VARIABLE: str = "freqOutput"

# --- Preview ---
# Seconds of silence appended to each clip's duration before the next one plays.
DEFAULT_PREVIEW_PAUSE_PADDING_S: float = 1.0
