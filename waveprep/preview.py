"""Audition of prepared waveforms.

Plays the original, filtered and resampled clips one after another so an
operator can confirm the result sounds right. The pipeline never depends on
this module; headless runs simply do not call it, or use ``NullPreview``.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from waveprep._audio_constants import DEFAULT_PREVIEW_PAUSE_PADDING_S
from waveprep.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from waveprep._types import PipelineResult, Waveform

logger = get_logger("preview")


class AudioPreview(ABC):
    """Plays a waveform and returns once the listener has heard it."""

    @abstractmethod
    def play(self, waveform: Waveform, label: str = "") -> None:
        """Play ``waveform`` at its own sample rate."""
        ...


class NullPreview(AudioPreview):
    """Preview that plays nothing (headless / batch runs)."""

    def play(self, waveform: Waveform, label: str = "") -> None:
        logger.debug("preview_skipped", clip=label, samples=len(waveform))


class SoundDevicePreview(AudioPreview):
    """Plays clips on the default output device via sounddevice.

    Playback blocks until the clip ends, then the call sleeps for
    ``pause_padding_s``, leaving a gap before the next clip.

    Args:
        pause_padding_s: Extra seconds to wait after each clip.
        sleep: Wall-clock sleep function. Defaults to ``time.sleep``.
    """

    def __init__(
        self,
        pause_padding_s: float = DEFAULT_PREVIEW_PAUSE_PADDING_S,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        self._pause_padding_s = pause_padding_s
        self._sleep = sleep if sleep is not None else time.sleep

    def play(self, waveform: Waveform, label: str = "") -> None:
        import sounddevice as sd

        logger.info(
            "preview_play",
            clip=label,
            sample_rate=waveform.sample_rate,
            duration_s=round(waveform.duration_s, 3),
        )
        # The audio device needs an integral rate; fractional rates are rounded.
        sd.play(waveform.samples, samplerate=int(round(waveform.sample_rate)), blocking=True)
        self._sleep(self._pause_padding_s)


def audition(preview: AudioPreview, clips: Iterable[tuple[str, Waveform]]) -> None:
    """Play labelled clips in order."""
    for label, waveform in clips:
        preview.play(waveform, label=label)


def result_clips(result: PipelineResult) -> list[tuple[str, Waveform]]:
    """Original, filtered and resampled clips of a pipeline run, in play order."""
    return [
        ("original", result.original),
        ("filtered", result.filtered),
        ("resampled", result.resampled),
    ]
