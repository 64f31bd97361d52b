"""Waveform loading and artifact persistence.

Loads audio files (via libsndfile) or pre-decoded MATLAB ``.mat`` arrays into
a mono float64 ``Waveform``, and writes the prepared waveform to a ``.mat`` or
``.npz`` artifact for the robot task program.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import scipy.io
import soundfile as sf

from waveprep._audio_constants import (
    DEFAULT_CHANNEL_INDEX,
    DEFAULT_MAT_RATE_VARIABLE,
    DEFAULT_MAT_SAMPLES_VARIABLE,
    DEFAULT_RATE_VARIABLE,
    DEFAULT_SAMPLES_VARIABLE,
)
from waveprep._types import Waveform
from waveprep.exceptions import ArtifactFormatError, AudioLoadError
from waveprep.logging import get_logger

logger = get_logger("preprocessing.audio_io")

ARTIFACT_SUFFIXES: tuple[str, ...] = (".mat", ".npz")


def load_waveform(
    path: Path,
    channel_index: int = DEFAULT_CHANNEL_INDEX,
    *,
    sample_rate: float | None = None,
    mat_variable: str = DEFAULT_MAT_SAMPLES_VARIABLE,
    mat_rate_variable: str = DEFAULT_MAT_RATE_VARIABLE,
) -> Waveform:
    """Load one channel of an audio source as a mono waveform.

    Audio containers (WAV, FLAC, OGG, ...) are decoded with soundfile and carry
    their own sample rate. ``.mat`` files hold a sample matrix in
    ``mat_variable`` (samples x channels); the rate comes from ``sample_rate``
    or, when omitted, from ``mat_rate_variable``.

    Args:
        path: Input file.
        channel_index: Channel to keep; the others are discarded.
        sample_rate: Sample rate override for ``.mat`` sources.
        mat_variable: Name of the sample matrix inside a ``.mat`` file.
        mat_rate_variable: Name of the sample-rate scalar inside a ``.mat`` file.

    Returns:
        Mono float64 waveform at the source sample rate.

    Raises:
        AudioLoadError: If the file is missing, undecodable, lacks the
            requested channel, or holds no valid samples.
    """
    path = Path(path)
    if not path.is_file():
        raise AudioLoadError(str(path), "file not found")

    if path.suffix.lower() == ".mat":
        data, rate = _read_mat(path, sample_rate, mat_variable, mat_rate_variable)
    else:
        try:
            data, rate = sf.read(str(path), dtype="float64", always_2d=True)
        except Exception as err:
            raise AudioLoadError(str(path), str(err)) from err
        if sample_rate is not None and float(sample_rate) != float(rate):
            logger.warning(
                "sample_rate_override_ignored",
                path=str(path),
                file_rate=rate,
                override=sample_rate,
            )

    n_channels = data.shape[1]
    if not 0 <= channel_index < n_channels:
        raise AudioLoadError(
            str(path), f"channel {channel_index} requested but source has {n_channels} channel(s)"
        )

    try:
        waveform = Waveform(samples=data[:, channel_index], sample_rate=rate)
    except ValueError as err:
        raise AudioLoadError(str(path), str(err)) from err

    logger.debug(
        "waveform_loaded",
        path=str(path),
        channels=n_channels,
        channel_index=channel_index,
        samples=len(waveform),
        sample_rate=waveform.sample_rate,
        duration_s=round(waveform.duration_s, 3),
    )
    return waveform


def _read_mat(
    path: Path,
    sample_rate: float | None,
    mat_variable: str,
    mat_rate_variable: str,
) -> tuple[np.ndarray, float]:
    """Read a samples x channels matrix and its rate from a ``.mat`` file."""
    try:
        contents = scipy.io.loadmat(str(path))
    except Exception as err:
        raise AudioLoadError(str(path), str(err)) from err

    if mat_variable not in contents:
        raise AudioLoadError(str(path), f"variable '{mat_variable}' not found")

    data = np.asarray(contents[mat_variable], dtype=np.float64)
    if data.ndim == 1:
        data = data[:, np.newaxis]
    elif data.ndim == 2 and data.shape[0] == 1 and data.shape[1] > 1:
        # MATLAB row vector
        data = data.T
    elif data.ndim != 2:
        raise AudioLoadError(str(path), f"variable '{mat_variable}' has shape {data.shape}")

    if sample_rate is None:
        if mat_rate_variable not in contents:
            raise AudioLoadError(
                str(path),
                f"no sample rate given and variable '{mat_rate_variable}' not found",
            )
        sample_rate = float(np.squeeze(contents[mat_rate_variable]))

    return data, sample_rate


def save_artifact(
    path: Path,
    waveform: Waveform,
    *,
    samples_variable: str = DEFAULT_SAMPLES_VARIABLE,
    rate_variable: str = DEFAULT_RATE_VARIABLE,
    overwrite: bool = False,
) -> Path:
    """Persist a prepared waveform for the robot task program.

    The samples are stored under ``samples_variable`` and the sample rate
    under ``rate_variable``; the task program does not otherwise know the
    rate the waveform was prepared for.

    Args:
        path: Destination, ``.mat`` or ``.npz``.
        waveform: Waveform to store.
        samples_variable: Key for the sample vector.
        rate_variable: Key for the sample rate.
        overwrite: Replace an existing file instead of failing.

    Returns:
        The path written.

    Raises:
        ArtifactFormatError: If the suffix is not supported.
        FileExistsError: If ``path`` exists and ``overwrite`` is False.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in ARTIFACT_SUFFIXES:
        raise ArtifactFormatError(str(path), ARTIFACT_SUFFIXES)

    if path.exists() and not overwrite:
        raise FileExistsError(f"Artifact already exists: {path}")

    path.parent.mkdir(parents=True, exist_ok=True)

    record = {
        samples_variable: np.asarray(waveform.samples, dtype=np.float64),
        rate_variable: float(waveform.sample_rate),
    }

    with path.open("wb") as f:
        if suffix == ".mat":
            scipy.io.savemat(f, record, oned_as="row")
        else:
            np.savez(f, **record)

    logger.info(
        "artifact_saved",
        path=str(path),
        samples=len(waveform),
        sample_rate=waveform.sample_rate,
    )
    return path


def read_artifact(
    path: Path,
    *,
    samples_variable: str = DEFAULT_SAMPLES_VARIABLE,
    rate_variable: str = DEFAULT_RATE_VARIABLE,
) -> Waveform:
    """Read back an artifact written by :func:`save_artifact`.

    Raises:
        ArtifactFormatError: If the suffix is not supported.
        KeyError: If either variable is missing.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in ARTIFACT_SUFFIXES:
        raise ArtifactFormatError(str(path), ARTIFACT_SUFFIXES)

    if suffix == ".mat":
        contents = scipy.io.loadmat(str(path))
        samples = np.ravel(contents[samples_variable])
        rate = float(np.squeeze(contents[rate_variable]))
    else:
        with np.load(path) as contents:
            samples = np.ravel(contents[samples_variable])
            rate = float(contents[rate_variable])

    return Waveform(samples=samples, sample_rate=rate)
