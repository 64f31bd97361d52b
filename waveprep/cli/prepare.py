"""`waveprep prepare` command — runs the preparation pipeline on one file."""

from __future__ import annotations

import sys
from pathlib import Path

import click
from pydantic import ValidationError

from waveprep.cli.main import cli
from waveprep.config.pipeline import PipelineConfig
from waveprep.config.settings import get_settings
from waveprep.exceptions import WaveprepError
from waveprep.logging import configure_logging, get_logger
from waveprep.preprocessing.pipeline import WaveformPreparationPipeline
from waveprep.preview import NullPreview, SoundDevicePreview, audition, result_clips

logger = get_logger("cli.prepare")


def _parse_vector(
    ctx: click.Context, param: click.Parameter, value: str | None
) -> list[float] | None:
    """Parse a comma-separated coefficient list, e.g. ``1,-2.43,2.01,-0.56``."""
    if value is None:
        return None
    try:
        return [float(v) for v in value.replace(" ", "").strip("[]").split(",") if v]
    except ValueError as err:
        raise click.BadParameter(f"expected comma-separated numbers: {err}") from err


@cli.command()
@click.argument("input_path", type=click.Path(path_type=Path))
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Artifact path (.mat or .npz). Default: WAVEPREP_OUTPUT_PATH or sampleSound.mat.",
)
@click.option(
    "--freq-output",
    type=float,
    default=None,
    help="Target update rate in Hz (4000; use 2000 for Dexterit-E R2013a and earlier).",
)
@click.option("--channel", type=int, default=None, help="Input channel to keep (0-based).")
@click.option(
    "--num",
    callback=_parse_vector,
    default=None,
    help="Filter numerator, comma-separated. Default: preset for the input rate.",
)
@click.option("--den", callback=_parse_vector, default=None, help="Filter denominator.")
@click.option(
    "--design-rate",
    type=float,
    default=None,
    help="Input sample rate the --num/--den coefficients were designed for.",
)
@click.option(
    "--lenient",
    is_flag=True,
    default=False,
    help="Warn instead of failing when --design-rate differs from the input rate.",
)
@click.option("--sample-rate", type=float, default=None, help="Sample rate for .mat input.")
@click.option("--mat-variable", default=None, help="Sample matrix variable in .mat input.")
@click.option("--mat-rate-variable", default=None, help="Sample rate variable in .mat input.")
@click.option("--overwrite", is_flag=True, default=False, help="Replace an existing artifact.")
@click.option(
    "--preview/--no-preview",
    default=None,
    help="Play original, filtered and resampled clips after processing.",
)
@click.option(
    "--log-format",
    type=click.Choice(["console", "json"]),
    default=None,
    help="Log format.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    default=None,
    help="Log level.",
)
def prepare(
    input_path: Path,
    output_path: Path | None,
    freq_output: float | None,
    channel: int | None,
    num: list[float] | None,
    den: list[float] | None,
    design_rate: float | None,
    lenient: bool,
    sample_rate: float | None,
    mat_variable: str | None,
    mat_rate_variable: str | None,
    overwrite: bool,
    preview: bool | None,
    log_format: str | None,
    log_level: str | None,
) -> None:
    """Filter, normalize and resample INPUT_PATH for the robot update rate."""
    if log_format is not None or log_level is not None:
        configure_logging(log_format=log_format, level=log_level, force=True)

    settings = get_settings()

    try:
        config = PipelineConfig.from_settings(
            settings.pipeline,
            freq_output=freq_output,
            input_channel_index=channel,
            filter_numerator=num,
            filter_denominator=den,
            filter_design_rate=design_rate,
            strict_rate_check=False if lenient else None,
        )
    except ValidationError as err:
        click.echo(f"Error: invalid configuration: {err}", err=True)
        sys.exit(1)

    load_options = {
        k: v
        for k, v in (("mat_variable", mat_variable), ("mat_rate_variable", mat_rate_variable))
        if v is not None
    }

    enabled = settings.preview.enabled if preview is None else preview
    if enabled:
        try:
            import sounddevice  # noqa: F401
        except (ImportError, OSError):
            click.echo(
                "Error: sounddevice is not available. Install with: pip install waveprep[preview]",
                err=True,
            )
            sys.exit(1)

    pipeline = WaveformPreparationPipeline(config)
    destination = output_path if output_path is not None else settings.artifact.output

    try:
        result = pipeline.run(
            input_path,
            destination,
            sample_rate=sample_rate,
            samples_variable=settings.artifact.samples_variable,
            rate_variable=settings.artifact.rate_variable,
            overwrite=overwrite,
            **load_options,
        )
    except (WaveprepError, FileExistsError) as err:
        logger.error("prepare_failed", input=str(input_path), error=str(err))
        click.echo(f"Error: {err}", err=True)
        sys.exit(1)

    click.echo(
        f"Wrote {destination} ({len(result.resampled)} samples @ "
        f"{result.resampled.sample_rate:g} Hz, scaling factor {result.scaling_factor:.6g})"
    )

    player = (
        SoundDevicePreview(pause_padding_s=settings.preview.pause_padding_s)
        if enabled
        else NullPreview()
    )
    audition(player, result_clips(result))
