"""`waveprep presets` command — lists the built-in anti-alias filter coefficients."""

from __future__ import annotations

import click

from waveprep.cli.main import cli
from waveprep.coefficients import PRESETS, supported_rates


def _format_vector(values: tuple[float, ...]) -> str:
    return "[" + ", ".join(f"{v:.9g}" for v in values) + "]"


@cli.command()
def presets() -> None:
    """List filter coefficient presets by input sample rate."""
    for rate in supported_rates():
        coefficients = PRESETS[rate]
        click.echo(f"{rate} Hz  {coefficients.description}")
        click.echo(f"  NUM = {_format_vector(coefficients.numerator)}")
        click.echo(f"  DEN = {_format_vector(coefficients.denominator)}")
