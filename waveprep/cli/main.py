"""Main CLI command group for waveprep."""

from __future__ import annotations

import click

import waveprep


@click.group()
@click.version_option(version=waveprep.__version__, prog_name="waveprep")
def cli() -> None:
    """waveprep — prepare audio waveforms for a fixed-rate robot control loop."""
