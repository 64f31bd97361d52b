"""waveprep CLI.

Registers all commands on the main group.
"""

from waveprep.cli.main import cli
from waveprep.cli.prepare import prepare
from waveprep.cli.presets import presets

__all__ = ["cli", "prepare", "presets"]
