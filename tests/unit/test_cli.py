"""Tests for the `waveprep` CLI commands."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import numpy as np
import pytest
import scipy.io
from click.testing import CliRunner

import waveprep
from tests.helpers import make_sine, write_wav
from waveprep.cli import cli
from waveprep.preprocessing.audio_io import read_artifact


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestPrepareCommand:
    def test_writes_artifact(self, runner: CliRunner, tmp_path: Path, wav_44khz: Path) -> None:
        # Arrange
        output = tmp_path / "sampleSound.mat"

        # Act
        result = runner.invoke(cli, ["prepare", str(wav_44khz), "-o", str(output)])

        # Assert
        assert result.exit_code == 0, result.output
        assert "4000 samples" in result.output
        artifact = read_artifact(output)
        assert len(artifact) == 4000
        assert artifact.sample_rate == 4000

    def test_freq_output_option(self, runner: CliRunner, tmp_path: Path, wav_44khz: Path) -> None:
        output = tmp_path / "out.npz"

        result = runner.invoke(
            cli, ["prepare", str(wav_44khz), "-o", str(output), "--freq-output", "2000"]
        )

        assert result.exit_code == 0, result.output
        assert len(read_artifact(output)) == 2000

    def test_freq_output_from_env(
        self, runner: CliRunner, tmp_path: Path, wav_44khz: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("WAVEPREP_FREQ_OUTPUT", "2000")
        output = tmp_path / "out.mat"

        result = runner.invoke(cli, ["prepare", str(wav_44khz), "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert read_artifact(output).sample_rate == 2000

    def test_default_output_from_env(
        self, runner: CliRunner, tmp_path: Path, wav_44khz: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        output = tmp_path / "env_out.mat"
        monkeypatch.setenv("WAVEPREP_OUTPUT_PATH", str(output))

        result = runner.invoke(cli, ["prepare", str(wav_44khz)])

        assert result.exit_code == 0, result.output
        assert output.exists()

    def test_channel_option(self, runner: CliRunner, tmp_path: Path) -> None:
        tone = make_sine(sample_rate=22050, duration=1.0)
        stereo = np.column_stack([np.zeros_like(tone), tone])
        path = write_wav(tmp_path / "right.wav", stereo, 22050)
        output = tmp_path / "out.mat"

        result = runner.invoke(cli, ["prepare", str(path), "-o", str(output), "--channel", "1"])

        assert result.exit_code == 0, result.output
        assert np.max(np.abs(read_artifact(output).samples)) == pytest.approx(1.0, rel=0.05)

    def test_missing_input(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(
            cli, ["prepare", str(tmp_path / "missing.wav"), "-o", str(tmp_path / "o.mat")]
        )

        assert result.exit_code == 1
        assert "Error" in result.output
        assert "not found" in result.output

    def test_existing_output(self, runner: CliRunner, tmp_path: Path, wav_44khz: Path) -> None:
        output = tmp_path / "out.mat"
        output.write_bytes(b"")

        result = runner.invoke(cli, ["prepare", str(wav_44khz), "-o", str(output)])

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_overwrite(self, runner: CliRunner, tmp_path: Path, wav_44khz: Path) -> None:
        output = tmp_path / "out.mat"
        output.write_bytes(b"")

        result = runner.invoke(
            cli, ["prepare", str(wav_44khz), "-o", str(output), "--overwrite"]
        )

        assert result.exit_code == 0, result.output
        assert len(read_artifact(output)) == 4000

    def test_unsupported_rate(self, runner: CliRunner, tmp_path: Path) -> None:
        path = write_wav(tmp_path / "48k.wav", make_sine(sample_rate=48000, duration=0.1), 48000)

        result = runner.invoke(cli, ["prepare", str(path), "-o", str(tmp_path / "o.mat")])

        assert result.exit_code == 1
        assert "48000" in result.output

    def test_silent_input(self, runner: CliRunner, tmp_path: Path) -> None:
        path = write_wav(tmp_path / "silence.wav", np.zeros(44100), 44100)

        result = runner.invoke(cli, ["prepare", str(path), "-o", str(tmp_path / "o.mat")])

        assert result.exit_code == 1
        assert "Cannot normalize" in result.output
        assert not (tmp_path / "o.mat").exists()

    def test_explicit_coefficients_mismatch(
        self, runner: CliRunner, tmp_path: Path, wav_44khz: Path
    ) -> None:
        args = [
            "prepare",
            str(wav_44khz),
            "-o",
            str(tmp_path / "o.mat"),
            "--num",
            "1.40997088e-02,4.22991263e-02,4.22991263e-02,1.40997088e-02",
            "--den",
            "1,-1.87302725,1.30032695,-0.314502036",
            "--design-rate",
            "22050",
        ]

        strict = runner.invoke(cli, args)
        lenient = runner.invoke(cli, [*args, "--lenient"])

        assert strict.exit_code == 1
        assert "designed for 22050 Hz" in strict.output
        assert lenient.exit_code == 0, lenient.output

    def test_bad_coefficient_list(self, runner: CliRunner, tmp_path: Path, wav_44khz: Path) -> None:
        result = runner.invoke(
            cli, ["prepare", str(wav_44khz), "--num", "1,abc", "--den", "1,0"]
        )

        assert result.exit_code == 2
        assert "comma-separated" in result.output

    def test_half_specified_coefficients(
        self, runner: CliRunner, tmp_path: Path, wav_44khz: Path
    ) -> None:
        result = runner.invoke(
            cli, ["prepare", str(wav_44khz), "-o", str(tmp_path / "o.mat"), "--num", "1,1"]
        )

        assert result.exit_code == 1
        assert "invalid configuration" in result.output

    def test_mat_input(self, runner: CliRunner, tmp_path: Path) -> None:
        source = tmp_path / "piano.mat"
        tone = make_sine(sample_rate=22050, duration=1.0)
        scipy.io.savemat(str(source), {"sound": tone[:, np.newaxis]})
        output = tmp_path / "o.mat"

        result = runner.invoke(
            cli,
            [
                "prepare",
                str(source),
                "-o",
                str(output),
                "--mat-variable",
                "sound",
                "--sample-rate",
                "22050",
            ],
        )

        assert result.exit_code == 0, result.output
        assert len(read_artifact(output)) == 4000

    def test_preview_plays_three_clips(
        self, runner: CliRunner, tmp_path: Path, wav_44khz: Path
    ) -> None:
        fake_sd = MagicMock()
        with (
            patch.dict("sys.modules", {"sounddevice": fake_sd}),
            patch("waveprep.preview.time.sleep") as fake_sleep,
        ):
            result = runner.invoke(
                cli, ["prepare", str(wav_44khz), "-o", str(tmp_path / "o.mat"), "--preview"]
            )

        assert result.exit_code == 0, result.output
        rates = [call.kwargs["samplerate"] for call in fake_sd.play.call_args_list]
        assert rates == [44100, 44100, 4000]
        assert fake_sleep.call_count == 3
        assert all(call.kwargs["blocking"] is True for call in fake_sd.play.call_args_list)

    def test_no_preview_by_default(
        self, runner: CliRunner, tmp_path: Path, wav_44khz: Path
    ) -> None:
        fake_sd = MagicMock()
        with patch.dict("sys.modules", {"sounddevice": fake_sd}):
            result = runner.invoke(cli, ["prepare", str(wav_44khz), "-o", str(tmp_path / "o.mat")])

        assert result.exit_code == 0, result.output
        fake_sd.play.assert_not_called()


class TestPresetsCommand:
    def test_lists_all_rates(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["presets"])

        assert result.exit_code == 0
        for rate in ("44100 Hz", "22050 Hz", "11025 Hz"):
            assert rate in result.output
        assert "NUM = [0.00221770132" in result.output
        assert "DEN = [1, -2.43191667" in result.output


class TestVersion:
    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert waveprep.__version__ in result.output
