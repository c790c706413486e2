"""CLI tests for configuration resolution, diagnostics, and exit codes."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from typer.testing import CliRunner

from radiotag.audio import concat as concat_module
from radiotag.audio import probe as probe_module
from radiotag.audio import transcode as transcode_module
from radiotag.cli import app
from radiotag.config import RadioTagConfig
from radiotag.errors import ConcatenationError
from radiotag.models.datatypes import ProbeResult, RunResult


@pytest.fixture
def forbid_external_tools(monkeypatch: pytest.MonkeyPatch) -> None:
    """Fail the test if any stage tries to launch ffmpeg or ffprobe."""

    def _forbidden(*args: object, **kwargs: object) -> None:
        _ = kwargs
        raise AssertionError(f"external tool invoked: {args}")

    monkeypatch.setattr(probe_module.subprocess, "run", _forbidden)
    monkeypatch.setattr(transcode_module.subprocess, "run", _forbidden)
    monkeypatch.setattr(concat_module.subprocess, "Popen", _forbidden)


@pytest.mark.usefixtures("forbid_external_tools")
def test_run_without_configuration_exits_1_without_tool_calls() -> None:
    """Missing required settings should be reported and exit with code 1."""

    result = CliRunner().invoke(app, ["run"])

    assert result.exit_code == 1
    assert "run failed at stage `config`" in result.output
    assert "MAIN_AUDIO_PATH" in result.output
    assert "RADIO_TAG_PATH" in result.output
    assert "OUTPUT_PATH" in result.output


@pytest.mark.usefixtures("forbid_external_tools")
def test_run_with_partial_configuration_names_missing_value(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Only the absent setting should be named."""

    monkeypatch.setenv("MAIN_AUDIO_PATH", "voice.wav")
    monkeypatch.setenv("RADIO_TAG_PATH", "jingle.wav")

    result = CliRunner().invoke(app, ["run"])

    assert result.exit_code == 1
    assert "Missing required setting(s) in configuration: OUTPUT_PATH" in result.output


@pytest.mark.usefixtures("forbid_external_tools")
def test_run_reports_missing_input_file(tmp_path: Path) -> None:
    """A missing main file should exit 1 before any tool invocation."""

    (tmp_path / "jingle.wav").write_bytes(b"tag")

    result = CliRunner().invoke(
        app,
        [
            "run",
            "--main",
            str(tmp_path / "voice.wav"),
            "--tag",
            str(tmp_path / "jingle.wav"),
            "--out",
            str(tmp_path / "final.mp3"),
        ],
    )

    assert result.exit_code == 1
    assert "run failed at stage `inputs`" in result.output
    assert "File not found" in result.output


@pytest.mark.usefixtures("forbid_external_tools")
def test_run_reads_dotenv_file(tmp_path: Path) -> None:
    """Settings from `.env` in the working directory should be used."""

    (tmp_path / ".env").write_text(
        "MAIN_AUDIO_PATH=voice.flac\nRADIO_TAG_PATH=jingle.wav\nOUTPUT_PATH=final.mp3\n",
        encoding="utf-8",
    )
    try:
        result = CliRunner().invoke(app, ["run"])
    finally:
        for key in ("MAIN_AUDIO_PATH", "RADIO_TAG_PATH", "OUTPUT_PATH"):
            os.environ.pop(key, None)

    assert result.exit_code == 1
    assert "run failed at stage `validate`" in result.output
    assert "Unsupported audio format: flac" in result.output


def test_run_reports_stage_error_with_hint(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    """Pipeline stage errors should print stage, detail, and hint."""

    def _failing_run(*_: object, **__: object) -> None:
        raise ConcatenationError(
            "ffmpeg concatenation failed for `final.mp3` (exit code 1): boom",
            hint="Verify local ffmpeg codec support (`libmp3lame` for mp3 output).",
        )

    monkeypatch.setattr("radiotag.cli.RadioTagPipeline.run", _failing_run)

    result = CliRunner().invoke(
        app,
        ["run", "--main", "voice.wav", "--tag", "jingle.wav", "--out", str(tmp_path / "f.mp3")],
    )

    assert result.exit_code == 1
    assert "run failed at stage `concatenate`" in result.output
    assert "Hint: Verify local ffmpeg codec support" in result.output


def test_run_passes_cli_overrides_and_prints_summary(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    """CLI options should override the environment and reach the pipeline."""

    seen: list[RadioTagConfig] = []
    output_path = tmp_path / "final.wav"

    def _fake_run(self: object, config: RadioTagConfig) -> RunResult:
        _ = self
        seen.append(config)
        probe = ProbeResult(path=config.main_audio, has_audio=True, duration_seconds=5.0)
        return RunResult(
            output_path=config.output_path,
            output_format="wav",
            expected_duration_seconds=9.0,
            main_probe=probe,
            tag_probe=probe,
        )

    monkeypatch.setattr("radiotag.cli.RadioTagPipeline.run", _fake_run)
    monkeypatch.setenv("MAIN_AUDIO_PATH", "env-voice.wav")
    monkeypatch.setenv("RADIO_TAG_PATH", "jingle.wav")
    monkeypatch.setenv("OUTPUT_PATH", "env-final.mp3")

    result = CliRunner().invoke(
        app,
        [
            "run",
            "--main",
            "cli-voice.wav",
            "--out",
            str(output_path),
            "--mp3-quality",
            "2",
            "--parallel-transcode",
        ],
    )

    assert result.exit_code == 0, result.output
    assert seen[0].main_audio == Path("cli-voice.wav")
    assert seen[0].radio_tag == Path("jingle.wav")
    assert seen[0].output_path == output_path
    assert seen[0].mp3_quality == 2
    assert seen[0].parallel_transcode is True
    assert "Expected duration (s): 9.000" in result.output
    assert f"Saved to: {output_path}" in result.output


@pytest.mark.usefixtures("forbid_external_tools")
def test_run_rejects_out_of_range_quality_option_with_exit_1() -> None:
    """Out-of-range quality on the command line should fail config like the env value."""

    result = CliRunner().invoke(
        app,
        ["run", "--main", "a.wav", "--tag", "b.wav", "--out", "c.mp3", "--mp3-quality", "12"],
    )

    assert result.exit_code == 1
    assert "run failed at stage `config`" in result.output
    assert "mp3_quality" in result.output


@pytest.mark.usefixtures("forbid_external_tools")
def test_env_and_cli_quality_errors_share_exit_code(monkeypatch: pytest.MonkeyPatch) -> None:
    """The environment source should fail with the same exit code as the option."""

    monkeypatch.setenv("RADIOTAG_MP3_QUALITY", "12")

    result = CliRunner().invoke(
        app, ["run", "--main", "a.wav", "--tag", "b.wav", "--out", "c.mp3"]
    )

    assert result.exit_code == 1
    assert "run failed at stage `config`" in result.output


def test_formats_command_lists_supported_formats() -> None:
    """The formats command should print one format per line."""

    result = CliRunner().invoke(app, ["formats"])

    assert result.exit_code == 0
    assert result.output.splitlines() == ["mp3", "wav"]


def test_probe_command_prints_metadata(monkeypatch: pytest.MonkeyPatch) -> None:
    """The probe command should render codec, rate, channels, and duration."""

    def _fake_probe(self: object, path: Path, role: str = "input") -> ProbeResult:
        _ = self
        _ = role
        return ProbeResult(
            path=path,
            has_audio=True,
            codec_name="mp3",
            sample_rate=22050,
            channels=1,
            duration_seconds=2.0,
        )

    monkeypatch.setattr("radiotag.cli.AudioProber.probe", _fake_probe)

    result = CliRunner().invoke(app, ["probe", "jingle.mp3"])

    assert result.exit_code == 0
    assert "Codec: mp3" in result.output
    assert "Sample rate (Hz): 22050" in result.output
    assert "Channels: 1" in result.output
    assert "Duration (s): 2.000" in result.output
