"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics,
progress lines, and run summaries.
"""

from __future__ import annotations

from typing import NoReturn

import typer

from .errors import PipelineStageError
from .models.datatypes import ProbeResult, RunResult


class StageProgressIndicator:
    """Render per-stage progress lines and concatenation percentages."""

    _SPINNER_FRAMES = "|/-\\"

    def __init__(self, command_name: str) -> None:
        self._command_name = command_name

    def on_stage_start(self, stage_name: str, stage_index: int, stage_total: int) -> None:
        """Print one progress line for a stage start transition."""

        spinner = self._SPINNER_FRAMES[(stage_index - 1) % len(self._SPINNER_FRAMES)]
        typer.echo(
            f"[progress] command={self._command_name} "
            f"{spinner} {stage_index}/{stage_total} stage={stage_name}"
        )

    def on_concat_progress(self, percent: int) -> None:
        """Print one concatenation percentage line."""

        typer.secho(f"Processing: {percent}%", fg=typer.colors.CYAN)


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, PipelineStageError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def echo_inputs(main_audio: object, radio_tag: object, output_path: object) -> None:
    """Print the files a run will process."""

    typer.secho("Processing files:", fg=typer.colors.MAGENTA, bold=True)
    typer.echo(f"  Main audio: {main_audio}")
    typer.echo(f"  Radio tag: {radio_tag}")
    typer.echo(f"  Output: {output_path}")


def echo_run_summary(result: RunResult) -> None:
    """Print the output location and expected duration of a finished run."""

    typer.secho("Processing completed!", fg=typer.colors.GREEN, bold=True)
    if result.expected_duration_seconds is not None:
        typer.echo(f"Expected duration (s): {result.expected_duration_seconds:.3f}")
    typer.secho(f"Saved to: {result.output_path}", fg=typer.colors.GREEN)


def echo_probe_result(result: ProbeResult) -> None:
    """Print probe metadata for one file."""

    def _show(value: object) -> str:
        return "unknown" if value is None else str(value)

    typer.echo(f"File: {result.path}")
    typer.echo(f"Codec: {_show(result.codec_name)}")
    typer.echo(f"Sample rate (Hz): {_show(result.sample_rate)}")
    typer.echo(f"Channels: {_show(result.channels)}")
    duration = (
        f"{result.duration_seconds:.3f}" if result.duration_seconds is not None else "unknown"
    )
    typer.echo(f"Duration (s): {duration}")
