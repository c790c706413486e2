"""Command-line interface for radiotag.

Responsibilities:
- Expose user-facing commands for the tag/main/tag pipeline.
- Resolve configuration from CLI options, YAML, `.env`, and the environment.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from dotenv import load_dotenv
import typer

from .audio.probe import AudioProber
from .audio.validation import SUPPORTED_FORMATS
from .cli_rendering import (
    StageProgressIndicator,
    echo_inputs,
    echo_probe_result,
    echo_run_summary,
    exit_with_command_error,
)
from .config import ConfigLoader
from .pipeline import RadioTagPipeline
from .runtime_tools import resolve_executable
from .telemetry.logger import RunLogger

app = typer.Typer(
    name="radiotag",
    no_args_is_help=True,
    help="Wrap an audio file with a radio tag at its start and end.",
)


@app.command("run")
def run_command(
    main_audio: Annotated[
        Path | None,
        typer.Option("--main", help="Main audio file (overrides MAIN_AUDIO_PATH)."),
    ] = None,
    radio_tag: Annotated[
        Path | None,
        typer.Option("--tag", help="Radio tag audio file (overrides RADIO_TAG_PATH)."),
    ] = None,
    output_path: Annotated[
        Path | None,
        typer.Option("--out", help="Output file, `.mp3` or `.wav` (overrides OUTPUT_PATH)."),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to YAML config file with run defaults."),
    ] = None,
    env_file: Annotated[
        Path | None,
        typer.Option(
            "--env-file",
            help="Dotenv file to load (defaults to `.env` in the working directory).",
        ),
    ] = None,
    mp3_quality: Annotated[
        int | None,
        typer.Option("--mp3-quality", help="LAME VBR quality, 0 (best) to 9."),
    ] = None,
    parallel_transcode: Annotated[
        bool | None,
        typer.Option(
            "--parallel-transcode/--sequential-transcode",
            help="Transcode tag and main concurrently before concatenation.",
        ),
    ] = None,
    work_dir: Annotated[
        Path | None,
        typer.Option("--work-dir", help="Parent directory for per-run temporary files."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Also log which ffmpeg and ffprobe executables are used.",
        ),
    ] = False,
) -> None:
    """Run validate, probe, transcode, and concatenate for one output file."""

    try:
        load_dotenv(dotenv_path=env_file or Path.cwd() / ".env", override=False)
        config = ConfigLoader.resolve(
            cli={
                "main_audio": main_audio,
                "radio_tag": radio_tag,
                "output_path": output_path,
                "mp3_quality": mp3_quality,
                "parallel_transcode": parallel_transcode,
                "work_dir": work_dir,
            },
            yaml_path=config_file,
        )
        echo_inputs(config.main_audio, config.radio_tag, config.output_path)
        progress = StageProgressIndicator(command_name="run")
        pipeline = RadioTagPipeline(
            run_logger=RunLogger(level="DEBUG" if verbose else "INFO"),
            stage_progress_callback=progress.on_stage_start,
            concat_progress_callback=progress.on_concat_progress,
        )
        result = pipeline.run(config)
    except Exception as exc:
        exit_with_command_error("run", exc)

    echo_run_summary(result)


@app.command("probe")
def probe_command(
    audio_file: Annotated[Path, typer.Argument(help="Audio file to inspect.")],
    ffprobe_binary: Annotated[
        str,
        typer.Option("--ffprobe", help="ffprobe executable name or path."),
    ] = "ffprobe",
) -> None:
    """Print codec, sample rate, channels, and duration of one file."""

    try:
        result = AudioProber(resolve_executable(ffprobe_binary)).probe(audio_file)
    except Exception as exc:
        exit_with_command_error("probe", exc)

    echo_probe_result(result)


@app.command("formats")
def formats_command() -> None:
    """List supported input and output formats."""

    for format_id in SUPPORTED_FORMATS:
        typer.echo(format_id)


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
