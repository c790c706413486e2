"""Configuration model and loaders for radiotag.

Responsibilities:
- Define run configuration as a typed dataclass.
- Load settings from environment variables and YAML files.
- Resolve layered sources with `cli` > `yaml` > `env` precedence.

Key types:
- `RadioTagConfig`: normalized settings for one pipeline run.
- `ConfigLoader`: static construction helpers for `RadioTagConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .errors import ConfigError
from .parsing import (
    normalize_optional_string,
    parse_int_in_range,
    parse_permissive_boolean,
)


DEFAULT_MP3_QUALITY = 0
DEFAULT_SAMPLE_RATE = 44100
DEFAULT_CHANNELS = 2


@dataclass(slots=True)
class RadioTagConfig:
    """Runtime configuration for one pipeline run.

    Attributes:
        main_audio: Main audio file placed between the two tags.
        radio_tag: Tag (station identifier) clip.
        output_path: Final output file; its extension selects the output format.
        mp3_quality: LAME VBR quality passed as `-q:a` (0 best, 9 worst).
        sample_rate: Intermediate and output sample rate in Hz; fixed at 44100.
        channels: Intermediate and output channel count; fixed at 2.
        parallel_transcode: Transcode tag and main concurrently.
        work_dir: Parent directory for the per-run temporary workspace.
        ffmpeg_binary: ffmpeg executable name or path.
        ffprobe_binary: ffprobe executable name or path.
    """

    main_audio: Path
    radio_tag: Path
    output_path: Path
    mp3_quality: int = DEFAULT_MP3_QUALITY
    sample_rate: int = DEFAULT_SAMPLE_RATE
    channels: int = DEFAULT_CHANNELS
    parallel_transcode: bool = False
    work_dir: Path | None = None
    ffmpeg_binary: str = "ffmpeg"
    ffprobe_binary: str = "ffprobe"

    def validate(self) -> None:
        """Validate configuration values before pipeline execution."""

        if not 0 <= self.mp3_quality <= 9:
            raise ConfigError("`mp3_quality` must be an integer between 0 and 9.")
        if self.sample_rate != DEFAULT_SAMPLE_RATE:
            raise ConfigError(f"`sample_rate` must be {DEFAULT_SAMPLE_RATE} Hz.")
        if self.channels != DEFAULT_CHANNELS:
            raise ConfigError(f"`channels` must be {DEFAULT_CHANNELS}.")
        if not self.ffmpeg_binary.strip():
            raise ConfigError("`ffmpeg_binary` must be a non-empty string.")
        if not self.ffprobe_binary.strip():
            raise ConfigError("`ffprobe_binary` must be a non-empty string.")


class ConfigLoader:
    """Factory helpers for loading `RadioTagConfig`."""

    REQUIRED_KEYS = ("main_audio", "radio_tag", "output_path")
    OPTIONAL_KEYS = (
        "mp3_quality",
        "parallel_transcode",
        "work_dir",
        "ffmpeg_binary",
        "ffprobe_binary",
    )

    ENV_KEYS = {
        "main_audio": "MAIN_AUDIO_PATH",
        "radio_tag": "RADIO_TAG_PATH",
        "output_path": "OUTPUT_PATH",
        "mp3_quality": "RADIOTAG_MP3_QUALITY",
        "parallel_transcode": "RADIOTAG_PARALLEL_TRANSCODE",
        "work_dir": "RADIOTAG_WORK_DIR",
        "ffmpeg_binary": "RADIOTAG_FFMPEG",
        "ffprobe_binary": "RADIOTAG_FFPROBE",
    }

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> RadioTagConfig:
        """Create a validated config from environment variables."""

        env_map: Mapping[str, str] = os.environ if env is None else env
        return ConfigLoader._build_config_from_mapping(
            ConfigLoader.env_values(env_map),
            source_label="environment",
        )

    @staticmethod
    def from_yaml(path: Path) -> RadioTagConfig:
        """Create a validated config from a YAML file."""

        return ConfigLoader._build_config_from_mapping(
            ConfigLoader.yaml_values(path),
            source_label=f"YAML `{path}`",
        )

    @staticmethod
    def resolve(
        *,
        cli: Mapping[str, object] | None = None,
        yaml_path: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> RadioTagConfig:
        """Merge all sources with `cli` > `yaml` > `env` precedence per key."""

        env_map: Mapping[str, str] = os.environ if env is None else env
        merged: dict[str, object] = dict(ConfigLoader.env_values(env_map))
        if yaml_path is not None:
            merged.update(ConfigLoader.yaml_values(yaml_path))
        for key, value in (cli or {}).items():
            if value is not None:
                merged[key] = value
        return ConfigLoader._build_config_from_mapping(merged, source_label="configuration")

    @staticmethod
    def env_values(env: Mapping[str, str]) -> dict[str, object]:
        """Map known environment variables to config keys, dropping blanks."""

        values: dict[str, object] = {}
        for key, env_key in ConfigLoader.ENV_KEYS.items():
            value = normalize_optional_string(env.get(env_key))
            if value is not None:
                values[key] = value
        return values

    @staticmethod
    def yaml_values(path: Path) -> dict[str, object]:
        """Read a YAML mapping of config keys."""

        try:
            raw_text = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise ConfigError(
                f"Config file not found: `{path}`.",
                hint="Provide an existing path via `--config <path.yaml>`.",
            ) from exc

        try:
            payload = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            raise ConfigError(
                f"Invalid YAML in config file `{path}`: {exc}",
                hint="Verify YAML syntax and rerun.",
            ) from exc

        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ConfigError(f"YAML config `{path}` must contain a top-level mapping/object.")

        allowed = set(ConfigLoader.REQUIRED_KEYS) | set(ConfigLoader.OPTIONAL_KEYS)
        unknown = sorted(str(key) for key in payload if key not in allowed)
        if unknown:
            raise ConfigError(
                f"YAML config `{path}` has unsupported key(s): {', '.join(unknown)}.",
                hint=f"Supported keys: {', '.join(sorted(allowed))}.",
            )
        return {
            str(key): value for key, value in payload.items() if value is not None
        }

    @staticmethod
    def _build_config_from_mapping(
        payload: Mapping[str, Any], source_label: str
    ) -> RadioTagConfig:
        """Build a validated config from a normalized mapping payload."""

        missing = [
            key
            for key in ConfigLoader.REQUIRED_KEYS
            if normalize_optional_string(payload.get(key)) is None
        ]
        if missing:
            names = ", ".join(
                f"{ConfigLoader.ENV_KEYS[key]} ({key})" for key in missing
            )
            raise ConfigError(
                f"Missing required setting(s) in {source_label}: {names}.",
                hint=(
                    "Set MAIN_AUDIO_PATH, RADIO_TAG_PATH and OUTPUT_PATH in the environment "
                    "or `.env`, or pass `--main`, `--tag` and `--out`."
                ),
            )

        try:
            mp3_quality = (
                parse_int_in_range(payload["mp3_quality"], "mp3_quality", minimum=0, maximum=9)
                if "mp3_quality" in payload
                else DEFAULT_MP3_QUALITY
            )
        except ValueError as exc:
            raise ConfigError(f"Invalid {source_label}: {exc}") from exc

        parallel_transcode = False
        if "parallel_transcode" in payload:
            parsed = parse_permissive_boolean(payload["parallel_transcode"])
            if parsed is None:
                raise ConfigError(
                    f"Invalid {source_label}: `parallel_transcode` must be a boolean value "
                    "(`true`/`false`, `1`/`0`, `yes`/`no`)."
                )
            parallel_transcode = parsed

        work_dir_text = normalize_optional_string(payload.get("work_dir"))

        config = RadioTagConfig(
            main_audio=Path(str(payload["main_audio"]).strip()),
            radio_tag=Path(str(payload["radio_tag"]).strip()),
            output_path=Path(str(payload["output_path"]).strip()),
            mp3_quality=mp3_quality,
            parallel_transcode=parallel_transcode,
            work_dir=Path(work_dir_text) if work_dir_text is not None else None,
            ffmpeg_binary=normalize_optional_string(payload.get("ffmpeg_binary")) or "ffmpeg",
            ffprobe_binary=normalize_optional_string(payload.get("ffprobe_binary")) or "ffprobe",
        )
        config.validate()
        return config
