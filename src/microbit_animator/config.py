"""Configuration loader for the micro:bit animator."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Any

from dotenv import load_dotenv
import yaml

from microbit_animator.playback.clock import MAX_FPS, MIN_FPS


@dataclass(frozen=True)
class DocumentConfig:
    """Defaults for new animation documents."""

    default_frame_count: int
    animation_path: str | None


@dataclass(frozen=True)
class PlaybackConfig:
    """Playback rate and polling cadence."""

    frames_per_second: int
    poll_interval_seconds: float


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str
    log_dir: str


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration."""

    document: DocumentConfig
    playback: PlaybackConfig
    log: LoggingConfig


def _require_key(mapping: dict[str, Any], key: str, context: str) -> Any:
    if key not in mapping:
        raise ValueError(f"Missing required key '{key}' in {context} config")
    return mapping[key]


def _require_section(data: dict[str, Any], key: str) -> dict[str, Any]:
    section = _require_key(data, key, key)
    if not isinstance(section, dict):
        raise ValueError(f"'{key}' config must be a mapping")
    return section


def load_config(path: str = "config/config.yaml") -> AppConfig:
    """Load application configuration from a YAML file."""
    load_dotenv()
    animation_path = os.environ.get("ANIMATION_PATH", "").strip() or None
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except FileNotFoundError as exc:
        raise ValueError(f"Config file not found: {path}") from exc

    if not isinstance(data, dict):
        raise ValueError("Config file must contain a mapping at the top level")

    document_section = _require_section(data, "document")
    playback_section = _require_section(data, "playback")
    logging_section = _require_section(data, "logging")

    default_frame_count = _require_key(document_section, "default_frame_count", "document")
    if not isinstance(default_frame_count, int) or default_frame_count < 1:
        raise ValueError("'default_frame_count' must be a positive integer")

    frames_per_second = _require_key(playback_section, "frames_per_second", "playback")
    if not isinstance(frames_per_second, int) or not MIN_FPS <= frames_per_second <= MAX_FPS:
        raise ValueError(f"'frames_per_second' must be an integer between {MIN_FPS} and {MAX_FPS}")

    poll_interval = _require_key(playback_section, "poll_interval_seconds", "playback")
    if not isinstance(poll_interval, (int, float)) or poll_interval <= 0:
        raise ValueError("'poll_interval_seconds' must be a positive number")

    document = DocumentConfig(
        default_frame_count=default_frame_count,
        animation_path=animation_path,
    )

    playback = PlaybackConfig(
        frames_per_second=frames_per_second,
        poll_interval_seconds=float(poll_interval),
    )

    logging = LoggingConfig(
        level=_require_key(logging_section, "level", "logging"),
        log_dir=_require_key(logging_section, "log_dir", "logging"),
    )

    return AppConfig(document=document, playback=playback, log=logging)
