# -*- coding: utf-8 -*-
"""Settings loading and validation."""

from __future__ import annotations

import os
from copy import deepcopy
from pathlib import Path
from typing import Any

from frameexporter.constants import DEFAULT_FPS, DEFAULT_SETTINGS_FILE, IMAGE_FORMATS, SCRATCH_FOLDER_NAME
from frameexporter.utils.file_utils import read_json_file


DEFAULT_CONFIG: dict[str, Any] = {
    "extraction": {
        "fps": DEFAULT_FPS,
        "image_format": "png",
        "ffmpeg_path": "",
        "ffprobe_path": "",
        "timeout_seconds": 3600,
        "scratch_dir": "",
    },
    "export": {"downloads_dir": ""},
    "grid": {"columns": 3, "thumbnail_size": 160},
}

# Environment variable -> (section, key)
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "FFMPEG_PATH": ("extraction", "ffmpeg_path"),
    "FFPROBE_PATH": ("extraction", "ffprobe_path"),
    "FRAMEEXPORTER_SCRATCH_DIR": ("extraction", "scratch_dir"),
    "FRAMEEXPORTER_DOWNLOADS_DIR": ("export", "downloads_dir"),
}


class ConfigError(ValueError):
    """Raised when settings are invalid."""


def get_default_config() -> dict[str, Any]:
    """Return a deep copy of the default config."""
    return deepcopy(DEFAULT_CONFIG)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _load_env_file(env_path: Path) -> dict[str, str]:
    """Load a simple .env file (KEY=VALUE)."""
    values: dict[str, str] = {}
    if not env_path.exists():
        return values

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key:
            continue
        if (value.startswith('"') and value.endswith('"')) or (
            value.startswith("'") and value.endswith("'")
        ):
            value = value[1:-1]
        values[key] = value
    return values


def _apply_env_overrides(config: dict[str, Any], env_values: dict[str, str]) -> dict[str, Any]:
    """Apply environment-based overrides to runtime config."""
    merged = deepcopy(config)
    for env_name, (section, key) in ENV_OVERRIDES.items():
        value = env_values.get(env_name, "").strip()
        if value:
            merged.setdefault(section, {})
            merged[section][key] = value
    return merged


def validate_config(config: dict[str, Any]) -> None:
    """Validate the fields the controller and GUI depend on."""
    extraction = config.get("extraction", {})
    fps = extraction.get("fps")
    if isinstance(fps, bool) or not isinstance(fps, (int, float)) or not (1 <= fps <= 240):
        raise ConfigError("extraction.fps must be a number in range 1..240")

    if extraction.get("image_format") not in IMAGE_FORMATS:
        raise ConfigError(f"extraction.image_format must be one of {', '.join(IMAGE_FORMATS)}")

    timeout = extraction.get("timeout_seconds")
    if isinstance(timeout, bool) or not isinstance(timeout, int) or timeout < 1:
        raise ConfigError("extraction.timeout_seconds must be a positive int")

    grid = config.get("grid", {})
    columns = grid.get("columns")
    if isinstance(columns, bool) or not isinstance(columns, int) or not (1 <= columns <= 12):
        raise ConfigError("grid.columns must be an int in range 1..12")

    thumbnail_size = grid.get("thumbnail_size")
    if isinstance(thumbnail_size, bool) or not isinstance(thumbnail_size, int) or not (32 <= thumbnail_size <= 1024):
        raise ConfigError("grid.thumbnail_size must be an int in range 32..1024")


def load_config(path: str | Path | None = None) -> dict[str, Any]:
    """Load config from JSON, merge into defaults and apply env overrides.

    Values from a `.env` file next to the settings file are applied first,
    then the process environment wins.
    """
    config_path = Path(path or DEFAULT_SETTINGS_FILE)
    env_values = _load_env_file(config_path.parent / ".env")
    env_values.update({name: os.environ[name] for name in ENV_OVERRIDES if name in os.environ})

    merged = get_default_config()
    if config_path.exists():
        merged = _deep_merge(merged, read_json_file(config_path))
    merged = _apply_env_overrides(merged, env_values)
    validate_config(merged)
    return merged


def resolve_scratch_dir(config: dict[str, Any]) -> Path:
    """Return the private folder that holds extracted frames for one session."""
    configured = str(config.get("extraction", {}).get("scratch_dir", "") or "").strip()
    if configured:
        return Path(configured).expanduser()
    return Path.home() / ".cache" / "frameexporter" / SCRATCH_FOLDER_NAME


def resolve_downloads_dir(config: dict[str, Any]) -> Path:
    """Return the public folder exported frames are copied into."""
    configured = str(config.get("export", {}).get("downloads_dir", "") or "").strip()
    if configured:
        return Path(configured).expanduser()
    return Path.home() / "Downloads"
