# -*- coding: utf-8 -*-
"""File helpers with UTF-8 defaults."""

from __future__ import annotations

import json
import shutil
from pathlib import Path
from typing import Any


def ensure_dir(path: str | Path) -> Path:
    """Create a directory if it does not exist."""
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def reset_dir(path: str | Path) -> Path:
    """Delete a directory with all its contents and create it again empty."""
    dir_path = Path(path)
    if dir_path.is_dir():
        shutil.rmtree(dir_path)
    elif dir_path.exists():
        dir_path.unlink()
    return ensure_dir(dir_path)


def list_files(path: str | Path) -> list[Path]:
    """Return the regular files directly inside a directory, sorted by name."""
    dir_path = Path(path)
    if not dir_path.is_dir():
        return []
    return sorted((p for p in dir_path.iterdir() if p.is_file()), key=lambda p: p.name)


def unique_path(directory: Path, file_name: str) -> Path:
    """Return `directory/file_name`, or `name (n).ext` when that name is taken."""
    candidate = directory / file_name
    if not candidate.exists():
        return candidate
    stem = Path(file_name).stem
    suffix = Path(file_name).suffix
    counter = 1
    while True:
        candidate = directory / f"{stem} ({counter}){suffix}"
        if not candidate.exists():
            return candidate
        counter += 1


def read_json_file(path: str | Path) -> dict[str, Any]:
    """Read a JSON file."""
    file_path = Path(path)
    with file_path.open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    if not isinstance(data, dict):
        raise ValueError(f"Expected JSON object in {file_path}")
    return data
