# -*- coding: utf-8 -*-
"""Session logging: console + one log file per run."""

from __future__ import annotations

import logging
import platform
from datetime import datetime
from pathlib import Path
from typing import Any

from frameexporter.config import resolve_downloads_dir, resolve_scratch_dir
from frameexporter.constants import APP_VERSION
from frameexporter.utils.subprocess_utils import resolve_executable

LOG_FORMAT = "%(asctime)s [%(threadName)s] %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def _session_log_path(base_dir: str | Path, app_name: str) -> Path:
    slug = app_name.lower().replace(" ", "-")
    return Path(base_dir) / "logs" / f"{slug}-{datetime.now():%Y%m%d-%H%M%S}.log"


def setup_session_logging(base_dir: str | Path, app_name: str) -> Path | None:
    """Configure root logging for the app once per process.

    Returns the path of the session log file, or None when it could not be
    created (console logging still works in that case).
    """
    root = logging.getLogger()
    if getattr(root, "_frameexporter_logging_configured", False):
        return getattr(root, "_frameexporter_session_log", None)

    root.setLevel(logging.DEBUG)
    # Extraction and export log from the worker thread.
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    if not any(isinstance(handler, logging.StreamHandler) for handler in root.handlers):
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        root.addHandler(console)

    session_log_path: Path | None = _session_log_path(base_dir, app_name)
    try:
        session_log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(session_log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
    except OSError as exc:
        root.error("No session log file, console only: %s", exc)
        session_log_path = None
    else:
        root.info("=== %s %s session started, log: %s ===", app_name, APP_VERSION, session_log_path)

    root._frameexporter_logging_configured = True  # type: ignore[attr-defined]
    root._frameexporter_session_log = session_log_path  # type: ignore[attr-defined]
    return session_log_path


def log_session_context(settings: dict[str, Any]) -> None:
    """Log the folders and tools this run will use, for support requests."""
    extraction = settings.get("extraction", {})
    root = logging.getLogger()
    root.info("Python %s on %s", platform.python_version(), platform.platform())
    root.info("Scratch folder: %s", resolve_scratch_dir(settings))
    root.info("Downloads folder: %s", resolve_downloads_dir(settings))
    root.info("ffmpeg: %s", resolve_executable("ffmpeg", extraction.get("ffmpeg_path") or None))
    root.info("ffprobe: %s", resolve_executable("ffprobe", extraction.get("ffprobe_path") or None))
    root.info(
        "Extraction: %s fps as %s, timeout %ss",
        extraction.get("fps"),
        extraction.get("image_format"),
        extraction.get("timeout_seconds"),
    )
