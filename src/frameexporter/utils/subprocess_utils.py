# -*- coding: utf-8 -*-
"""Subprocess runner for the external media tools."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


def resolve_executable(name: str, configured: str | Path | None = None) -> str:
    """Return a usable executable path.

    Priority: configured path -> PATH lookup -> bare name.
    """
    if configured:
        candidate = Path(configured).expanduser()
        if candidate.is_file():
            return str(candidate)
        logger.warning("Configured %s not found at %s, falling back to PATH", name, candidate)
    which = shutil.which(name)
    if which:
        return which
    return name


def run_command(
    cmd: list[str],
    cwd: Path | None = None,
    timeout: int = 3600,
) -> subprocess.CompletedProcess:
    """Run an external command, logging its output tail.

    Raises OSError when the executable cannot be started and
    subprocess.TimeoutExpired when it runs longer than `timeout` seconds.
    """
    logger.info("Running: %s", " ".join(cmd))

    result = subprocess.run(
        cmd,
        cwd=cwd,
        capture_output=True,
        text=True,
        timeout=timeout,
        check=False,
    )

    if result.stdout:
        logger.debug("stdout: %s", result.stdout[-500:])
    if result.stderr:
        logger.debug("stderr: %s", result.stderr[-500:])
    return result
