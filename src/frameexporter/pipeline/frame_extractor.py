# -*- coding: utf-8 -*-
"""Frame extraction through ffmpeg."""

from __future__ import annotations

import json
import logging
import subprocess
from fractions import Fraction
from pathlib import Path
from typing import Any

from frameexporter.constants import DEFAULT_FPS, FRAME_NAME_PATTERN, IMAGE_FORMATS
from frameexporter.utils.file_utils import ensure_dir, list_files
from frameexporter.utils.subprocess_utils import resolve_executable, run_command

logger = logging.getLogger(__name__)


class FrameExtractionError(RuntimeError):
    """Raised when ffmpeg could not turn a video into frames."""


class FrameExtractor:
    """Split a video into still images sampled at a fixed rate."""

    def __init__(
        self,
        fps: float = DEFAULT_FPS,
        image_format: str = "png",
        ffmpeg_path: str | Path | None = None,
        ffprobe_path: str | Path | None = None,
        timeout_seconds: int = 3600,
    ) -> None:
        if fps <= 0:
            raise ValueError("fps must be > 0")
        if image_format not in IMAGE_FORMATS:
            raise ValueError(f"Unsupported image format: {image_format}")
        self.fps = float(fps)
        self.image_format = image_format
        self.ffmpeg_path = resolve_executable("ffmpeg", ffmpeg_path)
        self.ffprobe_path = resolve_executable("ffprobe", ffprobe_path)
        self.timeout_seconds = timeout_seconds

    def build_command(self, video_path: Path, output_dir: Path, name_prefix: str) -> list[str]:
        pattern = FRAME_NAME_PATTERN.format(prefix=name_prefix, ext=self.image_format)
        return [
            self.ffmpeg_path,
            "-hide_banner",
            "-loglevel",
            "error",
            "-y",
            "-i",
            str(video_path),
            "-vf",
            f"fps={self.fps:g}",
            str(output_dir / pattern),
        ]

    def extract_frames(self, video_path: Path, output_dir: Path, name_prefix: str = "frame") -> list[Path]:
        """Write one image per sampled frame into `output_dir`.

        On success every file currently in `output_dir` is part of the
        result, sorted by name. The caller owns emptying the folder first.
        """
        video_path = Path(video_path)
        if not video_path.is_file():
            raise FrameExtractionError(f"Video not found: {video_path}")

        ensure_dir(output_dir)
        cmd = self.build_command(video_path, output_dir, name_prefix)
        try:
            result = run_command(cmd, timeout=self.timeout_seconds)
        except subprocess.TimeoutExpired as exc:
            raise FrameExtractionError(f"ffmpeg timed out after {self.timeout_seconds}s") from exc
        except OSError as exc:
            raise FrameExtractionError(f"Could not start ffmpeg: {exc}") from exc

        if result.returncode != 0:
            detail = (result.stderr or "").strip()[-300:]
            raise FrameExtractionError(f"ffmpeg exited with code {result.returncode}: {detail}")

        frames = list_files(output_dir)
        if not frames:
            raise FrameExtractionError(f"ffmpeg produced no frames for {video_path.name}")
        logger.info("Extracted %d frames from %s at %g fps", len(frames), video_path.name, self.fps)
        return frames

    def get_video_info(self, video_path: Path) -> dict[str, Any]:
        """Return duration, size and frame rate reported by ffprobe."""
        cmd = [
            self.ffprobe_path,
            "-v",
            "error",
            "-print_format",
            "json",
            "-show_format",
            "-show_streams",
            str(video_path),
        ]
        try:
            result = run_command(cmd, timeout=60)
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise FrameExtractionError(f"Could not run ffprobe: {exc}") from exc
        if result.returncode != 0:
            raise FrameExtractionError(f"ffprobe exited with code {result.returncode}")

        try:
            probe = json.loads(result.stdout or "{}")
        except json.JSONDecodeError as exc:
            raise FrameExtractionError("ffprobe returned invalid JSON") from exc

        info: dict[str, Any] = {
            "duration": float(probe.get("format", {}).get("duration", 0.0) or 0.0),
            "width": 0,
            "height": 0,
            "fps": 0.0,
        }
        for stream in probe.get("streams", []):
            if stream.get("codec_type") != "video":
                continue
            info["width"] = int(stream.get("width", 0))
            info["height"] = int(stream.get("height", 0))
            rate = str(stream.get("r_frame_rate", "0/1"))
            try:
                info["fps"] = float(Fraction(rate))
            except (ValueError, ZeroDivisionError):
                info["fps"] = 0.0
            break
        return info
