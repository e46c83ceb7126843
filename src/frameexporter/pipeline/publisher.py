# -*- coding: utf-8 -*-
"""Copy frames into the user-visible downloads folder."""

from __future__ import annotations

import logging
import mimetypes
import shutil
from dataclasses import dataclass
from pathlib import Path

from frameexporter.utils.file_utils import ensure_dir, unique_path

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_TYPE = "image/png"


class PublishError(RuntimeError):
    """Raised when a frame could not be copied into the downloads folder."""


@dataclass(frozen=True)
class PublishedFrame:
    """Where a frame ended up and which content type it was tagged with."""

    source: Path
    destination: Path
    mime_type: str


def guess_image_type(path: Path) -> str:
    mime_type, _ = mimetypes.guess_type(path.name)
    if mime_type and mime_type.startswith("image/"):
        return mime_type
    return DEFAULT_IMAGE_TYPE


class DownloadsPublisher:
    """Publish frames into a public folder, keeping their file names."""

    def __init__(self, downloads_dir: Path) -> None:
        self.downloads_dir = Path(downloads_dir)

    def publish(self, frame: Path) -> PublishedFrame:
        frame = Path(frame)
        if not frame.is_file():
            raise PublishError(f"Frame not found: {frame}")

        mime_type = guess_image_type(frame)
        try:
            target_dir = ensure_dir(self.downloads_dir)
            destination = unique_path(target_dir, frame.name)
            shutil.copyfile(frame, destination)
        except OSError as exc:
            raise PublishError(f"Could not copy {frame.name}: {exc}") from exc

        logger.debug("Published %s -> %s (%s)", frame.name, destination, mime_type)
        return PublishedFrame(source=frame, destination=destination, mime_type=mime_type)
