# -*- coding: utf-8 -*-
"""Worker classes for background thumbnail decoding."""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from PyQt6.QtCore import QObject, Qt, pyqtSignal
from PyQt6.QtGui import QImage, QImageReader

logger = logging.getLogger(__name__)


def load_thumbnail(frame: Path, size: int) -> QImage:
    """Decode `frame` scaled to fit a `size` x `size` box. Returns a null image on failure."""
    reader = QImageReader(str(frame))
    source_size = reader.size()
    if source_size.isValid():
        reader.setScaledSize(source_size.scaled(size, size, Qt.AspectRatioMode.KeepAspectRatio))
    image = reader.read()
    if image.isNull():
        logger.warning("Cannot read frame %s: %s", frame, reader.errorString())
        return image
    return image.convertToFormat(QImage.Format.Format_ARGB32_Premultiplied)


class ThumbnailLoader(QObject):
    """
    Decode frame thumbnails one by one off the GUI thread.
    Each result carries the generation it was started for so the grid can
    drop results that arrive after it was rebuilt.
    """
    loaded = pyqtSignal(int, object, object)
    finished = pyqtSignal()

    def __init__(self, generation: int, frames: list[Path], size: int) -> None:
        super().__init__()
        self.generation = generation
        self.frames = frames
        self.size = size
        self._cancelled = threading.Event()

    def cancel(self) -> None:
        self._cancelled.set()

    def run(self) -> None:
        logger.debug("ThumbnailLoader: decoding %d frames", len(self.frames))
        try:
            for frame in self.frames:
                if self._cancelled.is_set():
                    logger.debug("ThumbnailLoader: cancelled")
                    break
                image = load_thumbnail(frame, self.size)
                if not image.isNull():
                    self.loaded.emit(self.generation, frame, image)
        except Exception:
            logger.exception("ThumbnailLoader: decoding failed")
        finally:
            self.finished.emit()
