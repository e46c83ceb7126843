# -*- coding: utf-8 -*-
"""Qt bridge between the state controller and the widgets."""

from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtCore import QObject, pyqtSignal

from frameexporter.core.controller import ControllerBusyError, FrameExporterController
from frameexporter.core.state import ScreenState

logger = logging.getLogger(__name__)


class GuiController(QObject):
    """
    Re-emit controller states as a Qt signal.
    States produced on the worker thread reach the widgets through a
    queued connection, so rendering always happens on the GUI thread.
    """
    state_changed = pyqtSignal(object)

    def __init__(self, controller: FrameExporterController, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self.controller = controller
        self._unsubscribe = controller.subscribe(self.state_changed.emit)

    @property
    def state(self) -> ScreenState:
        return self.controller.state

    def pick_video(self, source: str | Path) -> None:
        try:
            self.controller.pick_video(source)
        except ControllerBusyError as exc:
            logger.warning("pick_video ignored: %s", exc)

    def select_frame(self, frame: Path) -> None:
        self.controller.select_frame(frame)

    def clear_selection(self) -> None:
        self.controller.clear_selection()

    def export_frames(self, frames: list[Path]) -> None:
        try:
            self.controller.export_frames(frames)
        except ControllerBusyError as exc:
            logger.warning("export_frames ignored: %s", exc)

    def shutdown(self) -> None:
        self._unsubscribe()
        self.controller.shutdown(wait=False)
