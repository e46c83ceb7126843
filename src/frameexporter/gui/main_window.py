# -*- coding: utf-8 -*-
"""Main window: one page per screen state."""

from __future__ import annotations

import logging
from typing import Any

from PyQt6.QtGui import QCloseEvent
from PyQt6.QtWidgets import QLabel, QMainWindow, QStackedWidget, QStatusBar, QWidget

from frameexporter.constants import APP_NAME, APP_VERSION, EXPORTING_LABEL, EXTRACTING_LABEL
from frameexporter.core.controller import FrameExporterController
from frameexporter.core.state import (
    Error,
    Exporting,
    ExportSuccess,
    Extracting,
    ExtractionSuccess,
    ScreenState,
    Start,
    state_name,
)
from frameexporter.gui.controller import GuiController
from frameexporter.gui.frame_grid_widget import FrameGridWidget
from frameexporter.gui.message_widget import MessageWidget
from frameexporter.gui.progress_widget import ProgressWidget
from frameexporter.gui.start_widget import StartWidget

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Render the current state; forward user input to the controller."""

    def __init__(
        self,
        settings: dict[str, Any],
        controller: GuiController | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.settings = settings
        self.controller = controller or GuiController(FrameExporterController.from_config(settings), self)

        self.setWindowTitle(f"{APP_NAME} v{APP_VERSION}")
        self.resize(960, 720)

        self._build_ui()
        self.controller.state_changed.connect(self.render_state)
        self.render_state(self.controller.state)

    def _build_ui(self) -> None:
        grid = self.settings.get("grid", {})
        self.start_widget = StartWidget()
        self.start_widget.video_picked.connect(self.controller.pick_video)
        self.progress_widget = ProgressWidget()
        self.frame_grid_widget = FrameGridWidget(
            columns=int(grid.get("columns", 3)),
            thumbnail_size=int(grid.get("thumbnail_size", 160)),
        )
        self.frame_grid_widget.frame_clicked.connect(self.controller.select_frame)
        self.frame_grid_widget.clear_requested.connect(self.controller.clear_selection)
        self.frame_grid_widget.export_requested.connect(self.controller.export_frames)
        self.message_widget = MessageWidget()
        self.message_widget.dismissed.connect(self.controller.clear_selection)

        self.pages = QStackedWidget()
        for page in (self.start_widget, self.progress_widget, self.frame_grid_widget, self.message_widget):
            self.pages.addWidget(page)
        self.setCentralWidget(self.pages)

        self.state_label = QLabel("")
        self.state_label.setObjectName("mutedText")
        status_bar = QStatusBar()
        status_bar.addPermanentWidget(self.state_label)
        self.setStatusBar(status_bar)

    def render_state(self, state: ScreenState) -> None:
        """Show the page for `state`. Each state type maps to exactly one branch."""
        if isinstance(state, Start):
            page: QWidget = self.start_widget
        elif isinstance(state, Extracting):
            # The scratch folder is rewritten, so cached thumbnails are stale.
            self.frame_grid_widget.reset()
            self.progress_widget.set_label(EXTRACTING_LABEL)
            page = self.progress_widget
        elif isinstance(state, Exporting):
            self.progress_widget.set_label(EXPORTING_LABEL)
            page = self.progress_widget
        elif isinstance(state, ExtractionSuccess):
            self.frame_grid_widget.set_state(state)
            page = self.frame_grid_widget
        elif isinstance(state, (ExportSuccess, Error)):
            self.message_widget.set_message(state.message)
            page = self.message_widget
        else:
            raise TypeError(f"Unhandled screen state: {state!r}")

        self.pages.setCurrentWidget(page)
        self.state_label.setText(state_name(state))

    def closeEvent(self, event: QCloseEvent) -> None:
        logger.info("Main window closing, shutting down controller")
        self.controller.shutdown()
        self.frame_grid_widget.stop_thumbnails()
        super().closeEvent(event)
