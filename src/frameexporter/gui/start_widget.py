# -*- coding: utf-8 -*-
"""Start page: pick a video."""

from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import QFileDialog, QLabel, QPushButton, QVBoxLayout, QWidget

from frameexporter.constants import VIDEO_FILE_FILTER

logger = logging.getLogger(__name__)


class StartWidget(QWidget):
    """Browse button that opens the platform file picker."""

    video_picked = pyqtSignal(object)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.prompt_label = QLabel("Pick a video")
        self.prompt_label.setObjectName("sectionTitle")
        self.browse_button = QPushButton("Browse")
        self.browse_button.clicked.connect(self.choose_video)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(8)
        layout.addStretch(1)
        layout.addWidget(self.prompt_label, alignment=Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.browse_button, alignment=Qt.AlignmentFlag.AlignCenter)
        layout.addStretch(1)

    def choose_video(self) -> None:
        file_path, _ = QFileDialog.getOpenFileName(self, "Pick a video", str(Path.home()), VIDEO_FILE_FILTER)
        if not file_path:
            logger.debug("Video picker cancelled")
            return
        self.video_picked.emit(Path(file_path))
