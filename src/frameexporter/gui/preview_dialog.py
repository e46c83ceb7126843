# -*- coding: utf-8 -*-
"""Larger preview of a single frame."""

from __future__ import annotations

from pathlib import Path

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QPixmap
from PyQt6.QtWidgets import QDialog, QLabel, QPushButton, QVBoxLayout, QWidget

PREVIEW_MAX_SIZE = 900


class FramePreviewDialog(QDialog):
    """Transient dialog; it does not touch the workflow state."""

    def __init__(self, frame: Path, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.frame = frame
        self.setWindowTitle(frame.name)

        self.image_label = QLabel()
        self.image_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        pixmap = QPixmap(str(frame))
        if pixmap.isNull():
            self.image_label.setText(f"Cannot display {frame.name}")
        else:
            self.image_label.setPixmap(
                pixmap.scaled(
                    PREVIEW_MAX_SIZE,
                    PREVIEW_MAX_SIZE,
                    Qt.AspectRatioMode.KeepAspectRatio,
                    Qt.TransformationMode.SmoothTransformation,
                )
            )
        self.close_button = QPushButton("Close")
        self.close_button.clicked.connect(self.accept)

        layout = QVBoxLayout(self)
        layout.addWidget(self.image_label)
        layout.addWidget(self.close_button, alignment=Qt.AlignmentFlag.AlignRight)
