# -*- coding: utf-8 -*-
"""Message page with a single dismiss action."""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import QLabel, QPushButton, QVBoxLayout, QWidget


class MessageWidget(QWidget):
    """Show an outcome message; Close returns to the start page."""

    dismissed = pyqtSignal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.message_label = QLabel("")
        self.message_label.setWordWrap(True)
        self.message_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.close_button = QPushButton("Close")
        self.close_button.clicked.connect(self.dismissed)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(8)
        layout.addStretch(1)
        layout.addWidget(self.message_label)
        layout.addWidget(self.close_button, alignment=Qt.AlignmentFlag.AlignCenter)
        layout.addStretch(1)

    def set_message(self, message: str) -> None:
        self.message_label.setText(message)
