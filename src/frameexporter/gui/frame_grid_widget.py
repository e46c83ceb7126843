# -*- coding: utf-8 -*-
"""Grid of extracted frames with selection overlay and export actions."""

from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtCore import QPoint, QSize, Qt, QThread, pyqtSignal
from PyQt6.QtGui import QBrush, QColor, QIcon, QImage, QPainter, QPen, QPixmap, QResizeEvent
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QListView,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from frameexporter.core.state import ExtractionSuccess
from frameexporter.gui.preview_dialog import FramePreviewDialog
from frameexporter.gui.workers import ThumbnailLoader

logger = logging.getLogger(__name__)

FRAME_PATH_ROLE = Qt.ItemDataRole.UserRole
GRID_PADDING = 8


def _draw_checkmark(pixmap: QPixmap) -> QPixmap:
    """Return a copy of `pixmap` with a check badge in the top-left corner."""
    decorated = QPixmap(pixmap)
    badge = max(16, min(decorated.width(), decorated.height()) // 4)
    painter = QPainter(decorated)
    painter.setRenderHint(QPainter.RenderHint.Antialiasing)
    painter.setPen(Qt.PenStyle.NoPen)
    painter.setBrush(QBrush(QColor(46, 160, 67)))
    painter.drawEllipse(4, 4, badge, badge)
    pen = QPen(QColor("white"))
    pen.setWidth(max(2, badge // 8))
    painter.setPen(pen)
    painter.drawLine(QPoint(4 + badge // 4, 4 + badge // 2), QPoint(4 + badge * 5 // 12, 4 + badge * 2 // 3))
    painter.drawLine(QPoint(4 + badge * 5 // 12, 4 + badge * 2 // 3), QPoint(4 + badge * 3 // 4, 4 + badge // 3))
    painter.end()
    return decorated


class FrameGridWidget(QWidget):
    """
    Show frames in a fixed number of columns.
    Click toggles selection; the context-menu gesture (right click or
    long press) opens a larger preview. Items start with a placeholder
    icon; thumbnails are decoded by a ThumbnailLoader on its own thread.
    """
    frame_clicked = pyqtSignal(object)
    clear_requested = pyqtSignal()
    export_requested = pyqtSignal(object)

    def __init__(self, columns: int = 3, thumbnail_size: int = 160, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.columns = max(1, int(columns))
        self.thumbnail_size = int(thumbnail_size)
        self._state: ExtractionSuccess | None = None
        self._thumbnails: dict[Path, QPixmap] = {}
        self._items: dict[Path, QListWidgetItem] = {}
        self._preview: FramePreviewDialog | None = None
        self._placeholder = QPixmap(self.thumbnail_size, self.thumbnail_size)
        self._placeholder.fill(QColor("lightgray"))
        self._generation = 0
        self._loader: ThumbnailLoader | None = None
        self._loader_thread: QThread | None = None

        self.title_label = QLabel("Choose frames to extract")
        self.title_label.setObjectName("appTitle")

        self.clear_button = QPushButton("Clear")
        self.clear_button.clicked.connect(self.clear_requested)
        self.export_all_button = QPushButton("Export All")
        self.export_all_button.clicked.connect(self._export_all)
        self.export_selected_button = QPushButton("Export selected(0)")
        self.export_selected_button.clicked.connect(self._export_selected)
        self.export_selected_button.setVisible(False)

        actions = QHBoxLayout()
        actions.setSpacing(8)
        actions.addStretch(1)
        actions.addWidget(self.clear_button)
        actions.addWidget(self.export_all_button)
        actions.addWidget(self.export_selected_button)

        self.list_widget = QListWidget()
        self.list_widget.setViewMode(QListView.ViewMode.IconMode)
        self.list_widget.setResizeMode(QListView.ResizeMode.Adjust)
        self.list_widget.setMovement(QListView.Movement.Static)
        self.list_widget.setSelectionMode(QListWidget.SelectionMode.NoSelection)
        self.list_widget.setUniformItemSizes(True)
        self.list_widget.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.list_widget.itemClicked.connect(self._on_item_clicked)
        self.list_widget.customContextMenuRequested.connect(self._on_context_menu)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)
        layout.setSpacing(8)
        layout.addWidget(self.title_label)
        layout.addLayout(actions)
        layout.addWidget(self.list_widget, 1)

    def set_state(self, state: ExtractionSuccess) -> None:
        if self._state is None or self._state.frames != state.frames:
            self._rebuild(state.frames)
            changed = set(state.frames)
        else:
            changed = self._state.selected ^ state.selected
        self._state = state
        for frame in changed:
            self._items[frame].setIcon(QIcon(self._icon_pixmap(frame, frame in state.selected)))

        count = len(state.selected)
        self.export_selected_button.setText(f"Export selected({count})")
        self.export_selected_button.setVisible(count > 0)

    def reset(self) -> None:
        self._state = None
        self._rebuild(())

    def item_count(self) -> int:
        return self.list_widget.count()

    def item_for(self, frame: Path) -> QListWidgetItem | None:
        return self._items.get(frame)

    def thumbnail_for(self, frame: Path) -> QPixmap | None:
        """Decoded thumbnail of `frame`, or None while it is still loading."""
        return self._thumbnails.get(frame)

    def wait_for_thumbnails(self, msecs: int = 5000) -> bool:
        """Block until the loader thread is done. Results still need the event loop to arrive."""
        if self._loader_thread is None:
            return True
        return self._loader_thread.wait(msecs)

    def stop_thumbnails(self) -> None:
        if self._loader is not None:
            self._loader.cancel()
        if self._loader_thread is not None:
            self._loader_thread.quit()
            self._loader_thread.wait()
            self._loader_thread.deleteLater()
        self._loader = None
        self._loader_thread = None

    def open_preview(self, frame: Path) -> FramePreviewDialog:
        if self._preview is not None:
            self._preview.close()
        self._preview = FramePreviewDialog(frame, self)
        self._preview.show()
        return self._preview

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        self._update_grid_size()

    def _rebuild(self, frames: tuple[Path, ...]) -> None:
        self.stop_thumbnails()
        self._generation += 1
        self.list_widget.clear()
        self._items.clear()
        self._thumbnails.clear()
        if self._preview is not None:
            self._preview.close()
            self._preview = None
        for frame in frames:
            item = QListWidgetItem(frame.name)
            item.setData(FRAME_PATH_ROLE, str(frame))
            item.setToolTip(str(frame))
            self.list_widget.addItem(item)
            self._items[frame] = item
        self._update_grid_size()
        logger.debug("Frame grid rebuilt with %d frames", len(frames))
        if frames:
            self._start_thumbnails(list(frames))

    def _start_thumbnails(self, frames: list[Path]) -> None:
        thread = QThread(self)
        loader = ThumbnailLoader(self._generation, frames, self.thumbnail_size)
        loader.moveToThread(thread)

        thread.started.connect(loader.run)
        loader.loaded.connect(self._on_thumbnail_loaded)
        loader.finished.connect(thread.quit, Qt.ConnectionType.DirectConnection)
        thread.finished.connect(loader.deleteLater)

        self._loader = loader
        self._loader_thread = thread
        thread.start()

    def _on_thumbnail_loaded(self, generation: int, frame: Path, image: QImage) -> None:
        item = self._items.get(frame)
        if generation != self._generation or item is None:
            return
        self._thumbnails[frame] = QPixmap.fromImage(image)
        selected = self._state is not None and frame in self._state.selected
        item.setIcon(QIcon(self._icon_pixmap(frame, selected)))

    def _update_grid_size(self) -> None:
        width = self.list_widget.viewport().width()
        cell = max(48, width // self.columns - 1)
        icon = max(32, cell - 2 * GRID_PADDING)
        self.list_widget.setIconSize(QSize(icon, icon))
        self.list_widget.setGridSize(QSize(cell, cell + self.list_widget.fontMetrics().height() + GRID_PADDING))

    def _icon_pixmap(self, frame: Path, selected: bool) -> QPixmap:
        thumbnail = self._thumbnails.get(frame, self._placeholder)
        return _draw_checkmark(thumbnail) if selected else thumbnail

    def _frame_for_item(self, item: QListWidgetItem) -> Path:
        return Path(str(item.data(FRAME_PATH_ROLE)))

    def _on_item_clicked(self, item: QListWidgetItem) -> None:
        self.frame_clicked.emit(self._frame_for_item(item))

    def _on_context_menu(self, pos: QPoint) -> None:
        item = self.list_widget.itemAt(pos)
        if item is not None:
            self.open_preview(self._frame_for_item(item))

    def _export_all(self) -> None:
        if self._state is not None:
            self.export_requested.emit(list(self._state.frames))

    def _export_selected(self) -> None:
        if self._state is not None and self._state.selected:
            self.export_requested.emit(self._state.selected_in_order())
