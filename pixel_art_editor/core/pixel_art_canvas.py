#!/usr/bin/env python3
"""
Canvas widget for the pixel art editor
Renders the controller's grid and turns mouse input into gesture calls
"""

# Standard library imports
from typing import Optional

# Third-party imports
import numpy as np
from PyQt6.QtCore import QRect, QSize, Qt
from PyQt6.QtGui import QColor, QImage, QMouseEvent, QPainter, QPen
from PyQt6.QtWidgets import QWidget

from .pixel_art_constants import (
    CANVAS_BORDER_COLOR,
    CANVAS_MIN_SIZE,
    CANVAS_PREFERRED_SIZE,
    GRID_LINE_COLOR,
)
from .pixel_art_raster import cell_size_for_surface, map_point_to_cell


class PixelArtCanvas(QWidget):
    """Canvas that draws the grid scaled to square cells"""

    def __init__(self, controller, parent=None):
        super().__init__(parent)

        self.controller = controller

        # QImage mirror of the grid, rebuilt when the whole grid changes
        self._qimage: Optional[QImage] = None

        self.setMinimumSize(CANVAS_MIN_SIZE, CANVAS_MIN_SIZE)
        self.setCursor(Qt.CursorShape.CrossCursor)
        self.setToolTip("Left drag: Paint • Right drag: Erase")

        self.controller.imageChanged.connect(self._on_image_changed)
        self.controller.cellChanged.connect(self._on_cell_changed)

    def sizeHint(self) -> QSize:
        return QSize(CANVAS_PREFERRED_SIZE, CANVAS_PREFERRED_SIZE)

    def cell_size(self) -> int:
        return cell_size_for_surface(self.width(), self.height(), self.controller.grid_size)

    def cell_at(self, x: float, y: float) -> Optional[tuple[int, int]]:
        """Cell under a widget position (may be outside the grid)"""
        return map_point_to_cell(x, y, self.width(), self.height(), self.controller.grid_size)

    def _on_image_changed(self):
        self._qimage = None
        self.update()

    def _on_cell_changed(self, x: int, y: int):
        if self._qimage is not None:
            r, g, b, a = (int(c) for c in self.controller.get_grid()[y, x])
            self._qimage.setPixelColor(x, y, QColor(r, g, b, a))

        cell = self.cell_size()
        self.update(QRect(x * cell, y * cell, cell, cell))

    def _get_qimage(self) -> QImage:
        """QImage of the grid at one pixel per cell"""
        if self._qimage is None:
            grid = np.ascontiguousarray(self.controller.get_grid())
            height, width = grid.shape[:2]
            # copy() detaches the QImage from the numpy buffer
            self._qimage = QImage(
                grid.tobytes(), width, height, width * 4, QImage.Format.Format_RGBA8888
            ).copy()
        return self._qimage

    def paintEvent(self, event):
        painter = QPainter(self)
        try:
            painter.setClipRect(event.rect())

            cell = self.cell_size()
            grid_size = self.controller.grid_size
            side = cell * grid_size

            if side > 0:
                # Default render hints scale with nearest-neighbor
                painter.drawImage(QRect(0, 0, side, side), self._get_qimage())

                painter.setPen(QPen(QColor(*GRID_LINE_COLOR), 1))
                for i in range(grid_size + 1):
                    offset = i * cell
                    painter.drawLine(offset, 0, offset, side)
                    painter.drawLine(0, offset, side, offset)

            painter.setPen(QPen(QColor(*CANVAS_BORDER_COLOR), 1))
            painter.drawRect(0, 0, self.width() - 1, self.height() - 1)
        finally:
            painter.end()

    def mousePressEvent(self, event: QMouseEvent):
        pos = self.cell_at(event.position().x(), event.position().y())
        if pos is None:
            return
        erase = event.button() == Qt.MouseButton.RightButton
        self.controller.handle_pointer_press(pos[0], pos[1], erase)

    def mouseMoveEvent(self, event: QMouseEvent):
        # Without mouse tracking, move events only arrive while a button is held
        pos = self.cell_at(event.position().x(), event.position().y())
        if pos is not None:
            self.controller.handle_pointer_move(pos[0], pos[1])

    def mouseReleaseEvent(self, event: QMouseEvent):
        self.controller.handle_pointer_release()
