"""
Frame pane - paints a numpy frame into a fixed-size widget
"""

import numpy as np
from PyQt6.QtWidgets import QWidget
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QPainter, QImage, QPixmap


def frame_to_qimage(frame: np.ndarray) -> QImage:
    """
    Convert a BGR (H, W, 3) or grey (H, W) uint8 frame to a QImage

    The returned image owns its pixels, so the frame can be reused.
    """
    frame = np.ascontiguousarray(frame)
    if frame.ndim == 2:
        height, width = frame.shape
        return QImage(frame.data, width, height, width, QImage.Format.Format_Grayscale8).copy()

    if frame.ndim != 3 or frame.shape[2] != 3:
        raise ValueError(f"Unsupported frame shape {frame.shape}")

    height, width, channels = frame.shape
    bytes_per_line = channels * width
    return QImage(
        frame.data,
        width,
        height,
        bytes_per_line,
        QImage.Format.Format_RGB888
    ).rgbSwapped()  # BGR -> RGB, also detaches from the numpy buffer


class FramePane(QWidget):
    """Fixed-size pane showing the latest frame at its top-left corner"""

    def __init__(self, width: int = 640, height: int = 480):
        super().__init__()
        self.setFixedSize(width, height)
        self.setStyleSheet("background-color: #000000;")

        self.pixmap: QPixmap = None

    def update_frame(self, frame: np.ndarray):
        """
        Update pane with new frame

        Args:
            frame: BGR image (H, W, 3) or grey image (H, W), uint8
        """
        self.pixmap = QPixmap.fromImage(frame_to_qimage(frame))
        self.update()

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.fillRect(self.rect(), Qt.GlobalColor.black)

        if self.pixmap is None:
            return

        # Unscaled, frames larger than the pane are cropped
        painter.drawPixmap(0, 0, self.pixmap)

    def clear(self):
        """Clear the pane"""
        self.pixmap = None
        self.update()
