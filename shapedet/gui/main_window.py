"""
Main window - camera feed and processed feed side by side
"""

import logging

from PyQt6.QtWidgets import QMainWindow, QWidget, QHBoxLayout, QLabel
from PyQt6.QtCore import pyqtSignal, QTimer

from .frame_pane import FramePane
from ..core.controller import FrameResult, ShapeDetectionController

logger = logging.getLogger(__name__)


class ShapeDetectionWindow(QMainWindow):
    """Fixed-size window with the annotated feed left and the edge image right"""

    # Emitted when the frame source gives up
    source_lost = pyqtSignal(str)

    def __init__(self, controller: ShapeDetectionController, title: str = "Shape Detection",
                 pane_width: int = 640, pane_height: int = 480):
        super().__init__()
        self.controller = controller
        self.setWindowTitle(title)

        self.controller.set_frame_callback(self._on_frame)
        self.controller.set_error_callback(self.source_lost.emit)
        self.source_lost.connect(self._on_source_lost)

        self._build_ui(pane_width, pane_height)

        # Drives the capture loop, interval replaces a fixed sleep per frame
        self.frame_timer = QTimer(self)
        self.frame_timer.timeout.connect(self.controller.step)

    def _build_ui(self, pane_width: int, pane_height: int):
        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        layout = QHBoxLayout(central_widget)
        layout.setSpacing(0)
        layout.setContentsMargins(0, 0, 0, 0)

        self.camera_feed = FramePane(pane_width, pane_height)
        self.processed_feed = FramePane(pane_width, pane_height)
        layout.addWidget(self.camera_feed)
        layout.addWidget(self.processed_feed)

        self.status_label = QLabel("Ready")
        self.statusBar().addWidget(self.status_label)
        self.statusBar().setSizeGripEnabled(False)

        # Not resizable
        self.setFixedSize(self.sizeHint())

    def start(self):
        """Start the controller and the frame timer"""
        self.controller.start()
        self.frame_timer.start(self.controller.frame_interval_ms)
        self.status_label.setText("Running")

    def stop(self):
        self.frame_timer.stop()
        self.controller.stop()

    # Controller callbacks (same thread as the timer)
    def _on_frame(self, result: FrameResult):
        self.camera_feed.update_frame(result.display)
        self.processed_feed.update_frame(result.processed)
        self.status_label.setText(f"Shapes: {len(result.shapes)}")

    def _on_source_lost(self, message: str):
        self.frame_timer.stop()
        self.status_label.setText(message)

    def closeEvent(self, event):
        """Stop the controller before closing"""
        self.stop()
        event.accept()
