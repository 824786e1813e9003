from .frame_pane import FramePane, frame_to_qimage
from .main_window import ShapeDetectionWindow

__all__ = ["FramePane", "frame_to_qimage", "ShapeDetectionWindow"]
