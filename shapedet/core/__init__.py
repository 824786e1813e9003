from .controller import FrameResult, ShapeDetectionController

__all__ = ["FrameResult", "ShapeDetectionController"]
