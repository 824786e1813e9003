"""
Capture and image processing
"""

from .camera import Camera, VideoFileSource, get_camera_list
from .frame_ops import adjust_shadows_and_contrast, draw_grid, ensure_bgr, zoom_image
from .pipeline import ProcessingParams, process_image
from .shapes import DetectedShape, ShapeParams, find_shapes, format_size, mark_outer_contour

__all__ = [
    "Camera",
    "VideoFileSource",
    "get_camera_list",
    "adjust_shadows_and_contrast",
    "draw_grid",
    "ensure_bgr",
    "zoom_image",
    "ProcessingParams",
    "process_image",
    "DetectedShape",
    "ShapeParams",
    "find_shapes",
    "format_size",
    "mark_outer_contour",
]
