"""
Per-frame adjustments applied before shape detection
Zoom, shadow/contrast/sharpness and the reference grid overlay.
"""

import cv2
import numpy as np
from typing import Tuple

GRID_COLOR_BGR = (255, 255, 255)


def ensure_bgr(frame: np.ndarray) -> np.ndarray:
    """
    Normalise a captured frame to 3-channel uint8 BGR

    Grey frames are expanded, BGRA frames lose their alpha channel and
    anything that is not uint8 is saturated into range.
    """
    if frame is None or frame.size == 0:
        raise ValueError("Empty frame")

    if frame.dtype != np.uint8:
        frame = _scale(frame, 1.0, 0.0)

    if frame.ndim == 2:
        return cv2.cvtColor(frame, cv2.COLOR_GRAY2BGR)

    channels = frame.shape[2]
    if channels == 3:
        return frame
    if channels == 4:
        return cv2.cvtColor(frame, cv2.COLOR_BGRA2BGR)
    if channels == 1:
        return cv2.cvtColor(frame, cv2.COLOR_GRAY2BGR)
    raise ValueError(f"Unsupported channel count: {channels}")


def zoom_image(frame: np.ndarray, zoom_factor: float) -> np.ndarray:
    """Resize frame by zoom_factor (linear interpolation)"""
    if zoom_factor <= 0:
        raise ValueError(f"zoom_factor must be positive, got {zoom_factor}")

    height, width = frame.shape[:2]
    new_width = int(width * zoom_factor)
    new_height = int(height * zoom_factor)
    if new_width < 1 or new_height < 1:
        raise ValueError(f"zoom_factor {zoom_factor} collapses a {width}x{height} frame")

    return cv2.resize(frame, (new_width, new_height), interpolation=cv2.INTER_LINEAR)


def _scale(frame: np.ndarray, alpha: float, beta: float) -> np.ndarray:
    """alpha * frame + beta, rounded and saturated to uint8"""
    scaled = frame.astype(np.float32) * alpha + beta
    return np.clip(np.rint(scaled), 0, 255).astype(np.uint8)


def sharpen_kernel(sharpness_level: float) -> np.ndarray:
    """3x3 sharpening kernel, centre weight 5 + sharpness_level"""
    return np.array([
        [0, -1, 0],
        [-1, 5 + sharpness_level, -1],
        [0, -1, 0],
    ], dtype=np.float32)


def adjust_shadows_and_contrast(frame: np.ndarray,
                                shadow_level: float = 0.0,
                                contrast_level: float = 1.0,
                                sharpness_level: float = 0.0) -> np.ndarray:
    """
    Lift shadows, scale contrast and optionally sharpen

    Args:
        frame: BGR image (H, W, 3) uint8
        shadow_level: Offset added to every pixel (saturating)
        contrast_level: Gain applied after the offset (saturating)
        sharpness_level: Extra centre weight for the sharpening kernel, 0 disables

    Returns:
        New frame with the same shape and dtype
    """
    # Two passes so the offset saturates before the gain
    result = _scale(frame, 1.0, shadow_level)
    result = _scale(result, contrast_level, 0.0)

    if sharpness_level > 0:
        result = cv2.filter2D(result, -1, sharpen_kernel(sharpness_level))

    return result


def draw_grid(frame: np.ndarray, rows: int = 4, cols: int = 4,
              color: Tuple[int, int, int] = GRID_COLOR_BGR,
              width_factor: float = 1.1) -> np.ndarray:
    """
    Draw a reference grid in place

    Vertical lines are spread over width * width_factor, so with the
    default factor the last column runs past the right edge.
    """
    if rows < 1 or cols < 1:
        raise ValueError(f"Grid needs at least one row and column, got {rows}x{cols}")

    height = frame.shape[0]
    width = int(frame.shape[1] * width_factor)

    for i in range(1, cols):
        x = width * i // cols
        cv2.line(frame, (x, 0), (x, height), color, 1)

    for i in range(1, rows):
        y = height * i // rows
        cv2.line(frame, (0, y), (width, y), color, 1)

    return frame
