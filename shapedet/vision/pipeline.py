"""
Edge extraction pipeline
Bilateral filter -> Gaussian blur -> grey -> Canny -> dilate -> erode
"""

from dataclasses import dataclass

import cv2
import numpy as np
from typing import Any, Dict, Optional

# 3x3 rectangular structuring element (OpenCV default for an empty kernel)
MORPH_KERNEL = np.ones((3, 3), dtype=np.uint8)


@dataclass
class ProcessingParams:
    """Filter chain tuning constants"""
    bilateral_d: int = 9
    bilateral_sigma_color: float = 75.0
    bilateral_sigma_space: float = 75.0
    gaussian_ksize: int = 7
    gaussian_sigma: float = 1.0
    canny_low: float = 25.0
    canny_high: float = 200.0
    dilate_iterations: int = 1
    erode_iterations: int = 1

    @classmethod
    def from_config(cls, section: Optional[Dict[str, Any]]) -> "ProcessingParams":
        """Build params from a config section, ignoring unknown keys"""
        section = section or {}
        known = {k: v for k, v in section.items() if k in cls.__dataclass_fields__}
        return cls(**known)


def process_image(frame: np.ndarray, params: Optional[ProcessingParams] = None) -> np.ndarray:
    """
    Turn a BGR frame into a binary edge image

    Args:
        frame: BGR image (H, W, 3) uint8
        params: Filter chain constants, defaults if None

    Returns:
        Single channel uint8 edge map (H, W), values 0 or 255
    """
    if frame is None or frame.size == 0:
        raise ValueError("Empty frame")
    params = params or ProcessingParams()

    # Edge-preserving smoothing, then a light Gaussian to knock out sensor noise
    smoothed = cv2.bilateralFilter(
        frame,
        params.bilateral_d,
        params.bilateral_sigma_color,
        params.bilateral_sigma_space,
    )
    ksize = params.gaussian_ksize | 1  # must be odd
    smoothed = cv2.GaussianBlur(smoothed, (ksize, ksize), params.gaussian_sigma)

    if smoothed.ndim == 3:
        gray = cv2.cvtColor(smoothed, cv2.COLOR_BGR2GRAY)
    else:
        gray = smoothed

    edges = cv2.Canny(gray, params.canny_low, params.canny_high)

    # Close small gaps in the outline
    if params.dilate_iterations > 0:
        edges = cv2.dilate(edges, MORPH_KERNEL, iterations=params.dilate_iterations)
    if params.erode_iterations > 0:
        edges = cv2.erode(edges, MORPH_KERNEL, iterations=params.erode_iterations)

    return edges
