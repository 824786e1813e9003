"""
Outer contour detection and size annotation

Finds external contours in the edge image, drops noise below a minimum
area and labels every remaining shape with an estimated size in cm and
its polygon vertex count.
"""

from dataclasses import dataclass

import cv2
import numpy as np
from typing import Any, Dict, List, Optional, Tuple

BOUNDING_MODES = ("contour", "rect", "rotated")

# Lawn green in BGR
MARK_COLOR_BGR = (0, 252, 124)

LABEL_FONT = cv2.FONT_HERSHEY_DUPLEX
LABEL_SCALE = 0.5
LABEL_LINE_SPACING = 15


@dataclass
class ShapeParams:
    """Contour filter and annotation settings"""
    min_area: float = 1000.0
    scaling_factor: float = 0.03695  # cm per pixel at the fixed working distance
    approx_epsilon: float = 0.02     # fraction of the perimeter
    bounding: str = "contour"
    color: Tuple[int, int, int] = MARK_COLOR_BGR
    thickness: int = 1

    def __post_init__(self):
        if self.bounding not in BOUNDING_MODES:
            raise ValueError(f"Unknown bounding mode '{self.bounding}', expected one of {BOUNDING_MODES}")
        self.color = tuple(int(c) for c in self.color)

    @classmethod
    def from_config(cls, section: Optional[Dict[str, Any]]) -> "ShapeParams":
        """Build params from a config section, ignoring unknown keys"""
        section = section or {}
        known = {k: v for k, v in section.items() if k in cls.__dataclass_fields__}
        return cls(**known)


@dataclass
class DetectedShape:
    """One contour that survived the noise filter"""
    contour: np.ndarray
    area: float
    vertices: int
    bounding_rect: Tuple[int, int, int, int]  # x, y, w, h
    rotated_rect: Tuple[Tuple[float, float], Tuple[float, float], float]
    length_cm: float
    width_cm: float

    @property
    def label(self) -> str:
        return format_size(self.length_cm, self.width_cm)

    @property
    def box_points(self) -> np.ndarray:
        """Corners of the rotated rectangle as int32 (4, 2)"""
        return np.round(cv2.boxPoints(self.rotated_rect)).astype(np.int32)


def format_size(length_cm: float, width_cm: float) -> str:
    return f"l={length_cm:.2f} cm, w={width_cm:.2f} cm"


def count_vertices(contour: np.ndarray, epsilon: float = 0.02) -> int:
    """Vertex count of the polygon approximating a closed contour"""
    curve = contour.astype(np.float32)
    perimeter = cv2.arcLength(curve, True)
    approx = cv2.approxPolyDP(curve, epsilon * perimeter, True)
    return len(approx)


def estimate_size(contour: np.ndarray, params: ShapeParams) -> Tuple[float, float]:
    """Length and width in cm from the bounding shape's sides"""
    if params.bounding == "rotated":
        (_, _), (w, h), _ = cv2.minAreaRect(contour)
    else:
        _, _, w, h = cv2.boundingRect(contour)
    return h * params.scaling_factor, w * params.scaling_factor


def find_shapes(edges: np.ndarray, params: Optional[ShapeParams] = None) -> List[DetectedShape]:
    """
    Extract outer contours larger than params.min_area

    Args:
        edges: Binary single channel image (H, W) uint8

    Returns:
        Detected shapes in the order OpenCV reports them
    """
    params = params or ShapeParams()
    if edges.ndim != 2:
        raise ValueError(f"Expected a single channel edge image, got shape {edges.shape}")

    contours, _ = cv2.findContours(edges, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_NONE)

    shapes = []
    for contour in contours:
        area = cv2.contourArea(contour)
        if area <= params.min_area:
            continue

        length_cm, width_cm = estimate_size(contour, params)
        shapes.append(DetectedShape(
            contour=contour,
            area=area,
            vertices=count_vertices(contour, params.approx_epsilon),
            bounding_rect=tuple(int(v) for v in cv2.boundingRect(contour)),
            rotated_rect=cv2.minAreaRect(contour),
            length_cm=length_cm,
            width_cm=width_cm,
        ))
    return shapes


def draw_shape(frame: np.ndarray, shape: DetectedShape, params: ShapeParams):
    """Draw label, vertex count and outline of one shape in place"""
    x, y, w, h = shape.bounding_rect
    anchor = (x + w, y + h)

    cv2.putText(frame, shape.label, anchor,
                LABEL_FONT, LABEL_SCALE, params.color, params.thickness)
    cv2.putText(frame, f"Points: {shape.vertices}", (anchor[0], anchor[1] + LABEL_LINE_SPACING),
                LABEL_FONT, LABEL_SCALE, params.color, params.thickness)

    if params.bounding == "rect":
        cv2.rectangle(frame, shape.bounding_rect, params.color, params.thickness)
    elif params.bounding == "rotated":
        cv2.drawContours(frame, [shape.box_points], -1, params.color, params.thickness)
    else:
        cv2.drawContours(frame, [shape.contour], -1, params.color, params.thickness)


def mark_outer_contour(edges: np.ndarray, frame: np.ndarray,
                       params: Optional[ShapeParams] = None) -> List[DetectedShape]:
    """
    Find shapes in edges and annotate them on frame (in place)

    edges and frame must share width and height.
    """
    params = params or ShapeParams()
    if edges.shape[:2] != frame.shape[:2]:
        raise ValueError(f"Edge image {edges.shape[:2]} does not match frame {frame.shape[:2]}")

    shapes = find_shapes(edges, params)
    for shape in shapes:
        draw_shape(frame, shape, params)
    return shapes
