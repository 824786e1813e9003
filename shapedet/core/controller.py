"""
Shape detection controller - capture, process, annotate
"""

import logging
import time
from dataclasses import dataclass, field, replace

import numpy as np
from typing import Optional, Callable, List

from ..utils.config import Config
from ..vision.camera import Camera, VideoFileSource
from ..vision.frame_ops import adjust_shadows_and_contrast, draw_grid, ensure_bgr, zoom_image
from ..vision.pipeline import ProcessingParams, process_image
from ..vision.shapes import DetectedShape, ShapeParams, mark_outer_contour

logger = logging.getLogger(__name__)


@dataclass
class FrameResult:
    """Output of one pass through the pipeline"""
    display: np.ndarray      # annotated colour frame (left pane)
    processed: np.ndarray    # edge image (right pane)
    shapes: List[DetectedShape] = field(default_factory=list)


class ShapeDetectionController:
    """Single-threaded capture -> filter chain -> contour marking loop"""

    def __init__(self, config: dict = None, source=None):
        self.config = config or Config().get_all()

        camera_config = self.config.get("camera", {})
        frame_config = self.config.get("frame", {})
        window_config = self.config.get("window", {})

        # Frame adjustments
        self.zoom_factor = frame_config.get("zoom_factor", 1.3)
        self.shadow_level = frame_config.get("shadow_level", 0.0)
        self.contrast_level = frame_config.get("contrast_level", 1.0)
        self.sharpness_level = frame_config.get("sharpness_level", 0.0)
        self.grid_rows = frame_config.get("grid_rows", 4)
        self.grid_cols = frame_config.get("grid_cols", 4)
        self.grid_width_factor = frame_config.get("grid_width_factor", 1.1)

        self.processing_params = ProcessingParams.from_config(self.config.get("processing"))
        self.shape_params = ShapeParams.from_config(self.config.get("shapes"))

        # Frame source (camera unless a video path or explicit source is given)
        self.source = source if source is not None else self._create_source(camera_config)
        self.fps = camera_config.get("fps", 30)

        # Consecutive read failures before the source is considered lost
        self.max_failures = window_config.get("max_failures", 10)
        self.consecutive_failures = 0

        self.running = False
        self.frame_count = 0
        self.last_result: Optional[FrameResult] = None

        self.frame_callback: Optional[Callable] = None
        self.error_callback: Optional[Callable] = None

    @staticmethod
    def _create_source(camera_config: dict):
        video_path = camera_config.get("video_path")
        if video_path:
            return VideoFileSource(video_path, loop=camera_config.get("loop", True))
        return Camera(
            device_id=camera_config.get("device_id", 0),
            width=camera_config.get("width", 640),
            height=camera_config.get("height", 480),
            fps=camera_config.get("fps", 30),
        )

    @property
    def frame_interval_ms(self) -> int:
        """Delay between frames, 33 ms at 30 fps"""
        fps = self.fps if self.fps and self.fps > 0 else 30
        return max(1, int(1000 / fps))

    def initialize(self) -> bool:
        """Open the frame source"""
        logger.info("Initializing shape detection...")
        if not self.source.is_opened and not self.source.open():
            logger.error("Failed to open frame source")
            return False

        logger.info("Shape detection initialized")
        return True

    def start(self):
        """Mark the loop as running, the GUI timer drives step()"""
        if self.running:
            return
        if not self.source.is_opened:
            raise RuntimeError("Frame source not opened, call initialize() first")

        self.consecutive_failures = 0
        self.running = True
        logger.info("Shape detection started")

    def stop(self):
        """Stop the loop and release the frame source"""
        was_running = self.running
        self.running = False
        self.source.close()
        if was_running:
            logger.info("Shape detection stopped after %d frames", self.frame_count)

    def process_frame(self, frame: np.ndarray) -> FrameResult:
        """
        Run one frame through the full chain

        zoom -> shadows/contrast -> edges -> contour marking -> grid
        """
        frame = ensure_bgr(frame)
        frame = zoom_image(frame, self.zoom_factor)
        adjusted = adjust_shadows_and_contrast(
            frame, self.shadow_level, self.contrast_level, self.sharpness_level
        )

        processed = process_image(adjusted, self.processing_params)
        shapes = mark_outer_contour(processed, adjusted, self.shape_params)
        draw_grid(adjusted, self.grid_rows, self.grid_cols, width_factor=self.grid_width_factor)

        return FrameResult(display=adjusted, processed=processed, shapes=shapes)

    def step(self) -> Optional[FrameResult]:
        """Read and process one frame, None if nothing was read"""
        if not self.running:
            return None

        ret, frame = self.source.read()
        if not ret:
            self.consecutive_failures += 1
            if self.consecutive_failures >= self.max_failures:
                message = f"Failed to read {self.max_failures} frames, camera may be disconnected"
                logger.error(message)
                self.stop()
                if self.error_callback:
                    self.error_callback(message)
            return None

        self.consecutive_failures = 0
        t0 = time.perf_counter()
        result = self.process_frame(frame)
        self.frame_count += 1

        if self.frame_count % 100 == 0:
            logger.debug("Frame %d processed in %.2fms, %d shapes",
                         self.frame_count, (time.perf_counter() - t0) * 1000, len(result.shapes))

        self.last_result = result
        if self.frame_callback:
            self.frame_callback(result)
        return result

    def set_frame_callback(self, callback: Callable):
        self.frame_callback = callback

    def set_error_callback(self, callback: Callable):
        self.error_callback = callback

    def set_bounding_mode(self, mode: str):
        """Switch between contour, rect and rotated outlines"""
        self.shape_params = replace(self.shape_params, bounding=mode)

    def set_zoom_factor(self, zoom_factor: float):
        if zoom_factor <= 0:
            raise ValueError(f"zoom_factor must be positive, got {zoom_factor}")
        self.zoom_factor = zoom_factor
