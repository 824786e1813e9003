#!/usr/bin/env python3
"""
Controller tests: per-frame chain, failure handling and settings
"""

import numpy as np
import pytest

from conftest import FakeSource, make_rect_frame
from shapedet.core.controller import FrameResult, ShapeDetectionController
from shapedet.utils.config import Config
from shapedet.vision.camera import Camera, VideoFileSource


def make_controller(frames=None, overrides=None):
    config = Config().get_all()
    for (section, key), value in (overrides or {}).items():
        config[section][key] = value
    source = FakeSource(frames)
    return ShapeDetectionController(config=config, source=source), source


def test_process_frame_zooms_and_marks():
    controller, _ = make_controller()
    result = controller.process_frame(make_rect_frame())

    assert isinstance(result, FrameResult)
    assert result.display.shape == (624, 832, 3)
    assert result.processed.shape == (624, 832)
    assert len(result.shapes) == 1

    # Zoom 1.3 turns the 200x100 rectangle into roughly 260x130 pixels
    shape = result.shapes[0]
    assert shape.width_cm == pytest.approx(260 * 0.03695, abs=0.3)
    assert shape.length_cm == pytest.approx(130 * 0.03695, abs=0.3)


def test_grid_only_on_display():
    controller, _ = make_controller()
    blank = np.zeros((480, 640, 3), dtype=np.uint8)
    result = controller.process_frame(blank)

    assert result.shapes == []
    assert not result.processed.any()
    # Horizontal grid line at a quarter of the zoomed height
    assert np.all(result.display[156, :] == 255)


def test_process_frame_accepts_grey_input():
    controller, _ = make_controller()
    grey = np.ascontiguousarray(make_rect_frame()[:, :, 0])
    result = controller.process_frame(grey)
    assert result.display.ndim == 3
    assert len(result.shapes) == 1


def test_initialize_and_step():
    frames = [make_rect_frame() for _ in range(3)]
    controller, source = make_controller(frames)
    received = []
    controller.set_frame_callback(received.append)

    assert controller.step() is None  # not running yet

    assert controller.initialize()
    controller.start()
    result = controller.step()

    assert result is not None
    assert len(received) == 1 and received[0] is result
    assert controller.last_result is result
    assert controller.frame_count == 1


def test_first_frame_is_processed_first():
    blank = np.zeros((480, 640, 3), dtype=np.uint8)
    controller, source = make_controller([make_rect_frame(), blank])

    assert controller.initialize()
    assert source.reads == 0
    controller.start()

    assert len(controller.step().shapes) == 1
    assert controller.step().shapes == []


def test_initialize_fails_when_source_does_not_open():
    controller = ShapeDetectionController(source=FakeSource(open_ok=False))
    assert not controller.initialize()
    with pytest.raises(RuntimeError):
        controller.start()


def test_stops_after_consecutive_failures():
    controller, source = make_controller([], {("window", "max_failures"): 3})
    errors = []
    controller.set_error_callback(errors.append)

    controller.initialize()
    controller.start()

    assert controller.step() is None
    assert controller.step() is None
    assert controller.running
    assert controller.step() is None

    assert not controller.running
    assert source.closed
    assert len(errors) == 1
    assert "3 frames" in errors[0]


def test_successful_read_resets_failure_count():
    frames = [make_rect_frame()] * 2
    controller, source = make_controller(frames, {("window", "max_failures"): 2})
    source.open()
    controller.start()

    source.frames, pending = [], source.frames
    assert controller.step() is None
    assert controller.consecutive_failures == 1

    source.frames = pending
    assert controller.step() is not None
    assert controller.consecutive_failures == 0


def test_frame_interval():
    controller, _ = make_controller()
    assert controller.frame_interval_ms == 33

    controller.fps = 0
    assert controller.frame_interval_ms == 33

    controller.fps = 60
    assert controller.frame_interval_ms == 16


def test_settings():
    controller, _ = make_controller()
    controller.set_bounding_mode("rotated")
    assert controller.shape_params.bounding == "rotated"
    assert controller.shape_params.min_area == 1000.0

    with pytest.raises(ValueError):
        controller.set_bounding_mode("ellipse")
    with pytest.raises(ValueError):
        controller.set_zoom_factor(-1)

    controller.set_zoom_factor(1.0)
    result = controller.process_frame(make_rect_frame())
    assert result.display.shape == (480, 640, 3)


def test_source_selection_from_config():
    config = Config().get_all()
    assert isinstance(ShapeDetectionController(config).source, Camera)

    config["camera"]["video_path"] = "clip.mp4"
    source = ShapeDetectionController(config).source
    assert isinstance(source, VideoFileSource)
    assert source.video_path == "clip.mp4"


def test_config_values_reach_pipeline():
    controller, _ = make_controller(overrides={
        ("processing", "canny_low"): 10.0,
        ("shapes", "bounding"): "rect",
        ("frame", "zoom_factor"): 1.0,
    })
    assert controller.processing_params.canny_low == 10.0
    assert controller.shape_params.bounding == "rect"
    assert controller.zoom_factor == 1.0


def main():
    print("=" * 60)
    print("Controller Tests")
    print("=" * 60)
    return pytest.main([__file__, "-v"])


if __name__ == "__main__":
    raise SystemExit(main())
