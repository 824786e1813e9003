#!/usr/bin/env python3
"""
Frame source tests with a stubbed cv2.VideoCapture
"""

import cv2
import numpy as np
import pytest

from shapedet.vision import camera as camera_module
from shapedet.vision.camera import Camera, VideoFileSource, get_camera_list


class FakeCapture:
    """Stand-in for cv2.VideoCapture"""

    opened_indices = {0}
    frames_per_source = 3

    def __init__(self, source):
        self.source = source
        self.released = False
        self.props = {
            cv2.CAP_PROP_FRAME_WIDTH: 320,
            cv2.CAP_PROP_FRAME_HEIGHT: 240,
            cv2.CAP_PROP_FPS: 0,
        }
        self.position = 0
        self.frames = [np.full((240, 320, 3), i, dtype=np.uint8) for i in range(self.frames_per_source)]

    def isOpened(self):
        if isinstance(self.source, str):
            return self.source.endswith(".mp4")
        return self.source in self.opened_indices

    def set(self, prop, value):
        if prop == cv2.CAP_PROP_POS_FRAMES:
            self.position = int(value)
        else:
            self.props[prop] = value
        return True

    def get(self, prop):
        return self.props.get(prop, 0)

    def read(self):
        if self.position >= len(self.frames):
            return False, None
        frame = self.frames[self.position]
        self.position += 1
        return True, frame

    def release(self):
        self.released = True


@pytest.fixture(autouse=True)
def fake_capture(monkeypatch):
    monkeypatch.setattr(camera_module.cv2, "VideoCapture", FakeCapture)
    return FakeCapture


def test_camera_open_read_close():
    cam = Camera(device_id=0, width=640, height=480)
    assert cam.read() == (False, None)

    assert cam.open()
    assert cam.is_opened
    assert cam.get_resolution() == (640, 480)

    ok, frame = cam.read()
    assert ok
    assert frame.shape == (240, 320, 3)

    cam.close()
    assert not cam.is_opened
    assert cam.read() == (False, None)
    assert cam.get_resolution() == (0, 0)


def test_camera_open_failure():
    cam = Camera(device_id=5)
    assert not cam.open()
    assert not cam.is_opened
    assert cam.cap is None


def test_camera_read_failure_returns_none():
    cam = Camera()
    cam.open()
    for _ in range(FakeCapture.frames_per_source):
        assert cam.read()[0]
    assert cam.read() == (False, None)


def test_video_source_properties_and_loop():
    video = VideoFileSource("clip.mp4", loop=True)
    assert video.open()
    assert video.get_resolution() == (320, 240)
    # FPS of 0 falls back to 30
    assert video.fps == 30

    values = [video.read()[1][0, 0, 0] for _ in range(5)]
    assert values == [0, 1, 2, 0, 1]


def test_video_source_without_loop_ends():
    video = VideoFileSource("clip.mp4", loop=False)
    video.open()
    for _ in range(3):
        assert video.read()[0]
    assert video.read() == (False, None)


def test_video_source_missing_file():
    video = VideoFileSource("clip.avi")
    assert not video.open()
    assert video.read() == (False, None)


def test_get_camera_list_stops_at_first_gap(monkeypatch):
    monkeypatch.setattr(FakeCapture, "opened_indices", {0, 1, 3})
    cameras = get_camera_list()
    assert cameras == [{'index': 0, 'name': 'Camera 0'}, {'index': 1, 'name': 'Camera 1'}]


def main():
    print("=" * 60)
    print("Frame Source Tests")
    print("=" * 60)
    return pytest.main([__file__, "-v"])


if __name__ == "__main__":
    raise SystemExit(main())
