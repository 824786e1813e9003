"""
Shared fixtures: synthetic frames and a fake frame source
"""

import cv2
import numpy as np
import pytest


def make_rect_frame(width=640, height=480, rect=(100, 100, 200, 100)):
    """Black BGR frame with one filled white rectangle (x, y, w, h)"""
    frame = np.zeros((height, width, 3), dtype=np.uint8)
    x, y, w, h = rect
    cv2.rectangle(frame, (x, y), (x + w - 1, y + h - 1), (255, 255, 255), -1)
    return frame


class FakeSource:
    """Frame source that replays a list of frames, then fails"""

    def __init__(self, frames=None, open_ok=True):
        self.frames = list(frames or [])
        self.open_ok = open_ok
        self.is_opened = False
        self.closed = False
        self.reads = 0

    def open(self):
        self.is_opened = self.open_ok
        return self.open_ok

    def read(self):
        self.reads += 1
        if not self.is_opened or not self.frames:
            return False, None
        return True, self.frames.pop(0)

    def close(self):
        self.closed = True
        self.is_opened = False


@pytest.fixture
def rect_frame():
    return make_rect_frame()
