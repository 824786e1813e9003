"""
Webcam capture module
"""

import logging

import cv2
import numpy as np
from typing import Optional, Tuple, List, Dict

logger = logging.getLogger(__name__)


class Camera:
    """Webcam capture handler (synchronous, one frame per read)"""

    def __init__(self, device_id: int = 0, width: int = 640, height: int = 480, fps: int = 30):
        self.device_id = device_id
        self.width = width
        self.height = height
        self.fps = fps
        self.cap: Optional[cv2.VideoCapture] = None
        self.is_opened = False

    def open(self) -> bool:
        """Open camera device and request the view size"""
        self.cap = cv2.VideoCapture(self.device_id)
        if not self.cap.isOpened():
            logger.error("Failed to open camera %d", self.device_id)
            self.cap.release()
            self.cap = None
            return False

        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)
        self.cap.set(cv2.CAP_PROP_FPS, self.fps)

        self.is_opened = True
        logger.info("Camera %d opened at %dx%d", self.device_id, *self.get_resolution())
        return True

    def read(self) -> Tuple[bool, Optional[np.ndarray]]:
        """Read frame from camera"""
        if not self.is_opened or self.cap is None:
            return False, None

        ret, frame = self.cap.read()
        if not ret:
            return False, None
        return True, frame

    def close(self):
        """Close camera device"""
        if self.cap is not None:
            self.cap.release()
            self.cap = None
        self.is_opened = False

    def get_resolution(self) -> Tuple[int, int]:
        """Get actual camera resolution"""
        if self.cap is None:
            return (0, 0)
        w = int(self.cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        h = int(self.cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
        return (w, h)

    def __del__(self):
        self.close()


class VideoFileSource:
    """Video file playback handler compatible with the Camera interface"""

    def __init__(self, video_path: str, loop: bool = True):
        self.video_path = video_path
        self.loop = loop
        self.cap: Optional[cv2.VideoCapture] = None
        self.is_opened = False

        # -1 marks a file source
        self.device_id = -1

        self.width = 640
        self.height = 480
        self.fps = 30

    def open(self) -> bool:
        """Open video file and read its properties"""
        self.cap = cv2.VideoCapture(self.video_path)
        if not self.cap.isOpened():
            logger.error("Failed to open video file: %s", self.video_path)
            self.cap.release()
            self.cap = None
            return False

        self.width = int(self.cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        self.height = int(self.cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
        self.fps = int(self.cap.get(cv2.CAP_PROP_FPS))
        if self.fps <= 0:
            self.fps = 30

        logger.info("Video opened: %dx%d @ %dfps", self.width, self.height, self.fps)
        self.is_opened = True
        return True

    def read(self) -> Tuple[bool, Optional[np.ndarray]]:
        """Read next frame, rewinding at end of file when looping"""
        if not self.is_opened or self.cap is None:
            return False, None

        ret, frame = self.cap.read()
        if not ret and self.loop:
            self.cap.set(cv2.CAP_PROP_POS_FRAMES, 0)
            ret, frame = self.cap.read()
        if not ret:
            return False, None
        return True, frame

    def close(self):
        """Close video file"""
        if self.cap is not None:
            self.cap.release()
            self.cap = None
        self.is_opened = False

    def get_resolution(self) -> Tuple[int, int]:
        """Get video resolution"""
        return (self.width, self.height)

    def __del__(self):
        self.close()


def get_camera_list(max_devices: int = 10) -> List[Dict]:
    """
    List cameras that OpenCV can open
    Returns list of dicts with 'index' and 'name' keys
    """
    cameras = []
    for i in range(max_devices):
        cap = cv2.VideoCapture(i)
        try:
            if not cap.isOpened():
                break
            cameras.append({'index': i, 'name': f'Camera {i}'})
        finally:
            cap.release()
    return cameras

