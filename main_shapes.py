#!/usr/bin/env python3
"""
Shape Detection
GUI entry point
"""

import argparse
import logging
import signal
import sys

from PyQt6.QtWidgets import QApplication

from shapedet.core.controller import ShapeDetectionController
from shapedet.gui.main_window import ShapeDetectionWindow
from shapedet.logging_config import setup_logging
from shapedet.utils.config import Config
from shapedet.vision.camera import get_camera_list
from shapedet.vision.shapes import BOUNDING_MODES


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Shape Detection - webcam edge and contour demo",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                          # default webcam, default tuning
  %(prog)s --camera 1               # second webcam
  %(prog)s --video clip.mp4         # play a file instead of the webcam
  %(prog)s --bounding rotated       # minimum-area rectangles
  %(prog)s --list-cameras           # print webcams OpenCV can open
        """
    )
    parser.add_argument("--config", help="Path to a JSON config file (default: ~/.shapedet/config.json)")
    parser.add_argument("--camera", type=int, help="Camera device index")
    parser.add_argument("--video", help="Video file to play instead of the webcam")
    parser.add_argument("--bounding", choices=BOUNDING_MODES, help="Outline drawn around each shape")
    parser.add_argument("--zoom", type=float, help="Zoom factor applied to every frame")
    parser.add_argument("--list-cameras", action="store_true", help="List available cameras and exit")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level (default: INFO)")
    parser.add_argument("--log-file", help="Also write logs to this file")
    return parser.parse_args(argv)


def build_config(args) -> Config:
    """Load the config file and apply command line overrides"""
    config = Config(args.config)
    config.load()

    if args.camera is not None:
        config.set("camera", "device_id", args.camera)
    if args.video:
        config.set("camera", "video_path", args.video)
    if args.bounding:
        config.set("shapes", "bounding", args.bounding)
    if args.zoom is not None:
        config.set("frame", "zoom_factor", args.zoom)
    return config


def print_camera_list():
    cameras = get_camera_list()
    if not cameras:
        print("No cameras found")
        return
    for camera in cameras:
        print(f"{camera['index']}: {camera['name']}")


def main(argv=None):
    """Main application entry point"""
    args = parse_args(argv)
    setup_logging(level=getattr(logging, args.log_level), log_file=args.log_file)

    if args.list_cameras:
        print_camera_list()
        return 0

    config = build_config(args)
    window_config = config.get_all()["window"]

    app = QApplication(sys.argv)
    app.setApplicationName(window_config["title"])

    # Ctrl-C in the terminal closes the window
    signal.signal(signal.SIGINT, lambda *_: app.quit())

    controller = ShapeDetectionController(config=config.get_all())
    if not controller.initialize():
        print("Failed to initialize shape detection")
        sys.exit(1)

    window = ShapeDetectionWindow(
        controller,
        title=window_config["title"],
        pane_width=window_config["pane_width"],
        pane_height=window_config["pane_height"],
    )
    window.show()
    window.start()

    exit_code = app.exec()
    window.stop()
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
