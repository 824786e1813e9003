"""
Configuration management
"""

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)


class Config:
    """Application configuration manager"""

    DEFAULT_CONFIG = {
        "camera": {
            "device_id": 0,
            "width": 640,
            "height": 480,
            "fps": 30,
            "video_path": None,  # play a file instead of the webcam
            "loop": True,
        },
        "frame": {
            "zoom_factor": 1.3,
            "shadow_level": 0.0,
            "contrast_level": 1.0,
            "sharpness_level": 0.0,
            "grid_rows": 4,
            "grid_cols": 4,
            "grid_width_factor": 1.1,
        },
        "processing": {
            "bilateral_d": 9,
            "bilateral_sigma_color": 75.0,
            "bilateral_sigma_space": 75.0,
            "gaussian_ksize": 7,
            "gaussian_sigma": 1.0,
            "canny_low": 25.0,
            "canny_high": 200.0,
            "dilate_iterations": 1,
            "erode_iterations": 1,
        },
        "shapes": {
            "min_area": 1000.0,
            "scaling_factor": 0.03695,
            "approx_epsilon": 0.02,
            "bounding": "contour",
        },
        "window": {
            "title": "Shape Detection",
            "pane_width": 640,
            "pane_height": 480,
            "max_failures": 10,
        },
    }

    def __init__(self, config_path: str = None):
        self.config_path = Path(config_path) if config_path else Path.home() / ".shapedet" / "config.json"
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)

    def load(self):
        """Load configuration from file, merging each section over the defaults"""
        if not self.config_path.exists():
            logger.debug("No config file at %s, using defaults", self.config_path)
            return

        with open(self.config_path, "r") as f:
            loaded = json.load(f)

        if not isinstance(loaded, dict):
            raise ValueError(f"Config file {self.config_path} must contain a JSON object")

        for section, values in loaded.items():
            if isinstance(values, dict) and isinstance(self.config.get(section), dict):
                self.config[section].update(values)
            else:
                self.config[section] = values
        logger.info("Loaded config from %s", self.config_path)

    def save(self):
        """Save configuration to file"""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w") as f:
            json.dump(self.config, f, indent=2)

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """Get configuration value"""
        return self.config.get(section, {}).get(key, default)

    def set(self, section: str, key: str, value: Any):
        """Set configuration value"""
        if section not in self.config:
            self.config[section] = {}
        self.config[section][key] = value

    def get_all(self) -> Dict:
        """Get all configuration"""
        return copy.deepcopy(self.config)
