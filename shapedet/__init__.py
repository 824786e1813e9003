"""
Shape Detection - webcam shape detection demo
"""

__version__ = "0.1.0"
