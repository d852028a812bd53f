"""Multimedia toolkit: ffmpeg command compiler and silence segmentation."""

__version__ = "0.1.0"
