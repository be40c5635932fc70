"""Depth projection, rectangle helpers, a bounded queue and DeepSORT-style multi-object tracking."""

__version__ = "0.1.0"