"""Clarity Compass backend: nine-point webpage clarity scoring."""

__version__ = "0.2.0"
