from __future__ import annotations


class DimensionError(ValueError):
    """Raised when an image or matrix would have a non-positive size."""


class CoordinateError(IndexError):
    """Raised on a pixel access outside the image bounds."""


class DecodeError(ValueError):
    """Raised when input bytes do not form a readable raster."""


class BufferOwnershipError(RuntimeError):
    """Raised when a buffer is released twice or was never issued."""
