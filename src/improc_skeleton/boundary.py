"""Bytes-in, bytes-out entry points with explicit buffer ownership.

Every entry point takes encoded image bytes plus the number of bytes to read
and returns a ``Buffer`` holding an encoded PNG. Failures never raise across
this boundary: they are logged and reported as ``Buffer.null()``. A buffer
returned here belongs to the caller until it is passed to ``free_buffer``
exactly once.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

import cv2

from improc_skeleton.core.binary_image import BinaryImage
from improc_skeleton.errors import BufferOwnershipError, DecodeError
from improc_skeleton.skeletonizers import (
    EberlySkeletonizer,
    RosenfeldSkeletonizer,
    Skeletonizer,
    ZhangSuenSkeletonizer,
)
from improc_skeleton.types import AdjacencyMode, PixelColor, ProgressCallback
from improc_skeleton.vision.raster import decode_raster, encode_png
from improc_skeleton.vision.threshold import ThresholdBinaryImageConverter

LOGGER = logging.getLogger("improc_skeleton.boundary")

# Dark ink on white paper: white is background.
BOUNDARY_BACKGROUND = PixelColor.WHITE


@dataclass(slots=True, eq=False)
class Buffer:
    data: bytes | None
    length: int
    _issued: bool = field(default=False, repr=False)
    _released: bool = field(default=False, repr=False)

    @classmethod
    def null(cls) -> Buffer:
        return cls(data=None, length=0)

    @property
    def is_null(self) -> bool:
        return self.data is None

    @property
    def is_released(self) -> bool:
        return self._released


def _issue(payload: bytes) -> Buffer:
    return Buffer(data=payload, length=len(payload), _issued=True)


def free_buffer(buffer: Buffer) -> None:
    if buffer.is_null and not buffer._issued:
        return
    if not buffer._issued:
        raise BufferOwnershipError("Buffer was not issued by this library")
    if buffer._released:
        raise BufferOwnershipError("Buffer was already released")

    buffer._released = True
    buffer.data = None
    buffer.length = 0


def mode_from_code(code: int) -> AdjacencyMode:
    return AdjacencyMode.EIGHT if int(code) == 0 else AdjacencyMode.FOUR


def _read_input(image_bytes: bytes, length: int) -> bytes:
    if not isinstance(image_bytes, (bytes, bytearray, memoryview)):
        raise DecodeError(f"Expected encoded image bytes, got {type(image_bytes).__name__}")
    if length <= 0 or length > len(image_bytes):
        raise DecodeError(f"Invalid input length {length} for {len(image_bytes)} bytes")
    return bytes(image_bytes[:length])


def _skeletonize(
    image_bytes: bytes,
    length: int,
    name: str,
    build: Callable[[], Skeletonizer],
    progress: ProgressCallback | None,
) -> Buffer:
    # Arguments are resolved inside the guard so a bad mode or length
    # comes back as a null buffer like any other failure.
    try:
        skeletonizer = build()
        raster = decode_raster(_read_input(image_bytes, length))
        image = BinaryImage.from_raster(raster, BOUNDARY_BACKGROUND)
        skeletonizer.process(image, progress)
        payload = encode_png(image.to_raster())
    except (ValueError, IndexError, TypeError, cv2.error):
        LOGGER.exception("skeletonization_failed algorithm=%s", name)
        return Buffer.null()
    return _issue(payload)


def threshold_binary_image_convert(
    image_bytes: bytes,
    length: int,
    threshold: int,
    progress: ProgressCallback | None = None,
) -> Buffer:
    try:
        converter = ThresholdBinaryImageConverter(threshold)
        raster = decode_raster(_read_input(image_bytes, length))
        payload = encode_png(converter.convert(raster, progress))
    except (ValueError, TypeError, cv2.error):
        LOGGER.exception("threshold_failed threshold=%s", threshold)
        return Buffer.null()
    return _issue(payload)


def zhang_suen_skeletonization(
    image_bytes: bytes,
    length: int,
    progress: ProgressCallback | None = None,
) -> Buffer:
    return _skeletonize(image_bytes, length, ZhangSuenSkeletonizer.name, ZhangSuenSkeletonizer, progress)


def rosenfeld_skeletonization(
    image_bytes: bytes,
    length: int,
    adjacency_mode: int,
    progress: ProgressCallback | None = None,
) -> Buffer:
    return _skeletonize(
        image_bytes,
        length,
        RosenfeldSkeletonizer.name,
        lambda: RosenfeldSkeletonizer(mode_from_code(adjacency_mode)),
        progress,
    )


def eberly_skeletonization(
    image_bytes: bytes,
    length: int,
    progress: ProgressCallback | None = None,
) -> Buffer:
    return _skeletonize(image_bytes, length, EberlySkeletonizer.name, EberlySkeletonizer, progress)
