from __future__ import annotations

from pathlib import Path

import cv2
import numpy as np

from improc_skeleton.errors import DecodeError
from improc_skeleton.types import RasterImage

# Raster formats the pipeline accepts by file name.
READABLE_SUFFIXES = frozenset({".png", ".jpg", ".jpeg", ".bmp", ".tif", ".tiff", ".webp"})


def ensure_rgb(image: np.ndarray) -> RasterImage:
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    if image.ndim == 3 and image.shape[2] == 3:
        return image
    if image.ndim == 3 and image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2BGR)
    raise ValueError(f"Unsupported image shape: {image.shape}")


def decode_raster(data: bytes) -> RasterImage:
    if not data:
        raise DecodeError("Image data is empty")

    buf = np.frombuffer(data, dtype=np.uint8)
    image = cv2.imdecode(buf, cv2.IMREAD_UNCHANGED)
    if image is None:
        raise DecodeError("Failed to decode image data")
    if image.dtype != np.uint8:
        # 16-bit PNG/TIFF input is narrowed to 8 bits per channel.
        image = (image / 257).astype(np.uint8)
    return ensure_rgb(image)


def encode_png(raster: RasterImage) -> bytes:
    ok, buf = cv2.imencode(".png", raster)
    if not ok:
        raise ValueError("Failed to encode raster as PNG")
    return buf.tobytes()


def load_raster(path: str | Path) -> RasterImage:
    image_path = Path(path)
    if not image_path.is_file():
        raise FileNotFoundError(f"Failed to read image: {image_path}")
    try:
        return decode_raster(image_path.read_bytes())
    except DecodeError as exc:
        raise FileNotFoundError(f"Failed to read image: {image_path}") from exc


def save_raster(raster: RasterImage, path: str | Path) -> Path:
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    suffix = out_path.suffix.lower() or ".png"
    ok, buf = cv2.imencode(suffix, raster)
    if not ok:
        raise ValueError(f"Failed to encode raster for {out_path}")
    out_path.write_bytes(buf.tobytes())
    return out_path
