from __future__ import annotations

__version__ = "0.1.0"

from improc_skeleton.core.binary_image import BinaryImage
from improc_skeleton.skeletonizers import (
    EberlySkeletonizer,
    RosenfeldSkeletonizer,
    Skeletonizer,
    SkeletonizerKind,
    ZhangSuenSkeletonizer,
    create_skeletonizer,
)
from improc_skeleton.types import AdjacencyMode, PixelColor
from improc_skeleton.vision.threshold import ThresholdBinaryImageConverter

__all__ = [
    "AdjacencyMode",
    "BinaryImage",
    "EberlySkeletonizer",
    "PixelColor",
    "RosenfeldSkeletonizer",
    "Skeletonizer",
    "SkeletonizerKind",
    "ThresholdBinaryImageConverter",
    "ZhangSuenSkeletonizer",
    "__version__",
    "create_skeletonizer",
]
