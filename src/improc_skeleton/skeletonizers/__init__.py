from __future__ import annotations

from enum import Enum

from improc_skeleton.skeletonizers.base import Skeletonizer
from improc_skeleton.skeletonizers.eberly import EberlySkeletonizer
from improc_skeleton.skeletonizers.rosenfeld import RosenfeldSkeletonizer
from improc_skeleton.skeletonizers.zhang_suen import ZhangSuenSkeletonizer
from improc_skeleton.types import AdjacencyMode


class SkeletonizerKind(str, Enum):
    ZHANG_SUEN = "zhang_suen"
    ROSENFELD = "rosenfeld"
    EBERLY = "eberly"


def create_skeletonizer(
    kind: SkeletonizerKind | str,
    mode: AdjacencyMode | str = AdjacencyMode.FOUR,
) -> Skeletonizer:
    kind = SkeletonizerKind(kind)
    if kind is SkeletonizerKind.ZHANG_SUEN:
        return ZhangSuenSkeletonizer()
    if kind is SkeletonizerKind.ROSENFELD:
        return RosenfeldSkeletonizer(AdjacencyMode(mode))
    return EberlySkeletonizer()


__all__ = [
    "EberlySkeletonizer",
    "RosenfeldSkeletonizer",
    "Skeletonizer",
    "SkeletonizerKind",
    "ZhangSuenSkeletonizer",
    "create_skeletonizer",
]
