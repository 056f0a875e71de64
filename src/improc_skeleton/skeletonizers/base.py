from __future__ import annotations

from abc import ABC, abstractmethod

from improc_skeleton.core.binary_image import BinaryImage
from improc_skeleton.types import ProgressCallback


class Skeletonizer(ABC):
    """Thins a ``BinaryImage`` in place until no more pixels can be removed."""

    name: str = ""

    @abstractmethod
    def process(self, image: BinaryImage, progress: ProgressCallback | None = None) -> None:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
