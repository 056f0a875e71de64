from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, TypeAlias

import numpy as np
import numpy.typing as npt

RasterImage: TypeAlias = npt.NDArray[np.uint8]
MaskImage: TypeAlias = npt.NDArray[np.uint8]
ProgressCallback: TypeAlias = Callable[[int, int], None]
Pixel: TypeAlias = tuple[int, int]


class PixelColor(str, Enum):
    BLACK = "black"
    WHITE = "white"

    def inverted(self) -> PixelColor:
        return PixelColor.WHITE if self is PixelColor.BLACK else PixelColor.BLACK


class AdjacencyMode(str, Enum):
    FOUR = "four"
    EIGHT = "eight"


@dataclass(slots=True)
class PipelineResult:
    output_path: Path
    report: dict[str, Any] = field(default_factory=dict)
