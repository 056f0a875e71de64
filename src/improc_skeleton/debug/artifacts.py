from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import cv2

from improc_skeleton.core.binary_image import BinaryImage

BINARIZED_NAME = "01_binarized.png"
SKELETON_NAME = "02_skeleton.png"
REPORT_NAME = "report.json"


def _grid_preview(image: BinaryImage):
    # Foreground is drawn white on black whatever the grid's background, so
    # one-pixel skeleton lines stay visible against the dark field.
    return image.to_mask() * 255


def write_report(report: dict[str, Any], out_path: str | Path) -> Path:
    path = Path(out_path)
    path.write_text(json.dumps(report, indent=2), encoding="utf-8")
    return path


def write_debug_artifacts(
    debug_dir: str | Path,
    binarized: BinaryImage,
    skeleton: BinaryImage,
    report: dict[str, Any],
) -> Path:
    """Write the grid before and after thinning plus the run report."""
    if (binarized.width, binarized.height) != (skeleton.width, skeleton.height):
        raise ValueError("Binarized and skeleton grids must share dimensions")

    out = Path(debug_dir)
    out.mkdir(parents=True, exist_ok=True)
    cv2.imwrite(str(out / BINARIZED_NAME), _grid_preview(binarized))
    cv2.imwrite(str(out / SKELETON_NAME), _grid_preview(skeleton))
    write_report(report, out / REPORT_NAME)
    return out
