from __future__ import annotations

import logging
from pathlib import Path
from time import perf_counter

from improc_skeleton.config import AppConfig
from improc_skeleton.core.binary_image import BinaryImage
from improc_skeleton.debug.artifacts import write_debug_artifacts, write_report
from improc_skeleton.skeletonizers import RosenfeldSkeletonizer, create_skeletonizer
from improc_skeleton.types import PipelineResult, ProgressCallback
from improc_skeleton.vision.raster import load_raster, save_raster
from improc_skeleton.vision.threshold import ThresholdBinaryImageConverter

LOGGER = logging.getLogger("improc_skeleton.pipeline")


def run_pipeline(
    image_path: Path,
    output_path: Path,
    cfg: AppConfig,
    debug_dir: Path | None = None,
    progress: ProgressCallback | None = None,
) -> PipelineResult:
    report: dict[str, object] = {"timings": {}}

    t0 = perf_counter()
    raster = load_raster(image_path)
    report["timings"]["load_image"] = perf_counter() - t0

    t1 = perf_counter()
    if cfg.threshold.enable:
        raster = ThresholdBinaryImageConverter(cfg.threshold.threshold).convert(raster)
    image = BinaryImage.from_raster(raster, cfg.skeleton.bg_color)
    binarized = image.copy()
    report["timings"]["binarize"] = perf_counter() - t1

    t2 = perf_counter()
    skeletonizer = create_skeletonizer(cfg.skeleton.kind, cfg.skeleton.mode)
    fg_before = image.count_fg()
    skeletonizer.process(image, progress)
    fg_after = image.count_fg()
    report["timings"]["skeletonize"] = perf_counter() - t2

    t3 = perf_counter()
    written = save_raster(image.to_raster(), output_path)
    report["timings"]["export"] = perf_counter() - t3

    report["algorithm"] = skeletonizer.name
    if isinstance(skeletonizer, RosenfeldSkeletonizer):
        report["adjacency_mode"] = skeletonizer.mode.value
    report["width"] = image.width
    report["height"] = image.height
    report["background"] = image.bg_color.value
    report["threshold"] = cfg.threshold.threshold if cfg.threshold.enable else None
    report["foreground_before_px"] = fg_before
    report["foreground_after_px"] = fg_after
    report["removed_px"] = fg_before - fg_after

    LOGGER.info(
        "skeletonize image=%s algorithm=%s removed=%d kept=%d",
        image_path,
        skeletonizer.name,
        fg_before - fg_after,
        fg_after,
    )

    if debug_dir is not None:
        write_debug_artifacts(debug_dir, binarized, image, report)

    if cfg.output.write_report:
        write_report(report, written.with_suffix(".json"))

    return PipelineResult(output_path=written, report=report)
