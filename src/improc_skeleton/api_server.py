from __future__ import annotations

import logging
from pathlib import Path
from uuid import uuid4

from fastapi import FastAPI, HTTPException, Request, Response
from pydantic import BaseModel, Field

from improc_skeleton import __version__
from improc_skeleton.boundary import (
    Buffer,
    eberly_skeletonization,
    free_buffer,
    rosenfeld_skeletonization,
    zhang_suen_skeletonization,
)
from improc_skeleton.config import AppConfig, SkeletonConfig, load_config
from improc_skeleton.skeletonizers import SkeletonizerKind
from improc_skeleton.vision.raster import READABLE_SUFFIXES

LOGGER = logging.getLogger("improc_skeleton.api")


class SkeletonizeByPathRequest(BaseModel):
    image_path: str = Field(..., description="Input image path")
    output_path: str | None = Field(default=None, description="Output .png path. Default: <image>_skeleton.png")
    config_path: str | None = Field(default=None, description="Optional YAML config path")
    algorithm: str | None = Field(default=None, description="Algorithm override: zhang_suen | rosenfeld | eberly")
    adjacency_mode: str | None = Field(default=None, description="Rosenfeld adjacency override: four | eight")
    debug_dir: str | None = Field(default=None, description="Optional debug directory")
    include_report: bool = Field(default=True, description="Return run report in response")


class SkeletonizeResponse(BaseModel):
    status: str
    trace_id: str
    output_path: str
    report: dict[str, object] | None = None


app = FastAPI(
    title="improc-skeleton API",
    version=__version__,
    description="Local API for binary image skeletonization (Zhang-Suen, Rosenfeld, Eberly).",
)


def _optional_path(raw: str | None) -> Path | None:
    return Path(raw).expanduser() if raw else None


def _input_raster_path(raw: str) -> Path:
    path = Path(raw).expanduser()
    if not path.is_file():
        raise HTTPException(status_code=400, detail=f"Input image does not exist: {path}")
    if path.suffix.lower() not in READABLE_SUFFIXES:
        allowed = ", ".join(sorted(READABLE_SUFFIXES))
        raise HTTPException(status_code=400, detail=f"Unsupported raster format {path.suffix!r}. Readable: {allowed}")
    return path


def _skeleton_path_for(image_path: Path) -> Path:
    return image_path.with_name(f"{image_path.stem}_skeleton.png")


def _with_overrides(cfg: AppConfig, payload: SkeletonizeByPathRequest) -> AppConfig:
    overrides = {
        key: value
        for key, value in (("algorithm", payload.algorithm), ("adjacency_mode", payload.adjacency_mode))
        if value is not None
    }
    if overrides:
        cfg.skeleton = SkeletonConfig.model_validate({**cfg.skeleton.model_dump(), **overrides})
    return cfg


def _run_boundary(kind: SkeletonizerKind, data: bytes, adjacency_mode: int) -> Buffer:
    if kind is SkeletonizerKind.ZHANG_SUEN:
        return zhang_suen_skeletonization(data, len(data))
    if kind is SkeletonizerKind.ROSENFELD:
        return rosenfeld_skeletonization(data, len(data), adjacency_mode)
    return eberly_skeletonization(data, len(data))


@app.get("/health", tags=["system"])
def health() -> dict[str, object]:
    return {"status": "ok", "version": __version__}


@app.get("/algorithms", tags=["system"])
def algorithms() -> dict[str, object]:
    return {
        "algorithms": [kind.value for kind in SkeletonizerKind],
        "adjacency_modes": {"0": "eight", "other": "four"},
    }


@app.post("/skeletonize", response_model=SkeletonizeResponse, tags=["skeletonize"])
def skeletonize(payload: SkeletonizeByPathRequest) -> SkeletonizeResponse:
    from improc_skeleton.pipeline import run_pipeline

    trace_id = uuid4().hex[:12]
    if not payload.image_path:
        raise HTTPException(status_code=400, detail="image_path is required")
    image_path = _input_raster_path(payload.image_path)

    output_path = _optional_path(payload.output_path) or _skeleton_path_for(image_path)
    config_path = _optional_path(payload.config_path)
    debug_dir = _optional_path(payload.debug_dir)

    try:
        cfg = _with_overrides(load_config(config_path), payload)
        result = run_pipeline(
            image_path=image_path,
            output_path=output_path,
            cfg=cfg,
            debug_dir=debug_dir,
        )
    except FileNotFoundError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except HTTPException:
        raise
    except Exception as exc:
        LOGGER.exception("trace=%s skeletonize_failed", trace_id)
        raise HTTPException(status_code=500, detail=f"Skeletonization failed: {exc}") from exc

    LOGGER.info(
        "trace=%s skeletonize image=%s output=%s",
        trace_id,
        image_path,
        result.output_path,
    )
    return SkeletonizeResponse(
        status="ok",
        trace_id=trace_id,
        output_path=str(result.output_path),
        report=result.report if payload.include_report else None,
    )


@app.post("/skeletonize/{algorithm}", tags=["skeletonize"], response_class=Response)
async def skeletonize_bytes(algorithm: str, request: Request, adjacency_mode: int = 1) -> Response:
    try:
        kind = SkeletonizerKind(algorithm.strip().lower().replace("-", "_"))
    except ValueError as exc:
        raise HTTPException(status_code=404, detail=f"Unknown algorithm: {algorithm}") from exc

    data = await request.body()
    buffer = _run_boundary(kind, data, adjacency_mode)
    if buffer.is_null:
        raise HTTPException(status_code=400, detail="Input is not a decodable image")

    content = bytes(buffer.data or b"")
    free_buffer(buffer)
    return Response(content=content, media_type="image/png")
