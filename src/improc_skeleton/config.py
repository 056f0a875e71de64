from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

from improc_skeleton.skeletonizers import SkeletonizerKind
from improc_skeleton.types import AdjacencyMode, PixelColor


class ThresholdConfig(BaseModel):
    enable: bool = True
    threshold: int = 127

    @field_validator("threshold")
    @classmethod
    def _validate_threshold(cls, value: int) -> int:
        if int(value) < 0:
            raise ValueError("threshold.threshold must be non-negative")
        return int(value)


class SkeletonConfig(BaseModel):
    algorithm: str = "zhang_suen"  # "zhang_suen" | "rosenfeld" | "eberly"
    adjacency_mode: str = "four"  # "four" | "eight", rosenfeld only
    background: str = "white"  # "white" | "black"

    @field_validator("algorithm")
    @classmethod
    def _validate_algorithm(cls, value: str) -> str:
        name = str(value).strip().lower().replace("-", "_")
        allowed = {kind.value for kind in SkeletonizerKind}
        if name not in allowed:
            raise ValueError(f"skeleton.algorithm must be one of: {', '.join(sorted(allowed))}")
        return name

    @field_validator("adjacency_mode")
    @classmethod
    def _validate_adjacency_mode(cls, value: str) -> str:
        mode = str(value).strip().lower()
        if mode not in {m.value for m in AdjacencyMode}:
            raise ValueError("skeleton.adjacency_mode must be one of: four, eight")
        return mode

    @field_validator("background")
    @classmethod
    def _validate_background(cls, value: str) -> str:
        color = str(value).strip().lower()
        if color not in {c.value for c in PixelColor}:
            raise ValueError("skeleton.background must be one of: black, white")
        return color

    @property
    def kind(self) -> SkeletonizerKind:
        return SkeletonizerKind(self.algorithm)

    @property
    def mode(self) -> AdjacencyMode:
        return AdjacencyMode(self.adjacency_mode)

    @property
    def bg_color(self) -> PixelColor:
        return PixelColor(self.background)


class OutputConfig(BaseModel):
    write_report: bool = False


class AppConfig(BaseModel):
    threshold: ThresholdConfig = Field(default_factory=ThresholdConfig)
    skeleton: SkeletonConfig = Field(default_factory=SkeletonConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    if path is None:
        return AppConfig()

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    raw = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    return AppConfig.model_validate(raw)
