import pytest
from pydantic import ValidationError

from improc_skeleton.config import AppConfig, SkeletonConfig, load_config
from improc_skeleton.skeletonizers import SkeletonizerKind
from improc_skeleton.types import AdjacencyMode, PixelColor


def test_default_config():
    cfg = load_config(None)

    assert isinstance(cfg, AppConfig)
    assert cfg.skeleton.kind is SkeletonizerKind.ZHANG_SUEN
    assert cfg.skeleton.mode is AdjacencyMode.FOUR
    assert cfg.skeleton.bg_color is PixelColor.WHITE
    assert cfg.threshold.enable


def test_load_yaml_config(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text(
        "threshold:\n  threshold: 90\nskeleton:\n  algorithm: Rosenfeld\n  adjacency_mode: EIGHT\n",
        encoding="utf-8",
    )

    cfg = load_config(path)

    assert cfg.threshold.threshold == 90
    assert cfg.skeleton.kind is SkeletonizerKind.ROSENFELD
    assert cfg.skeleton.mode is AdjacencyMode.EIGHT


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    assert load_config(path) == AppConfig()


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


@pytest.mark.parametrize(
    "field,value",
    [("algorithm", "medial_axis"), ("adjacency_mode", "six"), ("background", "gray")],
)
def test_invalid_skeleton_values_rejected(field, value):
    with pytest.raises(ValidationError):
        SkeletonConfig(**{field: value})


def test_invalid_threshold_rejected():
    with pytest.raises(ValidationError):
        AppConfig.model_validate({"threshold": {"threshold": -1}})
