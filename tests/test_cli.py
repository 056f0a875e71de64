import numpy as np
import pytest

pytest.importorskip("cv2")

from typer.testing import CliRunner

from improc_skeleton.cli import app
from improc_skeleton.vision.raster import load_raster, save_raster

runner = CliRunner()


def _square(path):
    raster = np.full((6, 6, 3), 255, dtype=np.uint8)
    raster[1:5, 1:5] = 0
    return save_raster(raster, path)


def test_run_command_writes_skeleton(tmp_path):
    image = _square(tmp_path / "in.png")
    out = tmp_path / "out.png"

    result = runner.invoke(app, ["run", "--image", str(image), "--out", str(out), "--algorithm", "rosenfeld"])

    assert result.exit_code == 0, result.output
    raster = load_raster(out)
    assert int(np.all(raster == 0, axis=2).sum()) == 2


def test_run_command_rejects_bad_algorithm(tmp_path):
    image = _square(tmp_path / "in.png")

    result = runner.invoke(app, ["run", "--image", str(image), "--out", str(tmp_path / "o.png"), "--algorithm", "x"])

    assert result.exit_code == 1


def test_threshold_command(tmp_path):
    image = tmp_path / "gray.png"
    save_raster(np.array([[[20, 20, 20], [200, 200, 200]]], dtype=np.uint8), image)
    out = tmp_path / "bw.png"

    result = runner.invoke(app, ["threshold", "--image", str(image), "--out", str(out), "--threshold", "100"])

    assert result.exit_code == 0, result.output
    np.testing.assert_array_equal(load_raster(out), [[[0, 0, 0], [255, 255, 255]]])


def test_algorithms_command_lists_all():
    result = runner.invoke(app, ["algorithms"])

    assert result.exit_code == 0
    assert result.output.split() == ["zhang_suen", "rosenfeld", "eberly"]
