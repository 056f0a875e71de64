import asyncio

import numpy as np
import pytest

pytest.importorskip("fastapi")
pytest.importorskip("cv2")

from fastapi import HTTPException
from starlette.requests import Request

from improc_skeleton.api_server import (
    SkeletonizeByPathRequest,
    algorithms,
    app,
    health,
    skeletonize,
    skeletonize_bytes,
)
from improc_skeleton.vision.raster import decode_raster, encode_png, save_raster


def _square_raster() -> np.ndarray:
    raster = np.full((6, 6, 3), 255, dtype=np.uint8)
    raster[1:5, 1:5] = 0
    return raster


def _request_with_body(body: bytes) -> Request:
    scope = {
        "type": "http",
        "http_version": "1.1",
        "method": "POST",
        "path": "/skeletonize/zhang_suen",
        "raw_path": b"/skeletonize/zhang_suen",
        "scheme": "http",
        "query_string": b"",
        "headers": [(b"content-type", b"application/octet-stream")],
        "client": ("127.0.0.1", 12345),
        "server": ("127.0.0.1", 8000),
        "root_path": "",
        "app": app,
    }

    async def receive():
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, receive)


def test_health_and_algorithms_endpoints():
    assert health()["status"] == "ok"
    assert algorithms()["algorithms"] == ["zhang_suen", "rosenfeld", "eberly"]


def test_skeletonize_by_path(tmp_path):
    image_path = save_raster(_square_raster(), tmp_path / "square.png")

    response = skeletonize(SkeletonizeByPathRequest(image_path=str(image_path), algorithm="zhang_suen"))

    assert response.status == "ok"
    assert response.output_path == str(tmp_path / "square_skeleton.png")
    assert response.report["foreground_after_px"] == 1


def test_skeletonize_by_path_rejects_missing_image(tmp_path):
    with pytest.raises(HTTPException) as excinfo:
        skeletonize(SkeletonizeByPathRequest(image_path=str(tmp_path / "missing.png")))

    assert excinfo.value.status_code == 400


def test_skeletonize_by_path_rejects_unknown_algorithm(tmp_path):
    image_path = save_raster(_square_raster(), tmp_path / "square.png")

    with pytest.raises(HTTPException) as excinfo:
        skeletonize(SkeletonizeByPathRequest(image_path=str(image_path), algorithm="medial_axis"))

    assert excinfo.value.status_code == 400


def test_skeletonize_bytes_returns_png():
    request = _request_with_body(encode_png(_square_raster()))

    response = asyncio.run(skeletonize_bytes("zhang_suen", request))

    assert response.media_type == "image/png"
    out = decode_raster(response.body)
    ys, xs = np.nonzero(np.all(out == 0, axis=2))
    assert list(zip(xs.tolist(), ys.tolist())) == [(2, 2)]


def test_skeletonize_bytes_errors():
    with pytest.raises(HTTPException) as excinfo:
        asyncio.run(skeletonize_bytes("eberly", _request_with_body(b"garbage")))
    assert excinfo.value.status_code == 400

    with pytest.raises(HTTPException) as excinfo:
        asyncio.run(skeletonize_bytes("voronoi", _request_with_body(b"")))
    assert excinfo.value.status_code == 404


def test_openapi_lists_routes():
    paths = app.openapi()["paths"]

    assert "/skeletonize" in paths
    assert "/skeletonize/{algorithm}" in paths


def test_skeletonize_by_path_overrides_adjacency_mode(tmp_path):
    image_path = save_raster(_square_raster(), tmp_path / "square.png")

    response = skeletonize(
        SkeletonizeByPathRequest(image_path=str(image_path), algorithm="rosenfeld", adjacency_mode="EIGHT")
    )

    assert response.report["algorithm"] == "rosenfeld"
    assert response.report["adjacency_mode"] == "eight"


def test_skeletonize_by_path_rejects_unknown_adjacency_mode(tmp_path):
    image_path = save_raster(_square_raster(), tmp_path / "square.png")

    with pytest.raises(HTTPException) as excinfo:
        skeletonize(
            SkeletonizeByPathRequest(image_path=str(image_path), algorithm="rosenfeld", adjacency_mode="six")
        )

    assert excinfo.value.status_code == 400


def test_skeletonize_by_path_rejects_unreadable_format(tmp_path):
    text_path = tmp_path / "notes.txt"
    text_path.write_text("not a raster", encoding="utf-8")

    with pytest.raises(HTTPException) as excinfo:
        skeletonize(SkeletonizeByPathRequest(image_path=str(text_path)))

    assert excinfo.value.status_code == 400
    assert "Unsupported raster format" in excinfo.value.detail
