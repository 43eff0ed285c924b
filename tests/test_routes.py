import struct

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.routes import router
from config import settings


@pytest.fixture
def client():
    app = FastAPI()
    app.include_router(router, prefix="/api")
    return TestClient(app)


def upload(*sources):
    return [("files", (f"icon{i}.png", data, "image/png")) for i, data in enumerate(sources)]


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_info(client):
    body = client.get("/api/info").json()

    assert body["server"] == "ICO Packer Server"
    assert body["default_sizes"] == settings.sizes_list
    assert body["mask_threshold"] == settings.mask_threshold


def test_create_ico(client, make_png):
    response = client.post("/api/ico", files=upload(make_png(16, 16), make_png(32, 32, mode="RGB")))

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/x-icon"
    assert "icon.ico" in response.headers["content-disposition"]

    ico = response.content
    assert struct.unpack("<HHH", ico[:6]) == (0, 1, 2)
    assert ico[6:8] == bytes([16, 16])
    assert ico[22:24] == bytes([32, 32])


def test_create_ico_with_resize(client, make_png):
    response = client.post(
        "/api/ico",
        files=upload(make_png(64, 64)),
        data={"resize": "true", "sizes": "16,32,128"},
    )

    assert response.status_code == 200
    assert struct.unpack("<H", response.content[4:6])[0] == 2


def test_bad_image_is_unprocessable(client, make_png):
    response = client.post("/api/ico", files=upload(make_png(16, 16), b"broken"))

    assert response.status_code == 422
    assert response.json()["detail"].startswith("image #1:")


def test_bad_sizes(client, make_png):
    response = client.post(
        "/api/ico", files=upload(make_png(16, 16)), data={"resize": "true", "sizes": "a,b"}
    )
    assert response.status_code == 422


def test_negative_threshold(client, make_png):
    response = client.post(
        "/api/ico", files=upload(make_png(16, 16)), data={"mask_threshold": "-1"}
    )
    assert response.status_code == 422


def test_upload_too_large(client, make_png, monkeypatch):
    monkeypatch.setattr(settings, "max_upload_size_mb", 0)

    response = client.post("/api/ico", files=upload(make_png(16, 16)))
    assert response.status_code == 413


def test_app_mounts_router():
    from main import app

    client = TestClient(app)

    assert client.get("/api/health").status_code == 200
    assert client.get("/api/info").status_code == 200
    assert client.get("/api/ico").status_code == 405
