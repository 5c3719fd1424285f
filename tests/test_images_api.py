import logging

import requests

from storefront.core import config
from storefront.services import image_service


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


def test_upload_relays_to_sirv(client, admin_headers, monkeypatch):
    calls = []

    def fake_post(url, **kwargs):
        calls.append((url, kwargs))
        if url.endswith("/token"):
            return FakeResponse(payload={"token": "sirv-token-123", "expiresIn": 1200})
        return FakeResponse()

    monkeypatch.setattr(image_service.requests, "post", fake_post)
    monkeypatch.setattr(config, "SIRV_BASE_URL", "https://old-souqs.sirv.com/")

    resp = client.post(
        "/images/upload",
        files={"file": ("brass lantern.jpg", b"\xff\xd8jpeg-bytes", "image/jpeg")},
        headers=admin_headers,
    )

    assert resp.status_code == 200, resp.text
    assert resp.json()["url"] == "https://old-souqs.sirv.com/Products/brass_lantern.jpg"

    token_call, upload_call = calls
    assert token_call[0].endswith("/v2/token")
    assert upload_call[0].endswith("/v2/files/upload")
    assert upload_call[1]["params"] == {"filename": "/Products/brass_lantern.jpg"}
    assert upload_call[1]["headers"]["Authorization"] == "Bearer sirv-token-123"
    assert upload_call[1]["data"] == b"\xff\xd8jpeg-bytes"


def test_upload_token_failure_is_bad_gateway(client, admin_headers, monkeypatch):
    monkeypatch.setattr(
        image_service.requests, "post", lambda url, **kw: FakeResponse(status_code=401, text="denied")
    )

    resp = client.post(
        "/images/upload", files={"file": ("a.jpg", b"data", "image/jpeg")}, headers=admin_headers
    )

    assert resp.status_code == 502


def test_upload_network_error_is_bad_gateway(client, admin_headers, monkeypatch):
    def boom(url, **kwargs):
        raise requests.ConnectionError("unreachable")

    monkeypatch.setattr(image_service.requests, "post", boom)

    resp = client.post(
        "/images/upload", files={"file": ("a.jpg", b"data", "image/jpeg")}, headers=admin_headers
    )

    assert resp.status_code == 502


def test_upload_rejects_empty_file(client, admin_headers):
    resp = client.post(
        "/images/upload", files={"file": ("a.jpg", b"", "image/jpeg")}, headers=admin_headers
    )
    assert resp.status_code == 400


def test_upload_requires_admin(client, customer_headers):
    resp = client.post(
        "/images/upload", files={"file": ("a.jpg", b"data", "image/jpeg")}, headers=customer_headers
    )
    assert resp.status_code == 403


def test_clean_file_name():
    assert image_service.clean_file_name(" old souq lamp.png ") == "old_souq_lamp.png"


def test_upload_does_not_log_sirv_token(client, admin_headers, monkeypatch, caplog):
    def fake_post(url, **kwargs):
        if url.endswith("/token"):
            return FakeResponse(payload={"token": "sirv-secret-token", "expiresIn": 1200})
        return FakeResponse()

    monkeypatch.setattr(image_service.requests, "post", fake_post)

    with caplog.at_level(logging.DEBUG):
        resp = client.post(
            "/images/upload",
            files={"file": ("tray.jpg", b"jpeg", "image/jpeg")},
            headers=admin_headers,
        )

    assert resp.status_code == 200, resp.text
    assert any("Uploading tray.jpg" in r.getMessage() for r in caplog.records)
    assert all("sirv-se" not in r.getMessage() for r in caplog.records)
