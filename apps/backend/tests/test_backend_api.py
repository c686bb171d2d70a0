"""Integration tests for the compression endpoints."""

from __future__ import annotations

import json
from typing import Callable

import pytest
from fastapi.testclient import TestClient

from app.settings import load_settings


def _pdf_upload(data: bytes, name: str = "document.pdf") -> dict[str, tuple[str, bytes, str]]:
    return {"file": (name, data, "application/pdf")}


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_openapi_is_served_under_api_prefix(client: TestClient) -> None:
    response = client.get("/api/openapi.json")

    assert response.status_code == 200
    assert "/compress" in response.json()["paths"]


def test_small_upload_is_returned_unchanged(client: TestClient, pdf_bytes: bytes) -> None:
    response = client.post("/compress", files=_pdf_upload(pdf_bytes))

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["x-slimpdf-skipped"] == "true"
    assert response.headers["x-slimpdf-method"] == "skipped"
    assert response.content == pdf_bytes


def test_forced_upload_is_compressed(client: TestClient, pdf_bytes: bytes) -> None:
    response = client.post("/compress", files=_pdf_upload(pdf_bytes, "../../scan.pdf"), data={"force": "true"})

    assert response.status_code == 200
    assert response.headers["x-slimpdf-skipped"] == "false"
    assert response.headers["x-slimpdf-method"] == "primary"
    assert response.headers["x-slimpdf-pages"] == "3"
    assert response.headers["x-slimpdf-original-size"] == str(len(pdf_bytes))
    assert response.headers["x-slimpdf-compressed-size"] == str(len(response.content))
    assert response.headers["x-slimpdf-compression-ratio"].endswith("%")
    assert 'filename="scan.pdf"' in response.headers["content-disposition"]
    assert response.content.startswith(b"%PDF")


def test_threshold_from_settings(make_client: Callable[..., TestClient], pdf_bytes: bytes) -> None:
    client = make_client(size_threshold=16)

    response = client.post("/compress", files=_pdf_upload(pdf_bytes))

    assert response.status_code == 200
    assert response.headers["x-slimpdf-skipped"] == "false"


def test_non_pdf_upload_is_rejected(client: TestClient) -> None:
    response = client.post("/compress", files={"file": ("notes.txt", b"hello", "text/plain")})

    assert response.status_code == 415


def test_empty_upload_is_rejected(client: TestClient) -> None:
    response = client.post("/compress", files=_pdf_upload(b""))

    assert response.status_code == 400
    assert "empty" in response.json()["detail"]


def test_oversized_upload_is_rejected(make_client: Callable[..., TestClient], pdf_bytes: bytes) -> None:
    client = make_client(max_upload_bytes=64)

    response = client.post("/compress", files=_pdf_upload(pdf_bytes))

    assert response.status_code == 413


@pytest.mark.parametrize(
    "options",
    ["{not json", "[1, 2]", json.dumps({"imageQuality": 500}), json.dumps({"colour": "blue"})],
)
def test_invalid_options_are_rejected(client: TestClient, pdf_bytes: bytes, options: str) -> None:
    response = client.post("/compress", files=_pdf_upload(pdf_bytes), data={"options": options, "force": "true"})

    assert response.status_code == 400


def test_options_are_applied(client: TestClient, pdf_bytes: bytes) -> None:
    options = json.dumps({"removeMetadata": False, "imageQuality": 45})

    response = client.post("/compress", files=_pdf_upload(pdf_bytes), data={"options": options, "force": "true"})

    assert response.status_code == 200
    assert b"backend-tests" in response.content


def test_unparseable_pdf_fails_when_forced(client: TestClient, corrupt_bytes: bytes) -> None:
    response = client.post("/compress", files=_pdf_upload(corrupt_bytes), data={"force": "true"})

    assert response.status_code == 422
    assert "All compression methods failed" in response.json()["detail"]


def test_report_uses_camel_case_keys(client: TestClient, pdf_bytes: bytes) -> None:
    response = client.post("/compress/report", files=_pdf_upload(pdf_bytes, "report.pdf"), data={"force": "true"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["filename"] == "report.pdf"
    assert payload["success"] is True
    assert payload["skipped"] is False
    assert payload["method"] == "primary"
    assert payload["originalSize"] == len(pdf_bytes)
    assert payload["pagesProcessed"] == 3
    assert 0 <= payload["compressionRatio"] <= 100
    assert "processingTimeMs" in payload


def test_report_for_skipped_upload(client: TestClient, pdf_bytes: bytes) -> None:
    payload = client.post("/compress/report", files=_pdf_upload(pdf_bytes)).json()

    assert payload["skipped"] is True
    assert payload["compressedSize"] == payload["originalSize"]
    assert "threshold" in payload["reason"]


def test_batch_isolates_failures(client: TestClient, pdf_bytes: bytes, corrupt_bytes: bytes) -> None:
    files = [
        ("files", ("good.pdf", pdf_bytes, "application/pdf")),
        ("files", ("notes.txt", b"plain text", "text/plain")),
        ("files", ("broken.pdf", corrupt_bytes, "application/pdf")),
    ]

    response = client.post("/compress/batch", files=files, data={"force": "true"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["totalFiles"] == 2
    assert payload["successful"] == 1
    assert payload["failed"] == 1
    assert payload["totalOriginalSize"] == len(pdf_bytes)
    by_name = {entry["filename"]: entry for entry in payload["results"]}
    assert by_name["good.pdf"]["success"] is True
    assert by_name["broken.pdf"]["success"] is False
    assert by_name["broken.pdf"]["method"] == "none"
    assert "failed" in by_name["broken.pdf"]["error"]


def test_batch_without_pdfs_is_rejected(client: TestClient) -> None:
    response = client.post("/compress/batch", files=[("files", ("a.txt", b"x", "text/plain"))])

    assert response.status_code == 400


def test_load_settings_from_environment() -> None:
    settings = load_settings(
        {
            "SLIMPDF_SIZE_THRESHOLD": "1024",
            "SLIMPDF_PRIMARY_MIN_GAIN": "10",
            "SLIMPDF_FALLBACK_MIN_GAIN": "2.5",
            "SLIMPDF_IMAGE_QUALITY": "70",
            "SLIMPDF_MAX_UPLOAD_MB": "5",
        }
    )

    assert settings.size_threshold == 1024
    assert settings.primary_min_gain == 10.0
    assert settings.fallback_min_gain == 2.5
    assert settings.config().image_quality == 70
    assert settings.max_upload_bytes == 5 * 1024 * 1024


def test_load_settings_defaults() -> None:
    settings = load_settings({})

    assert settings.size_threshold == 20 * 1024 * 1024
    assert settings.policy().primary_min_gain == 5.0


@pytest.mark.parametrize(
    "environ",
    [
        {"SLIMPDF_SIZE_THRESHOLD": "large"},
        {"SLIMPDF_PRIMARY_MIN_GAIN": "1", "SLIMPDF_FALLBACK_MIN_GAIN": "2"},
        {"SLIMPDF_IMAGE_QUALITY": "101"},
        {"SLIMPDF_MAX_UPLOAD_MB": "0"},
    ],
)
def test_load_settings_rejects_invalid_values(environ: dict[str, str]) -> None:
    with pytest.raises(RuntimeError):
        load_settings(environ)
