from __future__ import annotations

import io
import sys
from pathlib import Path
from typing import Callable, Iterator

import pytest
from fastapi.testclient import TestClient
from pypdf import PdfWriter

BACKEND_ROOT = Path(__file__).resolve().parents[1]
PROJECT_ROOT = Path(__file__).resolve().parents[3]
for path in (PROJECT_ROOT, BACKEND_ROOT):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from app.main import app  # noqa: E402
from app.settings import Settings, get_settings  # noqa: E402


@pytest.fixture()
def make_client() -> Iterator[Callable[..., TestClient]]:
    """Return a factory building a client whose settings are overridden."""

    def _create(**overrides: object) -> TestClient:
        settings = Settings(**overrides)  # type: ignore[arg-type]
        app.dependency_overrides[get_settings] = lambda: settings
        return TestClient(app)

    yield _create
    app.dependency_overrides.clear()


@pytest.fixture()
def client(make_client: Callable[..., TestClient]) -> TestClient:
    return make_client()


@pytest.fixture()
def pdf_bytes() -> bytes:
    writer = PdfWriter()
    for _ in range(3):
        writer.add_blank_page(width=300, height=400)
    writer.add_metadata({"/Title": "Upload", "/Author": "backend-tests"})
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture()
def corrupt_bytes() -> bytes:
    return b"not a pdf at all" * 64
