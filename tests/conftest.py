from __future__ import annotations

import io
from pathlib import Path
from typing import Callable, Sequence
import sys

import pytest
from PIL import Image
from pypdf import PdfWriter

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


def build_pdf(
    page_sizes: Sequence[tuple[float, float]],
    metadata: dict[str, str] | None = None,
) -> bytes:
    writer = PdfWriter()
    for width, height in page_sizes:
        writer.add_blank_page(width=width, height=height)
    if metadata:
        writer.add_metadata(metadata)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture()
def pdf_factory() -> Callable[..., bytes]:
    def _create(pages: int = 1, *, width: float = 200, height: float = 200, metadata: dict[str, str] | None = None) -> bytes:
        return build_pdf([(width, height)] * pages, metadata)

    return _create


@pytest.fixture()
def pdf_from_sizes() -> Callable[..., bytes]:
    return build_pdf


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    return build_pdf(
        [(200, 200)] * 5,
        {
            "/Title": "Sample",
            "/Author": "slimpdf-tests",
            "/Subject": "Testing",
            "/Keywords": "pdf, tests",
            "/Producer": "slimpdf-tests",
            "/Creator": "pytest",
        },
    )


@pytest.fixture()
def sample_pdf(tmp_path: Path, sample_pdf_bytes: bytes) -> Path:
    pdf_path = tmp_path / "sample.pdf"
    pdf_path.write_bytes(sample_pdf_bytes)
    return pdf_path


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    return build_pdf([])


@pytest.fixture()
def image_pdf_bytes() -> bytes:
    """A single page PDF holding one large, noisy RGB photo."""

    photo = Image.effect_noise((2000, 1500), 64).convert("RGB")
    buffer = io.BytesIO()
    photo.save(buffer, format="PDF", resolution=72.0, quality=95)
    return buffer.getvalue()


@pytest.fixture()
def corrupt_bytes() -> bytes:
    return b"this is definitely not a PDF document" * 32
