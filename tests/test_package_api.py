from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

import slimpdf
from slimpdf import (
    CompressionConfig,
    CompressionMethod,
    CompressionPolicy,
    ConfigurationError,
    compress_document,
    compress_if_needed,
    compress_pdf_bytes,
)


def test_version_is_exposed() -> None:
    assert slimpdf.__version__ == "0.1.0"


def test_compress_pdf_bytes_always_compresses(pdf_factory: Callable[..., bytes]) -> None:
    result = compress_pdf_bytes(pdf_factory(2))

    assert result.skipped is False
    assert result.method is CompressionMethod.PRIMARY
    assert result.processing_time >= 0.0


def test_compress_pdf_bytes_accepts_option_mapping(sample_pdf_bytes: bytes) -> None:
    result = compress_pdf_bytes(sample_pdf_bytes, {"removeMetadata": False, "imageQuality": 30})

    assert result.success is True


def test_compress_pdf_bytes_rejects_invalid_options(sample_pdf_bytes: bytes) -> None:
    with pytest.raises(ConfigurationError):
        compress_pdf_bytes(sample_pdf_bytes, {"image_quality": -1})


def test_compress_if_needed_respects_default_threshold(sample_pdf_bytes: bytes) -> None:
    result = compress_if_needed(sample_pdf_bytes)

    assert result.skipped is True
    assert result.buffer == sample_pdf_bytes


def test_compress_if_needed_with_custom_policy(sample_pdf_bytes: bytes) -> None:
    result = compress_if_needed(sample_pdf_bytes, policy=CompressionPolicy(size_threshold=1))

    assert result.skipped is False


def test_compress_document_writes_output(sample_pdf: Path, tmp_path: Path) -> None:
    output = tmp_path / "nested" / "result.pdf"

    result = compress_document(sample_pdf, output, config=CompressionConfig(image_quality=40))

    assert output.exists()
    assert output.read_bytes() == result.buffer


def test_compress_document_missing_input(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        compress_document(tmp_path / "missing.pdf", tmp_path / "out.pdf")
