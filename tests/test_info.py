from __future__ import annotations

from typing import Callable

import pytest

from slimpdf.compress import (
    CompressionMethod,
    CompressionResult,
    InvalidPDFError,
    get_compression_info,
    get_compression_stats,
    sizeof_fmt,
)


def test_sizeof_fmt_scales_units() -> None:
    assert sizeof_fmt(512) == "512.0 bytes"
    assert sizeof_fmt(2048) == "2.0 KiB"
    assert sizeof_fmt(20 * 1024 * 1024) == "20.0 MiB"


def test_compression_info_for_text_only_document(pdf_factory: Callable[..., bytes]) -> None:
    document = pdf_factory(3)

    info = get_compression_info(document)

    assert info.file_size_bytes == len(document)
    assert info.page_count == 3
    assert info.image_count == 0
    assert info.needs_compression is False
    assert info.potential_savings_bytes == int(len(document) * 0.05)


def test_compression_info_counts_images(image_pdf_bytes: bytes) -> None:
    info = get_compression_info(image_pdf_bytes, threshold=1024)

    assert info.image_count == 1
    assert info.needs_compression is True
    assert info.potential_savings_bytes == int(len(image_pdf_bytes) * min(0.35 + 0.02, 0.6))


def test_compression_info_rejects_invalid_documents(corrupt_bytes: bytes) -> None:
    with pytest.raises(InvalidPDFError):
        get_compression_info(corrupt_bytes)


def test_compression_stats_formats_result() -> None:
    result = CompressionResult.from_sizes(
        b"x" * 1024,
        original_size=4096,
        min_gain=5.0,
        method=CompressionMethod.PRIMARY,
        pages_processed=2,
    )

    stats = get_compression_stats(result)

    assert stats == {
        "originalSize": "4.0 KiB",
        "compressedSize": "1.0 KiB",
        "compressionRatio": "75.00%",
        "spaceSaved": "3.0 KiB",
        "method": "primary",
        "compressed": True,
        "skipped": False,
    }
