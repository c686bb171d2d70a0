"""Information and reporting helpers for :mod:`slimpdf.compress`."""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING

from .document import SourceDocument
from .gate import DEFAULT_SIZE_THRESHOLD, needs_compression
from .utils import get_logger

if TYPE_CHECKING:
    from .result import CompressionResult

_LOGGER = get_logger("slimpdf.compress")


@dataclasses.dataclass(slots=True)
class CompressionInfo:
    """Describes metrics about a PDF document relevant for compression."""

    file_size_bytes: int
    page_count: int
    image_count: int
    needs_compression: bool
    potential_savings_bytes: int


def sizeof_fmt(num_bytes: float) -> str:
    """Format *num_bytes* into a human-friendly string."""

    step_unit = 1024.0
    for unit in ("bytes", "KiB", "MiB", "GiB"):
        if abs(num_bytes) < step_unit:
            return f"{num_bytes:3.1f} {unit}"
        num_bytes /= step_unit
    return f"{num_bytes:.1f} TiB"


def _count_images(source: SourceDocument) -> int:
    image_count = 0
    for descriptor in source.pages():
        try:
            image_count += len(descriptor.page.images.keys())
        except Exception:  # pragma: no cover - attribute access guard
            continue
    return image_count


def _estimate_potential_savings(file_size_bytes: int, image_count: int) -> int:
    if image_count == 0:
        return int(file_size_bytes * 0.05)
    weight = min(0.35 + image_count * 0.02, 0.6)
    return int(file_size_bytes * weight)


def get_compression_info(document: bytes, *, threshold: int = DEFAULT_SIZE_THRESHOLD) -> CompressionInfo:
    """Return :class:`CompressionInfo` for the PDF held in *document*."""

    source = SourceDocument.load(document)
    image_count = _count_images(source)
    info = CompressionInfo(
        file_size_bytes=len(document),
        page_count=source.page_count,
        image_count=image_count,
        needs_compression=needs_compression(document, threshold),
        potential_savings_bytes=_estimate_potential_savings(len(document), image_count),
    )
    _LOGGER.debug("Compression info: %s", info)
    return info


def get_compression_stats(result: "CompressionResult") -> dict[str, object]:
    """Summarise *result* with human readable sizes."""

    return {
        "originalSize": sizeof_fmt(result.original_size),
        "compressedSize": sizeof_fmt(result.compressed_size),
        "compressionRatio": f"{result.compression_ratio:.2f}%",
        "spaceSaved": sizeof_fmt(result.bytes_saved),
        "method": result.method.value,
        "compressed": result.compressed,
        "skipped": result.skipped,
    }


__all__ = [
    "CompressionInfo",
    "get_compression_info",
    "get_compression_stats",
    "sizeof_fmt",
]
