"""Result types produced by the compression pipeline."""

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any


class CompressionMethod(str, Enum):
    """Identifies the code path that produced a :class:`CompressionResult`."""

    PRIMARY = "primary"
    FALLBACK = "fallback"
    SKIPPED = "skipped"
    NONE = "none"


def compression_ratio(original_size: int, compressed_size: int) -> float:
    """Return the size reduction as a percentage, floored at ``0``.

    An empty original is defined to have a ratio of ``0``.
    """

    if original_size <= 0:
        return 0.0
    ratio = (original_size - compressed_size) / original_size * 100
    return max(0.0, ratio)


@dataclasses.dataclass(slots=True)
class CompressionResult:
    """Represents the outcome of a compression run."""

    success: bool
    compressed: bool
    buffer: bytes
    original_size: int
    compressed_size: int
    compression_ratio: float
    pages_processed: int = 0
    method: CompressionMethod = CompressionMethod.PRIMARY
    error: str | None = None
    skipped: bool = False
    reason: str | None = None
    processing_time: float = 0.0

    @classmethod
    def from_sizes(
        cls,
        buffer: bytes,
        *,
        original_size: int,
        min_gain: float,
        method: CompressionMethod,
        pages_processed: int,
    ) -> "CompressionResult":
        ratio = compression_ratio(original_size, len(buffer))
        return cls(
            success=True,
            compressed=ratio > min_gain,
            buffer=buffer,
            original_size=original_size,
            compressed_size=len(buffer),
            compression_ratio=ratio,
            pages_processed=pages_processed,
            method=method,
        )

    @classmethod
    def skipped_result(cls, document: bytes, *, reason: str) -> "CompressionResult":
        """Result returned when the size gate declines to compress *document*."""

        return cls(
            success=True,
            compressed=False,
            buffer=document,
            original_size=len(document),
            compressed_size=len(document),
            compression_ratio=0.0,
            method=CompressionMethod.SKIPPED,
            skipped=True,
            reason=reason,
        )

    @classmethod
    def failed(cls, original_size: int, error: BaseException | str) -> "CompressionResult":
        """Record a terminal failure for reporting; the buffer is left empty."""

        return cls(
            success=False,
            compressed=False,
            buffer=b"",
            original_size=original_size,
            compressed_size=0,
            compression_ratio=0.0,
            method=CompressionMethod.NONE,
            error=str(error),
        )

    @property
    def bytes_saved(self) -> int:
        return max(self.original_size - self.compressed_size, 0)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON friendly summary without the output buffer."""

        payload: dict[str, Any] = {
            "success": self.success,
            "compressed": self.compressed,
            "originalSize": self.original_size,
            "compressedSize": self.compressed_size,
            "compressionRatio": round(self.compression_ratio, 2),
            "pagesProcessed": self.pages_processed,
            "method": self.method.value,
            "skipped": self.skipped,
            "processingTime": round(self.processing_time, 4),
        }
        if self.reason is not None:
            payload["reason"] = self.reason
        if self.error is not None:
            payload["error"] = self.error
        return payload


__all__ = ["CompressionMethod", "CompressionResult", "compression_ratio"]
