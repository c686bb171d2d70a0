"""Size-gated PDF compression toolkit."""

from __future__ import annotations

from pathlib import Path

from . import compress
from .compress import (
    CompressionConfig,
    CompressionError,
    CompressionMethod,
    CompressionPipeline,
    CompressionPolicy,
    CompressionResult,
    CompressionStream,
    ConfigurationError,
    InvalidPDFError,
    SlimPDFError,
    compress_bytes,
    compress_pdf,
    get_compression_info,
    needs_compression,
)

__version__ = "0.1.0"

__all__ = [
    "compress",
    "compress_bytes",
    "compress_pdf",
    "compress_document",
    "compress_pdf_bytes",
    "compress_if_needed",
    "get_compression_info",
    "needs_compression",
    "CompressionConfig",
    "CompressionError",
    "CompressionMethod",
    "CompressionPipeline",
    "CompressionPolicy",
    "CompressionResult",
    "CompressionStream",
    "ConfigurationError",
    "InvalidPDFError",
    "SlimPDFError",
]


def compress_pdf_bytes(
    document: bytes,
    config: CompressionConfig | dict[str, object] | None = None,
    **kwargs,
) -> CompressionResult:
    """Convenience wrapper around :func:`compress.compress_bytes` that always compresses."""

    return compress_bytes(document, config, force=True, **kwargs)


def compress_if_needed(
    document: bytes,
    config: CompressionConfig | dict[str, object] | None = None,
    **kwargs,
) -> CompressionResult:
    """Compress *document* only when the size gate allows it."""

    return compress_bytes(document, config, force=False, **kwargs)


def compress_document(
    input: str | Path,
    output: str | Path,
    *,
    config: CompressionConfig | dict[str, object] | None = None,
    policy: CompressionPolicy | None = None,
) -> CompressionResult:
    """Convenience wrapper around :func:`compress.compress_pdf`."""

    return compress_pdf(input, output, config, policy=policy)
