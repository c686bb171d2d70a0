"""Size-gated PDF compression exposed through the slimpdf namespace."""

from __future__ import annotations

from .config import (
    DEFAULT_CONFIG,
    DEFAULT_POLICY,
    CompressionConfig,
    CompressionPolicy,
)
from .document import OutputDocument, PageDescriptor, SourceDocument
from .exceptions import (
    CompressionError,
    ConfigurationError,
    InvalidPDFError,
    SlimPDFError,
    StreamClosedError,
)
from .gate import DEFAULT_SIZE_THRESHOLD, needs_compression
from .info import CompressionInfo, get_compression_info, get_compression_stats, sizeof_fmt
from .optimizers import ImagePageOptimizer, NoOpOptimizer, PageOptimizer, reencode_image
from .pipeline import Attempt, CompressionPipeline, compress_bytes, compress_pdf
from .progress import CallbackProgress, CountingProgress, LoggingProgress, NullProgress, ProgressSink, QueueProgress
from .result import CompressionMethod, CompressionResult, compression_ratio
from .stream import CompressionStream, compress_chunks

__all__ = [
    "Attempt",
    "CallbackProgress",
    "CompressionConfig",
    "CompressionError",
    "CompressionInfo",
    "CompressionMethod",
    "CompressionPipeline",
    "CompressionPolicy",
    "CompressionResult",
    "CompressionStream",
    "ConfigurationError",
    "CountingProgress",
    "DEFAULT_CONFIG",
    "DEFAULT_POLICY",
    "DEFAULT_SIZE_THRESHOLD",
    "ImagePageOptimizer",
    "InvalidPDFError",
    "LoggingProgress",
    "NoOpOptimizer",
    "NullProgress",
    "OutputDocument",
    "PageDescriptor",
    "PageOptimizer",
    "ProgressSink",
    "QueueProgress",
    "SlimPDFError",
    "SourceDocument",
    "StreamClosedError",
    "compress_bytes",
    "compress_chunks",
    "compress_pdf",
    "compression_ratio",
    "get_compression_info",
    "get_compression_stats",
    "needs_compression",
    "reencode_image",
    "sizeof_fmt",
]
