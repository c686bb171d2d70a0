"""CLI helpers for compressing PDF files."""

from __future__ import annotations

from argparse import ArgumentParser, Namespace, _SubParsersAction

from ...compress import (
    CompressionConfig,
    CompressionError,
    CompressionPolicy,
    ConfigurationError,
    LoggingProgress,
    compress_pdf,
    get_compression_stats,
)
from ...compress.gate import DEFAULT_SIZE_THRESHOLD
from ...compress.utils import get_logger

LOGGER = get_logger("slimpdf.cli")


def configure_parser(subparsers: _SubParsersAction[ArgumentParser]) -> None:
    parser = subparsers.add_parser("compress", help="Compress a PDF file")
    parser.add_argument("input", help="Input PDF file")
    parser.add_argument("output", help="Destination for compressed PDF")
    parser.add_argument("--quality", type=int, default=None, help="Image quality between 0 and 100")
    parser.add_argument("--max-width", type=int, default=None, help="Maximum image width in pixels")
    parser.add_argument("--max-height", type=int, default=None, help="Maximum image height in pixels")
    parser.add_argument(
        "--keep-metadata",
        action="store_true",
        help="Keep document title, author and similar fields",
    )
    parser.add_argument(
        "--threshold",
        type=int,
        default=DEFAULT_SIZE_THRESHOLD,
        help="Only compress files larger than this many bytes",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Compress regardless of the size threshold",
    )
    parser.set_defaults(handler=run)


def run(args: Namespace) -> int:
    try:
        config = CompressionConfig.merge(
            {
                "image_quality": args.quality,
                "image_max_width": args.max_width,
                "image_max_height": args.max_height,
                "remove_metadata": not args.keep_metadata,
            },
            strict=True,
        )
        policy = CompressionPolicy(size_threshold=args.threshold)
    except ConfigurationError as exc:
        print(f"Invalid options: {exc}")
        return 2

    try:
        result = compress_pdf(
            args.input,
            args.output,
            config,
            policy=policy,
            progress=LoggingProgress(args.input),
            force=args.force,
        )
    except (CompressionError, FileNotFoundError) as exc:
        LOGGER.error("Compression of %s failed: %s", args.input, exc)
        print(f"Compression failed: {exc}")
        return 1

    stats = get_compression_stats(result)
    if result.skipped:
        print(f"Skipped: {result.reason}")
    print(
        f"{stats['originalSize']} -> {stats['compressedSize']} "
        f"({stats['compressionRatio']}, method: {stats['method']}, pages: {result.pages_processed})"
    )
    return 0
