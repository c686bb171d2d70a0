"""CLI helpers for inspecting PDF files before compression."""

from __future__ import annotations

from argparse import ArgumentParser, Namespace, _SubParsersAction

from ...compress import InvalidPDFError, get_compression_info, sizeof_fmt
from ...compress.gate import DEFAULT_SIZE_THRESHOLD
from ...compress.utils import resolve_path


def configure_parser(subparsers: _SubParsersAction[ArgumentParser]) -> None:
    parser = subparsers.add_parser("info", help="Show compression related details for a PDF file")
    parser.add_argument("input", help="Input PDF file")
    parser.add_argument(
        "--threshold",
        type=int,
        default=DEFAULT_SIZE_THRESHOLD,
        help="Size threshold used to decide whether compression is needed",
    )
    parser.set_defaults(handler=run)


def run(args: Namespace) -> int:
    path = resolve_path(args.input)
    if not path.exists():
        print(f"File not found: {path}")
        return 1
    try:
        info = get_compression_info(path.read_bytes(), threshold=args.threshold)
    except InvalidPDFError as exc:
        print(f"Invalid PDF: {exc}")
        return 1

    print(f"File size: {sizeof_fmt(info.file_size_bytes)}")
    print(f"Pages: {info.page_count}")
    print(f"Images: {info.image_count}")
    print(f"Needs compression: {'yes' if info.needs_compression else 'no'}")
    print(f"Estimated savings: {sizeof_fmt(info.potential_savings_bytes)}")
    return 0
