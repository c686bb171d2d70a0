"""Size gate deciding whether a document is worth transcoding."""

from __future__ import annotations

DEFAULT_SIZE_THRESHOLD = 20 * 1024 * 1024


def needs_compression(
    document: bytes | bytearray | memoryview,
    threshold: int = DEFAULT_SIZE_THRESHOLD,
) -> bool:
    """Return ``True`` when *document* is strictly larger than *threshold* bytes.

    A document of exactly *threshold* bytes is not compressed.
    """

    return len(document) > threshold


__all__ = ["DEFAULT_SIZE_THRESHOLD", "needs_compression"]
