"""Per-page optimization hooks invoked while a document is rebuilt."""

from __future__ import annotations

import io
from typing import Callable, Protocol

from PIL import Image
from pypdf import PageObject

from .config import CompressionConfig
from .utils import get_logger

_LOGGER = get_logger("slimpdf.compress")

ImageReencoder = Callable[[bytes, int, int, int], bytes]


class PageOptimizer(Protocol):
    """Hook applied to every page copied into the output document."""

    def optimize_page(self, page: PageObject, config: CompressionConfig) -> None:
        ...


class NoOpOptimizer:
    """Optimizer that leaves pages untouched."""

    def optimize_page(self, page: PageObject, config: CompressionConfig) -> None:
        return None


def reencode_image(data: bytes, quality: int, max_width: int, max_height: int) -> bytes:
    """Re-encode the image in *data*, downscaling it to fit ``max_width x max_height``.

    Greyscale and RGB images are written as JPEG at *quality*; anything else
    is written as PNG.
    """

    with Image.open(io.BytesIO(data)) as source:
        img = source.convert("RGB") if source.mode == "CMYK" else source.copy()

    if img.width > max_width or img.height > max_height:
        img.thumbnail((max_width, max_height), Image.Resampling.LANCZOS)

    output = io.BytesIO()
    if img.mode in {"RGB", "L"}:
        img.save(output, format="JPEG", quality=quality, optimize=True)
    else:
        img.save(output, format="PNG", optimize=True)
    return output.getvalue()


class ImagePageOptimizer:
    """Deflates content streams and recompresses page images with Pillow."""

    def __init__(self, reencoder: ImageReencoder = reencode_image) -> None:
        self._reencoder = reencoder

    def optimize_page(self, page: PageObject, config: CompressionConfig) -> None:
        if config.compress_streams:
            try:
                page.compress_content_streams()
            except Exception as exc:  # pragma: no cover - depends on input content
                _LOGGER.warning("Failed to compress content streams: %s", exc)

        try:
            names = list(page.images.keys())
        except Exception as exc:  # pragma: no cover - depends on input content
            _LOGGER.debug("Skipping image optimization, image listing failed: %s", exc)
            return

        for name in names:
            self._optimize_image(page, name, config)

    def _optimize_image(self, page: PageObject, name: str, config: CompressionConfig) -> bool:
        try:
            image = page.images[name]
            if image.indirect_reference is None:
                return False
            xobject = image.indirect_reference.get_object()
            original_length = len(getattr(xobject, "_data", b"") or b"")
            reencoded = self._reencoder(
                image.data,
                config.image_quality,
                config.image_max_width,
                config.image_max_height,
            )
            if original_length and len(reencoded) >= original_length:
                return False
            with Image.open(io.BytesIO(reencoded)) as replacement:
                image.replace(replacement, quality=config.image_quality)
        except Exception as exc:
            _LOGGER.debug("Skipping image %s due to error: %s", name, exc)
            return False
        _LOGGER.debug("Re-encoded image %s (%d -> %d bytes)", name, original_length, len(reencoded))
        return True


__all__ = [
    "ImagePageOptimizer",
    "ImageReencoder",
    "NoOpOptimizer",
    "PageOptimizer",
    "reencode_image",
]
