"""Thin document model over :mod:`pypdf` used by the compression pipeline.

The pipeline never touches raw PDF bytes; it loads a :class:`SourceDocument`,
enumerates :class:`PageDescriptor` handles, copies them into an
:class:`OutputDocument` and serializes that.
"""

from __future__ import annotations

import dataclasses
import io
from typing import Iterable, Iterator

from pypdf import PageObject, PdfReader, PdfWriter

from .exceptions import InvalidPDFError
from .utils import get_logger

_LOGGER = get_logger("slimpdf.compress")

FULL_METADATA_FIELDS: tuple[str, ...] = (
    "/Title",
    "/Author",
    "/Subject",
    "/Keywords",
    "/Producer",
    "/Creator",
)
BASIC_METADATA_FIELDS: tuple[str, ...] = FULL_METADATA_FIELDS[:4]


@dataclasses.dataclass(frozen=True)
class PageDescriptor:
    """Geometry and content handle of a single page in a loaded document."""

    index: int
    width: float
    height: float
    page: PageObject


class SourceDocument:
    """A parsed, read-only input document."""

    def __init__(self, reader: PdfReader, size: int) -> None:
        self._reader = reader
        self.size = size

    @classmethod
    def load(cls, data: bytes) -> "SourceDocument":
        """Parse *data* into a document model, raising :class:`InvalidPDFError` on failure."""

        if not data:
            raise InvalidPDFError("Document is empty")
        try:
            reader = PdfReader(io.BytesIO(data))
            # Force the page tree to be resolved so structural errors surface here.
            len(reader.pages)
        except Exception as exc:
            raise InvalidPDFError(f"Failed to parse PDF: {exc}") from exc
        return cls(reader, len(data))

    @property
    def reader(self) -> PdfReader:
        return self._reader

    @property
    def page_count(self) -> int:
        return len(self._reader.pages)

    @property
    def metadata(self) -> dict[str, str]:
        info = self._reader.metadata or {}
        return {str(key): str(value) for key, value in info.items() if value is not None}

    def pages(self) -> Iterator[PageDescriptor]:
        for index, page in enumerate(self._reader.pages):
            box = page.mediabox
            yield PageDescriptor(index=index, width=float(box.width), height=float(box.height), page=page)


class OutputDocument:
    """A document under construction that can be serialized to bytes."""

    def __init__(self, writer: PdfWriter) -> None:
        self._writer = writer

    @classmethod
    def create(cls) -> "OutputDocument":
        return cls(PdfWriter())

    @classmethod
    def clone(cls, source: SourceDocument) -> "OutputDocument":
        """Return a writable copy of *source* with its structure left intact."""

        return cls(PdfWriter(clone_from=source.reader))

    @property
    def writer(self) -> PdfWriter:
        return self._writer

    @property
    def page_count(self) -> int:
        return len(self._writer.pages)

    def add_page(self, descriptor: PageDescriptor) -> PageObject:
        """Copy the page behind *descriptor* into this document at the same geometry."""

        copied = self._writer.add_page(descriptor.page)
        box = copied.mediabox
        if (float(box.width), float(box.height)) != (descriptor.width, descriptor.height):
            raise InvalidPDFError(
                f"Page {descriptor.index + 1} geometry changed while copying: "
                f"{descriptor.width}x{descriptor.height} -> {float(box.width)}x{float(box.height)}"
            )
        return copied

    def set_metadata(self, values: dict[str, str]) -> None:
        if values:
            self._writer.add_metadata(values)

    def clear_metadata(self, fields: Iterable[str]) -> None:
        self._writer.add_metadata({field: "" for field in fields})

    def serialize(self, *, deduplicate: bool = False) -> bytes:
        """Write the document to a new ``bytes`` object.

        With *deduplicate* set, identical objects (such as fonts embedded once
        per page) are merged and unreferenced objects dropped first.
        """

        if deduplicate:
            self._writer.compress_identical_objects()
        buffer = io.BytesIO()
        self._writer.write(buffer)
        data = buffer.getvalue()
        _LOGGER.debug("Serialized %d page(s) into %d bytes", self.page_count, len(data))
        return data


__all__ = [
    "BASIC_METADATA_FIELDS",
    "FULL_METADATA_FIELDS",
    "OutputDocument",
    "PageDescriptor",
    "SourceDocument",
]
