"""Streaming front-end for the compression pipeline.

PDF parsing needs random access to the whole file, so every chunk is
buffered and the pipeline runs exactly once, after the last chunk arrives.
"""

from __future__ import annotations

from typing import AsyncIterable, AsyncIterator, Iterable

from .exceptions import StreamClosedError
from .pipeline import CompressionPipeline, ProgressArg
from .result import CompressionResult


class CompressionStream:
    """Accumulates document chunks and compresses them on :meth:`close`."""

    def __init__(
        self,
        pipeline: CompressionPipeline | None = None,
        *,
        progress: ProgressArg = None,
        gated: bool = False,
    ) -> None:
        self._pipeline = pipeline or CompressionPipeline()
        self._progress = progress
        self._gated = gated
        self._chunks: list[bytes] = []
        self._size = 0
        self._closed = False

    @property
    def buffered_size(self) -> int:
        return self._size

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, chunk: bytes | bytearray | memoryview) -> int:
        if self._closed:
            raise StreamClosedError("Cannot write to a closed compression stream")
        data = bytes(chunk)
        if data:
            self._chunks.append(data)
            self._size += len(data)
        return len(data)

    async def close(self) -> CompressionResult:
        """Finish the stream and run the pipeline over the buffered document."""

        if self._closed:
            raise StreamClosedError("Compression stream already closed")
        self._closed = True
        document = b"".join(self._chunks)
        self._chunks.clear()
        if self._gated:
            return await self._pipeline.compress_if_needed(document, self._progress)
        return await self._pipeline.compress(document, self._progress)


async def compress_chunks(
    chunks: Iterable[bytes] | AsyncIterable[bytes],
    pipeline: CompressionPipeline | None = None,
    *,
    progress: ProgressArg = None,
) -> AsyncIterator[bytes]:
    """Buffer *chunks* fully and yield the single compressed document."""

    stream = CompressionStream(pipeline, progress=progress)
    if hasattr(chunks, "__aiter__"):
        async for chunk in chunks:  # type: ignore[union-attr]
            stream.write(chunk)
    else:
        for chunk in chunks:  # type: ignore[union-attr]
            stream.write(chunk)
    result = await stream.close()
    yield result.buffer


__all__ = ["CompressionStream", "compress_chunks"]
