"""Size-gated transcoding pipeline for :mod:`slimpdf.compress`.

A document is rebuilt page by page into a fresh PDF (the *primary* path).
When that fails for any reason the original bytes are handed to a lighter
*fallback* that only clears basic metadata. When both fail a
:class:`CompressionError` is raised; a partial buffer is never returned.
"""

from __future__ import annotations

import asyncio
import dataclasses
import os
import time
from typing import Awaitable, Callable, Mapping

from .config import DEFAULT_CONFIG, DEFAULT_POLICY, CompressionConfig, CompressionPolicy
from .document import BASIC_METADATA_FIELDS, FULL_METADATA_FIELDS, OutputDocument, PageDescriptor, SourceDocument
from .exceptions import CompressionError
from .info import sizeof_fmt
from .optimizers import ImagePageOptimizer, PageOptimizer
from .progress import CountingProgress, ProgressSink, as_progress_sink
from .result import CompressionMethod, CompressionResult
from .utils import as_bytes, get_logger, resolve_path

_LOGGER = get_logger("slimpdf.compress")

ProgressArg = ProgressSink | Callable[[int, int], object] | None


@dataclasses.dataclass(frozen=True, slots=True)
class Attempt:
    """Outcome of one compression strategy: a result or the error that stopped it."""

    method: CompressionMethod
    result: CompressionResult | None = None
    error: Exception | None = None

    @property
    def succeeded(self) -> bool:
        return self.result is not None


class CompressionPipeline:
    """Rebuilds PDF documents with a primary strategy and a metadata-only fallback.

    The pipeline only holds immutable configuration, so a single instance can
    serve any number of concurrent :meth:`compress` calls.
    """

    def __init__(
        self,
        config: CompressionConfig | None = None,
        policy: CompressionPolicy | None = None,
        optimizer: PageOptimizer | None = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self.policy = policy or DEFAULT_POLICY
        self.optimizer: PageOptimizer = optimizer if optimizer is not None else ImagePageOptimizer()

    async def compress(self, document: bytes, progress: ProgressArg = None) -> CompressionResult:
        """Compress *document*, falling back to metadata removal if the rebuild fails."""

        data = as_bytes(document)
        sink = as_progress_sink(progress)
        counter = CountingProgress(sink)
        started = time.perf_counter()

        primary = await self._attempt(CompressionMethod.PRIMARY, lambda: self._run_primary(data, counter))
        outcome = primary
        if not primary.succeeded:
            _LOGGER.warning("Primary compression failed, using fallback: %s", primary.error)
            outcome = await self._attempt(CompressionMethod.FALLBACK, lambda: self._run_fallback(data))
            if outcome.result is not None:
                self._finish_progress(sink, counter.completed, outcome.result.pages_processed)

        if outcome.result is None:
            _LOGGER.error("All compression methods failed", exc_info=outcome.error)
            raise CompressionError(
                f"All compression methods failed: {outcome.error}",
                primary_error=primary.error,
            ) from outcome.error

        result = outcome.result
        result.processing_time = time.perf_counter() - started
        _LOGGER.info(
            "Compressed %s -> %s (%.2f%%) using %s path",
            sizeof_fmt(result.original_size),
            sizeof_fmt(result.compressed_size),
            result.compression_ratio,
            result.method.value,
        )
        return result

    async def fallback(self, document: bytes) -> CompressionResult:
        """Run only the fallback strategy on *document*."""

        data = as_bytes(document)
        try:
            return await self._run_fallback(data)
        except Exception as exc:
            raise CompressionError(f"All compression methods failed: {exc}") from exc

    async def compress_if_needed(self, document: bytes, progress: ProgressArg = None) -> CompressionResult:
        """Compress *document* only when it is larger than the policy threshold."""

        data = as_bytes(document)
        if not self.policy.needs_compression(data):
            _LOGGER.info(
                "PDF compression skipped - %s is not above the %s threshold",
                sizeof_fmt(len(data)),
                sizeof_fmt(self.policy.size_threshold),
            )
            return CompressionResult.skipped_result(
                data,
                reason=f"File size not above {sizeof_fmt(self.policy.size_threshold)} threshold",
            )
        return await self.compress(data, progress)

    @staticmethod
    async def _attempt(
        method: CompressionMethod,
        run: Callable[[], Awaitable[CompressionResult]],
    ) -> Attempt:
        try:
            result = await run()
        except Exception as exc:
            return Attempt(method, error=exc)
        return Attempt(method, result=result)

    async def _run_primary(self, data: bytes, sink: ProgressSink) -> CompressionResult:
        source = await asyncio.to_thread(SourceDocument.load, data)
        output = OutputDocument.create()
        total = source.page_count
        _LOGGER.debug("Processing %d page(s)", total)

        for descriptor in source.pages():
            await asyncio.to_thread(self._rebuild_page, output, descriptor)
            self._notify(sink, descriptor.index + 1, total)

        if self.config.remove_metadata:
            output.clear_metadata(FULL_METADATA_FIELDS)
        else:
            output.set_metadata(source.metadata)

        buffer = await asyncio.to_thread(output.serialize, deduplicate=self.config.optimize_fonts)
        return CompressionResult.from_sizes(
            buffer,
            original_size=len(data),
            min_gain=self.policy.primary_min_gain,
            method=CompressionMethod.PRIMARY,
            pages_processed=total,
        )

    def _rebuild_page(self, output: OutputDocument, descriptor: PageDescriptor) -> None:
        page = output.add_page(descriptor)
        self.optimizer.optimize_page(page, self.config)

    async def _run_fallback(self, data: bytes) -> CompressionResult:
        buffer, pages = await asyncio.to_thread(self._strip_basic_metadata, data)
        return CompressionResult.from_sizes(
            buffer,
            original_size=len(data),
            min_gain=self.policy.fallback_min_gain,
            method=CompressionMethod.FALLBACK,
            pages_processed=pages,
        )

    @staticmethod
    def _strip_basic_metadata(data: bytes) -> tuple[bytes, int]:
        output = OutputDocument.clone(SourceDocument.load(data))
        output.clear_metadata(BASIC_METADATA_FIELDS)
        return output.serialize(), output.page_count

    @classmethod
    def _finish_progress(cls, sink: ProgressSink, completed: int, total: int) -> None:
        # Pages the primary pass never reached are reported once the fallback succeeds.
        for page in range(completed + 1, total + 1):
            cls._notify(sink, page, total)

    @staticmethod
    def _notify(sink: ProgressSink, completed: int, total: int) -> None:
        try:
            sink.page_completed(completed, total)
        except Exception as exc:
            _LOGGER.warning("Progress sink failed on page %d/%d: %s", completed, total, exc)


def compress_bytes(
    document: bytes,
    config: CompressionConfig | Mapping[str, object] | None = None,
    *,
    policy: CompressionPolicy | None = None,
    progress: ProgressArg = None,
    optimizer: PageOptimizer | None = None,
    force: bool = True,
) -> CompressionResult:
    """Synchronously compress *document*.

    With ``force=False`` the size gate is consulted first and small documents
    are returned unchanged as a skipped result. Must not be called from a
    running event loop; use :class:`CompressionPipeline` directly there.
    """

    if not isinstance(config, CompressionConfig):
        config = CompressionConfig.merge(config)
    pipeline = CompressionPipeline(config, policy, optimizer)
    if force:
        return asyncio.run(pipeline.compress(document, progress))
    return asyncio.run(pipeline.compress_if_needed(document, progress))


def compress_pdf(
    input_path: str | os.PathLike[str],
    output_path: str | os.PathLike[str],
    config: CompressionConfig | Mapping[str, object] | None = None,
    *,
    policy: CompressionPolicy | None = None,
    progress: ProgressArg = None,
    force: bool = True,
) -> CompressionResult:
    """Compress the PDF at *input_path* writing the output to *output_path*."""

    source = resolve_path(input_path)
    destination = resolve_path(output_path)
    if not source.exists():
        raise FileNotFoundError(source)

    result = compress_bytes(source.read_bytes(), config, policy=policy, progress=progress, force=force)
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_bytes(result.buffer)
    return result


__all__ = [
    "Attempt",
    "CompressionPipeline",
    "compress_bytes",
    "compress_pdf",
]
