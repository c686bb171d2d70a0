"""Upload handling around the slimpdf compression pipeline."""

from __future__ import annotations

import json
from json import JSONDecodeError
from pathlib import Path

from fastapi import HTTPException, UploadFile

from slimpdf.compress import (
    CompressionConfig,
    CompressionError,
    CompressionPipeline,
    CompressionResult,
    CompressionStream,
    ConfigurationError,
    LoggingProgress,
)
from slimpdf.compress.utils import get_logger

from ..settings import Settings
from .models import BatchSummary, CompressionReport

LOGGER = get_logger("slimpdf.backend")

PDF_MIME_TYPE = "application/pdf"
UPLOAD_CHUNK_SIZE = 1024 * 1024


def safe_filename(filename: str | None, default: str = "document.pdf") -> str:
    """Return a filesystem-safe filename derived from user input."""

    if not filename:
        return default

    candidate = Path(filename).name
    return candidate or default


def parse_options(raw_value: str | None) -> dict[str, object] | None:
    """Parse the optional JSON encoded ``options`` form field."""

    if raw_value is None or not raw_value.strip():
        return None

    try:
        payload = json.loads(raw_value)
    except JSONDecodeError as exc:
        raise HTTPException(status_code=400, detail="options must be valid JSON.") from exc

    if payload is None:
        return None
    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="options must be a JSON object.")
    return payload


def is_pdf_upload(upload: UploadFile) -> bool:
    content_type = (upload.content_type or "").split(";", 1)[0].strip().lower()
    return content_type == PDF_MIME_TYPE


class CompressionService:
    """Validates uploads and feeds them through a :class:`CompressionPipeline`."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._policy = settings.policy()
        self._base_config = settings.config()

    def build_pipeline(self, options: dict[str, object] | None = None) -> CompressionPipeline:
        try:
            config = CompressionConfig.merge(options, base=self._base_config, strict=True)
        except ConfigurationError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return CompressionPipeline(config, self._policy)

    async def compress_upload(
        self,
        upload: UploadFile,
        *,
        options: dict[str, object] | None = None,
        force: bool = False,
    ) -> CompressionResult:
        """Stream *upload* into the pipeline and return its result.

        Raises :class:`HTTPException` for transport misuse (wrong media type,
        empty or oversized payload, bad options) and for terminal
        compression failures.
        """

        if not is_pdf_upload(upload):
            raise HTTPException(
                status_code=415,
                detail=f"File type {upload.content_type} is not allowed; upload a PDF.",
            )

        filename = safe_filename(upload.filename)
        pipeline = self.build_pipeline(options)
        stream = CompressionStream(pipeline, progress=LoggingProgress(filename), gated=not force)

        while True:
            chunk = await upload.read(UPLOAD_CHUNK_SIZE)
            if not chunk:
                break
            stream.write(chunk)
            if stream.buffered_size > self.settings.max_upload_bytes:
                raise HTTPException(
                    status_code=413,
                    detail=f"File '{filename}' exceeds the upload limit.",
                )

        if stream.buffered_size == 0:
            raise HTTPException(status_code=400, detail=f"File '{filename}' is empty.")

        try:
            result = await stream.close()
        except CompressionError as exc:
            LOGGER.error("PDF compression failed for %s: %s", filename, exc)
            raise HTTPException(
                status_code=422,
                detail=f"PDF compression failed: {exc}",
            ) from exc

        LOGGER.info(
            "Compressed upload %s with method %s (%.2f%%)",
            filename,
            result.method.value,
            result.compression_ratio,
        )
        return result

    async def compress_batch(
        self,
        uploads: list[UploadFile],
        *,
        options: dict[str, object] | None = None,
        force: bool = False,
    ) -> BatchSummary:
        """Compress every PDF in *uploads*; non-PDF files are ignored."""

        pdf_uploads = [upload for upload in uploads if is_pdf_upload(upload)]
        if not pdf_uploads:
            raise HTTPException(status_code=400, detail="No valid PDF files found.")

        # Validate options once so a bad payload fails the whole request.
        self.build_pipeline(options)

        reports: list[CompressionReport] = []
        for upload in pdf_uploads:
            filename = safe_filename(upload.filename)
            try:
                result = await self.compress_upload(upload, options=options, force=force)
            except HTTPException as exc:
                LOGGER.warning("Batch entry %s failed: %s", filename, exc.detail)
                result = CompressionResult.failed(upload.size or 0, exc.detail)
            reports.append(CompressionReport.from_result(filename, result))

        return BatchSummary.from_reports(reports)


__all__ = [
    "CompressionService",
    "PDF_MIME_TYPE",
    "is_pdf_upload",
    "parse_options",
    "safe_filename",
]
