"""API routes for PDF compression."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import Response

from slimpdf.compress import get_compression_stats

from .dependencies import get_compression_service
from .models import BatchSummary, CompressionReport
from .service import PDF_MIME_TYPE, CompressionService, parse_options, safe_filename

router = APIRouter(prefix="/compress", tags=["compress"])


@router.post(
    "",
    response_class=Response,
    summary="Compress a PDF",
    response_description="The compressed PDF, or the original when compression was skipped.",
)
async def compress_document(
    file: UploadFile = File(..., description="PDF to compress."),
    options: str | None = Form(None, description="Optional JSON object with compression options."),
    force: bool = Form(False, description="Compress even when the file is below the size threshold."),
    service: CompressionService = Depends(get_compression_service),
) -> Response:
    """Compress an uploaded PDF and return the resulting document.

    Statistics about the run are reported in ``X-SlimPDF-*`` headers.
    """

    filename = safe_filename(file.filename)
    result = await service.compress_upload(file, options=parse_options(options), force=force)
    stats = get_compression_stats(result)

    headers = {
        "Content-Disposition": f'attachment; filename="{filename}"',
        "X-SlimPDF-Original-Size": str(result.original_size),
        "X-SlimPDF-Compressed-Size": str(result.compressed_size),
        "X-SlimPDF-Compression-Ratio": stats["compressionRatio"],
        "X-SlimPDF-Method": result.method.value,
        "X-SlimPDF-Pages": str(result.pages_processed),
        "X-SlimPDF-Compressed": str(result.compressed).lower(),
        "X-SlimPDF-Skipped": str(result.skipped).lower(),
    }
    return Response(content=result.buffer, media_type=PDF_MIME_TYPE, headers=headers)


@router.post("/report", response_model=CompressionReport, response_model_by_alias=True)
async def compress_report(
    file: UploadFile = File(..., description="PDF to compress."),
    options: str | None = Form(None, description="Optional JSON object with compression options."),
    force: bool = Form(False, description="Compress even when the file is below the size threshold."),
    service: CompressionService = Depends(get_compression_service),
) -> CompressionReport:
    """Compress an uploaded PDF and return only the statistics."""

    result = await service.compress_upload(file, options=parse_options(options), force=force)
    return CompressionReport.from_result(safe_filename(file.filename), result)


@router.post("/batch", response_model=BatchSummary, response_model_by_alias=True)
async def compress_batch(
    files: List[UploadFile] = File(..., description="PDF files to compress."),
    options: str | None = Form(None, description="Optional JSON object with compression options."),
    force: bool = Form(False, description="Compress even when files are below the size threshold."),
    service: CompressionService = Depends(get_compression_service),
) -> BatchSummary:
    """Compress several PDFs independently and summarise the outcome."""

    return await service.compress_batch(files, options=parse_options(options), force=force)


__all__ = ["router"]
