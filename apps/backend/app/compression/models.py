"""Pydantic models returned by the compression endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from slimpdf.compress import CompressionResult, sizeof_fmt


class CompressionReport(BaseModel):
    """JSON summary of a single compression run."""

    filename: str
    success: bool
    compressed: bool
    skipped: bool = False
    original_size: int = Field(..., alias="originalSize")
    compressed_size: int = Field(..., alias="compressedSize")
    compression_ratio: float = Field(..., alias="compressionRatio")
    space_saved: str = Field(..., alias="spaceSaved")
    pages_processed: int = Field(0, alias="pagesProcessed")
    method: str
    processing_time_ms: int = Field(0, alias="processingTimeMs")
    reason: str | None = None
    error: str | None = None

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_result(cls, filename: str, result: CompressionResult) -> "CompressionReport":
        return cls(
            filename=filename,
            success=result.success,
            compressed=result.compressed,
            skipped=result.skipped,
            original_size=result.original_size,
            compressed_size=result.compressed_size,
            compression_ratio=round(result.compression_ratio, 2),
            space_saved=sizeof_fmt(result.bytes_saved),
            pages_processed=result.pages_processed,
            method=result.method.value,
            processing_time_ms=int(result.processing_time * 1000),
            reason=result.reason,
            error=result.error,
        )


class BatchSummary(BaseModel):
    """Aggregate outcome of a batch compression request."""

    total_files: int = Field(..., alias="totalFiles")
    successful: int
    failed: int
    total_original_size: int = Field(..., alias="totalOriginalSize")
    total_compressed_size: int = Field(..., alias="totalCompressedSize")
    total_space_saved: int = Field(..., alias="totalSpaceSaved")
    overall_compression_ratio: float = Field(..., alias="overallCompressionRatio")
    results: list[CompressionReport]

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_reports(cls, reports: list[CompressionReport]) -> "BatchSummary":
        succeeded = [report for report in reports if report.success]
        original = sum(report.original_size for report in succeeded)
        compressed = sum(report.compressed_size for report in succeeded)
        saved = max(original - compressed, 0)
        return cls(
            total_files=len(reports),
            successful=len(succeeded),
            failed=len(reports) - len(succeeded),
            total_original_size=original,
            total_compressed_size=compressed,
            total_space_saved=saved,
            overall_compression_ratio=round(saved / original * 100, 2) if original else 0.0,
            results=reports,
        )


__all__ = ["BatchSummary", "CompressionReport"]
