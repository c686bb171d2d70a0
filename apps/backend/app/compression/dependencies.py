"""FastAPI dependencies for the compression endpoints."""

from __future__ import annotations

from fastapi import Depends

from ..settings import Settings, get_settings
from .service import CompressionService


def get_compression_service(settings: Settings = Depends(get_settings)) -> CompressionService:
    return CompressionService(settings)


__all__ = ["get_compression_service"]
