"""PDF compression endpoints for the slimpdf backend."""

from .dependencies import get_compression_service
from .routes import router as compression_router
from .service import CompressionService

__all__ = [
    "CompressionService",
    "compression_router",
    "get_compression_service",
]
