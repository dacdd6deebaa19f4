"""
Data models for the PDF unlocker service.

Request/response bodies for the HTTP API and the archive entry value type.
"""

from src.models.archive import ArchiveEntry
from src.models.payloads import (
    ErrorResponse,
    ExtractBase64Response,
    ExtractedFile,
    ExtractRequest,
    HealthResponse,
    UnlockBase64Response,
    UnlockRequest,
)

__all__ = [
    "ArchiveEntry",
    "ErrorResponse",
    "ExtractBase64Response",
    "ExtractedFile",
    "ExtractRequest",
    "HealthResponse",
    "UnlockBase64Response",
    "UnlockRequest",
]
