"""Request and response bodies for the HTTP API.

Field names are snake_case in Python and camelCase on the wire, matching
what existing clients send (``fileBase64``, ``returnBase64``...).
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _WireModel(BaseModel):
    """Base for bodies that use camelCase aliases on the wire."""

    model_config = ConfigDict(populate_by_name=True)


class HealthResponse(BaseModel):
    """Liveness probe body."""
    status: str = "ok"


class UnlockRequest(_WireModel):
    """Body of ``POST /unlock``.

    ``password`` and ``file_base64`` are optional at the schema level so
    that an absent field is reported as a 400 by the handler instead of a
    schema error.
    """

    password: Optional[str] = Field(default=None, description="PDF user or owner password")
    file_base64: Optional[str] = Field(
        default=None,
        alias="fileBase64",
        description="Encrypted PDF, standard base64",
    )
    return_base64: bool = Field(
        default=False,
        alias="returnBase64",
        description="Respond with JSON-wrapped base64 instead of raw bytes",
    )

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "password": "s3cret",
                "fileBase64": "JVBERi0xLjcKJcfs...",
                "returnBase64": True,
            }
        },
    )


class ExtractRequest(_WireModel):
    """Body of ``POST /extract-pdfs``."""

    zip_base64: Optional[str] = Field(
        default=None,
        alias="zipBase64",
        description="ZIP archive, standard base64",
    )
    return_base64: bool = Field(default=False, alias="returnBase64")


class UnlockBase64Response(_WireModel):
    """Decrypted PDF wrapped in a success envelope."""
    success: bool = True
    file_base64: str = Field(..., alias="fileBase64")


class ExtractedFile(_WireModel):
    """One PDF pulled out of an archive."""
    filename: str
    file_base64: str = Field(..., alias="fileBase64")


class ExtractBase64Response(_WireModel):
    """All PDFs of an archive, in archive order."""
    success: bool = True
    files: list[ExtractedFile] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Error envelope shared by every failure response."""
    error: str
    details: Optional[str] = None
