"""
API Routes

Implements the PDF endpoints:
- PDF unlock via qpdf
- PDF extraction from ZIP archives

Each endpoint answers either with raw PDF bytes or with a base64 JSON
envelope, chosen by the request's ``returnBase64`` flag. Failures are raised
as ``ServiceError`` subclasses and rendered by the app's exception handler.
"""

import asyncio
import logging
import re
from urllib.parse import quote

from fastapi import APIRouter, Depends, Response

from src.archive.selector import select_first_pdf_entry, select_pdf_entries
from src.codec.payload import decode_payload, encode_payload
from src.errors import RequestValidationFailed
from src.models.payloads import (
    ErrorResponse,
    ExtractBase64Response,
    ExtractedFile,
    ExtractRequest,
    UnlockBase64Response,
    UnlockRequest,
)
from src.unlock.decryptor import Decryptor, get_decryptor

logger = logging.getLogger(__name__)

router = APIRouter()

PDF_MEDIA_TYPE = "application/pdf"
UNLOCKED_FILENAME = "unlocked.pdf"

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing or malformed input"},
    500: {"model": ErrorResponse, "description": "Processing failure"},
}


# RFC 7230 token characters
_TOKEN_RE = re.compile(r"[!#$%&'*+.^_`|~0-9A-Za-z-]+")
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")


def _quoted(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def content_disposition(filename: str) -> str:
    """``attachment`` disposition for ``filename``.

    Control characters are replaced so a member name can never break the
    header line. Names that are not plain tokens are quoted; non-ASCII
    names get an RFC 6266 ``filename*`` parameter next to an ASCII
    fallback, since header values must be latin-1 encodable.
    """
    name = _CONTROL_RE.sub("_", filename)
    if name.isascii():
        if _TOKEN_RE.fullmatch(name):
            return f"attachment; filename={name}"
        return f"attachment; filename={_quoted(name)}"
    fallback = name.encode("ascii", "replace").decode("ascii").replace("?", "_")
    return f"attachment; filename={_quoted(fallback)}; filename*=UTF-8''{quote(name, safe='')}"


def pdf_response(content: bytes, filename: str) -> Response:
    """Raw PDF download response."""
    return Response(
        content=content,
        media_type=PDF_MEDIA_TYPE,
        headers={"Content-Disposition": content_disposition(filename)},
    )


# ===== Unlock =====

@router.post(
    "/unlock",
    response_model=UnlockBase64Response,
    responses={
        **_ERROR_RESPONSES,
        200: {"content": {PDF_MEDIA_TYPE: {}}, "description": "Decrypted PDF"},
    },
)
async def unlock_pdf(
    request: UnlockRequest,
    decryptor: Decryptor = Depends(get_decryptor),
):
    """
    Remove password protection from a PDF.

    Returns the decrypted file as an ``application/pdf`` attachment, or as
    ``{"success": true, "fileBase64": ...}`` when ``returnBase64`` is set.
    """
    if not request.password or not request.file_base64:
        raise RequestValidationFailed("Missing 'password' or 'fileBase64' in body")

    content = decode_payload(request.file_base64)
    logger.info("Unlock request: %d bytes", len(content))

    decrypted = await decryptor.decrypt(content, request.password)

    if not request.return_base64:
        return pdf_response(decrypted, UNLOCKED_FILENAME)
    return UnlockBase64Response(file_base64=encode_payload(decrypted))


# ===== Extract =====

@router.post(
    "/extract-pdfs",
    response_model=ExtractBase64Response,
    responses={
        **_ERROR_RESPONSES,
        200: {"content": {PDF_MEDIA_TYPE: {}}, "description": "First PDF in the archive"},
        404: {"model": ErrorResponse, "description": "No PDF files in the archive"},
    },
)
async def extract_pdfs(request: ExtractRequest):
    """
    Pull PDF files out of a ZIP archive.

    In binary mode only the first PDF (archive order) is returned; in
    base64 mode every PDF is listed.
    """
    if not request.zip_base64:
        raise RequestValidationFailed("Missing 'zipBase64' in body")

    archive = decode_payload(request.zip_base64)
    logger.info("Extract request: %d byte archive", len(archive))

    if not request.return_base64:
        entry = await asyncio.to_thread(select_first_pdf_entry, archive)
        return pdf_response(entry.content, entry.name)

    entries = await asyncio.to_thread(select_pdf_entries, archive)
    return ExtractBase64Response(
        files=[
            ExtractedFile(filename=entry.name, file_base64=encode_payload(entry.content))
            for entry in entries
        ]
    )
