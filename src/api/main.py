"""
FastAPI Application

Main application entry point with:
- Request size limit
- Uniform error envelopes for service errors and bad bodies
- Catch-all fault boundary around every route
- Health endpoint and PDF routes
"""

import logging
import shutil
from contextlib import asynccontextmanager

from src.config import get_settings

# Configure root logger BEFORE any other imports
logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(levelname)s  %(name)s  %(message)s",
)

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.routes import router
from src.errors import ServiceError
from src.models.payloads import ErrorResponse, HealthResponse

logger = logging.getLogger(__name__)


def error_response(status_code: int, error: str, details=None) -> JSONResponse:
    """JSON error envelope; ``details`` is left out when empty."""
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    settings = get_settings()
    if shutil.which(settings.qpdf_binary) is None:
        logger.warning("qpdf executable %r not found; /unlock will fail", settings.qpdf_binary)
    yield


app = FastAPI(
    title="PDF Unlocker API",
    description="Removes PDF passwords with qpdf and extracts PDFs from ZIP archives",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Render a ServiceError with its own status code."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.details)
    return error_response(exc.status_code, exc.message, exc.details)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report unparsable or mistyped bodies as 400 rather than 422."""
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    )
    return error_response(400, "Invalid request body", problems or None)


@app.middleware("http")
async def body_size_limit(request: Request, call_next):
    """Enforce the configured body limit.

    The limit is checked against Content-Length, so chunked bodies, which
    carry no declared length, are refused with 411.
    """
    limit = get_settings().max_body_bytes
    declared = request.headers.get("content-length")
    if declared is None:
        if "chunked" in request.headers.get("transfer-encoding", "").lower():
            return error_response(411, "Content-Length required", f"Bodies are limited to {limit} bytes")
    elif declared.isdigit() and int(declared) > limit:
        return error_response(413, "Request body too large", f"Limit is {limit} bytes")
    return await call_next(request)


@app.middleware("http")
async def fault_boundary(request: Request, call_next):
    """Turn any unhandled exception into a 500 envelope.

    Registered last so it wraps every other middleware and route.
    """
    try:
        return await call_next(request)
    except Exception as exc:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(500, "Unexpected server error", str(exc) or type(exc).__name__)


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="ok")


app.include_router(router)
