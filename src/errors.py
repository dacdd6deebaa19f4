"""
Service error taxonomy.

Every failure a request can end in is one of these exceptions. Each carries
the HTTP status it is reported with, so handlers only raise and the API layer
renders a uniform ``{"error", "details"}`` envelope.
"""

from typing import Optional


class ServiceError(Exception):
    """Base class for failures reported to the client."""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[str] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class RequestValidationFailed(ServiceError):
    """Required request fields are missing, empty or of the wrong type."""
    status_code = 400


class MalformedEncodingError(ServiceError):
    """Text payload is not valid base64."""
    status_code = 400


class DecryptionFailedError(ServiceError):
    """qpdf rejected the password or the input, or did not finish in time."""
    status_code = 500


class OutputMissingError(ServiceError):
    """qpdf exited cleanly but left no output file behind."""
    status_code = 500


class DecryptorUnavailableError(ServiceError):
    """The decryption executable could not be started."""
    status_code = 500


class MalformedArchiveError(ServiceError):
    """Archive bytes could not be parsed or a member could not be read."""
    status_code = 500


class NoMatchingEntriesError(ServiceError):
    """Archive parsed fine but holds no PDF entries."""
    status_code = 404
