"""Archive transfer errors

Failures raised by this package before anything reaches the network.
Transport and server failures are raised by the API client
(see src.app.services.api_client) and pass through the services untouched.
"""
from typing import Optional


class ArchiveTransferError(Exception):
    """Base exception for all client-side archive transfer errors"""
    code = "ARCHIVE_TRANSFER_ERROR"

    def __init__(self, message: str, reason: Optional[str] = None):
        self.message = message
        self.reason = reason
        super().__init__(message)


class InvalidInputError(ArchiveTransferError):
    """Raised when a required identifier or submission field is missing or malformed"""
    code = "INVALID_INPUT"


class ArchiveFileError(ArchiveTransferError):
    """Raised when the local archive cannot be opened or read"""
    code = "ARCHIVE_FILE_ERROR"


class EncodingError(ArchiveTransferError):
    """Raised when a multipart form field cannot be encoded"""
    code = "ENCODING_ERROR"
