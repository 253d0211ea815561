"""Custom exceptions for the document-to-test-case pipeline."""

from typing import Optional


class Doc2TestError(Exception):
    """Base exception for doc2test errors."""
    pass


class DocumentProcessingError(Doc2TestError):
    """
    Raised when any stage of the pipeline fails.

    The whole run fails atomically: no partial requirements or test cases
    are returned. The original exception is available as ``__cause__``.
    """

    def __init__(self, message: str):
        super().__init__(f"Failed to process document: {message}")


class UploadError(Doc2TestError):
    """
    Raised when an uploaded document payload is rejected at the boundary.

    Attributes:
        status_code: HTTP-style status code describing the rejection
        details: Human-readable explanation of what went wrong
    """

    status_code = 400

    def __init__(self, details: str):
        self.details = details
        super().__init__(details)


class InvalidUploadError(UploadError):
    """Raised when required upload fields are missing or undecodable."""
    status_code = 400


class UnsupportedFileTypeError(UploadError):
    """Raised when the upload declares a MIME type other than text/plain."""
    status_code = 415

    def __init__(self, file_type: Optional[str]):
        self.file_type = file_type
        super().__init__(
            f"Unsupported file type: {file_type}. Only text/plain documents are supported"
        )


class ConfigurationError(Doc2TestError):
    """Raised when configuration is invalid."""
    pass
