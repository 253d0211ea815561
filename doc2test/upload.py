"""
Upload boundary for the pipeline.

Decodes a ``{fileContent, fileName, fileType}`` payload, runs the pipeline
and maps the outcome to an HTTP-style status code and JSON body. Framework
agnostic: a web route only has to pass the parsed JSON body in and send the
response back out.
"""

from __future__ import annotations
import base64
import binascii
from typing import Any, Dict, Optional
import logging

from pydantic import Field, ValidationError

from .models import CamelModel
from .workflow import DocumentPipeline
from .exceptions import (
    DocumentProcessingError,
    InvalidUploadError,
    UnsupportedFileTypeError,
    UploadError,
)

logger = logging.getLogger(__name__)


SUPPORTED_FILE_TYPE = "text/plain"


class UploadRequest(CamelModel):
    """Document upload payload."""
    file_content: Optional[str] = Field(None, description="Raw text or a base64 data URI")
    file_name: Optional[str] = Field(None, description="Original file name")
    file_type: Optional[str] = Field(None, description="MIME type of the file")


class UploadResponse(CamelModel):
    """Status code and JSON body to send back to the caller."""
    status_code: int
    body: Dict[str, Any]


def decode_file_content(file_content: str) -> str:
    """
    Return the document text carried by ``file_content``.

    Data URIs (``data:text/plain;base64,...``) are base64-decoded from the
    first comma on; anything else is taken as plain text.
    """
    if not file_content.startswith("data:"):
        return file_content

    _, _, payload = file_content.partition(",")
    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidUploadError(f"Invalid base64 file content: {e}") from e
    return raw.decode("utf-8", errors="replace")


def parse_upload(body: Dict[str, Any]) -> UploadRequest:
    """Validate required fields and the declared file type."""
    try:
        request = UploadRequest.model_validate(body or {})
    except ValidationError as e:
        raise InvalidUploadError(f"Malformed upload payload: {e.error_count()} invalid field(s)") from e

    if not request.file_content or not request.file_name:
        raise InvalidUploadError("Missing required fields: fileContent and fileName")

    if request.file_type != SUPPORTED_FILE_TYPE:
        raise UnsupportedFileTypeError(request.file_type)

    return request


def handle_upload(
    body: Dict[str, Any],
    pipeline: Optional[DocumentPipeline] = None
) -> UploadResponse:
    """
    Process an upload payload end to end.

    Returns:
        UploadResponse with 200 and the pipeline result, 400 for missing or
        undecodable content, 415 for unsupported file types, or 500 when
        the pipeline fails.
    """
    pipeline = pipeline or DocumentPipeline()

    try:
        request = parse_upload(body)
        text = decode_file_content(request.file_content)
    except UploadError as e:
        logger.warning(f"Rejected upload: {e.details}")
        return UploadResponse(status_code=e.status_code, body={"error": e.details})

    logger.info(f"Received upload: {request.file_name} ({request.file_type})")

    try:
        result = pipeline.process(text, request.file_name)
    except DocumentProcessingError as e:
        return UploadResponse(
            status_code=500,
            body={"error": f"Error processing document: {e}"},
        )

    return UploadResponse(status_code=200, body=result.to_dict())
