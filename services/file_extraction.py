"""
Plain-text extraction for uploaded files.

Only text files are read for real; PDF and DOCX uploads are accepted but
answered with a placeholder until a parser is wired in.
"""

from typing import Optional

from services.interfaces import ExtractedDocument, TextExtractor
from utils.config import settings, PLAIN_TEXT, PDF, DOCX
from utils.errors import UnsupportedFileTypeError, FileTooLargeError
from utils.logging import get_logger

logger = get_logger(__name__)


class UploadTextExtractor:
    """Validates uploads against the configured whitelist and size limit."""

    def __init__(self, max_bytes: Optional[int] = None, allowed_types=None):
        self.max_bytes = settings.MAX_UPLOAD_BYTES if max_bytes is None else max_bytes
        self.allowed_types = tuple(allowed_types or settings.ALLOWED_UPLOAD_TYPES)

    def extract(self, filename: str, content_type: str, data: bytes) -> ExtractedDocument:
        """
        Extract plain text from an uploaded file.

        Args:
            filename: Name of the file as sent by the client
            content_type: MIME type declared by the client
            data: Raw file contents

        Returns:
            ExtractedDocument with the (not yet normalized) text

        Raises:
            UnsupportedFileTypeError: If the content type is not whitelisted
            FileTooLargeError: If the file exceeds the size limit
        """
        if content_type not in self.allowed_types:
            raise UnsupportedFileTypeError("Unsupported file type")

        if len(data) > self.max_bytes:
            max_mb = self.max_bytes // (1024 * 1024)
            raise FileTooLargeError(f"File too large. Maximum size is {max_mb}MB")

        if content_type == PLAIN_TEXT:
            text = data.decode("utf-8", errors="replace")
        elif content_type == PDF:
            # TODO: parse PDFs with PyMuPDF once uploads are stored server-side
            text = f"PDF processing not yet implemented for server-side. File name: {filename}"
        elif content_type == DOCX:
            text = f"DOCX processing not yet implemented for server-side. File name: {filename}"
        else:
            # Whitelisted but no extractor registered
            raise UnsupportedFileTypeError("Unsupported file type")

        logger.info(f"Extracted {len(text)} characters from {filename} ({content_type})",
                    extra={"context": {"filename": filename, "size": len(data)}})

        return ExtractedDocument(text=text, filename=filename, content_type=content_type)


def get_extractor() -> TextExtractor:
    """FastAPI dependency returning an extractor with the limits from settings."""
    return UploadTextExtractor()


def extract_text(filename: str, content_type: str, data: bytes) -> ExtractedDocument:
    """Extract text using the default limits from settings."""
    extractor: TextExtractor = get_extractor()
    return extractor.extract(filename, content_type, data)
