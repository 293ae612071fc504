"""Upload route: POST /api/upload

Accepts a multipart file (.txt, .pdf or .docx), validates type and size,
extracts its text and returns the normalized text with basic length info.
Nothing is persisted.
"""

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from typing import Optional

from schemas.text import UploadResponse
from services import text_processing
from services.file_extraction import get_extractor
from services.interfaces import TextExtractor
from utils.config import settings
from utils.errors import ValidationError, UnsupportedFileTypeError, FileTooLargeError
from utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["upload"],
)

@router.post("/upload", response_model=UploadResponse)
async def upload_file(
    file: Optional[UploadFile] = File(None),
    extractor: TextExtractor = Depends(get_extractor)
):
    """Extract and normalize the text of an uploaded file."""
    if file is None or not file.filename:
        raise ValidationError("No file provided")

    content_type = file.content_type or "application/octet-stream"

    # Reject by declared size before pulling the body into memory
    if content_type not in settings.ALLOWED_UPLOAD_TYPES:
        await file.close()
        raise UnsupportedFileTypeError("Unsupported file type")
    if file.size is not None and file.size > settings.MAX_UPLOAD_BYTES:
        await file.close()
        max_mb = settings.MAX_UPLOAD_BYTES // (1024 * 1024)
        raise FileTooLargeError(f"File too large. Maximum size is {max_mb}MB")

    try:
        data = await file.read()
        document = extractor.extract(file.filename, content_type, data)
        processed = text_processing.normalize_text(document.text)
    except ValidationError:
        raise
    except Exception as e:
        logger.error(f"File upload error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to process file")
    finally:
        await file.close()

    return UploadResponse(
        text=processed,
        original_length=len(document.text),
        processed_length=len(processed),
        filename=document.filename,
        type=document.content_type,
    )
