from fastapi import APIRouter, Body, HTTPException
from typing import Dict, Any

from schemas.text import ProcessTextResponse, TextMetadata, TextRecommendations
from services import text_processing
from utils.errors import ValidationError
from utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["text"],
)

@router.post("/process-text", response_model=ProcessTextResponse)
async def process_text(
    payload: Dict[str, Any] = Body(...)
):
    """
    Normalize text for speech synthesis and report what was measured.

    Returns the original and normalized text, the full metadata and a few
    recommendations (readiness, complexity, suggested speech rate).

    Raises:
        400: Text missing, not a string, blank or over the length limit
        500: Processing failed
    """
    raw = text_processing.validate_text_payload(payload.get("text"))

    try:
        normalized, metrics = text_processing.normalize_and_measure(raw)
    except ValidationError:
        raise
    except Exception as e:
        logger.error(f"Text processing error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to process text")

    logger.info(
        f"Processed text: {metrics.word_count} words, complexity {metrics.complexity_class}",
        extra={"context": {"original_length": metrics.original_length,
                           "filtered_characters": metrics.filtered_character_count}},
    )

    return ProcessTextResponse(
        original_text=raw,
        processed_text=normalized,
        metadata=TextMetadata.from_metrics(metrics),
        recommendations=TextRecommendations(
            tts_readiness=metrics.tts_readiness,
            complexity_class=metrics.complexity_class,
            suggested_rate=metrics.suggested_rate,
        ),
    )
