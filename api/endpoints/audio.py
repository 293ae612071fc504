from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response
from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError as PydanticValidationError
from typing import Dict, Any, Optional
import re
import time

from schemas.audio import VoiceSettings
from services import text_processing
from services.interfaces import SpeechSynthesizer
from services.speech_synthesis import get_synthesizer, render_download_artifact
from utils.errors import ValidationError, SynthesisError
from utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["audio"],
)

# Values echoed into Content-Disposition must stay header-safe
SAFE_TOKEN = re.compile(r"^[A-Za-z0-9_-]{1,128}$")
SAFE_FORMAT = re.compile(r"^[A-Za-z0-9]{1,10}$")

def _parse_voice_settings(raw: Any) -> VoiceSettings:
    if raw is None:
        return VoiceSettings()
    if not isinstance(raw, dict):
        raise ValidationError("Settings must be an object")
    try:
        return VoiceSettings(**raw)
    except PydanticValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
        raise ValidationError(f"Invalid voice settings: {fields}")

def _attachment(audio: bytes, content_type: str, filename: str, extra_headers: Optional[Dict[str, str]] = None) -> Response:
    headers = {
        "Content-Disposition": f'attachment; filename="{filename}"',
        "Content-Length": str(len(audio)),
    }
    if extra_headers:
        headers.update(extra_headers)
    return Response(content=audio, media_type=content_type, headers=headers)

@router.post("/generate-audio")
async def generate_audio(
    payload: Dict[str, Any] = Body(...),
    synthesizer: SpeechSynthesizer = Depends(get_synthesizer)
):
    """
    Generate a downloadable audio file from text and voice settings.

    The text is normalized the same way as /api/process-text before it is
    handed to the speech provider.

    Raises:
        400: Text or settings invalid
        500: Synthesis failed
    """
    raw = text_processing.validate_text_payload(payload.get("text"))
    voice_settings = _parse_voice_settings(payload.get("settings"))

    normalized = text_processing.normalize_text(raw)

    try:
        audio = await run_in_threadpool(synthesizer.synthesize, normalized, voice_settings)
    except ValidationError:
        raise
    except SynthesisError as e:
        logger.error(f"TTS generation error: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to generate audio")
    except Exception as e:
        logger.error(f"TTS generation error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to generate audio")

    filename = f"tts-audio-{int(time.time() * 1000)}.{audio.extension}"
    return _attachment(audio.data, audio.content_type, filename)

@router.head("/download")
async def download_health_check():
    """Health check for the download route"""
    return Response(status_code=200)

@router.get("/download")
async def download_audio(
    id: Optional[str] = Query(None, description="ID of the generated audio"),
    format: Optional[str] = Query(None, description="Audio format: mp3, wav or ogg")
):
    """Serve a generated audio file as an attachment."""
    if not id:
        raise ValidationError("Audio ID is required")
    if not SAFE_TOKEN.match(id):
        raise ValidationError("Invalid audio ID")

    audio_format = format or "mp3"
    if not SAFE_FORMAT.match(audio_format):
        raise ValidationError("Invalid audio format")

    try:
        audio = render_download_artifact(audio_format)
    except Exception as e:
        logger.error(f"Download error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to download audio file")

    logger.info(f"Serving audio {id} as {audio_format} ({len(audio.data)} bytes)")

    return _attachment(
        audio.data,
        audio.content_type,
        f"tts-audio-{id}.{audio_format}",
        {"Cache-Control": "public, max-age=3600"},
    )
