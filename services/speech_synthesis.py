"""
Mock speech synthesis.

There is no real speech provider behind the studio yet. `MockSpeechSynthesizer`
stands in for one: it renders a 440 Hz tone whose length follows the text's
word count and the requested rate, which is enough for the UI to play,
scrub and download something realistic.
"""

import io
import os
import wave
from typing import Optional

import numpy as np

from schemas.audio import VoiceSettings
from services.interfaces import SpeechSynthesizer, SynthesizedAudio
from services.text_processing import count_words, estimate_synthesis_duration
from utils.config import settings as app_settings
from utils.errors import SynthesisError
from utils.logging import get_logger
from utils.timing import time_it

logger = get_logger(__name__)

TONE_FREQUENCY = 440
TONE_AMPLITUDE = 0.3
MOCK_ENCODED_SIZE = 1024

CONTENT_TYPES = {
    "wav": "audio/wav",
    "ogg": "audio/ogg",
    "mp3": "audio/mpeg",
}


def render_sine_wav(duration_seconds: int, sample_rate: int, amplitude: float = TONE_AMPLITUDE) -> bytes:
    """
    Render a mono 16-bit PCM WAV file containing a sine tone.

    Args:
        duration_seconds: Whole seconds of audio, 0 gives a header-only file
        sample_rate: Samples per second
        amplitude: Peak amplitude in [0, 1]

    Returns:
        The complete WAV file as bytes
    """
    samples = int(duration_seconds * sample_rate)
    t = np.arange(samples, dtype=np.float64) / sample_rate
    tone = np.sin(2 * np.pi * TONE_FREQUENCY * t) * amplitude

    # Convert to 16-bit PCM
    pcm = (tone * 32767).astype("<i2")

    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as wav_file:
        wav_file.setnchannels(1)  # Mono
        wav_file.setsampwidth(2)  # 16-bit
        wav_file.setframerate(sample_rate)
        wav_file.writeframes(pcm.tobytes())

    return buffer.getvalue()


def content_type_for(audio_format: str) -> str:
    return CONTENT_TYPES.get(audio_format, "audio/mpeg")


class MockSpeechSynthesizer:
    """Speech provider stand-in that renders a tone instead of speech."""

    def __init__(self, sample_rate: Optional[int] = None):
        self.sample_rate = sample_rate or app_settings.AUDIO_SAMPLE_RATE

    @time_it("speech_synthesis", summarize=lambda audio: {
        "audio_seconds": audio.duration_seconds,
        "audio_bytes": len(audio.data),
        "content_type": audio.content_type,
    })
    def synthesize(self, text: str, settings: VoiceSettings) -> SynthesizedAudio:
        """
        Render normalized text to audio.

        The audio is always WAV-encoded; the content type still follows the
        requested format (wav, or mpeg for anything else).
        """
        word_count = count_words(text)
        duration = estimate_synthesis_duration(word_count, settings.rate)

        try:
            data = render_sine_wav(duration, self.sample_rate, TONE_AMPLITUDE * settings.volume)
        except (ValueError, MemoryError) as e:
            raise SynthesisError(f"Mock synthesis failed: {e}") from e

        logger.info(
            f"Synthesized {word_count} words into {duration}s of audio",
            extra={"context": {"voice": settings.voice, "rate": settings.rate, "format": settings.format}},
        )

        return SynthesizedAudio(
            data=data,
            content_type="audio/wav" if settings.format == "wav" else "audio/mpeg",
            extension=settings.format,
            duration_seconds=duration,
        )


def render_download_artifact(audio_format: str, duration_seconds: Optional[int] = None,
                             sample_rate: Optional[int] = None) -> SynthesizedAudio:
    """
    Build the file served by the download route.

    WAV requests get a real tone; other formats get random bytes standing in
    for an encoded stream.
    """
    duration = app_settings.DOWNLOAD_DURATION_SECONDS if duration_seconds is None else duration_seconds
    rate = sample_rate or app_settings.AUDIO_SAMPLE_RATE

    if audio_format == "wav":
        data = render_sine_wav(duration, rate)
    else:
        data = os.urandom(MOCK_ENCODED_SIZE)

    return SynthesizedAudio(
        data=data,
        content_type=content_type_for(audio_format),
        extension=audio_format,
        duration_seconds=duration,
    )


_default_synthesizer: Optional[SpeechSynthesizer] = None


def get_synthesizer() -> SpeechSynthesizer:
    """FastAPI dependency returning the process-wide speech provider."""
    global _default_synthesizer
    if _default_synthesizer is None:
        _default_synthesizer = MockSpeechSynthesizer()
    return _default_synthesizer
