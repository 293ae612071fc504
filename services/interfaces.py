"""
Service Interface Contracts

This module defines Protocol interfaces and shared value types for the
Voicecraft service layer. These contracts let routes depend on a speech
provider or text extractor without knowing which implementation is wired in.
"""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from schemas.audio import VoiceSettings


@dataclass(frozen=True)
class SynthesizedAudio:
    """Audio bytes returned by a speech provider."""
    data: bytes
    content_type: str
    extension: str
    duration_seconds: int


@dataclass(frozen=True)
class ExtractedDocument:
    """Plain text pulled out of an uploaded file."""
    text: str
    filename: str
    content_type: str


# Speech Synthesis Service Interface
@runtime_checkable
class SpeechSynthesizer(Protocol):
    """Protocol for text-to-speech providers."""

    def synthesize(self, text: str, settings: VoiceSettings) -> SynthesizedAudio:
        """Render normalized text to audio using the given voice settings."""
        ...


# Text Extraction Service Interface
@runtime_checkable
class TextExtractor(Protocol):
    """Protocol for turning uploaded files into plain text."""

    def extract(self, filename: str, content_type: str, data: bytes) -> ExtractedDocument:
        """Extract plain text from the raw bytes of an uploaded file."""
        ...
