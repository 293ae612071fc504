from typing import Literal

from pydantic import BaseModel, Field


class VoiceSettings(BaseModel):
    """Voice parameters sent along with text to generate audio."""
    voice: str = "default"
    # Same ranges as the studio's rate and pitch sliders
    rate: float = Field(1.0, ge=0.5, le=2.0)
    pitch: float = Field(1.0, ge=0.5, le=1.5)
    volume: float = Field(1.0, ge=0, le=1)
    format: Literal["mp3", "wav", "ogg"] = "mp3"
