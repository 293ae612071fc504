from dataclasses import asdict

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from services.text_processing import TextMetrics


class CamelModel(BaseModel):
    """Base model that serializes snake_case fields as camelCase."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class TextMetadata(CamelModel):
    original_length: int
    processed_length: int
    filtered_character_count: int
    word_count: int
    sentence_count: int
    avg_words_per_sentence: int
    estimated_duration_seconds: int
    parenthetical_segment_count: int
    complexity_class: str
    suggested_rate: float

    @classmethod
    def from_metrics(cls, metrics: TextMetrics) -> "TextMetadata":
        return cls(**asdict(metrics))


class TextRecommendations(CamelModel):
    tts_readiness: str
    complexity_class: str
    suggested_rate: float


class ProcessTextResponse(CamelModel):
    success: bool = True
    original_text: str
    processed_text: str
    metadata: TextMetadata
    recommendations: TextRecommendations


class UploadResponse(CamelModel):
    success: bool = True
    text: str
    original_length: int
    processed_length: int
    filename: str
    type: str
