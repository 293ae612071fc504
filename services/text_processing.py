"""
Text normalization and speech metadata estimation.

Every route that accepts text (paste, upload, audio generation) runs it
through `normalize_text` so that the text shown to the user, the text that
gets measured and the text sent to the speech provider are always the same.
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from utils.config import settings
from utils.errors import ValidationError
from utils.logging import get_logger

logger = get_logger(__name__)

# Baseline narration speed used for every duration estimate
WORDS_PER_MINUTE = 150

# Word characters are ASCII only, so accented letters are replaced like symbols
DISALLOWED_CHARS = re.compile(r"""[^A-Za-z0-9_\s().,!?;:'"]""")
WHITESPACE_RUN = re.compile(r"\s+")
SENTENCE_TERMINATORS = re.compile(r"[.!?]+")
PARENTHETICAL = re.compile(r"\([^)]*\)")

COMPLEXITY_LOW = "low"
COMPLEXITY_MEDIUM = "medium"
COMPLEXITY_HIGH = "high"


@dataclass(frozen=True)
class TextMetrics:
    """Derived measurements for one piece of text. Never stored."""
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

    @property
    def tts_readiness(self) -> str:
        return "ready" if self.processed_length > 0 else "empty"


def validate_text_payload(value: Any, max_length: Optional[int] = None) -> str:
    """
    Check a caller-supplied text value before it is processed.

    Args:
        value: The raw value taken from the request payload
        max_length: Character limit, defaults to settings.MAX_TEXT_LENGTH

    Returns:
        The value unchanged

    Raises:
        ValidationError: If the value is missing, not a string, blank or too long
    """
    limit = settings.MAX_TEXT_LENGTH if max_length is None else max_length

    if value is None or not isinstance(value, str):
        raise ValidationError("Text is required and must be a string")

    if not value.strip():
        raise ValidationError("Text cannot be empty")

    if len(value) > limit:
        raise ValidationError(f"Text too long. Maximum length is {limit:,} characters")

    return value


def normalize_text(raw: str) -> str:
    """Replace unsupported characters with spaces, collapse whitespace and trim."""
    filtered = DISALLOWED_CHARS.sub(" ", raw)
    return WHITESPACE_RUN.sub(" ", filtered).strip()


def count_words(text: str) -> int:
    return len([token for token in text.split(" ") if token])


def count_sentences(text: str) -> int:
    # Segments are not stripped: a lone space between terminators still counts
    return len([segment for segment in SENTENCE_TERMINATORS.split(text) if segment])


def average_words_per_sentence(word_count: int, sentence_count: int) -> int:
    """Average sentence length rounded half-up, 0 when there are no sentences."""
    if sentence_count <= 0:
        return 0
    return int(math.floor(word_count / sentence_count + 0.5))


def count_parenthetical_segments(raw: str) -> int:
    return len(PARENTHETICAL.findall(raw))


def estimate_reading_duration(word_count: int) -> int:
    """Seconds needed to read `word_count` words at the baseline speed."""
    return math.ceil(word_count / WORDS_PER_MINUTE * 60)


def estimate_synthesis_duration(word_count: int, rate: float) -> int:
    """
    Length in seconds of the audio rendered for `word_count` words.

    Treats WORDS_PER_MINUTE * rate as words per second, unlike
    `estimate_reading_duration`.
    """
    if rate <= 0:
        raise ValidationError("Speech rate must be greater than zero")
    return math.ceil(word_count / (WORDS_PER_MINUTE * rate))


def classify_complexity(avg_words_per_sentence: int) -> str:
    if avg_words_per_sentence > 20:
        return COMPLEXITY_HIGH
    if avg_words_per_sentence > 10:
        return COMPLEXITY_MEDIUM
    return COMPLEXITY_LOW


def suggest_rate(avg_words_per_sentence: int) -> float:
    """Slow down for long sentences, speed up for short ones."""
    if avg_words_per_sentence > 20:
        return 0.8
    if avg_words_per_sentence < 8:
        return 1.2
    return 1.0


def normalize_and_measure(raw: str) -> Tuple[str, TextMetrics]:
    """
    Normalize text and derive its speech metadata.

    This function is total over any string; length and emptiness checks
    belong to the caller (see `validate_text_payload`).

    Args:
        raw: Text exactly as supplied by the user

    Returns:
        Tuple of (normalized text, TextMetrics)
    """
    normalized = normalize_text(raw)

    word_count = count_words(normalized)
    sentence_count = count_sentences(normalized)
    avg_words = average_words_per_sentence(word_count, sentence_count)

    metrics = TextMetrics(
        original_length=len(raw),
        processed_length=len(normalized),
        filtered_character_count=len(raw) - len(normalized),
        word_count=word_count,
        sentence_count=sentence_count,
        avg_words_per_sentence=avg_words,
        estimated_duration_seconds=estimate_reading_duration(word_count),
        parenthetical_segment_count=count_parenthetical_segments(raw),
        complexity_class=classify_complexity(avg_words),
        suggested_rate=suggest_rate(avg_words),
    )

    logger.debug(
        f"Normalized {metrics.original_length} chars to {metrics.processed_length} "
        f"({metrics.word_count} words, {metrics.sentence_count} sentences)"
    )

    return normalized, metrics
