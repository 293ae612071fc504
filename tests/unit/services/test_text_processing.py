import pytest

from services import text_processing
from services.text_processing import (
    normalize_text,
    normalize_and_measure,
    validate_text_payload,
)
from utils.errors import ValidationError


SAMPLES = [
    "Hello, World! (emphasis) #$%^",
    "a   b\t\nc",
    "  leading and trailing  ",
    "Price: $100 & 50% off!!! (limited) [today]",
    "line one\r\nline two three",
    "café naïve résumé",
    "emoji 😀 in the middle",
    "(((nested))) and )stray( parens",
    "",
    "#$%^&*",
]


@pytest.mark.parametrize("raw", SAMPLES)
def test_normalize_is_idempotent(raw):
    once = normalize_text(raw)
    assert normalize_text(once) == once


@pytest.mark.parametrize("raw", SAMPLES)
def test_normalize_never_grows_text(raw):
    assert len(normalize_text(raw)) <= len(raw)


@pytest.mark.parametrize("raw", SAMPLES)
def test_filtered_count_matches_lengths(raw):
    normalized, metrics = normalize_and_measure(raw)
    assert metrics.original_length == len(raw)
    assert metrics.processed_length == len(normalized)
    assert metrics.filtered_character_count == metrics.original_length - metrics.processed_length
    assert metrics.filtered_character_count >= 0


def test_whitespace_collapse():
    assert normalize_text("a   b\t\nc") == "a b c"


def test_allowed_punctuation_is_kept():
    raw = "Wait; what: \"yes\", 'no'. Really? Yes! snake_case 42"
    assert normalize_text(raw) == raw


def test_parenthetical_content_is_preserved():
    assert "(pronounced toe MAY toe)" in normalize_text("Tomato (pronounced toe-MAY-toe) #1")
    assert normalize_text("say (this) please") == "say (this) please"


def test_symbols_become_spaces_and_collapse():
    assert normalize_text("rock&roll") == "rock roll"
    assert normalize_text("a - b") == "a b"
    assert normalize_text("[today]") == "today"


def test_non_ascii_letters_are_filtered():
    assert normalize_text("café") == "caf"
    assert normalize_text("emoji 😀 here") == "emoji here"


def test_example_hello_world():
    normalized, metrics = normalize_and_measure("Hello, World! (emphasis) #$%^")

    assert normalized == "Hello, World! (emphasis)"
    assert metrics.original_length == 29
    assert metrics.processed_length == 24
    assert metrics.filtered_character_count == 5
    assert metrics.word_count == 3
    assert metrics.sentence_count == 2
    assert metrics.avg_words_per_sentence == 2
    assert metrics.parenthetical_segment_count == 1
    assert metrics.estimated_duration_seconds == 2
    assert metrics.complexity_class == "low"
    assert metrics.suggested_rate == 1.2
    assert metrics.tts_readiness == "ready"


def test_ten_word_sentences(sentences_of):
    raw = sentences_of(15, 10)
    normalized, metrics = normalize_and_measure(raw)

    assert normalized == raw
    assert metrics.word_count == 150
    assert metrics.sentence_count == 15
    assert metrics.avg_words_per_sentence == 10
    assert metrics.estimated_duration_seconds == 60
    assert metrics.suggested_rate == 1.0
    # 10 is not strictly above the medium threshold
    assert metrics.complexity_class == "low"


def test_single_long_sentence(sentences_of):
    _, metrics = normalize_and_measure(sentences_of(1, 25))

    assert metrics.word_count == 25
    assert metrics.sentence_count == 1
    assert metrics.avg_words_per_sentence == 25
    assert metrics.complexity_class == "high"
    assert metrics.suggested_rate == 0.8


def test_text_with_only_symbols_is_empty():
    normalized, metrics = normalize_and_measure("#$%^&*")

    assert normalized == ""
    assert metrics.word_count == 0
    assert metrics.sentence_count == 0
    assert metrics.avg_words_per_sentence == 0
    assert metrics.estimated_duration_seconds == 0
    assert metrics.tts_readiness == "empty"


def test_measure_is_deterministic():
    raw = "Some text (with notes). And more!"
    assert normalize_and_measure(raw) == normalize_and_measure(raw)


def test_count_words_ignores_empty_tokens():
    assert text_processing.count_words("") == 0
    assert text_processing.count_words("one two  three") == 3


def test_count_sentences_keeps_whitespace_segments():
    assert text_processing.count_sentences("Hi. There.") == 2
    assert text_processing.count_sentences("Hi... There?!") == 2
    assert text_processing.count_sentences("Hi. . There") == 3
    assert text_processing.count_sentences("no terminator") == 1
    assert text_processing.count_sentences("") == 0


def test_average_rounds_half_up():
    assert text_processing.average_words_per_sentence(5, 2) == 3
    assert text_processing.average_words_per_sentence(7, 2) == 4
    assert text_processing.average_words_per_sentence(4, 3) == 1
    assert text_processing.average_words_per_sentence(5, 0) == 0


def test_parentheticals_are_counted_on_raw_text():
    assert text_processing.count_parenthetical_segments("(a) (b) (c") == 2
    assert text_processing.count_parenthetical_segments("((a))") == 1
    assert text_processing.count_parenthetical_segments("() empty") == 1

    # A symbol inside the parentheses does not stop detection
    _, metrics = normalize_and_measure("(x#y)")
    assert metrics.parenthetical_segment_count == 1


@pytest.mark.parametrize("avg, expected", [
    (0, "low"), (10, "low"), (11, "medium"), (20, "medium"), (21, "high"),
])
def test_classify_complexity_boundaries(avg, expected):
    assert text_processing.classify_complexity(avg) == expected


@pytest.mark.parametrize("avg, expected", [
    (0, 1.2), (7, 1.2), (8, 1.0), (20, 1.0), (21, 0.8),
])
def test_suggest_rate_boundaries(avg, expected):
    assert text_processing.suggest_rate(avg) == expected


def test_reading_duration():
    assert text_processing.estimate_reading_duration(0) == 0
    assert text_processing.estimate_reading_duration(150) == 60
    assert text_processing.estimate_reading_duration(300) == 120


def test_synthesis_duration_scales_with_rate():
    assert text_processing.estimate_synthesis_duration(0, 1.0) == 0
    assert text_processing.estimate_synthesis_duration(150, 1.0) == 1
    assert text_processing.estimate_synthesis_duration(300, 0.5) == 4
    assert text_processing.estimate_synthesis_duration(1, 2.0) == 1


def test_synthesis_duration_rejects_non_positive_rate():
    with pytest.raises(ValidationError):
        text_processing.estimate_synthesis_duration(10, 0)


def test_validate_accepts_text_at_limit():
    text = "a" * 50000
    assert validate_text_payload(text) is text


@pytest.mark.parametrize("value, message", [
    (None, "Text is required and must be a string"),
    (123, "Text is required and must be a string"),
    (["text"], "Text is required and must be a string"),
    ("", "Text cannot be empty"),
    ("   \n\t", "Text cannot be empty"),
])
def test_validate_rejects_missing_or_blank(value, message):
    with pytest.raises(ValidationError) as excinfo:
        validate_text_payload(value)
    assert str(excinfo.value) == message


def test_validate_rejects_text_over_limit():
    with pytest.raises(ValidationError) as excinfo:
        validate_text_payload("a" * 50001)
    assert "Maximum length is 50,000 characters" in str(excinfo.value)


def test_validate_uses_explicit_limit():
    with pytest.raises(ValidationError):
        validate_text_payload("abcdef", max_length=5)
    assert validate_text_payload("abcde", max_length=5) == "abcde"
