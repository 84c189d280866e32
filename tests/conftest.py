"""Shared test fixtures for the transcript_segmenter test suite.

WHY: Several test modules run the same reference transcripts through
different layers (enricher, segmenter, pipeline, HTTP, CLI). Keeping the
texts and timings in one place makes sure every layer is checked against
identical input.

HOW: Plain constants hold the reference texts and word timings in seconds;
fixtures hand out fresh copies plus resolved preset configs.

RULES:
- Timings are built from integer milliseconds so rounding is exact.
- Fixtures return new objects on every call; tests may mutate them.
"""

from typing import Dict, List, Optional

import pytest

from transcript_segmenter.config import resolve_config
from transcript_segmenter.core.ir import EnrichedWord, RawWordTiming


def build_timings(
    texts: List[str],
    word_ms: int = 250,
    gap_ms: int = 100,
    pauses: Optional[Dict[int, int]] = None,
) -> List[RawWordTiming]:
    """Sequential word timings; pauses maps word index -> gap after it (ms)."""
    pauses = pauses or {}
    timings = []  # type: List[RawWordTiming]
    t = 0
    for i, text in enumerate(texts):
        timings.append(RawWordTiming(
            text=text,
            start_time=t / 1000.0,
            end_time=(t + word_ms) / 1000.0,
        ))
        t += word_ms + pauses.get(i, gap_ms)
    return timings


def build_word(text: str = "word", **kwargs) -> EnrichedWord:
    """An EnrichedWord with neutral defaults, overridable per field."""
    values = {
        "text": text,
        "start": 0,
        "end": 250,
        "duration": 250,
        "gap_after": 100,
    }
    values.update(kwargs)
    return EnrichedWord(**values)


# ---------------------------------------------------------------------------
# Reference transcripts
# ---------------------------------------------------------------------------

HELLO_TEXT = "Hello world. How are you today?"
HELLO_WORDS = ["Hello", "world.", "How", "are", "you", "today?"]

DIALOGUE_TEXT = "Why? I don't know. Yes! That's fine."
DIALOGUE_WORDS = ["Why?", "I", "don't", "know.", "Yes!", "That's", "fine."]
# Breathing pauses after "Why?" and "Yes!"
DIALOGUE_PAUSES = {0: 400, 4: 400}

DOCTOR_TEXT = "Dr. Smith arrived."
DOCTOR_WORDS = ["Dr.", "Smith", "arrived."]


@pytest.fixture
def default_config():
    return resolve_config("default")


@pytest.fixture
def long_form_config():
    return resolve_config("long_form")


@pytest.fixture
def hello_timings():
    """Six evenly spaced words over 0.0-2.0 s with 100 ms gaps."""
    return build_timings(HELLO_WORDS)


@pytest.fixture
def dialogue_timings():
    return build_timings(DIALOGUE_WORDS, pauses=DIALOGUE_PAUSES)


@pytest.fixture
def doctor_timings():
    return build_timings(DOCTOR_WORDS)
