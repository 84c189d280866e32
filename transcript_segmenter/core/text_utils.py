"""Alignment helpers between provider words and the source text.

WHY: Provider word text does not always match the source tokenization:
TTS engines often drop trailing punctuation, so "world." arrives as "world".
To recover punctuation and sentence positions, each provider word has to be
located in the original text and the characters after it inspected.

HOW: Words are cleaned of trailing punctuation, then matched as whole words
(case-insensitive, regex-escaped) against the text. The n-th occurrence
gives the word's character offset; the first non-word, non-space character
after that occurrence is the punctuation that follows it.

RULES:
- Lookups never raise: a missing word or occurrence returns None.
- Matching is Unicode-aware, so CJK words align too.
- A word never matches part of a contraction ("I" inside "I'm").
- Only the first punctuation character is reported ("!!!" -> "!").
"""

import re
from typing import FrozenSet, Iterator, Optional

from transcript_segmenter.presets import TRAILING_PUNCTUATION_CHARS

_TRAILING_PUNCT_RE = re.compile("[{}]+$".format(re.escape(TRAILING_PUNCTUATION_CHARS)))
_PUNCT_AFTER_RE = re.compile(r"\s*([^\w\s])")
_TRAILING_PERIODS_RE = re.compile(r"\.+$")


def clean_word(word: str) -> str:
    """Strip whitespace and trailing sentence/clause punctuation from a word."""
    return _TRAILING_PUNCT_RE.sub("", word.strip())


def trailing_punctuation(word: str) -> Optional[str]:
    """Return the first character of the word's trailing punctuation run."""
    match = _TRAILING_PUNCT_RE.search(word.strip())
    return match.group(0)[0] if match else None


def _iter_word_matches(text: str, word: str) -> Iterator["re.Match"]:
    if not word:
        return iter(())
    pattern = re.compile(
        r"(?<!\w['’])\b{}\b(?!['’]\w)".format(re.escape(word)), re.IGNORECASE
    )
    return pattern.finditer(text)


def _nth_match(text: str, word: str, occurrence_index: int) -> Optional["re.Match"]:
    if occurrence_index < 0:
        return None
    for i, match in enumerate(_iter_word_matches(text, word)):
        if i == occurrence_index:
            return match
    return None


def get_word_position_in_text(text: str, word: str, occurrence_index: int) -> Optional[int]:
    """Find the character offset of a word occurrence in the text.

    Args:
        text: The full source text.
        word: The word to find (already cleaned of trailing punctuation).
        occurrence_index: 0-based occurrence to return, for repeated words.

    Returns:
        The start offset of that occurrence, or None if it does not exist.
    """
    match = _nth_match(text, word, occurrence_index)
    return match.start() if match else None


def extract_punctuation_after_word(
    text: str, word: str, occurrence_index: int
) -> Optional[str]:
    """Return the punctuation mark that immediately follows a word occurrence.

    Whitespace between the word and the mark is skipped. The first character
    that is neither a word character nor whitespace is returned; anything
    else (another word, end of text, missing occurrence) yields None.
    """
    match = _nth_match(text, word, occurrence_index)
    if match is None:
        return None
    punct = _PUNCT_AFTER_RE.match(text, match.end())
    return punct.group(1) if punct else None


def is_abbreviation_word(
    word: str,
    punctuation_after: Optional[str],
    abbreviations: FrozenSet[str],
) -> bool:
    """Check a word against a known-abbreviation set.

    Handles both "Mr." (period attached) and "Mr" followed by "." in the text.
    Words without a period in either place are never abbreviations.
    """
    if not (word.endswith(".") or punctuation_after == "."):
        return False
    return _TRAILING_PERIODS_RE.sub("", word).lower() in abbreviations
