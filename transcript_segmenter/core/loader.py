"""JSON input parsing for the command-line tool.

WHY: Word timings arrive as JSON exported from different TTS/ASR tools.
Some exports are full request documents with the source text and language,
others are bare word lists, and hand-trimmed snippets often lose their
closing brackets.

HOW: try_parse_json() parses the raw string; on failure it drops a
trailing comma and appends the closers of every bracket left open.
parse_input() accepts either an object with "words" (plus optional "text"
and "language") or a bare list of word objects, and normalizes each word
through RawWordTiming.from_dict.

RULES:
- Word entries without text are skipped.
- Without a "text" field, the source text is the space-joined words.
- Unparseable JSON and non-numeric word times raise ValueError.
"""

import json
import re
from dataclasses import dataclass
from typing import Any, List, Optional

from transcript_segmenter.core.ir import RawWordTiming

_CLOSERS = {"[": "]", "{": "}"}
_TRAILING_COMMA_RE = re.compile(r",\s*$")


@dataclass
class SegmentationInput:
    """A parsed segmentation request."""

    text: str
    words: List[RawWordTiming]
    language: Optional[str] = None


def _unclosed_brackets(raw: str) -> str:
    """Closing characters for every bracket still open at the end of raw."""
    expected = []  # type: List[str]
    in_string = False
    escaped = False
    for ch in raw:
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch in _CLOSERS:
            expected.append(_CLOSERS[ch])
        elif expected and ch == expected[-1]:
            expected.pop()
    return "".join(reversed(expected))


def try_parse_json(raw: str) -> Any:
    """Parse JSON, closing brackets left open by a truncated export.

    Raises:
        ValueError: If the input cannot be parsed even with attempted fixes.
    """
    raw = raw.strip()

    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        error = e

    trimmed = _TRAILING_COMMA_RE.sub("", raw)
    try:
        return json.loads(trimmed + _unclosed_brackets(trimmed))
    except json.JSONDecodeError:
        raise ValueError(
            "Could not parse JSON input (even with attempted fixes): {}".format(error)
        ) from None


def _parse_words(items: Any) -> List[RawWordTiming]:
    words = []  # type: List[RawWordTiming]
    if not isinstance(items, list):
        return words
    for item in items:
        if not isinstance(item, dict):
            continue
        timing = RawWordTiming.from_dict(item)
        if timing.text.strip():
            words.append(timing)
    return words


def parse_input(data: Any, text: Optional[str] = None) -> SegmentationInput:
    """Normalize parsed JSON into a SegmentationInput.

    Args:
        data: Parsed JSON, either {"text", "words", "language"} or a list of
            word objects.
        text: Source text override (e.g. from --text-file).

    Returns:
        The normalized input. words may be empty.
    """
    language = None  # type: Optional[str]
    if isinstance(data, dict):
        words = _parse_words(data.get("words"))
        if text is None:
            text = data.get("text")
        language = data.get("language")
    else:
        words = _parse_words(data)

    if not text:
        text = " ".join(w.text.strip() for w in words)

    return SegmentationInput(text=text, words=words, language=language)
