"""Segmentation presets and linguistic constant tables.

WHY: Segment boundaries depend on a handful of tunable numbers (word-count
bounds, pause thresholds) and several fixed lookup tables (punctuation
weights, abbreviations). Keeping them as plain importable data lets callers
pick a preset by name and lets concurrent calls use different presets
without any global state.

HOW: Each preset is a plain dict with word-count bounds and pause thresholds
in milliseconds. PRESETS maps preset names to their dicts. The punctuation
weight table, abbreviation set and sentence-ending marks are frozen
constants shared by the enricher and the segmenter.

RULES:
- Presets are frozen constants; never mutate them at runtime.
- Callers copy a preset before modifying it (config.resolve_config does this).
- All durations are integer milliseconds.
- Abbreviations are lowercase with trailing periods stripped.
"""

from typing import Dict, FrozenSet

# Follow-along reading: short segments, sensitive to breathing pauses.
PRESET_DEFAULT: Dict = {
    "min_words_per_segment": 1,
    "max_words_per_segment": 12,
    "preferred_words_per_segment": 6,
    "pause_threshold": 250,
    "long_pause_threshold": 500,
}

# Longer read-along lines for narration and audiobook-style material.
PRESET_LONG_FORM: Dict = {
    "min_words_per_segment": 3,
    "max_words_per_segment": 15,
    "preferred_words_per_segment": 8,
    "pause_threshold": 300,
    "long_pause_threshold": 600,
}

PRESETS: Dict[str, Dict] = {
    "default": PRESET_DEFAULT,
    "long_form": PRESET_LONG_FORM,
}

CONFIG_KEYS: FrozenSet[str] = frozenset(PRESET_DEFAULT.keys())

# Break strength of the punctuation mark following a word (higher = stronger).
PUNCTUATION_WEIGHTS: Dict[str, int] = {
    # Sentence endings
    ".": 10,
    "!": 10,
    "?": 10,
    "。": 10,
    "！": 10,
    "？": 10,
    "…": 10,
    # Clauses
    ";": 6,
    "；": 6,
    ",": 5,
    "，": 5,
    # Phrases
    ":": 4,
    "：": 4,
    "—": 3,
    "-": 2,
}

# Marks that can end a sentence. The ellipsis weighs as much as a full stop
# but is not treated as a sentence terminator on its own.
SENTENCE_ENDING_PUNCTUATION: FrozenSet[str] = frozenset({
    ".", "!", "?", "。", "！", "？",
})

# Trailing punctuation stripped from a raw word before aligning it to the text.
TRAILING_PUNCTUATION_CHARS = ".,!?;:，。！？；："

# Tokens that end with a period without ending a sentence.
COMMON_ABBREVIATIONS: FrozenSet[str] = frozenset({
    # Titles and honorifics
    "mr", "mrs", "ms", "dr", "prof", "sr", "jr", "esq",
    # Time and eras
    "am", "pm", "a.m", "p.m", "bc", "ad", "bce", "ce",
    # Places
    "us", "usa", "uk", "u.s", "u.s.a",
    # Latin and general English
    "etc", "vs", "v", "e.g", "i.e", "ex", "inc", "ltd", "corp", "co",
    # Street types
    "st", "ave", "blvd", "rd", "ct", "ln", "pl", "pkwy",
    # Academic degrees
    "ph.d", "m.d", "b.a", "m.a", "b.s", "m.s",
    # Units
    "ft", "in", "lb", "oz", "kg", "g", "mg", "ml", "l",
    # Generic
    "ca", "approx", "max", "min",
})
