"""Environment loading and segmentation config resolution.

WHY: The segmenter is embedded in different hosts (CLI, HTTP service, other
Python code). Each host needs the same way to pick a preset, override single
values, and reject inconsistent settings before any words are processed.

HOW: python-dotenv loads the .env file on import. Host-level defaults (preset
name, log level, API bind address) are read from environment variables.
resolve_config() deep-copies a named preset from presets.PRESETS, applies
caller overrides and validates the result.

RULES:
- The returned config dict is always a fresh copy; presets stay frozen.
- Unknown preset names and unknown override keys raise ValueError.
- Word-count bounds must satisfy 1 <= min <= preferred <= max.
- pause_threshold must not exceed long_pause_threshold.
- All defaults can be overridden via environment variables.
"""

from __future__ import annotations

import copy
import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from transcript_segmenter.presets import CONFIG_KEYS, PRESETS

load_dotenv()

# ---------------------------------------------------------------------------
# Host defaults
# ---------------------------------------------------------------------------

DEFAULT_PRESET = os.getenv("SEGMENTER_PRESET", "default")
LOG_LEVEL = os.getenv("SEGMENTER_LOG_LEVEL", "INFO").upper()
API_HOST = os.getenv("SEGMENTER_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("SEGMENTER_API_PORT", "8000"))


def resolve_config(
    preset: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Build a validated segmentation config dict.

    WHY: Every segmentation call takes its config as an explicit parameter.
    This is the single place that turns a preset name plus optional
    overrides into that parameter.

    HOW: Looks up the preset (DEFAULT_PRESET when None), deep-copies it,
    applies overrides, then runs validate_config().

    Args:
        preset: Preset name from presets.PRESETS, or None for the default.
        overrides: Optional mapping of config keys to replacement values.

    Returns:
        A new config dict safe to hand to the segmentation functions.

    Raises:
        ValueError: If the preset or an override key is unknown, or the
            resulting values are inconsistent.
    """
    name = preset or DEFAULT_PRESET
    if name not in PRESETS:
        raise ValueError(
            "Unknown preset '{}'. Available: {}".format(name, ", ".join(PRESETS.keys()))
        )
    cfg = copy.deepcopy(PRESETS[name])

    if overrides:
        unknown = sorted(set(overrides) - CONFIG_KEYS)
        if unknown:
            raise ValueError("Unknown config keys: {}".format(", ".join(unknown)))
        cfg.update(overrides)

    validate_config(cfg)
    return cfg


def validate_config(cfg: Dict[str, Any]) -> None:
    """Raise ValueError if a config dict is incomplete or inconsistent."""
    missing = sorted(CONFIG_KEYS - set(cfg))
    if missing:
        raise ValueError("Missing config keys: {}".format(", ".join(missing)))

    min_words = cfg["min_words_per_segment"]
    preferred = cfg["preferred_words_per_segment"]
    max_words = cfg["max_words_per_segment"]
    if not 1 <= min_words <= preferred <= max_words:
        raise ValueError(
            "Word-count bounds must satisfy 1 <= min <= preferred <= max "
            "(got min={}, preferred={}, max={})".format(min_words, preferred, max_words)
        )

    if cfg["pause_threshold"] > cfg["long_pause_threshold"]:
        raise ValueError(
            "pause_threshold ({}) exceeds long_pause_threshold ({})".format(
                cfg["pause_threshold"], cfg["long_pause_threshold"]
            )
        )
