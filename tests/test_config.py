"""Unit tests for preset lookup and config validation.

WHY: Every entry point resolves its config through resolve_config(). A bad
preset name or an inconsistent override must fail loudly before any words
are processed, and presets must never be mutated by callers.

RULES:
- Returned configs are copies.
- All errors are ValueError with a message naming the problem.
"""

import pytest

from transcript_segmenter.config import resolve_config, validate_config
from transcript_segmenter.presets import PRESET_DEFAULT, PRESETS


class TestResolveConfig:
    """Preset lookup plus keyword overrides."""

    def test_default_values(self):
        cfg = resolve_config("default")
        assert cfg["min_words_per_segment"] == 1
        assert cfg["max_words_per_segment"] == 12
        assert cfg["preferred_words_per_segment"] == 6
        assert cfg["pause_threshold"] == 250
        assert cfg["long_pause_threshold"] == 500

    def test_returns_copy(self):
        cfg = resolve_config("default")
        cfg["max_words_per_segment"] = 99
        assert PRESET_DEFAULT["max_words_per_segment"] == 12

    def test_every_preset_is_valid(self):
        for name in PRESETS:
            validate_config(resolve_config(name))

    def test_unknown_preset(self):
        with pytest.raises(ValueError, match="Unknown preset 'karaoke'. Available"):
            resolve_config("karaoke")

    def test_overrides_applied(self):
        cfg = resolve_config("default", {"max_words_per_segment": 20})
        assert cfg["max_words_per_segment"] == 20

    def test_unknown_override_key(self):
        with pytest.raises(ValueError, match="Unknown config keys: colour"):
            resolve_config("default", {"colour": "red"})


class TestValidateConfig:
    """Incomplete or inconsistent configs are rejected with ValueError."""

    def test_bounds_order(self):
        with pytest.raises(ValueError, match="min <= preferred <= max"):
            resolve_config("default", {"preferred_words_per_segment": 20})

    def test_minimum_at_least_one(self):
        with pytest.raises(ValueError):
            resolve_config("default", {"min_words_per_segment": 0})

    def test_pause_thresholds(self):
        with pytest.raises(ValueError, match="exceeds long_pause_threshold"):
            resolve_config("default", {"pause_threshold": 900})

    def test_missing_keys(self):
        with pytest.raises(ValueError, match="Missing config keys"):
            validate_config({"min_words_per_segment": 1})
