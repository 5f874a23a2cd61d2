"""Tests for the taxonomy normalizer helpers."""

import pytest

from api.utils import normalize_many, parse_limit, slugify, title_case


class TestSlugify:
    """Tests for slugify."""

    def test_ampersand_becomes_and(self):
        """'&' is spelled out before whitespace is collapsed."""
        assert slugify("Rock & Roll") == "rock-and-roll"

    def test_underscores_and_padding(self):
        """Surrounding whitespace is trimmed and underscores become hyphens."""
        assert slugify("  Hip__Hop  ") == "hip-hop"

    def test_drops_disallowed_characters(self):
        assert slugify("Lo-Fi Beats!!") == "lo-fi-beats"
        assert slugify("Café") == "caf"

    def test_none_is_empty(self):
        assert slugify(None) == ""
        assert slugify("   ") == ""

    @pytest.mark.parametrize(
        "raw",
        ["Rock & Roll", "  Hip__Hop  ", "R&B", "--Deep  House--", "80s Synth_Wave", "日本", ""],
    )
    def test_idempotent(self, raw):
        """Slugifying a slug changes nothing."""
        once = slugify(raw)
        assert slugify(once) == once


class TestTitleCase:
    """Tests for title_case."""

    def test_slug_to_display_name(self):
        assert title_case("hip-hop") == "Hip Hop"

    def test_mixed_separators(self):
        assert title_case("  ROCK_and-roll  ") == "Rock And Roll"

    def test_none(self):
        assert title_case(None) == ""


class TestNormalizeMany:
    """Tests for normalize_many."""

    def test_case_variants_collapse(self):
        """'Pop', 'pop' and 'POP' are one entry."""
        assert normalize_many(["Pop", "pop", "POP"]) == ["pop"]

    def test_scalar_is_wrapped(self):
        assert normalize_many("Rock & Roll") == ["rock-and-roll"]

    def test_empty_inputs(self):
        assert normalize_many(None) == []
        assert normalize_many("") == []
        assert normalize_many([]) == []

    def test_keeps_first_occurrence_order_and_drops_empties(self):
        assert normalize_many(["Jazz", "!!!", "Blues", "jazz", " "]) == ["jazz", "blues"]


class TestParseLimit:
    """Tests for parse_limit."""

    def test_default_when_missing_or_bad(self):
        assert parse_limit(None) == 7
        assert parse_limit("abc") == 7

    def test_clamped(self):
        assert parse_limit("500") == 50
        assert parse_limit(0) == 1
        assert parse_limit(-3) == 1
        assert parse_limit("12") == 12
