"""Tests for key normalization and fuzzy key matching."""

import logging

import pytest

from skills_gap_scorer.normalizer import KeyMatcher, match_key, normalize_key


class TestNormalizeKey:
    """Tests for normalize_key."""

    @pytest.mark.parametrize("label,expected", [
        ("IT & Security", "itsecurity"),
        ("Ops & Logistics", "opslogistics"),
        ("ops_logistics", "opslogistics"),
        ("  R&D / Engineering (EMEA) ", "rdengineeringemea"),
        ("Finance-2024", "finance2024"),
    ])
    def test_normalizes_labels(self, label, expected):
        assert normalize_key(label) == expected

    def test_empty_and_none(self):
        """Empty input yields an empty token."""
        assert normalize_key("") == ""
        assert normalize_key(None) == ""

    def test_non_ascii_letters_are_dropped(self):
        assert normalize_key("Café Ops") == "cafops"


class TestKeyMatcher:
    """Tests for KeyMatcher."""

    def test_match_after_normalization(self):
        """'IT & Security' matches 'it_security' by equality after normalization."""
        assert match_key("IT & Security", ["it_security", "finance"]) == "it_security"

    def test_case_and_punctuation_insensitive(self):
        assert match_key("Ops & Logistics", ["ops_logistics"]) == "ops_logistics"

    def test_key_contains_label(self):
        assert match_key("Finance", ["Human Resources", "Finance Department"]) == "Finance Department"

    def test_label_contains_key(self):
        assert match_key("Finance & Accounting", ["HR", "finance"]) == "finance"

    def test_no_match_returns_none(self):
        assert match_key("Marketing", ["finance", "it_security"]) is None

    def test_empty_candidates(self):
        assert match_key("Finance", []) is None

    def test_empty_label_does_not_match(self):
        assert match_key("", ["finance"]) is None
        assert match_key("&&", ["finance"]) is None

    def test_empty_candidate_token_never_matches(self):
        assert match_key("Finance", ["---", "finance"]) == "finance"

    def test_exact_match_preferred_over_earlier_containment(self):
        """An exact token match wins even when a containing key comes first."""
        keys = ["IT Security", "IT"]
        assert match_key("it", keys) == "IT"

    def test_first_containment_match_wins(self):
        """Without an exact match, source order decides."""
        keys = ["IT Security", "IT Operations"]
        assert match_key("IT", keys) == "IT Security"

    def test_ambiguous_match_is_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="skills_gap_scorer.normalizer"):
            match_key("IT", ["IT Security", "IT Operations"])
        assert "Ambiguous key match" in caplog.text

    def test_matcher_preserves_source_order(self):
        matcher = KeyMatcher({"b_key": 1, "a_key": 2})
        assert matcher.keys == ["b_key", "a_key"]
        assert len(matcher) == 2
        assert matcher.match("key") == "b_key"

    def test_matcher_is_reusable(self):
        matcher = KeyMatcher(["it_security", "finance", "people_culture"])
        assert matcher.match("IT & Security") == "it_security"
        assert matcher.match("People & Culture") == "people_culture"
        assert matcher.match("Legal") is None
