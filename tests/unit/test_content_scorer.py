"""Tests for chat content scoring."""

import pytest

from chat_peaks.domain.models.timeline import ContentSignal
from chat_peaks.domain.services.content_scorer import (
    ContentScorer,
    content_score,
    normalize_text,
)
from tests.factories import ChatEventFactory


@pytest.fixture
def scorer():
    return ContentScorer()


def _events(*texts):
    return [ChatEventFactory(text=text) for text in texts]


class TestContentScorer:
    """Test suite for ContentScorer."""

    def test_empty_group_scores_zero(self, scorer):
        assert scorer.score([], ["pog"], ["bad"]) == ContentSignal()

    def test_excitement_is_share_of_matching_messages(self, scorer):
        """Test case-insensitive substring keyword matching."""
        events = _events("hello world", "that was POGGERS", "nothing here", "omg")

        signal = scorer.score(events, ["pog", "OMG"], [])

        assert signal.excitement_score == pytest.approx(0.5)

    def test_disallowed_terms(self, scorer):
        events = _events("you are a Noob", "nice play")

        signal = scorer.score(events, [], ["noob"])

        assert signal.disallowed_score == pytest.approx(0.5)

    def test_message_matches_once_regardless_of_keyword_count(self, scorer):
        events = _events("pog omg wow")

        signal = scorer.score(events, ["pog", "omg", "wow"], [])

        assert signal.excitement_score == pytest.approx(1.0)

    def test_caps_ratio_over_whole_group(self, scorer):
        events = _events("ABC", "abc")

        signal = scorer.score(events, [], [])

        assert signal.caps_ratio == pytest.approx(0.5)
        assert signal.avg_message_length == pytest.approx(3.0)

    def test_empty_texts_have_no_caps(self, scorer):
        signal = scorer.score(_events("", ""), [], [])

        assert signal.caps_ratio == 0.0
        assert signal.avg_message_length == 0.0

    def test_repeats_beyond_three_are_spam(self, scorer):
        """Test that normalized repeats count from the fourth occurrence on."""
        events = _events("gg ez", "GG EZ", "  gg   ez ", "gg\tez", "Gg Ez")

        signal = scorer.score(events, [], [])

        assert signal.spam_ratio == pytest.approx(2 / 5)

    def test_three_repeats_are_not_spam(self, scorer):
        signal = scorer.score(_events("hype", "hype", "hype", "other"), [], [])

        assert signal.spam_ratio == 0.0

    def test_verbatim_flood_is_mostly_spam(self, scorer):
        signal = scorer.score(_events(*["POG lets go"] * 10), ["pog"], [])

        assert signal.spam_ratio == pytest.approx(0.7)
        assert signal.excitement_score == pytest.approx(1.0)


class TestNormalizeText:
    def test_collapses_whitespace_and_case(self):
        assert normalize_text("  Hello \n  WORLD ") == "hello world"


class TestContentScore:
    """Test cases for the collapsed content score."""

    def test_combines_signals(self):
        signal = ContentSignal(excitement_score=0.5, caps_ratio=0.1, spam_ratio=0.2)

        assert content_score(signal) == pytest.approx(1.0 + 0.3 - 0.2)

    def test_caps_contribution_is_capped(self):
        signal = ContentSignal(caps_ratio=0.9)

        assert content_score(signal) == pytest.approx(1.0)

    def test_never_negative(self):
        signal = ContentSignal(disallowed_score=1.0, spam_ratio=1.0)

        assert content_score(signal) == 0.0
