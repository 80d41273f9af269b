"""Tests for single-width peak detection."""

import pytest

from chat_peaks.domain.models.baseline import Baseline, MessagePercentiles
from chat_peaks.domain.models.config import AnalysisConfig
from chat_peaks.domain.models.peak import Peak, PeakClassification
from chat_peaks.domain.models.timeline import WindowPoint
from chat_peaks.domain.services.baseline_estimator import BaselineEstimator
from chat_peaks.domain.services.peak_detector import (
    PeakDetector,
    calculate_intensity,
    minimum_peak_distance,
)
from chat_peaks.domain.services.timeline_builder import TimelineBuilder
from tests.factories import burst_log


@pytest.fixture
def detector():
    return PeakDetector()


def _detect(detector, log, config, corroborating_peaks=None):
    timeline = TimelineBuilder().build(
        log, [config.primary_window_size], config.excitement_keywords
    )[config.primary_window_size]
    baseline = BaselineEstimator().estimate(log)
    return detector.detect(timeline, baseline, config, corroborating_peaks)


def _merged_peak(timestamp, widths=(30.0, 60.0)):
    return Peak(
        timestamp_seconds=timestamp,
        window_size_seconds=30.0,
        message_count=100,
        emote_count=0,
        unique_user_count=100,
        subscriber_message_count=0,
        intensity=10.0,
        content_score=0.0,
        classification=PeakClassification.EPIC,
        multi_window_supported=True,
        supporting_window_sizes=frozenset(widths),
        confidence=1.0,
    )


class TestPeakDetector:
    """Test suite for PeakDetector."""

    def test_single_burst_without_content_analysis(
        self, detector, single_burst_log, plain_config
    ):
        """Test that one burst in a quiet log yields exactly one peak at its window."""
        peaks = _detect(detector, single_burst_log, plain_config)

        assert len(peaks) == 1
        peak = peaks[0]
        assert peak.timestamp_seconds == 300.0
        assert peak.window_size_seconds == 30.0
        assert peak.message_count == 100
        assert peak.classification.rank >= PeakClassification.MODERATE.rank
        assert peak.content_score == 0.0
        assert peak.supporting_window_sizes == frozenset({30.0})

    def test_exciting_burst_with_content_analysis(self, detector, content_config):
        log = burst_log(numbered_text="POG lets go")

        peaks = _detect(detector, log, content_config)

        assert [p.timestamp_seconds for p in peaks] == [300.0]
        assert peaks[0].content_score > 0.1

    def test_bland_burst_fails_content_gate(
        self, detector, single_burst_log, content_config
    ):
        assert _detect(detector, single_burst_log, content_config) == []

    def test_candidates_skip_the_content_gate(
        self, detector, single_burst_log, content_config
    ):
        timeline = TimelineBuilder().build(
            single_burst_log, [30], content_config.excitement_keywords
        )[30.0]
        baseline = BaselineEstimator().estimate(single_burst_log)

        candidates = detector.find_candidates(timeline, baseline, content_config)

        assert [p.timestamp_seconds for p in candidates] == [300.0]
        assert candidates[0].content_score <= 0.1
        assert detector.detect(timeline, baseline, content_config) == []

    def test_candidates_are_not_spaced(self, detector, plain_config):
        log = burst_log(burst_starts=[300, 390])
        timeline = TimelineBuilder().build(log, [30])[30.0]
        baseline = BaselineEstimator().estimate(log)

        candidates = detector.find_candidates(timeline, baseline, plain_config)

        assert [p.timestamp_seconds for p in candidates] == [300.0, 390.0]

    def test_spam_burst_is_rejected(self, detector, content_config):
        """Test that a flood of identical messages does not become a peak."""
        log = burst_log(text="POG lets go")
        timeline = TimelineBuilder().build(log, [30], content_config.excitement_keywords)

        assert timeline[30.0][10].content.spam_ratio > 0
        assert _detect(detector, log, content_config) == []

    def test_corroboration_bypasses_content_gate(
        self, detector, single_burst_log, content_config
    ):
        peaks = _detect(
            detector,
            single_burst_log,
            content_config,
            corroborating_peaks=[_merged_peak(310.0)],
        )

        assert [p.timestamp_seconds for p in peaks] == [300.0]

    def test_unsupported_or_distant_merged_peaks_do_not_corroborate(
        self, detector, single_burst_log, content_config
    ):
        lonely = _merged_peak(300.0, widths=(30.0,))
        lonely = lonely.with_support(frozenset({30.0}), 0.5, False)
        distant = _merged_peak(400.0)

        peaks = _detect(
            detector,
            single_burst_log,
            content_config,
            corroborating_peaks=[lonely, distant],
        )

        assert peaks == []

    def test_message_floor_filters_small_bursts(self, detector, single_burst_log):
        config = AnalysisConfig(
            message_threshold=150,
            use_adaptive_thresholds=False,
            content_analysis=False,
        )

        assert _detect(detector, single_burst_log, config) == []

    def test_adaptive_floor_uses_half_the_threshold(self, detector, single_burst_log):
        """Test that the adaptive floor never drops below half the threshold."""
        config = AnalysisConfig(
            message_threshold=150,
            sensitivity_mode="aggressive",
            use_adaptive_thresholds=True,
            content_analysis=False,
        )

        # p75 of the per-minute counts is 6, so the floor is 75
        peaks = _detect(detector, single_burst_log, config)

        assert [p.timestamp_seconds for p in peaks] == [300.0]

    def test_adjacent_bursts_respect_minimum_distance(self, detector, plain_config):
        log = burst_log(burst_starts=[300, 390])

        peaks = _detect(detector, log, plain_config)

        assert [p.timestamp_seconds for p in peaks] == [300.0]

    def test_spaced_bursts_are_both_detected(self, detector, plain_config):
        log = burst_log(burst_starts=[300, 480])

        peaks = _detect(detector, log, plain_config)

        assert [p.timestamp_seconds for p in peaks] == [300.0, 480.0]

    def test_accepted_peaks_are_spaced(self, detector, plain_config):
        log = burst_log(burst_starts=[60, 150, 240, 420, 450, 540])
        baseline = BaselineEstimator().estimate(log)
        distance = minimum_peak_distance(plain_config, baseline)

        peaks = _detect(detector, log, plain_config)

        assert peaks
        for a, b in zip(peaks, peaks[1:]):
            assert b.timestamp_seconds - a.timestamp_seconds >= distance

    def test_short_timeline_has_no_peaks(self, detector, plain_config):
        timeline = [WindowPoint(0, 30, message_count=100), WindowPoint(30, 30)]

        assert detector.detect(timeline, Baseline(), plain_config) == []

    def test_peak_reports_normalized_intensity(
        self, detector, single_burst_log, plain_config
    ):
        peak = _detect(detector, single_burst_log, plain_config)[0]

        assert peak.normalized_intensity == pytest.approx(peak.intensity / 15.7)


class TestMinimumPeakDistance:
    """Test cases for the activity-adapted spacing."""

    @pytest.mark.parametrize(
        "avg, base, expected",
        [
            (150.0, 120, 84.0),
            (150.0, 60, 60.0),
            (50.0, 120, 120.0),
            (10.0, 120, 180.0),
            (10.0, 600, 600.0),
            (10.0, 300, 300.0),
        ],
    )
    def test_distance(self, avg, base, expected):
        config = AnalysisConfig(minimum_peak_distance=base)
        baseline = Baseline(avg_messages_per_minute=avg)

        assert minimum_peak_distance(config, baseline) == pytest.approx(expected)


class TestCalculateIntensity:
    """Test cases for the intensity formula."""

    def test_all_factors(self):
        point = WindowPoint(
            window_start=0,
            window_size_seconds=10,
            message_count=10,
            emote_count=5,
            unique_user_count=10,
            subscriber_message_count=0,
            messages_per_second=1.0,
        )
        baseline = Baseline(avg_messages_per_minute=5.0)

        intensity = calculate_intensity(point, trend=5.0, baseline=baseline, content=1.0)

        # 2 * 2 * 1.5 * 2 * 1 * 2 * 1.5
        assert intensity == pytest.approx(36.0)

    def test_unreadable_chat_penalty(self):
        point = WindowPoint(
            window_start=0,
            window_size_seconds=10,
            message_count=120,
            unique_user_count=0,
            messages_per_second=12.0,
        )
        baseline = Baseline(
            avg_messages_per_minute=0.0,
            message_count_percentiles=MessagePercentiles(),
        )

        intensity = calculate_intensity(point, trend=120.0, baseline=baseline, content=0.0)

        # 1 * 120 * 2 (velocity, capped) * 0.8
        assert intensity == pytest.approx(192.0)
