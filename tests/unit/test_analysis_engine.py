"""Tests for the composed peak analysis engine."""

import pytest

from chat_peaks.domain.exceptions import InvalidInputError
from chat_peaks.domain.models.chat import ChatLog
from chat_peaks.domain.models.config import AnalysisConfig
from chat_peaks.domain.models.peak import Peak, PeakClassification
from chat_peaks.domain.services.analysis_engine import PeakAnalysisEngine, rank_peaks
from tests.factories import burst_log, events_at


@pytest.fixture
def engine():
    return PeakAnalysisEngine()


@pytest.fixture
def multi_window_config():
    return AnalysisConfig(
        message_threshold=50,
        peak_window_size=30,
        use_adaptive_thresholds=False,
        content_analysis=False,
        multi_window_analysis=True,
        window_sizes=[30, 60],
    )


class TestPeakAnalysisEngine:
    """Test suite for PeakAnalysisEngine."""

    def test_single_burst(self, engine, single_burst_log, plain_config):
        analysis = engine.analyze(single_burst_log, plain_config)

        assert [p.timestamp_seconds for p in analysis.peaks] == [300.0]
        peak = analysis.peaks[0]
        assert peak.classification.rank >= PeakClassification.MODERATE.rank
        assert peak.confidence == 1.0
        assert peak.multi_window_supported is False
        assert peak.supporting_window_sizes == frozenset({30.0})
        assert set(analysis.timelines_by_window_size) == {30.0}
        assert analysis.summary_stats.total_messages == single_burst_log.message_count

    def test_empty_log(self, engine):
        """Test that an empty log is analyzed without errors."""
        log = ChatLog(recording_id="vod", events=(), duration_seconds=60)

        analysis = engine.analyze(log, AnalysisConfig())

        assert analysis.peaks == ()
        assert analysis.summary_stats.total_messages == 0
        assert analysis.baseline.avg_messages_per_minute == 0.0
        assert [p.message_count for p in analysis.timelines_by_window_size[30.0]] == [0, 0]

    def test_idempotent(self, engine, plain_config):
        log = burst_log(burst_starts=[60, 240, 540])

        first = engine.analyze(log, plain_config)
        second = engine.analyze(log, plain_config)

        assert first.peaks == second.peaks

    def test_multi_window_agreement(self, engine, single_burst_log, multi_window_config):
        """Test two widths corroborating the same burst."""
        analysis = engine.analyze(single_burst_log, multi_window_config)

        assert set(analysis.timelines_by_window_size) == {30.0, 60.0}
        assert len(analysis.peaks) == 1
        peak = analysis.peaks[0]
        assert peak.timestamp_seconds == 300.0
        assert peak.window_size_seconds == 30.0
        assert peak.multi_window_supported is True
        assert peak.supporting_window_sizes == frozenset({30.0, 60.0})
        assert peak.confidence == pytest.approx(1.0)

    def test_bland_burst_corroborated_by_another_width(self, engine, single_burst_log):
        """Test that agreement across widths lets a bland burst past the content gate."""
        config = AnalysisConfig(
            message_threshold=50,
            use_adaptive_thresholds=False,
            content_analysis=True,
            multi_window_analysis=True,
            window_sizes=[30, 60],
        )

        analysis = engine.analyze(single_burst_log, config)

        assert len(analysis.peaks) == 1
        peak = analysis.peaks[0]
        assert peak.timestamp_seconds == 300.0
        assert peak.window_size_seconds == 30.0
        assert peak.multi_window_supported is True
        assert peak.supporting_window_sizes == frozenset({30.0, 60.0})
        assert peak.confidence == pytest.approx(1.0)

    def test_bland_burst_seen_only_at_primary_width_is_gated(
        self, engine, single_burst_log
    ):
        # Two 300 s windows are too few for the wide width to find a candidate
        config = AnalysisConfig(
            message_threshold=50,
            use_adaptive_thresholds=False,
            content_analysis=True,
            multi_window_analysis=True,
            window_sizes=[300],
        )

        assert engine.analyze(single_burst_log, config).peaks == ()

    def test_primary_only_burst_without_content_analysis(
        self, engine, single_burst_log
    ):
        config = AnalysisConfig(
            message_threshold=50,
            use_adaptive_thresholds=False,
            content_analysis=False,
            multi_window_analysis=True,
            window_sizes=[300],
        )

        peaks = engine.analyze(single_burst_log, config).peaks

        assert [p.timestamp_seconds for p in peaks] == [300.0]
        assert peaks[0].multi_window_supported is False
        assert peaks[0].supporting_window_sizes == frozenset({30.0})
        assert peaks[0].confidence == pytest.approx(0.5)

    def test_primary_width_always_analyzed(self, engine, single_burst_log):
        config = AnalysisConfig(
            peak_window_size=30,
            multi_window_analysis=True,
            window_sizes=[15, 60],
        )

        analysis = engine.analyze(single_burst_log, config)

        assert set(analysis.timelines_by_window_size) == {15.0, 30.0, 60.0}

    def test_thread_pool_matches_serial(self, single_burst_log, multi_window_config):
        serial = PeakAnalysisEngine().analyze(single_burst_log, multi_window_config)
        pooled = PeakAnalysisEngine(max_workers=4).analyze(
            single_burst_log, multi_window_config
        )

        assert pooled == serial

    def test_invalid_log_aborts(self, engine, plain_config):
        log = ChatLog(recording_id="vod", events=events_at([-3]), duration_seconds=60)

        with pytest.raises(InvalidInputError):
            engine.analyze(log, plain_config)

    def test_peaks_ranked_by_combined_score(self, engine, plain_config):
        log = burst_log(burst_starts=[60, 300])
        # A bigger second burst in the same log
        log = ChatLog(
            recording_id=log.recording_id,
            events=sorted(
                log.events + tuple(events_at([300.1 + i * 0.2 for i in range(50)])),
                key=lambda e: e.timestamp_seconds,
            ),
            duration_seconds=log.duration_seconds,
        )

        analysis = engine.analyze(log, plain_config)

        assert [p.timestamp_seconds for p in analysis.peaks] == [300.0, 60.0]
        scores = [p.combined_score for p in analysis.peaks]
        assert scores == sorted(scores, reverse=True)


def _ranked_peak(ts, intensity, classification=None):
    return Peak(
        timestamp_seconds=ts,
        window_size_seconds=30,
        message_count=10,
        emote_count=0,
        unique_user_count=10,
        subscriber_message_count=0,
        intensity=intensity,
        content_score=0.0,
        classification=classification or PeakClassification.from_score(intensity),
    )


class TestRankPeaks:
    def test_ties_broken_by_timestamp(self):
        ranked = rank_peaks(
            [_ranked_peak(600, 3.0), _ranked_peak(300, 3.0), _ranked_peak(0, 5.0)]
        )

        assert [p.timestamp_seconds for p in ranked] == [0, 300, 600]

    def test_classification_outranks_score(self):
        major = _ranked_peak(100, 3.0, classification=PeakClassification.MAJOR)
        moderate = _ranked_peak(0, 3.5)

        ranked = rank_peaks([moderate, major])

        assert ranked == (major, moderate)
