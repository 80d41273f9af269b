"""
Peak merging across window widths.
"""

from typing import Iterable, Sequence

from structlog import get_logger

from ..models.peak import Peak

logger = get_logger()

# Peaks closer than this to a group's first member join that group
MERGE_WINDOW_SECONDS = 60.0


class PeakMerger:
    """Consolidates peaks detected at several widths into single moments."""

    def __init__(self, merge_window_seconds: float = MERGE_WINDOW_SECONDS):
        self.merge_window_seconds = merge_window_seconds

    def merge(
        self, peaks: Iterable[Peak], configured_widths: Sequence[float]
    ) -> list[Peak]:
        """
        Merge temporally close peaks.

        Each group is represented by its member with the highest normalized
        intensity. A group is multi-window supported when more than one width
        contributed to it; confidence is the share of configured widths that
        did.

        Returns:
            Merged peaks in timestamp order
        """
        ordered = sorted(
            peaks, key=lambda p: (p.timestamp_seconds, p.window_size_seconds)
        )
        if not ordered:
            return []

        groups: list[list[Peak]] = []
        for peak in ordered:
            if (
                groups
                and peak.timestamp_seconds - groups[-1][0].timestamp_seconds
                <= self.merge_window_seconds
            ):
                groups[-1].append(peak)
            else:
                groups.append([peak])

        width_count = max(len(configured_widths), 1)
        merged = [self._consolidate(group, width_count) for group in groups]

        logger.debug("Merged peaks", input_peaks=len(ordered), merged_peaks=len(merged))
        return merged

    def _consolidate(self, group: list[Peak], width_count: int) -> Peak:
        representative = group[0]
        for peak in group[1:]:
            if peak.normalized_intensity > representative.normalized_intensity:
                representative = peak

        widths = frozenset(p.window_size_seconds for p in group)
        return representative.with_support(
            supporting_window_sizes=widths,
            confidence=min(1.0, len(widths) / width_count),
            multi_window_supported=len(widths) > 1,
        )
