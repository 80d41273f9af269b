"""
Scoring utilities for chat peak analysis.

This module provides the small numeric helpers shared by the timeline,
baseline, peak and statistics services.
"""

import math
from typing import Dict, Sequence

import numpy as np


def normalize_score(score: float, min_val: float = 0.0, max_val: float = 1.0) -> float:
    """
    Clamp a score to a specified range.

    Args:
        score: Raw score to normalize
        min_val: Minimum value of output range
        max_val: Maximum value of output range

    Returns:
        Score clamped to [min_val, max_val]
    """
    return max(min_val, min(max_val, score))


def safe_ratio(numerator: float, denominator: float) -> float:
    """Divide, returning 0.0 when the denominator is not positive."""
    if denominator <= 0:
        return 0.0
    return numerator / denominator


def calculate_weighted_score(
    scores: Dict[str, float], weights: Dict[str, float]
) -> float:
    """
    Calculate weighted combination of multiple scores.

    Weights are applied as given; scores without a weight count as zero.

    Args:
        scores: Dictionary of score values
        weights: Dictionary of weight values

    Returns:
        Weighted combination score
    """
    if not scores or not weights:
        return 0.0

    weighted_sum = 0.0
    for key, score in scores.items():
        weighted_sum += score * weights.get(key, 0.0)

    return weighted_sum


def centered_moving_average(values: Sequence[float], half_window: int = 1) -> list[float]:
    """
    Centered moving average that shrinks at the sequence boundaries.

    With half_window=1 interior points average three samples while the
    first and last points average two.

    Args:
        values: Input series
        half_window: Samples taken on each side of the center

    Returns:
        Smoothed series of the same length
    """
    if len(values) == 0:
        return []

    data = np.asarray(values, dtype=float)
    n = len(data)
    index = np.arange(n)
    lo = np.maximum(index - half_window, 0)
    hi = np.minimum(index + half_window, n - 1)

    # Window sums from a running total, divided by how many samples fell inside
    running = np.concatenate(([0.0], np.cumsum(data)))
    sums = running[hi + 1] - running[lo]

    return (sums / (hi - lo + 1)).tolist()


def nearest_rank_percentile(sorted_values: Sequence[float], percentile: float) -> float:
    """
    Nearest-rank percentile of an ascending sequence.

    index = ceil(p / 100 * n) - 1, clamped to [0, n - 1].

    Returns:
        The selected value, or 0.0 for an empty sequence
    """
    n = len(sorted_values)
    if n == 0:
        return 0.0

    index = math.ceil(percentile * n / 100.0) - 1
    index = max(0, min(n - 1, index))
    return float(sorted_values[index])
