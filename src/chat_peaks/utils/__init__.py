"""Shared numeric helpers."""

from .scoring_utils import (
    calculate_weighted_score,
    centered_moving_average,
    nearest_rank_percentile,
    normalize_score,
    safe_ratio,
)

__all__ = [
    "calculate_weighted_score",
    "centered_moving_average",
    "nearest_rank_percentile",
    "normalize_score",
    "safe_ratio",
]
