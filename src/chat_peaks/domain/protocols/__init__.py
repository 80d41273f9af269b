"""Domain protocols."""

from .protocols import AnalysisRepository, ContentFetcher

__all__ = [
    "AnalysisRepository",
    "ContentFetcher",
]
