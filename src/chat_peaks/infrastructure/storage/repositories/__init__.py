"""Repository implementations."""

from .analysis import AnalysisRepository

__all__ = ["AnalysisRepository"]
