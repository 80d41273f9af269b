"""Database module."""

from .database import Base, Database
from .models import AnalysisModel

__all__ = ["AnalysisModel", "Base", "Database"]
