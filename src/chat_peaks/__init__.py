"""Interaction peak detection for recorded stream chat."""

__version__ = "1.0.0"
