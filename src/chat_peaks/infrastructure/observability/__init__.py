"""Observability module."""

from .tracing import configure_logfire, traced

__all__ = ["configure_logfire", "traced"]
