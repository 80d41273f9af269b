"""Chat peak analysis domain layer."""
