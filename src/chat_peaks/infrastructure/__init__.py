"""Infrastructure layer - storage, content sources, config and observability."""
