"""Adapters connecting terradactyl to external services."""
