"""Endpoint helpers for the read-only sheet collections."""

__all__: list[str] = []
