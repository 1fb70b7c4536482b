"""State/store layer.

This package is the single source of truth for the live subject/ticket
state: cache hydration, remote refreshes, and change notification all go
through :class:`~ticketsync.state.store.StateStore`.
"""
