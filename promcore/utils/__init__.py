"""Shared helpers (environment flags, exception hierarchy)."""
