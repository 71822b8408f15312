"""Shared helpers (logging setup and structured log context)."""
