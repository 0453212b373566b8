"""Shared utilities (merge, I/O, text)."""
