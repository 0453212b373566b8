"""Top-level faber commands."""
