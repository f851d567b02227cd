"""Core retrieval and generation logic (no I/O)."""
