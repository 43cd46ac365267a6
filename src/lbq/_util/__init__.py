"""Internal helpers (ANSI colors, filesystem, debug log)."""
