"""Terminal-facing helpers (editor launcher)."""
