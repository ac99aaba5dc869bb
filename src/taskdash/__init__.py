"""Terminal task dashboard: an in-memory task store with filters and statistics."""

__version__ = "0.1.0"
