"""MiRemover usage API: user registry and per-day usage statistics sync."""

__version__ = "1.0.0"
