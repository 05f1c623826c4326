"""Interactive local system monitor with JSON report export."""

__version__ = "1.0.0"
