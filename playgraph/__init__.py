"""Cross-platform listening history reconciliation."""

__version__ = "0.1.0"
