"""Guided bulk find & replace against a remote content store."""

__version__ = "0.1.0"
