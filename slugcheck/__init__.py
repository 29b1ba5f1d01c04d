"""Duplicate URL slug detection for Kontent.ai content items."""

__version__ = "0.3.0"
