"""Wishcard: personalized greeting cards with shareable links."""

__version__ = "1.0.0"
