"""Resolve CBC video identifiers into playable streams and list live events."""

__version__ = "0.4.0"
