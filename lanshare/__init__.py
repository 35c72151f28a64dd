"""Ephemeral content sharing for devices on the same local network."""

__version__ = "1.0.0"
