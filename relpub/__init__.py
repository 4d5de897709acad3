"""Publish a prebuilt archive as a hosted GitHub release."""

__version__ = "0.1.0"
