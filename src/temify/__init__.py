"""Headless gamification engine core."""

__version__ = "0.1.0"
