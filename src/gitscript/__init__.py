"""Fetch every Git repository found under a directory tree."""

__version__ = "1.0"
