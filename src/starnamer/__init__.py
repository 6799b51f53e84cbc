"""Starnamer - star catalog indexing and emotion-based star suggestions."""

__version__ = "0.1.0"
