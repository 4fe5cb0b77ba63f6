"""Typed exception hierarchy for block store errors.

This module defines the root exception of the book builder and the errors
raised while loading a source tree dump.
"""

from typing import Optional


class BookError(Exception):
    """Base exception for all gen-books errors.

    Use this to catch any application-level error from the book builder.
    """
    pass


class SourceTreeError(BookError):
    """Raised when a source tree dump cannot be loaded or is malformed."""

    def __init__(self, message: str, source: Optional[str] = None):
        if source:
            full_message = f"Invalid source tree {source}: {message}"
        else:
            full_message = f"Invalid source tree: {message}"
        super().__init__(full_message)
        self.source = source
        self.original_message = message
