"""Typed exception hierarchy for book building errors.

This module defines all custom exceptions raised while turning a source tree
into a book. ContentError subclasses are fatal integrity errors: the content
needs human correction and the build stops. SourceFileError is recoverable
and is recorded on the embedded source file instead of propagating.
"""

from typing import Optional

from src.block_store.errors import BookError


class ContentError(BookError):
    """Base exception for fatal content integrity errors."""
    pass


class UnknownMetaKeyError(ContentError):
    """Raised when a page contains an unsupported ``$key: value`` directive."""

    def __init__(self, key: str, page_id: str):
        super().__init__(f"Unknown key '{key}' in page with id {page_id}")
        self.key = key
        self.page_id = page_id


class MalformedDirectiveError(ContentError):
    """Raised when a directive line has no ``:`` separator."""

    def __init__(self, text: str, page_id: str):
        super().__init__(
            f"Directive '{text}' in page with id {page_id} has no ':' separator"
        )
        self.text = text
        self.page_id = page_id


class MissingSubPageError(ContentError):
    """Raised when a page link references an id missing from the source tree."""

    def __init__(self, page_id: str):
        super().__init__(f"No sub page for id {page_id}")
        self.page_id = page_id


class UnexpectedRootTypeError(ContentError):
    """Raised when the start node of a book is not a page."""

    def __init__(self, block_type: str, expected: str = "page"):
        super().__init__(
            f"Start block is of type '{block_type}' and not '{expected}'"
        )
        self.block_type = block_type
        self.expected = expected


class SourceFileError(BookError):
    """Raised when an embedded source file cannot be read."""

    def __init__(self, file_path: str, reason: Optional[str] = None):
        message = f"Failed to read source file {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.reason = reason


class FilesystemError(BookError):
    """Raised when filesystem operations fail (read, write, permissions, etc)."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Filesystem operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason


class ConfigError(BookError):
    """Raised when configuration validation fails."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Configuration error in field '{config_field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.config_field = config_field
        self.original_message = message
