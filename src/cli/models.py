"""Data models for CLI operations.

This module defines the data models used by the CLI module, following the
patterns established in src/book/models.py.
"""

from dataclasses import dataclass
from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): All books built
    - GENERAL_ERROR (1): Unexpected failure
    - CONTENT_ERROR (2): Fatal content integrity error (unknown directive,
      malformed directive, missing sub page, wrong start node type)
    - CONFIG_ERROR (3): Configuration or source tree could not be loaded

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    CONTENT_ERROR = 2
    CONFIG_ERROR = 3


@dataclass
class BuildSummary:
    """Counts reported after building a book.

    Attributes:
        book_name: Configured name of the book
        title: Book title
        page_count: Number of pages in the tree
        source_file_count: Number of embedded source files
        missing_source_count: Embedded source files that were not read
    """
    book_name: str
    title: str
    page_count: int = 0
    source_file_count: int = 0
    missing_source_count: int = 0
