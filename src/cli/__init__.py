"""Command-line interface for building books.

This package provides the `gen-books` CLI tool that loads the build
configuration, builds each book from its source tree dump and reports the
page tree and unresolved source files.
"""

from .build_command import BuildCommand
from .models import ExitCode, BuildSummary
from .errors import (
    CLIError,
    ConfigNotFoundError,
    UnknownBookError,
)

__all__ = [
    'BuildCommand',
    'ExitCode',
    'BuildSummary',
    'CLIError',
    'ConfigNotFoundError',
    'UnknownBookError',
]
