"""Typed exception hierarchy for CLI-related errors.

This module defines the custom exceptions raised by the CLI itself. All
exceptions inherit from CLIError for easy catching.
"""

from typing import List

from src.block_store.errors import BookError


class CLIError(BookError):
    """Base exception for all CLI-related errors."""
    pass


class ConfigNotFoundError(CLIError):
    """Raised when configuration file is not found."""

    def __init__(self, config_path: str):
        super().__init__(
            f"Configuration file not found at {config_path}"
        )
        self.config_path = config_path


class UnknownBookError(CLIError):
    """Raised when a book selected on the command line is not configured."""

    def __init__(self, name: str, available: List[str]):
        message = f"Book '{name}' is not configured"
        if available:
            message += f" (available: {', '.join(available)})"
        super().__init__(message)
        self.name = name
        self.available = available
