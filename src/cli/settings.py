"""Environment settings for the gen-books command.

Defaults for command-line options can be set in the environment or in a
.env file loaded with python-dotenv:

    GEN_BOOKS_CONFIG: Path of the build configuration (default books.yaml)
    GEN_BOOKS_SOURCE_ROOT: Directory embedded sources are resolved against
"""

import os
from typing import Optional

from dotenv import load_dotenv

from src.book.config_loader import ConfigLoader


class Settings:
    """Reads option defaults from environment variables.

    Example:
        >>> settings = Settings()
        >>> config_path = settings.config_path()
    """

    CONFIG_ENV = 'GEN_BOOKS_CONFIG'
    SOURCE_ROOT_ENV = 'GEN_BOOKS_SOURCE_ROOT'

    def __init__(self, load_env_file: bool = True):
        """Initialize settings, loading the .env file unless disabled."""
        if load_env_file:
            load_dotenv()

    def config_path(self, override: Optional[str] = None) -> str:
        """Configuration path from the command line, environment or default."""
        if override:
            return override
        return os.getenv(self.CONFIG_ENV) or ConfigLoader.DEFAULT_CONFIG_FILE

    def source_root(self, override: Optional[str] = None) -> Optional[str]:
        """Source root from the command line or environment, None if unset."""
        if override:
            return override
        return os.getenv(self.SOURCE_ROOT_ENV) or None
