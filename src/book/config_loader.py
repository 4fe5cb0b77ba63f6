"""YAML configuration loading and validation.

This module loads the build configuration that lists the books to build, the
source tree dump holding each book's pages and the convention used to map
embed URLs back to local source files.
"""

import os
from typing import Any, Dict, List

import yaml

from .embed_resolver import EmbedUrlConvention
from .errors import ConfigError, FilesystemError
from .models import BookConfig, BuildConfig


class ConfigLoader:
    """Handles configuration file loading and validation.

    Configuration file structure:
        source_root: .
        embed:
          repository: essentialbooks/books
          branches: [master, notion]
        books:
          - name: go
            title: Essential Go
            start_page_id: 0c7c5b8d1c4f4e8a9e2b3f1a2b3c4d5e
            source_tree: cache/go.json

    Relative ``source_tree`` and ``source_root`` paths are resolved against
    the directory holding the configuration file.
    """

    # Required top-level config fields
    REQUIRED_TOP_LEVEL_FIELDS = {'books'}

    # Required fields for each book config
    REQUIRED_BOOK_FIELDS = {'name', 'start_page_id', 'source_tree'}

    DEFAULT_CONFIG_FILE = 'books.yaml'

    @classmethod
    def load(cls, config_path: str) -> BuildConfig:
        """Load and parse configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            BuildConfig object with parsed configuration

        Raises:
            FilesystemError: If file cannot be read
            ConfigError: If configuration is invalid or malformed
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise FilesystemError(
                config_path,
                'read',
                'Configuration file not found'
            )
        except PermissionError:
            raise FilesystemError(
                config_path,
                'read',
                'Permission denied'
            )
        except OSError as e:
            raise FilesystemError(
                config_path,
                'read',
                str(e)
            )

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Invalid YAML syntax: {str(e)}"
            )

        if config_dict is None:
            raise ConfigError("Configuration file is empty")

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        base_dir = os.path.dirname(os.path.abspath(config_path))
        return cls._parse_config(config_dict, base_dir)

    @classmethod
    def _parse_config(cls, config_dict: Dict[str, Any], base_dir: str) -> BuildConfig:
        """Parse and validate configuration dictionary.

        Args:
            config_dict: Raw configuration dictionary from YAML
            base_dir: Directory relative paths are resolved against

        Returns:
            Validated BuildConfig object

        Raises:
            ConfigError: If configuration is invalid
        """
        missing_fields = cls.REQUIRED_TOP_LEVEL_FIELDS - set(config_dict.keys())
        if missing_fields:
            raise ConfigError(
                f"Missing required fields: {', '.join(sorted(missing_fields))}"
            )

        books_raw = config_dict.get('books')
        if not isinstance(books_raw, list):
            raise ConfigError("Field 'books' must be a list", 'books')
        if not books_raw:
            raise ConfigError("At least one book configuration is required", 'books')

        books: List[BookConfig] = []
        seen_names = set()
        for i, book_dict in enumerate(books_raw):
            book = cls._parse_book(book_dict, i, base_dir)
            if book.name in seen_names:
                raise ConfigError(
                    f"Duplicate book name '{book.name}'",
                    f'books[{i}].name'
                )
            seen_names.add(book.name)
            books.append(book)

        source_root = config_dict.get('source_root')
        if source_root is not None:
            source_root = os.path.join(base_dir, str(source_root))

        embed_dict = config_dict.get('embed') or {}
        if not isinstance(embed_dict, dict):
            raise ConfigError("Field 'embed' must be a dictionary", 'embed')

        defaults = EmbedUrlConvention()
        repository = str(embed_dict.get('repository', defaults.repository)).strip('/')
        if repository.count('/') != 1:
            raise ConfigError(
                f"Repository must have the form 'owner/name', got '{repository}'",
                'embed.repository'
            )

        branches_raw = embed_dict.get('branches', list(defaults.branches))
        if not isinstance(branches_raw, list):
            raise ConfigError("Field 'branches' must be a list", 'embed.branches')
        branches = [str(branch).strip('/') for branch in branches_raw]

        return BuildConfig(
            books=books,
            source_root=source_root,
            embed_repository=repository,
            embed_branches=branches,
        )

    @classmethod
    def _parse_book(cls, book_dict: Any, i: int, base_dir: str) -> BookConfig:
        if not isinstance(book_dict, dict):
            raise ConfigError(
                f"Book configuration at index {i} must be a dictionary",
                f'books[{i}]'
            )

        missing_book_fields = cls.REQUIRED_BOOK_FIELDS - set(book_dict.keys())
        if missing_book_fields:
            raise ConfigError(
                f"Missing required fields in book {i}: {', '.join(sorted(missing_book_fields))}",
                f'books[{i}]'
            )

        name = str(book_dict['name'])
        start_page_id = str(book_dict['start_page_id'])
        source_tree = str(book_dict['source_tree'])
        title = str(book_dict.get('title') or '')

        for field_name, value in (
            ('name', name),
            ('start_page_id', start_page_id),
            ('source_tree', source_tree),
        ):
            if not value.strip():
                raise ConfigError(
                    f"Field '{field_name}' in book {i} cannot be empty",
                    f'books[{i}].{field_name}'
                )

        return BookConfig(
            name=name,
            start_page_id=start_page_id,
            source_tree=os.path.join(base_dir, source_tree),
            title=title,
        )

    @staticmethod
    def embed_convention(config: BuildConfig) -> EmbedUrlConvention:
        """Build the embed URL convention described by a configuration."""
        return EmbedUrlConvention(
            repository=config.embed_repository,
            branches=tuple(config.embed_branches),
        )
