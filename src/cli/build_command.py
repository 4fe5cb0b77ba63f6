"""Build command orchestration for CLI.

This module provides the BuildCommand class that loads the build
configuration, builds each selected book from its source tree dump and
reports the result through the OutputHandler.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

from src.block_store.errors import SourceTreeError
from src.block_store.loader import SourceTreeLoader
from src.block_store.models import SourceNode
from src.book.config_loader import ConfigLoader
from src.book.embed_resolver import EmbedResolver
from src.book.errors import ConfigError, ContentError, FilesystemError
from src.book.models import Book, BookConfig, BuildConfig
from src.book.tree_builder import TreeBuilder
from src.cli.errors import CLIError, ConfigNotFoundError, UnknownBookError
from src.cli.models import BuildSummary, ExitCode
from src.cli.output import OutputHandler

logger = logging.getLogger(__name__)


class BuildCommand:
    """Orchestrates building the configured books.

    The build workflow:
        1. Load the configuration
        2. Select the books (all, or those named on the command line)
        3. For each book: load its source tree dump, build the page tree
        4. Print the page tree, missing source files and a summary
        5. Return an exit code

    Example:
        >>> output = OutputHandler(verbosity=1)
        >>> exit_code = BuildCommand("books.yaml", output_handler=output).run()
        >>> sys.exit(exit_code)
    """

    def __init__(
        self,
        config_path: str = ConfigLoader.DEFAULT_CONFIG_FILE,
        output_handler: Optional[OutputHandler] = None,
        loader: Optional[SourceTreeLoader] = None,
        source_root: Optional[str] = None,
    ):
        """Initialize build command with dependencies.

        Args:
            config_path: Path to configuration YAML file
            output_handler: OutputHandler for terminal output (optional)
            loader: SourceTreeLoader for source tree dumps (optional)
            source_root: Overrides the configured source root (optional)
        """
        self.config_path = config_path
        self.output_handler = output_handler or OutputHandler()
        self.loader = loader or SourceTreeLoader()
        self.source_root = source_root
        self.books: List[Book] = []

    def run(
        self,
        book_names: Optional[List[str]] = None,
        show_tree: bool = True,
    ) -> ExitCode:
        """Build the selected books.

        Args:
            book_names: Names of the books to build (all if None or empty)
            show_tree: If True, print each book's table of contents

        Returns:
            ExitCode indicating success or specific failure type
        """
        try:
            if not Path(self.config_path).exists():
                raise ConfigNotFoundError(self.config_path)

            logger.info(f"Loading configuration from {self.config_path}")
            config = ConfigLoader.load(self.config_path)
            logger.info(f"Loaded config with {len(config.books)} book(s)")

            selected = self._select_books(config, book_names)
            builder = self._create_builder(config)

            for book_config in selected:
                book = self._build_book(builder, book_config)
                self.books.append(book)
                self._report(book_config, book, show_tree)

            return ExitCode.SUCCESS

        except ContentError as e:
            logger.error(f"Content error: {e}")
            self.output_handler.error(f"Content error: {e}")
            return ExitCode.CONTENT_ERROR

        except (ConfigError, FilesystemError, SourceTreeError, CLIError) as e:
            logger.error(f"Configuration error: {e}")
            self.output_handler.error(f"Configuration error: {e}")
            return ExitCode.CONFIG_ERROR

        except Exception as e:
            logger.exception("Unexpected error during build")
            self.output_handler.error(f"Unexpected error: {e}")
            return ExitCode.GENERAL_ERROR

    def _select_books(
        self,
        config: BuildConfig,
        book_names: Optional[List[str]]
    ) -> List[BookConfig]:
        if not book_names:
            return list(config.books)

        selected = []
        for name in book_names:
            book_config = config.get_book(name)
            if book_config is None:
                raise UnknownBookError(name, [b.name for b in config.books])
            selected.append(book_config)
        return selected

    def _create_builder(self, config: BuildConfig) -> TreeBuilder:
        source_root = self.source_root or config.source_root
        resolver = EmbedResolver(
            source_root=source_root,
            convention=ConfigLoader.embed_convention(config),
        )
        return TreeBuilder(embed_resolver=resolver)

    def _build_book(self, builder: TreeBuilder, book_config: BookConfig) -> Book:
        self.output_handler.info(f"Loading {book_config.source_tree}")
        page_by_id: Dict[str, SourceNode] = self.loader.load(book_config.source_tree)

        with self.output_handler.spinner(f"Building {book_config.name}..."):
            return builder.build_book(
                book_config.start_page_id,
                page_by_id,
                title=book_config.title or None,
            )

    def _report(self, book_config: BookConfig, book: Book, show_tree: bool) -> None:
        if show_tree:
            self.output_handler.print_page_tree(book)

        self.output_handler.print_missing_sources(book)

        summary = BuildSummary(
            book_name=book_config.name,
            title=book.title,
            page_count=len(book.pages()),
            source_file_count=len(book.source_files()),
            missing_source_count=len(book.missing_source_files()),
        )
        self.output_handler.print_summary(summary)
