"""Main CLI entry point for gen-books command.

This module provides the Typer application that serves as the entry point
for the gen-books command-line tool.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer

from src.cli.build_command import BuildCommand
from src.cli.output import OutputHandler
from src.cli.settings import Settings

VERSION = "0.1.0"

app = typer.Typer(
    name="gen-books",
    help="""Build books from Notion page tree dumps.

EXAMPLE:
  gen-books --config books.yaml --book go -v 1""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=False,
)

# Module logger
logger = logging.getLogger(__name__)


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries. The root logger is left unchanged. Handlers from an earlier call
    are replaced, so repeated calls never duplicate log lines.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:  # verbosity >= 2
        level = logging.DEBUG

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"gen-books_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


@app.command()
def main_command(
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="Build configuration file (default: $GEN_BOOKS_CONFIG or books.yaml)",
        metavar="PATH",
    ),
    book: Optional[List[str]] = typer.Option(
        None,
        "--book",
        "-b",
        help="Name of a configured book to build (can be used multiple times, default: all)",
        metavar="NAME",
    ),
    source_root: Optional[str] = typer.Option(
        None,
        "--source-root",
        help="Directory embedded source files are resolved against "
             "(default: $GEN_BOOKS_SOURCE_ROOT, configured source_root or current directory)",
        metavar="DIR",
    ),
    show_tree: bool = typer.Option(
        True,
        "--show-tree/--no-show-tree",
        help="Print the table of contents of each book",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
) -> None:
    """Build books from Notion page tree dumps.

    Each configured book is built from its source tree dump: page metadata is
    read from $key: value directives, embedded source files are resolved to
    local files and the page tree is printed with a summary.
    """
    if version:
        typer.echo(f"gen-books version {VERSION}")
        raise typer.Exit()

    _configure_logging(verbosity, logdir)

    settings = Settings()
    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    build_cmd = BuildCommand(
        config_path=settings.config_path(config),
        output_handler=output,
        source_root=settings.source_root(source_root),
    )
    exit_code = build_cmd.run(book_names=book, show_tree=show_tree)

    raise typer.Exit(exit_code)


def main() -> None:
    """Main entry point for the CLI application."""
    app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()
