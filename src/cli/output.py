"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output:
colored status messages, a spinner for long operations, the table of
contents of a built book and the build summary.
"""

from contextlib import contextmanager
from typing import Iterator, List, Optional

from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.spinner import Spinner
from rich.tree import Tree

from src.book.models import Book, Page
from src.cli.models import BuildSummary


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Book built")
    """

    def __init__(
        self,
        verbosity: int = 0,
        no_color: bool = False,
        console: Optional[Console] = None
    ):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
            console: Console to print to (a new stdout Console if None)
        """
        self.verbosity = verbosity
        self.console = console or Console(
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green."""
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def error(self, message: str) -> None:
        """Display error message in red."""
        self.console.print(f"[red]✗[/red] {escape(message)}", style="red")

    def warning(self, message: str) -> None:
        """Display warning message in yellow."""
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(escape(message))

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def print(self, message: str) -> None:
        """Display message without formatting."""
        self.console.print(escape(message))

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display spinner for single operations.

        Example:
            >>> with handler.spinner("Building book..."):
            ...     builder.build_book(start_page_id, page_by_id)
        """
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.console, refresh_per_second=10, transient=True):
            yield

    def print_page_tree(self, book: Book) -> None:
        """Display the table of contents of a book as a tree.

        Each page shows its title, followed by its ``$id`` when it has one and
        the number of embedded source files.
        """
        tree = Tree(f"[bold]{escape(book.title)}[/bold]")
        self._add_children(tree, book.root_page.children)
        self.console.print(tree)

    def _add_children(self, tree: Tree, pages: List[Page]) -> None:
        for page in pages:
            branch = tree.add(self._page_label(page))
            self._add_children(branch, page.children)

    def _page_label(self, page: Page) -> str:
        label = escape(page.title or "(untitled)")
        if page.id:
            label += f" [dim]#{escape(page.id)}[/dim]"
        if page.source_files:
            missing = sum(1 for f in page.source_files if not f.file_exists)
            if missing:
                label += f" [yellow]({len(page.source_files)} files, {missing} missing)[/yellow]"
            else:
                label += f" [dim]({len(page.source_files)} files)[/dim]"
        return label

    def print_missing_sources(self, book: Book) -> None:
        """Display a warning for every embedded source file that was not read."""
        for page, source_file in book.missing_source_files():
            target = source_file.path or source_file.embed_url
            self.warning(
                f"{page.title} ({page.notion_id}): {target}: {source_file.error}"
            )

    def print_summary(self, summary: BuildSummary) -> None:
        """Display build summary with color coding."""
        self.console.print(f"\n[bold]{escape(summary.title)}[/bold] ({escape(summary.book_name)})")
        self.console.print(f"  [green]✓[/green] Pages: {summary.page_count}")
        self.console.print(f"  [blue]≡[/blue] Source files: {summary.source_file_count}")
        if summary.missing_source_count > 0:
            self.console.print(
                f"  [yellow]⚠[/yellow] Missing source files: {summary.missing_source_count}"
            )
