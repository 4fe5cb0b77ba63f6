"""Data models for books.

This module defines the output of the book builder: a tree of Page objects
with extracted metadata and attached source files, and the Book that owns
the root page. All models use dataclasses.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from src.block_store.ids import normalize_id
from src.block_store.models import Block, SourceNode


@dataclass
class MetaValue:
    """A single ``$key: value`` directive parsed from a text block."""
    key: str
    value: str


@dataclass
class EmbeddedSourceFile:
    """A source file referenced by an embed block.

    Attributes:
        embed_url: Display source URL as found in the embed block
        file_name: Base name of the resolved file ("" if unresolved)
        path: Absolute path of the resolved file ("" if unresolved)
        lines: Filtered file content (empty if the file could not be read)
        file_exists: True only if the file was located and read
        error: Reason the file is missing, None when it was read
    """
    embed_url: str
    file_name: str = ""
    path: str = ""
    lines: List[str] = field(default_factory=list)
    file_exists: bool = False
    error: Optional[str] = None

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


@dataclass(eq=False)
class Page:
    """A single page in a book.

    Pages form a tree: each page owns its children and keeps a non-owning
    reference to its parent (None for the root).

    Attributes:
        title: Display title copied from the source node
        notion_id: Normalized identifier of the source node
        source_node: The source node the page was built from (never modified)
        blocks: Renderable block sequence left after extraction
        block_ids: Ids of ``blocks``, parallel to it
        id: Legacy page id from the ``$id`` directive, used for redirects
        stack_overflow_id: Id from the ``$soid`` directive
        search: Search aliases from the ``$search`` directive
        source_files: Files referenced by embed blocks, in block order
        children: Sub pages, in block order
        parent: Owning page, None for the root
    """
    title: str
    notion_id: str
    source_node: Optional[SourceNode] = field(default=None, repr=False)
    blocks: List[Block] = field(default_factory=list, repr=False)
    block_ids: List[str] = field(default_factory=list, repr=False)
    id: str = ""
    stack_overflow_id: str = ""
    search: List[str] = field(default_factory=list)
    source_files: List[EmbeddedSourceFile] = field(default_factory=list)
    children: List['Page'] = field(default_factory=list)
    parent: Optional['Page'] = field(default=None, repr=False)

    @classmethod
    def from_node(cls, node: SourceNode, parent: Optional['Page'] = None) -> 'Page':
        """Create a page holding copies of a source node's block sequences."""
        return cls(
            title=node.title,
            notion_id=normalize_id(node.id),
            source_node=node,
            blocks=list(node.root.content),
            block_ids=list(node.root.content_ids),
            parent=parent,
        )

    @property
    def depth(self) -> int:
        """Distance from the root page (0 for the root)."""
        depth = 0
        page = self.parent
        while page is not None:
            depth += 1
            page = page.parent
        return depth

    def find_source_file(self, embed_url: str) -> Optional[EmbeddedSourceFile]:
        """Find the attached source file for an embed URL.

        Args:
            embed_url: Display source URL of an embed block

        Returns:
            The matching source file if it was read, None otherwise
        """
        for source_file in self.source_files:
            if source_file.embed_url == embed_url:
                if source_file.file_exists:
                    return source_file
                return None
        return None

    def siblings(self) -> List['Page']:
        """Pages sharing this page's parent, including this page."""
        if self.parent is None:
            return [self]
        return list(self.parent.children)

    def walk(self) -> Iterator['Page']:
        """Yield this page and all its descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass
class Book:
    """A book built from a source tree.

    Attributes:
        title: Book title (start page title unless configured)
        start_page_id: Normalized id of the start page
        root_page: Root of the page tree
        source_root: Directory embedded source paths were resolved against
    """
    title: str
    start_page_id: str
    root_page: Page
    source_root: Optional[Path] = None

    def pages(self) -> List[Page]:
        """All pages of the book, depth first."""
        return list(self.root_page.walk())

    def source_files(self) -> List[EmbeddedSourceFile]:
        return [f for page in self.root_page.walk() for f in page.source_files]

    def missing_source_files(self) -> List[Tuple[Page, EmbeddedSourceFile]]:
        """Every embedded source file that could not be resolved or read."""
        return [
            (page, source_file)
            for page in self.root_page.walk()
            for source_file in page.source_files
            if not source_file.file_exists
        ]


@dataclass
class BookConfig:
    """Configuration for a single book.

    Attributes:
        name: Short name used to select the book on the command line
        start_page_id: Id of the book's start page
        source_tree: Path of the source tree dump holding the book's pages
        title: Book title (start page title if empty)
    """
    name: str
    start_page_id: str
    source_tree: str
    title: str = ""


@dataclass
class BuildConfig:
    """Overall build configuration.

    Attributes:
        books: Books to build
        source_root: Directory embedded source paths are resolved against
                     (current directory if None)
        embed_repository: ``owner/name`` of the repository embeds point at
        embed_branches: Branch names stripped from embed paths
    """
    books: List[BookConfig] = field(default_factory=list)
    source_root: Optional[str] = None
    embed_repository: str = "essentialbooks/books"
    embed_branches: List[str] = field(default_factory=lambda: ["master", "notion"])

    def get_book(self, name: str) -> Optional[BookConfig]:
        for book in self.books:
            if book.name == name:
                return book
        return None
