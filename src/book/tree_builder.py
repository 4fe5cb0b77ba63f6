"""Tree builder turning a source tree into a book.

This module composes the metadata, embed and sub page extractors into a
recursive, depth-first traversal that produces a Page tree. The
identifier-to-node mapping is passed down explicitly and is only read.
"""

import logging
from typing import Dict, Optional

from src.block_store.ids import normalize_id
from src.block_store.models import BlockType, SourceNode
from .embed_resolver import EmbedResolver
from .errors import MissingSubPageError, UnexpectedRootTypeError
from .meta_extractor import MetaExtractor
from .models import Book, Page
from .sub_pages import SubPageExtractor

logger = logging.getLogger(__name__)


class TreeBuilder:
    """Builds Page trees from source nodes.

    Each page works on a copy of its source node's block sequence: directive
    and page-link blocks are consumed from the copy, embeds resolved and sub
    pages built recursively in block order. Source nodes are never modified,
    so the same mapping can be built any number of times.

    Example:
        >>> page_by_id = SourceTreeLoader().load("cache/go.json")
        >>> book = TreeBuilder().build_book("0c7c5b8d...", page_by_id)
        >>> print(f"{book.title}: {len(book.pages())} pages")
    """

    def __init__(
        self,
        embed_resolver: Optional[EmbedResolver] = None,
        meta_extractor: Optional[MetaExtractor] = None,
        sub_page_extractor: Optional[SubPageExtractor] = None
    ):
        """Initialize the tree builder with its extractors.

        Args:
            embed_resolver: Resolver for embed blocks (default EmbedResolver())
            meta_extractor: Extractor for directives (default MetaExtractor())
            sub_page_extractor: Extractor for page links (default SubPageExtractor())
        """
        self.embed_resolver = embed_resolver or EmbedResolver()
        self.meta_extractor = meta_extractor or MetaExtractor()
        self.sub_page_extractor = sub_page_extractor or SubPageExtractor()

    def build_book(
        self,
        start_page_id: str,
        page_by_id: Dict[str, SourceNode],
        title: Optional[str] = None
    ) -> Book:
        """Build a book starting from a page of the source tree.

        Args:
            start_page_id: Id of the start page (any spelling)
            page_by_id: Mapping of normalized node ids to nodes
            title: Book title (start page title if None)

        Returns:
            Book whose root page holds the whole page tree

        Raises:
            MissingSubPageError: If the start page or a linked page is missing
            UnexpectedRootTypeError: If the start node is not a page
            UnknownMetaKeyError: If a page has an unsupported directive
            MalformedDirectiveError: If a directive has no ':' separator
        """
        start_id = normalize_id(start_page_id)
        node = page_by_id.get(start_id)
        if node is None:
            raise MissingSubPageError(start_id)

        if node.root.block_type != BlockType.PAGE:
            logger.error(f"Start page {start_id} has type '{node.root.type}'")
            raise UnexpectedRootTypeError(node.root.type, BlockType.PAGE.value)

        logger.info(f"Building book from page {start_id} ('{node.title}')")
        root_page = self.build_page(node, page_by_id)

        book = Book(
            title=title or node.title,
            start_page_id=start_id,
            root_page=root_page,
            source_root=self.embed_resolver.source_root,
        )
        logger.info(f"Built book '{book.title}' with {len(book.pages())} pages")
        return book

    def build_page(
        self,
        node: SourceNode,
        page_by_id: Dict[str, SourceNode],
        parent: Optional[Page] = None
    ) -> Page:
        """Build a Page and its sub pages from a source node.

        Args:
            node: Source node to convert
            page_by_id: Mapping of normalized node ids to nodes
            parent: Owning page (None for the root)

        Returns:
            Fully populated Page
        """
        page = Page.from_node(node, parent=parent)
        self.meta_extractor.extract(page)
        self.embed_resolver.extract(page)
        sub_pages = self.sub_page_extractor.extract(page, page_by_id)

        logger.debug(
            f"Built page {page.notion_id}: title='{page.title}', id='{page.id}', "
            f"sub pages={len(sub_pages)}, source files={len(page.source_files)}"
        )

        for sub_page in sub_pages:
            page.children.append(self.build_page(sub_page, page_by_id, parent=page))
        return page
