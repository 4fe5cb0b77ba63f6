"""Extraction of sub page links from a page's block sequence."""

import logging
from typing import Dict, List, Set

from src.block_store.ids import normalize_id
from src.block_store.models import SourceNode
from .blocks import prune_blocks
from .errors import MissingSubPageError
from .models import Page

logger = logging.getLogger(__name__)


class SubPageExtractor:
    """Resolves page-link blocks to the source nodes they point at.

    Example:
        >>> children = SubPageExtractor().extract(page, page_by_id)
        >>> print([child.title for child in children])
    """

    def extract(
        self,
        page: Page,
        page_by_id: Dict[str, SourceNode]
    ) -> List[SourceNode]:
        """Collect the sub pages of a page and remove the link blocks.

        Args:
            page: Page whose block sequence is scanned
            page_by_id: Mapping of normalized node ids to nodes (only read)

        Returns:
            Sub page nodes in block order

        Raises:
            MissingSubPageError: If a link references an unknown id
        """
        sub_pages: List[SourceNode] = []
        to_remove: Set[int] = set()
        for idx, block in enumerate(page.blocks):
            if not block.is_page:
                continue
            to_remove.add(idx)
            page_id = normalize_id(block.id)
            sub_page = page_by_id.get(page_id)
            if sub_page is None:
                logger.error(f"Page {page.notion_id} links to unknown page {page_id}")
                raise MissingSubPageError(page_id)
            sub_pages.append(sub_page)

        page.blocks, page.block_ids = prune_blocks(page.blocks, page.block_ids, to_remove)
        return sub_pages
