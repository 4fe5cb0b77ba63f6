"""Extraction of ``$key: value`` page metadata.

A directive block is a plain text block such as ``$Id: 59``. Directives are
consumed into the page's fields and removed from its renderable block
sequence.
"""

import logging
from typing import Optional, Set

from src.block_store.models import Block, BlockType
from .blocks import prune_blocks
from .errors import MalformedDirectiveError, UnknownMetaKeyError
from .models import MetaValue, Page

logger = logging.getLogger(__name__)


def is_directive_block(block: Block) -> bool:
    """Check if a block has the shape of a ``$key: value`` directive.

    The block must be a text block with exactly one plain inline run whose
    trimmed text is at least 4 characters long and starts with ``$``.
    """
    if block.block_type != BlockType.TEXT:
        return False
    if len(block.inline_content) != 1:
        return False
    inline = block.inline_content[0]
    if not inline.is_plain:
        return False
    text = inline.text.strip()
    return len(text) >= 4 and text.startswith("$")


def parse_meta_value(block: Block, page_id: str = "") -> Optional[MetaValue]:
    """Parse a directive block into a MetaValue.

    Args:
        block: Block to inspect
        page_id: Id of the page the block belongs to (for error messages)

    Returns:
        MetaValue, or None if the block is not a directive block

    Raises:
        MalformedDirectiveError: If the directive has no ':' separator
    """
    if not is_directive_block(block):
        return None

    text = block.inline_content[0].text.strip()
    key, sep, value = text.partition(":")
    if not sep:
        raise MalformedDirectiveError(text, page_id)
    return MetaValue(key=key.strip().lower(), value=value.strip())


class MetaExtractor:
    """Consumes directive blocks into page metadata.

    Recognized keys:
        $id: legacy page id
        $soid: StackOverflow documentation id
        $search: comma separated search aliases
        $score: reserved, ignored

    Example:
        >>> MetaExtractor().extract(page)
        >>> print(page.id, page.search)
    """

    def extract(self, page: Page) -> None:
        """Apply all directives of a page and remove their blocks.

        Args:
            page: Page whose block sequence is scanned

        Raises:
            MalformedDirectiveError: If a directive has no ':' separator
            UnknownMetaKeyError: If a directive key is not recognized
        """
        page_id = page.notion_id
        to_remove: Set[int] = set()
        for idx, block in enumerate(page.blocks):
            meta = parse_meta_value(block, page_id)
            if meta is None:
                continue
            to_remove.add(idx)
            self._apply(page, meta, page_id)

        page.blocks, page.block_ids = prune_blocks(page.blocks, page.block_ids, to_remove)
        if to_remove:
            logger.debug(f"Removed {len(to_remove)} directive blocks from page {page_id}")

    def _apply(self, page: Page, meta: MetaValue, page_id: str) -> None:
        if meta.key == "$id":
            page.id = meta.value
        elif meta.key == "$soid":
            page.stack_overflow_id = meta.value
        elif meta.key == "$search":
            page.search = [s.strip() for s in meta.value.split(",")]
        elif meta.key == "$score":
            pass
        else:
            raise UnknownMetaKeyError(meta.key, page_id)
