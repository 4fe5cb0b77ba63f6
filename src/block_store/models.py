"""Data models for the page block tree.

This module defines the data structures for a Notion-style block tree. A page
is a root block of type ``page`` whose ``content`` holds the ordered top-level
blocks; ``content_ids`` is the parallel list of their block ids.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class BlockType(Enum):
    """Types of blocks in the page tree."""

    # Structural
    PAGE = "page"

    # Text blocks
    TEXT = "text"
    HEADER = "header"
    SUB_HEADER = "sub_header"
    SUB_SUB_HEADER = "sub_sub_header"
    QUOTE = "quote"
    CALLOUT = "callout"
    BULLETED_LIST = "bulleted_list"
    NUMBERED_LIST = "numbered_list"
    TOGGLE = "toggle"
    TODO = "to_do"

    # Media and code
    CODE = "code"
    IMAGE = "image"
    EMBED = "embed"
    BOOKMARK = "bookmark"

    # Other
    DIVIDER = "divider"
    TABLE_OF_CONTENTS = "table_of_contents"
    UNKNOWN = "unknown"


@dataclass
class InlineRun:
    """A run of inline text inside a block.

    Attributes:
        text: Text of the run
        marks: Formatting applied to the run (bold, italic, code, link, ...)
        attrs: Extra attributes (link target, mentioned user, date, ...)
    """

    text: str
    marks: List[str] = field(default_factory=list)
    attrs: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_plain(self) -> bool:
        """Check if the run is unformatted plain text."""
        return not self.marks and not self.attrs


@dataclass
class Block:
    """Represents a block in the page tree.

    Attributes:
        id: Block identifier as found in the source
        type: Raw block type string
        title: Title (for page blocks)
        inline_content: Inline runs (for text-like blocks)
        display_source: Display source URL (for embed blocks)
        content: Ordered child blocks
        content_ids: Ids of the child blocks, parallel to ``content``
    """

    id: str
    type: str
    title: str = ""
    inline_content: List[InlineRun] = field(default_factory=list)
    display_source: str = ""
    content: List["Block"] = field(default_factory=list)
    content_ids: List[str] = field(default_factory=list)

    @property
    def block_type(self) -> BlockType:
        """Get the BlockType enum value."""
        try:
            return BlockType(self.type)
        except ValueError:
            return BlockType.UNKNOWN

    @property
    def is_page(self) -> bool:
        return self.block_type == BlockType.PAGE

    @property
    def is_embed(self) -> bool:
        return self.block_type == BlockType.EMBED

    def get_text_content(self) -> str:
        """Concatenate the text of all inline runs."""
        return "".join(run.text for run in self.inline_content)


@dataclass
class SourceNode:
    """A page node of the source tree.

    Attributes:
        id: Node identifier as found in the source
        root: Root block holding the page title, type and block sequence
    """

    id: str
    root: Block

    @property
    def title(self) -> str:
        return self.root.title

    @property
    def blocks(self) -> List[Block]:
        """Top-level block sequence of the page."""
        return self.root.content

    def find_block(self, block_id: str) -> Optional[Block]:
        """Find a top-level block by its id.

        Args:
            block_id: The block id to search for

        Returns:
            The matching block, or None if not found
        """
        for block in self.root.content:
            if block.id == block_id:
                return block
        return None
