"""Block store for Notion-style page trees.

This package provides the in-memory block tree read by the book builder:
typed blocks with ordered children, page nodes, identifier normalization and
a loader for JSON dumps of an already-downloaded page tree.
"""

from .models import Block, BlockType, InlineRun, SourceNode
from .errors import BookError, SourceTreeError
from .ids import normalize_id
from .loader import SourceTreeLoader

__all__ = [
    'Block',
    'BlockType',
    'InlineRun',
    'SourceNode',
    'BookError',
    'SourceTreeError',
    'normalize_id',
    'SourceTreeLoader',
]
