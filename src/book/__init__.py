"""Book builder for Notion-style page trees.

This package turns a page tree into a book: a tree of Page objects carrying
the metadata from ``$key: value`` directive blocks, the source files
referenced by embed blocks and their sub pages, with the structural blocks
removed from the renderable content.
"""

from .models import (
    Book,
    BookConfig,
    BuildConfig,
    EmbeddedSourceFile,
    MetaValue,
    Page,
)
from .errors import (
    ConfigError,
    ContentError,
    FilesystemError,
    MalformedDirectiveError,
    MissingSubPageError,
    SourceFileError,
    UnexpectedRootTypeError,
    UnknownMetaKeyError,
)
from .blocks import remove_blocks, prune_blocks
from .config_loader import ConfigLoader
from .embed_resolver import EmbedResolver, EmbedUrlConvention
from .meta_extractor import MetaExtractor, parse_meta_value
from .source_reader import SourceFileReader, filter_source_lines
from .sub_pages import SubPageExtractor
from .tree_builder import TreeBuilder

__all__ = [
    'Book',
    'BookConfig',
    'BuildConfig',
    'EmbeddedSourceFile',
    'MetaValue',
    'Page',
    'ConfigError',
    'ContentError',
    'FilesystemError',
    'MalformedDirectiveError',
    'MissingSubPageError',
    'SourceFileError',
    'UnexpectedRootTypeError',
    'UnknownMetaKeyError',
    'remove_blocks',
    'prune_blocks',
    'ConfigLoader',
    'EmbedResolver',
    'EmbedUrlConvention',
    'MetaExtractor',
    'parse_meta_value',
    'SourceFileReader',
    'filter_source_lines',
    'SubPageExtractor',
    'TreeBuilder',
]
