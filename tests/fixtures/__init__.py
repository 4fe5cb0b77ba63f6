"""Test fixtures for book builder tests.

This module provides builders for blocks, page nodes and source tree dumps.
"""

from .page_trees import (
    ROOT_ID,
    CHILD_1_ID,
    CHILD_2_ID,
    GRANDCHILD_ID,
    BOOLEANS_EMBED_URL,
    create_text,
    create_directive,
    create_embed,
    create_page_link,
    create_code,
    create_node,
    index_nodes,
    github_embed_url,
    create_sample_tree,
    create_sample_dump,
    block_dict,
)
