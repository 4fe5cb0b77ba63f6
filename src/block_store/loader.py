"""Loader for source tree dumps.

This module parses the JSON dump of a downloaded page tree into ``SourceNode``
and ``Block`` objects and builds the identifier-to-node mapping used by the
tree builder.

Dump structure:
    {"pages": [{"id": "<node id>", "root": <block>}]}

Block structure:
    {"id": "...", "type": "text", "title": "...",
     "text": [{"text": "...", "marks": ["b"], "attrs": {}}],
     "display_source": "https://...", "content": [<block>, ...]}
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from .errors import SourceTreeError
from .ids import normalize_id
from .models import Block, InlineRun, SourceNode

logger = logging.getLogger(__name__)


class SourceTreeLoader:
    """Parses source tree dumps into page nodes.

    Example:
        >>> loader = SourceTreeLoader()
        >>> page_by_id = loader.load("cache/go.json")
        >>> print(f"Loaded {len(page_by_id)} pages")
    """

    def load(self, path: Union[str, Path]) -> Dict[str, SourceNode]:
        """Load a dump file and return the identifier-to-node mapping.

        Args:
            path: Path to the JSON dump

        Returns:
            Dictionary mapping normalized node ids to SourceNode objects

        Raises:
            SourceTreeError: If the file cannot be read or is malformed
        """
        path_str = str(path)
        try:
            with open(path_str, 'r', encoding='utf-8') as f:
                content = f.read()
        except OSError as e:
            raise SourceTreeError(f"cannot read file: {e}", path_str)

        page_by_id = self.parse_from_string(content, source=path_str)
        logger.info(f"Loaded {len(page_by_id)} pages from {path_str}")
        return page_by_id

    def parse_from_string(self, data: str, source: str = "") -> Dict[str, SourceNode]:
        """Parse a JSON dump string.

        Args:
            data: The dump as a JSON string
            source: Name of the dump used in error messages

        Returns:
            Dictionary mapping normalized node ids to SourceNode objects
        """
        try:
            tree_json = json.loads(data)
        except json.JSONDecodeError as e:
            raise SourceTreeError(f"invalid JSON: {e}", source or None)
        return self.parse_tree(tree_json, source=source)

    def parse_tree(self, tree_json: Any, source: str = "") -> Dict[str, SourceNode]:
        """Parse a decoded dump into the identifier-to-node mapping.

        Raises:
            SourceTreeError: If the structure is invalid or ids collide
        """
        if not isinstance(tree_json, dict):
            raise SourceTreeError("dump must be a JSON object", source or None)

        pages = tree_json.get("pages")
        if not isinstance(pages, list):
            raise SourceTreeError("field 'pages' must be a list", source or None)

        page_by_id: Dict[str, SourceNode] = {}
        for i, page_data in enumerate(pages):
            node = self._parse_node(page_data, f"pages[{i}]", source)
            key = normalize_id(node.id)
            if key in page_by_id:
                raise SourceTreeError(f"duplicate page id {key}", source or None)
            page_by_id[key] = node

        return page_by_id

    def _parse_node(self, page_data: Any, where: str, source: str) -> SourceNode:
        if not isinstance(page_data, dict):
            raise SourceTreeError(f"{where} must be an object", source or None)

        node_id = page_data.get("id")
        if not node_id:
            raise SourceTreeError(f"{where} is missing 'id'", source or None)

        root_data = page_data.get("root")
        if not isinstance(root_data, dict):
            raise SourceTreeError(f"{where} is missing 'root' block", source or None)

        root = self._parse_block(root_data, f"{where}.root", source)
        return SourceNode(id=str(node_id), root=root)

    def _parse_block(self, block_data: Any, where: str, source: str) -> Block:
        """Parse a single block and its children recursively."""
        if not isinstance(block_data, dict):
            raise SourceTreeError(f"{where} must be an object", source or None)

        block_id = block_data.get("id")
        if not block_id:
            raise SourceTreeError(f"{where} is missing 'id'", source or None)

        inline_content = self._parse_runs(block_data.get("text", []), f"{where}.text", source)

        content_data: List[Any] = block_data.get("content", [])
        if not isinstance(content_data, list):
            raise SourceTreeError(f"{where}.content must be a list", source or None)
        content = [
            self._parse_block(child, f"{where}.content[{i}]", source)
            for i, child in enumerate(content_data)
        ]

        return Block(
            id=str(block_id),
            type=block_data.get("type", "unknown"),
            title=block_data.get("title", ""),
            inline_content=inline_content,
            display_source=block_data.get("display_source", ""),
            content=content,
            content_ids=[child.id for child in content],
        )

    def _parse_runs(self, runs_data: Any, where: str, source: str) -> List[InlineRun]:
        if not isinstance(runs_data, list):
            raise SourceTreeError(f"{where} must be a list", source or None)

        runs = []
        for i, run in enumerate(runs_data):
            if not isinstance(run, dict):
                raise SourceTreeError(f"{where}[{i}] must be an object", source or None)
            text = run.get("text", "")
            marks = run.get("marks", [])
            attrs = run.get("attrs", {})
            if not isinstance(text, str):
                raise SourceTreeError(f"{where}[{i}].text must be a string", source or None)
            if not isinstance(marks, list):
                raise SourceTreeError(f"{where}[{i}].marks must be a list", source or None)
            if not isinstance(attrs, dict):
                raise SourceTreeError(f"{where}[{i}].attrs must be an object", source or None)
            runs.append(InlineRun(text=text, marks=list(marks), attrs=dict(attrs)))
        return runs
