"""Reading and filtering of embedded source files.

Book sources are complete, compilable programs. Only part of each file is
meant to be shown on the page, marked with comments:

    // :show start
    ...shown lines...
    // :show end
    fmt.Println(x) // :show line

Build constraint lines are never shown.
"""

import logging
import re
from typing import List

from .errors import SourceFileError

logger = logging.getLogger(__name__)

_BUILD_TAG_RE = re.compile(r"^\s*//\s*(\+build\b|go:build\b)")
_SHOW_START_RE = re.compile(r"^\s*(//|#)\s*:show start\s*$")
_SHOW_END_RE = re.compile(r"^\s*(//|#)\s*:show end\s*$")
_SHOW_LINE_RE = re.compile(r"\s*(//|#)\s*:show line\s*$")


def filter_source_lines(lines: List[str]) -> List[str]:
    """Apply the show/hide rules to the lines of a source file.

    Args:
        lines: File lines without line endings

    Returns:
        Lines to display
    """
    lines = [line for line in lines if not _BUILD_TAG_RE.match(line)]

    has_regions = any(_SHOW_START_RE.match(line) for line in lines)
    if has_regions:
        shown: List[str] = []
        in_region = False
        for line in lines:
            if _SHOW_START_RE.match(line):
                in_region = True
            elif _SHOW_END_RE.match(line):
                in_region = False
            elif in_region:
                shown.append(_SHOW_LINE_RE.sub("", line))
            elif _SHOW_LINE_RE.search(line):
                shown.append(_SHOW_LINE_RE.sub("", line))
        lines = shown
    else:
        lines = [_SHOW_LINE_RE.sub("", line) for line in lines]

    while lines and not lines[0].strip():
        lines = lines[1:]
    while lines and not lines[-1].strip():
        lines = lines[:-1]
    return lines


class SourceFileReader:
    """Reads source files and filters their content for display."""

    def read_lines(self, path: str) -> List[str]:
        """Read a UTF-8 source file and return its filtered lines.

        Args:
            path: Absolute path of the file

        Returns:
            Filtered lines without line endings

        Raises:
            SourceFileError: If the file cannot be read or decoded
        """
        try:
            with open(path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise SourceFileError(path, 'File not found')
        except PermissionError:
            raise SourceFileError(path, 'Permission denied')
        except (OSError, UnicodeDecodeError) as e:
            raise SourceFileError(path, str(e))

        lines = filter_source_lines(content.splitlines())
        logger.debug(f"Read {len(lines)} lines from {path}")
        return lines
