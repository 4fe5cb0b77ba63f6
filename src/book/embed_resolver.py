"""Resolution of embed blocks to local source files.

Code samples are embedded in pages through a viewer service that wraps a
link to the file on GitHub:

    https://www.onlinetool.io/gitoembed/widget?url=https%3A%2F%2Fgithub.com%2Fessentialbooks%2Fbooks%2Fblob%2Fmaster%2Fbooks%2Fgo%2F0020-basic-types%2Fbooleans.go

The same file is checked out locally at
``books/go/0020-basic-types/booleans.go`` relative to the source root, so the
resolver decodes the wrapper URL and reads the local copy.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union
from urllib.parse import parse_qs, urlparse

from .errors import SourceFileError
from .models import EmbeddedSourceFile, Page
from .source_reader import SourceFileReader

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmbedUrlConvention:
    """Shape of the viewer-wrapper URLs understood by the resolver.

    Attributes:
        viewer_hosts: Hosts of the viewer service
        widget_path: Path of the viewer widget
        source_host: Host of the wrapped source URL
        repository: ``owner/name`` of the repository holding the sources
        branches: Branch names stripped from the wrapped path
    """
    viewer_hosts: Tuple[str, ...] = ("www.onlinetool.io", "onlinetool.io")
    widget_path: str = "/gitoembed/widget"
    source_host: str = "github.com"
    repository: str = "essentialbooks/books"
    branches: Tuple[str, ...] = ("master", "notion")

    @property
    def repository_prefix(self) -> str:
        return f"/{self.repository.strip('/')}/"

    def to_relative_path(self, uri: str) -> str:
        """Decode a viewer-wrapper URL into a path relative to the source root.

        Args:
            uri: Display source URL of an embed block

        Returns:
            Relative path, or "" if the URL does not follow the convention
        """
        try:
            parsed = urlparse(uri)
        except ValueError:
            return ""
        if parsed.hostname not in self.viewer_hosts:
            return ""
        if parsed.path != self.widget_path:
            return ""

        inner_urls = parse_qs(parsed.query).get("url")
        if not inner_urls:
            return ""
        try:
            inner = urlparse(inner_urls[0])
        except ValueError:
            return ""
        if inner.hostname != self.source_host:
            return ""

        prefix = self.repository_prefix
        if not inner.path.startswith(prefix):
            return ""
        path = inner.path[len(prefix):]

        # blob/master/books/go/... -> books/go/...
        path = _trim_prefix(path, "blob/")
        for branch in self.branches:
            path = _trim_prefix(path, f"{branch}/")
        return path


def _trim_prefix(s: str, prefix: str) -> str:
    if s.startswith(prefix):
        return s[len(prefix):]
    return s


def _absolute(path: Union[str, Path]) -> Path:
    # Normalizes '..' without following symlinks
    return Path(os.path.abspath(path))


class EmbedResolver:
    """Attaches the source files referenced by a page's embed blocks.

    Every embed block yields exactly one EmbeddedSourceFile, in block order.
    Unresolvable URLs and unreadable files are logged and recorded on the
    EmbeddedSourceFile; they never abort the build. Embed blocks stay in the
    page's block sequence.

    Example:
        >>> resolver = EmbedResolver(source_root="/src/books")
        >>> resolver.extract(page)
        >>> print([f.file_name for f in page.source_files if f.file_exists])
    """

    def __init__(
        self,
        source_root: Optional[Union[str, Path]] = None,
        convention: Optional[EmbedUrlConvention] = None,
        reader: Optional[SourceFileReader] = None
    ):
        """Initialize the resolver.

        Args:
            source_root: Directory relative paths are joined with, made
                         absolute (current working directory if None)
            convention: Viewer-wrapper URL convention (defaults if None)
            reader: Source file reader (SourceFileReader if None)
        """
        self.source_root = _absolute(source_root) if source_root is not None else None
        self.convention = convention or EmbedUrlConvention()
        self.reader = reader or SourceFileReader()

    def extract(self, page: Page) -> None:
        """Resolve every embed block of a page and attach the results.

        Args:
            page: Page whose block sequence is scanned
        """
        root_dir = self.source_root or Path(os.getcwd())
        for block in page.blocks:
            if not block.is_embed:
                continue
            page.source_files.append(self.resolve(block.display_source, root_dir))

    def resolve(self, uri: str, root_dir: Optional[Path] = None) -> EmbeddedSourceFile:
        """Resolve a single embed URL.

        Args:
            uri: Display source URL of the embed block
            root_dir: Directory to resolve against (source_root or cwd if None)

        Returns:
            EmbeddedSourceFile, with file_exists True only if the file was read
        """
        source_file = EmbeddedSourceFile(embed_url=uri)

        relative_path = self.convention.to_relative_path(uri)
        if not relative_path:
            logger.warning(f"Couldn't parse embed uri '{uri}'")
            source_file.error = "Embed URL does not reference a source file"
            return source_file

        root_dir = _absolute(root_dir) if root_dir is not None else self.source_root
        if root_dir is None:
            root_dir = Path(os.getcwd())
        path = _absolute(root_dir / relative_path)
        if not path.is_relative_to(root_dir):
            logger.warning(f"Embed uri '{uri}' points outside of '{root_dir}'")
            source_file.error = "Embed URL points outside of the source root"
            return source_file

        source_file.file_name = path.name
        source_file.path = str(path)

        try:
            source_file.lines = self.reader.read_lines(source_file.path)
        except SourceFileError as e:
            logger.warning(
                f"Failed to read '{source_file.path}' extracted from '{uri}', error: {e.reason}"
            )
            source_file.error = e.reason or str(e)
            return source_file

        source_file.file_exists = True
        return source_file
