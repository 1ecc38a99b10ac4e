"""Request path resolution.

Maps a raw request path onto the filesystem under a fixed root directory and
classifies what it finds there. Only metadata is read; file contents are left
to the responder.
"""

import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import unquote

from fileserve.core.types import URLPath

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegularFile:
    """A readable regular file under the root."""

    path: Path
    size: int
    mtime: float


@dataclass(frozen=True)
class Directory:
    """A directory under the root."""

    path: Path


@dataclass(frozen=True)
class NotFound:
    """Nothing servable exists at the requested path."""


@dataclass(frozen=True)
class Forbidden:
    """The request escapes the root or is not accessible."""


Resolution = RegularFile | Directory | NotFound | Forbidden


def normalize(request_path: str) -> list[str] | None:
    """Decode and normalize a request path into path segments.

    Empty and "." segments are dropped and ".." removes the preceding
    segment. The result is always relative to the root: a leading "/" does
    not refer to the filesystem root.

    Args:
        request_path: Raw request path, possibly percent-encoded

    Returns:
        List of path segments (empty for the root itself), or None if the
        path is not allowed (escapes the root, contains NUL or backslash)

    Raises:
        UnicodeDecodeError: If the percent-decoded bytes are not valid UTF-8
    """
    decoded = unquote(request_path, errors="strict")
    if "\x00" in decoded or "\\" in decoded:
        return None

    segments: list[str] = []
    for segment in decoded.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if not segments:
                return None
            segments.pop()
            continue
        segments.append(segment)
    return segments


class PathResolver:
    """Resolves request paths to files and directories under a root directory.

    The root is fixed at construction time and never changes, so a single
    resolver can be shared by any number of concurrent requests.
    """

    def __init__(self, root_dir: Path) -> None:
        """Initialize resolver.

        Args:
            root_dir: Directory beneath which all servable files reside
        """
        self._root_dir = root_dir

    @property
    def root_dir(self) -> Path:
        """Root directory."""
        return self._root_dir

    def resolve(self, request_path: URLPath | str) -> Resolution:
        """Classify what a request path refers to.

        Never raises: every failure maps onto NotFound or Forbidden.

        Args:
            request_path: Raw request path (e.g., "/docs/a%20b.txt")

        Returns:
            RegularFile, Directory, NotFound or Forbidden
        """
        try:
            segments = normalize(request_path)
        except UnicodeDecodeError:
            return NotFound()

        if segments is None:
            logger.debug(f"Rejected path outside root: {request_path!r}")
            return Forbidden()

        candidate = self._root_dir.joinpath(*segments)
        return self._classify(candidate)

    def _classify(self, candidate: Path) -> Resolution:
        """Stat a candidate path and classify the result.

        Args:
            candidate: Filesystem path inside the root

        Returns:
            Resolution for the candidate
        """
        try:
            st = candidate.stat()
        except (FileNotFoundError, NotADirectoryError):
            return NotFound()
        except PermissionError:
            return Forbidden()
        except (OSError, ValueError) as e:
            logger.debug(f"Cannot stat {candidate}: {e}")
            return NotFound()

        if stat.S_ISDIR(st.st_mode):
            return Directory(path=candidate)

        if not stat.S_ISREG(st.st_mode):
            return NotFound()

        if not os.access(candidate, os.R_OK):
            return Forbidden()

        return RegularFile(path=candidate, size=st.st_size, mtime=st.st_mtime)
