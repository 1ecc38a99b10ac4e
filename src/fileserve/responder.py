"""Static file responses.

Turns a path resolution into a complete HTTP response: file bytes streamed
from disk, redirects for directory paths, index files, conditional and range
requests, and fixed error pages.
"""

import re
from urllib.parse import quote, unquote

from aiohttp import hdrs, web

from fileserve.config import DEFAULT_INDEX_FILE
from fileserve.core.content_types import content_type_for
from fileserve.core.resolver import (
    Directory,
    Forbidden,
    NotFound,
    PathResolver,
    RegularFile,
    Resolution,
)
from fileserve.core.types import URLPath

CHUNK_SIZE = 256 * 1024

_ZERO_SUFFIX_RANGE = re.compile(r"^bytes=-0+$")


class StaticFiles:
    """Request handler serving files from a single root directory.

    Directory policy:
        - "/dir" redirects to "/dir/"
        - "/dir/" serves "/dir/<index_file>" if it is a regular file, else 404
        - "/dir/<index_file>" redirects to "/dir/"
        - "/file/" redirects to "/file"

    No directory listings are produced.
    """

    def __init__(
        self,
        resolver: PathResolver,
        *,
        index_file: str = DEFAULT_INDEX_FILE,
        chunk_size: int = CHUNK_SIZE,
    ) -> None:
        """Initialize handler.

        Args:
            resolver: Resolver bound to the root directory
            index_file: File served for directory requests
            chunk_size: Read size when sendfile is unavailable
        """
        self._resolver = resolver
        self._index_file = index_file
        self._chunk_size = chunk_size

    @property
    def resolver(self) -> PathResolver:
        """Path resolver."""
        return self._resolver

    @property
    def index_file(self) -> str:
        """Index file name."""
        return self._index_file

    async def handle(self, request: web.Request) -> web.StreamResponse:
        """Handle GET and HEAD requests for any path.

        Args:
            request: aiohttp request

        Returns:
            FileResponse for the resolved file

        Raises:
            web.HTTPException: For redirects, 403, 404 and zero-length ranges
        """
        raw_path = URLPath(request.rel_url.raw_path)
        resolution = self._resolver.resolve(raw_path)

        if isinstance(resolution, Directory):
            if not raw_path.endswith("/"):
                raise _local_redirect(request, f"./{_last_segment(raw_path)}/")
            resolution = self._resolve_index(raw_path)
        elif isinstance(resolution, RegularFile):
            if raw_path.endswith("/"):
                raise _local_redirect(request, f"../{_last_segment(raw_path)}")
            if unquote(_last_segment(raw_path)) == self._index_file:
                raise _local_redirect(request, "./")

        if isinstance(resolution, Forbidden):
            raise web.HTTPForbidden()
        if not isinstance(resolution, RegularFile):
            raise web.HTTPNotFound()

        return self._file_response(request, resolution)

    def _resolve_index(self, dir_path: URLPath) -> Resolution:
        """Resolve the index file of a directory request path."""
        index = self._resolver.resolve(URLPath(dir_path + quote(self._index_file)))
        if isinstance(index, Directory):
            return NotFound()
        return index

    def _file_response(
        self,
        request: web.Request,
        file: RegularFile,
    ) -> web.FileResponse:
        """Stream a resolved file, leaving ranges and conditionals to aiohttp.

        A file that disappears or becomes unreadable after resolution is
        answered with 404 or 403 by FileResponse itself.
        """
        rng = request.headers.get(hdrs.RANGE)
        if (
            rng is not None
            and hdrs.IF_RANGE not in request.headers
            and _ZERO_SUFFIX_RANGE.match(rng.strip())
        ):
            # http_range reads "-0" as the whole file
            raise web.HTTPRequestRangeNotSatisfiable(
                headers={hdrs.CONTENT_RANGE: f"bytes */{file.size}"},
            )

        return web.FileResponse(
            file.path,
            chunk_size=self._chunk_size,
            headers={hdrs.CONTENT_TYPE: content_type_for(file.path)},
        )


def _last_segment(raw_path: str) -> str:
    """Return the last non-empty segment of a raw path, still encoded."""
    return raw_path.rstrip("/").rsplit("/", 1)[-1]


def _local_redirect(request: web.Request, location: str) -> web.HTTPMovedPermanently:
    """Build a relative redirect that keeps the query string."""
    query = request.rel_url.raw_query_string
    if query:
        location = f"{location}?{query}"
    return web.HTTPMovedPermanently(location=location)


def create_static_routes(static_files: StaticFiles) -> list[web.RouteDef]:
    """Create the catch-all route serving static files.

    GET routes also answer HEAD; other methods get 405 from the router.

    Args:
        static_files: Handler bound to a root directory

    Returns:
        List of route definitions
    """
    return [web.get("/{path:.*}", static_files.handle)]
