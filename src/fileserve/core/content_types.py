"""Fixed extension to MIME type table.

Lookups never consult the host's mime.types files, so the same file
gets the same Content-Type on every machine.
"""

from pathlib import PurePath

DEFAULT_CONTENT_TYPE = "application/octet-stream"

_UTF8 = "; charset=utf-8"

CONTENT_TYPES: dict[str, str] = {
    # Text
    ".css": "text/css" + _UTF8,
    ".csv": "text/csv" + _UTF8,
    ".htm": "text/html" + _UTF8,
    ".html": "text/html" + _UTF8,
    ".js": "text/javascript" + _UTF8,
    ".md": "text/markdown" + _UTF8,
    ".mjs": "text/javascript" + _UTF8,
    ".txt": "text/plain" + _UTF8,
    ".xml": "text/xml" + _UTF8,
    # Structured data
    ".json": "application/json",
    ".map": "application/json",
    ".pdf": "application/pdf",
    ".wasm": "application/wasm",
    ".webmanifest": "application/manifest+json",
    ".zip": "application/zip",
    # Images
    ".avif": "image/avif",
    ".gif": "image/gif",
    ".ico": "image/vnd.microsoft.icon",
    ".jpeg": "image/jpeg",
    ".jpg": "image/jpeg",
    ".png": "image/png",
    ".svg": "image/svg+xml",
    ".webp": "image/webp",
    # Fonts
    ".otf": "font/otf",
    ".ttf": "font/ttf",
    ".woff": "font/woff",
    ".woff2": "font/woff2",
    # Media
    ".mp3": "audio/mpeg",
    ".mp4": "video/mp4",
    ".ogg": "audio/ogg",
    ".wav": "audio/wav",
    ".webm": "video/webm",
}


def content_type_for(path: PurePath | str) -> str:
    """Return the Content-Type for a file based on its extension.

    Args:
        path: File path or name

    Returns:
        MIME type from the fixed table, or application/octet-stream
    """
    suffix = PurePath(path).suffix.lower()
    return CONTENT_TYPES.get(suffix, DEFAULT_CONTENT_TYPE)
