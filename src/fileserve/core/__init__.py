"""Request path resolution and content type lookup."""

from .content_types import content_type_for
from .resolver import (
    Directory,
    Forbidden,
    NotFound,
    PathResolver,
    RegularFile,
    Resolution,
)

__all__ = [
    "Directory",
    "Forbidden",
    "NotFound",
    "PathResolver",
    "RegularFile",
    "Resolution",
    "content_type_for",
]
