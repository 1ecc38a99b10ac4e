"""Application keys for type-safe app configuration access."""

from aiohttp import web

from fileserve.core.resolver import PathResolver
from fileserve.responder import StaticFiles

resolver_key = web.AppKey("resolver", PathResolver)
static_files_key = web.AppKey("static_files", StaticFiles)
