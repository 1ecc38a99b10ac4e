"""aiohttp server for Fileserve.

Application factory, listener startup and the blocking run loop.
"""

import asyncio
import logging
from collections.abc import Sequence

from aiohttp import web

from fileserve.app_keys import resolver_key, static_files_key
from fileserve.config import Config
from fileserve.core.resolver import PathResolver
from fileserve.responder import StaticFiles, create_static_routes

logger = logging.getLogger(__name__)


def create_app(config: Config) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration

    Returns:
        Configured aiohttp application
    """
    app = web.Application()

    resolver = PathResolver(config.static.root_dir)
    static_files = StaticFiles(resolver, index_file=config.static.index_file)

    app[resolver_key] = resolver
    app[static_files_key] = static_files

    app.router.add_routes(create_static_routes(static_files))

    return app


async def start_server(config: Config) -> web.AppRunner:
    """Bind the listener and start accepting connections.

    Logs one "Listening on ..." line per bound socket, with the real port when
    port 0 was requested.

    Args:
        config: Application configuration

    Returns:
        Running AppRunner; call cleanup() on it to stop the server

    Raises:
        OSError: If the listener cannot bind to the configured address
    """
    listen_addr = config.server.listen_addr
    runner = web.AppRunner(create_app(config))
    await runner.setup()

    site = web.TCPSite(runner, host=listen_addr.bind_host, port=listen_addr.port)
    try:
        await site.start()
    except OSError as e:
        logger.error(f"Failed to listen on {listen_addr}: {e}")
        await runner.cleanup()
        raise

    for address in runner.addresses:
        logger.info(f"Listening on {format_address(address)}...")

    return runner


def format_address(address: Sequence[object] | str) -> str:
    """Format a socket address as host:port, bracketing IPv6 hosts."""
    if isinstance(address, str):
        return address
    host, port = str(address[0]), address[1]
    if ":" in host:
        host = f"[{host}]"
    return f"{host}:{port}"


async def _serve(config: Config) -> None:
    """Serve until the task is cancelled."""
    runner = await start_server(config)
    try:
        await asyncio.Event().wait()
    finally:
        await runner.cleanup()


def run_server(config: Config) -> None:
    """Run the server until interrupted.

    Args:
        config: Application configuration

    Raises:
        OSError: If the listener cannot bind to the configured address
    """
    root_dir = config.static.root_dir
    if not root_dir.is_dir():
        logger.warning(f"Root directory {root_dir} does not exist")

    asyncio.run(_serve(config))
