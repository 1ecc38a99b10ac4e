"""CLI interface for Fileserve.

Command-line tool for serving a directory of static files over HTTP.
"""

import logging
import sys
from pathlib import Path

import click

from fileserve.config import Config

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@click.command()
@click.option(
    "--listen-addr",
    default=None,
    help="Server listen address as [host]:port (default: from config or :5000)",
)
@click.option(
    "--root-dir",
    "-r",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Directory to serve (default: from config or ./static)",
)
@click.option(
    "--index-file",
    default=None,
    help="File served for directory requests (default: index.html)",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover fileserve.toml)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable debug logging",
)
def cli(
    listen_addr: str | None,
    root_dir: Path | None,
    index_file: str | None,
    config_path: Path | None,
    verbose: bool,
) -> None:
    """Fileserve - serve static files over HTTP."""
    from fileserve.server import run_server

    setup_logging(verbose=verbose)

    try:
        config = Config.load(config_path).with_overrides(
            listen_addr=listen_addr,
            root_dir=root_dir,
            index_file=index_file,
        )
    except (FileNotFoundError, ValueError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    click.echo(f"Serving {config.static.root_dir} on {config.server.listen_addr}")
    if config.config_path is not None:
        click.echo(f"Configuration: {config.config_path}")

    try:
        run_server(config)
    except OSError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        click.echo("Shutting down")


def setup_logging(*, verbose: bool = False) -> None:
    """Configure the root logger with a console handler.

    Args:
        verbose: Log at DEBUG instead of INFO
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)


if __name__ == "__main__":
    cli()
