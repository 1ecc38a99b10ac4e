from fileserve.cli import cli

cli()
