"""
Click-based command line interface.

    harkit generate capture.har --format fetch
    harkit scan capture.har --page-url https://app.example.com/users
    harkit pages list
"""
import logging
from pathlib import Path

import click

from harkit import __version__
from harkit.cli.common import CLIContext
from harkit.cli.commands.codegen import generate, response
from harkit.cli.commands.headers import headers
from harkit.cli.commands.scan import pages, scan
from harkit.cli.commands.web import serve


@click.group()
@click.version_option(__version__, prog_name='harkit')
@click.option(
    '--store-path',
    type=click.Path(dir_okay=False, path_type=Path),
    envvar='HARKIT_STORE_PATH',
    help='SQLite file for settings and the page map (default: OS-specific location)'
)
@click.option(
    '--ephemeral',
    is_flag=True,
    help='Keep settings and scans in memory only for this run'
)
@click.option('-v', '--verbose', count=True, help='-v for info logs, -vv for debug')
@click.pass_context
def main(ctx, store_path, ephemeral, verbose):
    """Turn captured HAR exchanges into code, summaries and page-to-API maps."""
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format='%(levelname)s %(name)s: %(message)s')

    ctx.obj = CLIContext(store_path=store_path, ephemeral=ephemeral)
    ctx.call_on_close(ctx.obj.close)


main.add_command(generate)
main.add_command(response)
main.add_command(headers)
main.add_command(scan)
main.add_command(pages)
main.add_command(serve)
