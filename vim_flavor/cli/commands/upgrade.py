"""Upgrade command implementation"""

import sys
from pathlib import Path

import click

from ..utils.output import console, format_install_result, print_flavor_error, progress_printer
from ...api import Facade
from ...api.exceptions import FlavorError


@click.command()
@click.option('--vimfiles-path', type=click.Path(file_okay=False, path_type=Path),
              help='Vimfiles directory to deploy into (default: ~/.vim)')
@click.pass_context
def upgrade(ctx, vimfiles_path):
    """Upgrade every flavor to the newest allowed version

    Locked versions are ignored: each flavor's repository is fetched and
    the newest tag satisfying its constraint is locked and deployed.

    Examples:

        vim-flavor upgrade
    """
    try:
        progress = None if ctx.obj.quiet else progress_printer(console)
        facade = Facade(config=ctx.obj.config, progress=progress)
        result = facade.upgrade(vimfiles_path)

    except FlavorError as e:
        print_flavor_error(e)
        sys.exit(1)

    if not ctx.obj.quiet:
        format_install_result(result)
