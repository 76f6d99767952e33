"""Install command implementation"""

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
def install(ctx, vimfiles_path):
    """Install flavors declared in the VimFlavor file

    Flavors already recorded in VimFlavor.lock keep their locked version
    as long as their constraint is unchanged. New flavors, and flavors
    whose constraint changed, are locked to the newest satisfying version.

    Examples:

        # Install into ~/.vim
        vim-flavor install

        # Install into another vimfiles directory
        vim-flavor install --vimfiles-path ~/dotfiles/vim
    """
    try:
        progress = None if ctx.obj.quiet else progress_printer(console)
        facade = Facade(config=ctx.obj.config, progress=progress)
        result = facade.install(vimfiles_path)

    except FlavorError as e:
        print_flavor_error(e)
        sys.exit(1)

    if not ctx.obj.quiet:
        format_install_result(result)
