"""List command implementation"""

import sys

import click

from ..utils.output import format_flavor_list, print_flavor_error
from ...api.exceptions import FlavorError
from ...core import LockStore


@click.command(name='list')
@click.pass_context
def list_flavors(ctx):
    """List flavors recorded in the lock file"""
    try:
        lockfile = LockStore.load(ctx.obj.config.lockfile_path)
    except FlavorError as e:
        print_flavor_error(e)
        sys.exit(1)

    format_flavor_list(lockfile)
