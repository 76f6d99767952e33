# vim_flavor/cli/main.py
"""Main CLI entry point for vim-flavor"""

import os
import sys
import logging
from pathlib import Path
from typing import Optional

import click
from rich.logging import RichHandler

from ..__version__ import get_version
from ..constants import APP_NAME, ENV_LOG_LEVEL, LOG_FORMAT
from ..api.exceptions import FlavorError
from ..models import FlavorConfig
from .utils.output import console, print_flavor_error

# Import all commands
from .commands import (
    install,
    upgrade,
    list_cmd,
    doctor
)


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Setup logging configuration

    Args:
        verbose: Enable verbose output (INFO level)
        debug: Enable debug output (DEBUG level)
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.getLevelName(os.environ.get(ENV_LOG_LEVEL, "WARNING").upper())
        if not isinstance(level, int):
            level = logging.WARNING

    # Configure rich handler
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            RichHandler(
                console=console,
                show_time=debug,
                show_path=debug,
                rich_tracebacks=True,
                tracebacks_suppress=[click]
            )
        ],
        force=True
    )


class Context:
    """CLI context object with lazy configuration

    Configuration is read from the environment only when a command first
    asks for it, so that `--help` works even with a broken environment.
    """

    def __init__(self):
        """Initialize CLI context"""
        self._config: Optional[FlavorConfig] = None
        self.overrides = {}
        self.verbose: bool = False
        self.debug: bool = False
        self.quiet: bool = False

    @property
    def config(self) -> FlavorConfig:
        """Get configuration (lazy loading)

        Raises:
            ConfigError: If an environment setting is invalid
        """
        if self._config is None:
            self._config = FlavorConfig.from_env().with_overrides(**self.overrides)
            if self.debug:
                console.print(f"[dim]Cache root: {self._config.dot_path}[/dim]")
        return self._config


@click.group(name=APP_NAME)
@click.version_option(version=get_version(), prog_name=APP_NAME)
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
@click.option('-d', '--debug', is_flag=True, help='Enable debug output')
@click.option('-q', '--quiet', is_flag=True, help='Suppress all output except errors')
@click.option('--flavorfile', type=click.Path(dir_okay=False, path_type=Path),
              help='Path to the VimFlavor file (default: ./VimFlavor)')
@click.option('--lockfile', type=click.Path(dir_okay=False, path_type=Path),
              help='Path to the lock file (default: ./VimFlavor.lock)')
@click.option('--cache-dir', type=click.Path(file_okay=False, path_type=Path),
              help='Directory holding cloned repositories (default: ~/.vim-flavor)')
@click.pass_context
def cli(ctx, verbose, debug, quiet, flavorfile, lockfile, cache_dir):
    """vim-flavor - A tool to manage your favorite Vim plugins

    Declare plugins with version constraints in a VimFlavor file.
    `install` locks each of them to a concrete version in VimFlavor.lock
    and deploys them into the flavors directory of your vimfiles;
    `upgrade` moves every plugin to the newest version its constraint
    allows.

    Load the deployed plugins by adding this line to your vimrc:

        runtime flavors/bootstrap.vim
    """
    # Setup logging
    if quiet:
        logging.disable(logging.CRITICAL)
    else:
        setup_logging(verbose=verbose, debug=debug)

    # Create context with lazy initialization
    ctx.obj = Context()
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug
    ctx.obj.quiet = quiet
    ctx.obj.overrides = {
        'flavorfile_path': flavorfile,
        'lockfile_path': lockfile,
        'dot_path': cache_dir,
    }


# Register commands
cli.add_command(install.install)
cli.add_command(upgrade.upgrade)
cli.add_command(list_cmd.list_flavors)
cli.add_command(doctor.doctor)


def main():
    """Main entry point for the CLI application

    This function handles:
    - Flavor errors with the failing flavor and step
    - Keyboard interrupts
    - Unexpected exceptions with proper error display
    """
    try:
        cli(prog_name=APP_NAME, standalone_mode=False)

    except click.exceptions.Abort:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)

    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)

    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)

    except FlavorError as e:
        print_flavor_error(e)
        sys.exit(1)

    except Exception as e:
        console.print(f"[red]Unexpected error: {e}[/red]")
        if '--debug' in sys.argv or '-d' in sys.argv:
            console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
