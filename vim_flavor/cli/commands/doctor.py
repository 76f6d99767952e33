"""System diagnostic command"""

import shutil
import sys

import click
from rich import box
from rich.markup import escape
from rich.table import Table

from ..utils.output import console
from ...api.exceptions import FlavorError
from ...core import LockStore, load_manifest


class DiagnosticCheck:
    """Base class for diagnostic checks"""

    def __init__(self, name: str, description: str):
        self.name = name
        self.description = description
        self.passed = False
        self.message = ""

    def run(self, ctx) -> 'DiagnosticCheck':
        """Run the diagnostic check"""
        raise NotImplementedError


class ExecutableCheck(DiagnosticCheck):
    """Check that an external command is on PATH"""

    def __init__(self, executable: str, purpose: str):
        super().__init__(
            f"{executable.capitalize()} Executable",
            f"Verify '{executable}' is available for {purpose}"
        )
        self.executable = executable

    def run(self, ctx):
        location = shutil.which(self.executable)

        if location:
            self.passed = True
            self.message = f"Found at {location}"
        else:
            self.passed = False
            self.message = f"'{self.executable}' not found on PATH"

        return self


class ManifestCheck(DiagnosticCheck):
    """Check that the VimFlavor file parses"""

    def __init__(self):
        super().__init__(
            "VimFlavor File",
            "Verify the VimFlavor file can be read"
        )

    def run(self, ctx):
        config = ctx.obj.config

        try:
            manifest = load_manifest(config.flavorfile_path, config.protocol)
        except FlavorError as e:
            self.passed = False
            self.message = str(e)
        else:
            self.passed = True
            self.message = f"{len(manifest)} flavor(s) declared"

        return self


class LockFileCheck(DiagnosticCheck):
    """Check that the lock file parses"""

    def __init__(self):
        super().__init__(
            "Lock File",
            "Verify VimFlavor.lock can be read"
        )

    def run(self, ctx):
        try:
            lockfile_path = ctx.obj.config.lockfile_path
            lockfile = LockStore.load(lockfile_path)
        except FlavorError as e:
            self.passed = False
            self.message = str(e)
        else:
            self.passed = True
            if lockfile_path.exists():
                self.message = f"{len(lockfile)} flavor(s) locked"
            else:
                self.message = "No lock file yet"

        return self


@click.command()
@click.option('--check', multiple=True,
              type=click.Choice(['all', 'git', 'vim', 'flavorfile', 'lockfile']),
              default=['all'],
              help='Specific checks to run')
@click.pass_context
def doctor(ctx, check):
    """Run system diagnostics

    This command checks that the external tools vim-flavor relies on are
    installed and that the VimFlavor and VimFlavor.lock files are valid.

    Examples:

        # Run all checks
        vim-flavor doctor

        # Run specific checks
        vim-flavor doctor --check git --check flavorfile
    """
    console.print("[bold]vim-flavor Diagnostics[/bold]\n")

    # Determine which checks to run
    all_checks = {
        'git': ExecutableCheck('git', 'fetching repositories'),
        'vim': ExecutableCheck('vim', 'building help tags'),
        'flavorfile': ManifestCheck(),
        'lockfile': LockFileCheck()
    }

    if 'all' in check:
        checks_to_run = list(all_checks.values())
    else:
        checks_to_run = [all_checks[c] for c in check if c in all_checks]

    # Run checks
    failed_checks = []
    for diagnostic_check in checks_to_run:
        diagnostic_check.run(ctx)
        if not diagnostic_check.passed:
            failed_checks.append(diagnostic_check)

    # Display results
    table = Table(title="Diagnostic Results", box=box.ROUNDED)
    table.add_column("Check", style="cyan")
    table.add_column("Status", justify="center")
    table.add_column("Details")

    for diagnostic_check in checks_to_run:
        status = "[green]✓ PASS[/green]" if diagnostic_check.passed else "[red]✗ FAIL[/red]"
        table.add_row(
            diagnostic_check.name,
            status,
            escape(diagnostic_check.message)
        )

    console.print(table)

    # Exit code based on results
    if failed_checks:
        console.print(f"\n[red]{len(failed_checks)} check(s) failed[/red]")
        sys.exit(1)
    else:
        console.print("\n[green]All checks passed![/green]")
