# vim_flavor/vcs/git.py
"""Git backend for repository access"""

import logging
import os
import subprocess
from pathlib import Path
from typing import List, Optional, Union

from .base import VersionControlClient
from ..api.exceptions import RepositoryAccessError
from ..constants import DEFAULT_GIT_TIMEOUT, RepositoryStep


class GitClient(VersionControlClient):
    """Version control client that shells out to the git executable"""

    def __init__(self, executable: str = "git", timeout: int = DEFAULT_GIT_TIMEOUT):
        """
        Initialize git client

        Args:
            executable: Git executable name or path
            timeout: Seconds before a git command is abandoned
        """
        self.executable = executable
        self.timeout = timeout
        self.logger = logging.getLogger("GitClient")

    def _run(self,
             args: List[str],
             step: RepositoryStep,
             cwd: Optional[Union[str, Path]] = None) -> str:
        """
        Run a git command, capturing combined output

        Args:
            args: Arguments after the executable
            step: Step reported on failure
            cwd: Working directory

        Returns:
            Captured output

        Raises:
            RepositoryAccessError: If git is missing, times out or fails
        """
        cmd = [self.executable] + args
        self.logger.debug(f"Running {' '.join(cmd)} in {cwd or '.'}")

        try:
            result = subprocess.run(
                cmd,
                cwd=str(cwd) if cwd else None,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                encoding='utf-8',
                errors='replace',
                timeout=self.timeout
            )
        except FileNotFoundError:
            raise RepositoryAccessError(
                f"Git executable not found: {self.executable}",
                step=step.value
            ) from None
        except subprocess.TimeoutExpired as e:
            output = e.output or ""
            if isinstance(output, bytes):
                output = output.decode(errors='replace')
            raise RepositoryAccessError(
                f"git {args[0]} timed out after {self.timeout} seconds",
                output=output,
                step=step.value
            ) from None

        if result.returncode != 0:
            raise RepositoryAccessError(
                f"git {args[0]} failed with exit code {result.returncode}",
                output=result.stdout or "",
                step=step.value
            )

        return result.stdout or ""

    def clone(self, uri: str, dest: Path) -> None:
        self._run(['clone', uri, str(dest)], RepositoryStep.CLONE)

    def fetch(self, dest: Path) -> None:
        self._run(['fetch', '--tags', 'origin'], RepositoryStep.FETCH, cwd=dest)

    def list_tags(self, dest: Path) -> List[str]:
        output = self._run(['tag'], RepositoryStep.LIST_TAGS, cwd=dest)
        return [line.strip() for line in output.splitlines() if line.strip()]

    def checkout(self, dest: Path, revision: str, output_dir: Path) -> None:
        # checkout-index needs the trailing separator to treat prefix as a directory
        prefix = Path(os.path.abspath(output_dir)).as_posix().rstrip('/') + '/'
        self._run(['checkout', '-f', revision], RepositoryStep.CHECKOUT, cwd=dest)
        self._run(
            ['checkout-index', '-a', '-f', f'--prefix={prefix}'],
            RepositoryStep.CHECKOUT,
            cwd=dest
        )
