# vim_flavor/vcs/helptags.py
"""Help tag indexing through Vim"""

import logging
import subprocess
from pathlib import Path

from .base import HelpIndexer
from ..constants import DEFAULT_HELPTAGS_TIMEOUT


class VimHelpIndexer(HelpIndexer):
    """Runs ``:helptags`` on a deployed flavor's doc directory"""

    def __init__(self, executable: str = "vim", timeout: int = DEFAULT_HELPTAGS_TIMEOUT):
        self.executable = executable
        self.timeout = timeout
        self.logger = logging.getLogger("VimHelpIndexer")

    def build_command(self, doc_dir: Path) -> list:
        """Command line running helptags in a bare, non-interactive Vim"""
        # a Vim string literal; fnameescape() guards spaces, | % and #
        quoted = "'" + doc_dir.as_posix().replace("'", "''") + "'"
        return [
            self.executable,
            '-u', 'NONE', '-i', 'NONE', '-n', '-N', '-e', '-s',
            '-c', f"execute 'silent! helptags' fnameescape({quoted})",
            '-c', 'qall!',
        ]

    def rebuild(self, directory: Path) -> bool:
        doc_dir = Path(directory) / 'doc'
        if not doc_dir.is_dir():
            self.logger.debug(f"No doc directory in {directory}, skipping helptags")
            return False

        try:
            result = subprocess.run(
                self.build_command(doc_dir),
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                encoding='utf-8',
                errors='replace',
                timeout=self.timeout
            )
        except (FileNotFoundError, subprocess.TimeoutExpired, OSError) as e:
            self.logger.warning(f"Failed to rebuild help tags in {doc_dir}: {e}")
            return False

        if result.returncode != 0:
            self.logger.warning(
                f"helptags exited with code {result.returncode} in {doc_dir}: "
                f"{(result.stdout or '').strip()}"
            )
            return False

        return True
