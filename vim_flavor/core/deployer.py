"""Deployment of locked flavors into a vimfiles directory"""

import logging
from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence

from ..api.exceptions import DeploymentError
from ..constants import BOOTSTRAP_FILE_NAME, MSG_DEPLOYING_FLAVOR, RepositoryStep
from ..models.flavor import Flavor
from ..templates import BOOTSTRAP_TEMPLATE, load_template
from ..utils.file_utils import atomic_write_text, flavors_path, remove_path
from ..utils.template_utils import render_template, vim_string_list
from ..vcs.base import HelpIndexer, VersionControlClient


class DeploymentOrchestrator:
    """Rebuild the flavors tree of a vimfiles directory

    Deployment is all or nothing per run: the whole flavors tree is wiped
    first and the first failing flavor aborts the run, leaving the tree
    incomplete until the next successful deployment.
    """

    def __init__(self,
                 vcs: VersionControlClient,
                 dot_path: Path,
                 help_indexer: Optional[HelpIndexer] = None,
                 progress: Optional[Callable[[str], None]] = None):
        """Initialize deployment orchestrator

        Args:
            vcs: Repository access backend
            dot_path: Cache root holding cloned repositories
            help_indexer: Help index builder run after each checkout
            progress: Optional callback receiving human-readable progress
        """
        self.vcs = vcs
        self.dot_path = Path(dot_path)
        self.help_indexer = help_indexer
        self.progress = progress
        self.logger = logging.getLogger("DeploymentOrchestrator")

    def deploy(self, flavors: Sequence[Flavor], vimfiles_path: Path) -> Path:
        """
        Deploy flavors in order

        Args:
            flavors: Locked flavors, in deployment order
            vimfiles_path: Target vimfiles directory

        Returns:
            Path to the generated bootstrap script

        Raises:
            DeploymentError: If wiping or any checkout fails
        """
        vimfiles_path = Path(vimfiles_path)
        flavors = list(flavors)

        self.wipe(vimfiles_path)
        bootstrap_path = self.create_bootstrap_script(flavors, vimfiles_path)

        for flavor in flavors:
            message = MSG_DEPLOYING_FLAVOR.format(
                name=flavor.source_name,
                version=flavor.locked_version
            )
            self.logger.info(message)
            if self.progress:
                self.progress(message)

            flavor.checkout_into(
                flavor.make_deploy_path(vimfiles_path),
                self.vcs,
                self.dot_path,
                self.help_indexer
            )

        return bootstrap_path

    def wipe(self, vimfiles_path: Path) -> None:
        """Remove the whole flavors tree"""
        target = flavors_path(vimfiles_path)
        try:
            if remove_path(target):
                self.logger.debug(f"Removed {target}")
        except OSError as e:
            raise DeploymentError(
                f"Failed to remove {target}: {e}",
                step=RepositoryStep.WIPE.value
            ) from e

    def render_bootstrap(self, flavors: Iterable[Flavor]) -> str:
        """Render the bootstrap script for flavors in deployment order"""
        template = load_template(*BOOTSTRAP_TEMPLATE)
        return render_template(template, {
            'flavor_names': vim_string_list(
                f.zapped_repo_dir_name for f in flavors
            )
        })

    def create_bootstrap_script(self, flavors: Iterable[Flavor], vimfiles_path: Path) -> Path:
        """Write bootstrap.vim into the flavors tree

        Returns:
            Path to the written script
        """
        bootstrap_path = flavors_path(vimfiles_path) / BOOTSTRAP_FILE_NAME
        atomic_write_text(bootstrap_path, self.render_bootstrap(flavors))
        self.logger.debug(f"Wrote {bootstrap_path}")
        return bootstrap_path
