"""Pytest configuration and fixtures for vim-flavor tests.

This conftest.py ensures tests work for both developers (editable install)
and users (pip installed package).
"""
import sys
import logging
import textwrap
import pytest
from pathlib import Path
from click.testing import CliRunner


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests that run install/upgrade end to end"
    )


@pytest.fixture(scope="session", autouse=True)
def setup_test_path():
    """Ensure the package root and tests directory are in the Python path."""
    package_root = Path(__file__).parent.parent
    tests_root = Path(__file__).parent

    for path in (package_root, tests_root):
        path_str = str(path)
        if path_str not in sys.path:
            sys.path.insert(0, path_str)

    yield


@pytest.fixture(autouse=True)
def reset_logging_disable():
    """`vim-flavor -q` disables logging process-wide; undo it after each test."""
    yield
    logging.disable(logging.NOTSET)


@pytest.fixture
def fake_vcs():
    """Fake repositories with a handful of tags each."""
    from fakes import FakeVersionControlClient, QUICKRUN, SMARTINPUT, TEXTOBJ_USER

    return FakeVersionControlClient({
        TEXTOBJ_USER: ["0.1.0", "0.3.11", "0.3.12", "0.4.0", "wip"],
        SMARTINPUT: ["0.0.3", "0.0.4", "0.0.5", "0.1.0"],
        QUICKRUN: ["0.4.0", "0.5.0", "0.6.0"],
    })


@pytest.fixture
def help_indexer():
    from fakes import FakeHelpIndexer

    return FakeHelpIndexer()


@pytest.fixture
def dot_path(tmp_path):
    """Cache root for cloned repositories."""
    return tmp_path / "dot"


@pytest.fixture
def vimfiles(tmp_path):
    """Target vimfiles directory."""
    return tmp_path / "vimfiles"


@pytest.fixture
def config(tmp_path, dot_path, vimfiles):
    from vim_flavor.models import FlavorConfig

    return FlavorConfig(
        dot_path=dot_path,
        flavorfile_path=tmp_path / "VimFlavor",
        lockfile_path=tmp_path / "VimFlavor.lock",
        vimfiles_path=vimfiles,
    )


@pytest.fixture
def write_flavorfile(config):
    """Write a VimFlavor file, dedenting the given YAML."""
    def write(content: str) -> Path:
        config.flavorfile_path.write_text(textwrap.dedent(content))
        return config.flavorfile_path

    return write


@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()
