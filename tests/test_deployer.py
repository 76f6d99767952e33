"""Tests for deployment and bootstrap generation."""

import re

import pytest

from fakes import FakeHelpIndexer, QUICKRUN, SMARTINPUT
from vim_flavor.api.exceptions import DeploymentError
from vim_flavor.core import DeploymentOrchestrator
from vim_flavor.models import Flavor, Version
from vim_flavor.utils import render_template, vim_string_list


def locked(name, version):
    flavor = Flavor.declare(name, groups=["default"])
    flavor.lock(Version(version))
    return flavor


def flavor_names(script):
    match = re.search(r"^let s:flavor_names = \[(.*)\]$", script, re.MULTILINE)
    return re.findall(r"'([^']*)'", match.group(1))


@pytest.fixture
def orchestrator(fake_vcs, dot_path):
    return DeploymentOrchestrator(fake_vcs, dot_path, FakeHelpIndexer())


class TestBootstrap:
    def test_lists_flavors_in_deployment_order(self, orchestrator):
        script = orchestrator.render_bootstrap([
            locked("thinca/vim-quickrun", "0.5.0"),
            locked("kana/vim-smartinput", "0.0.4"),
        ])

        assert flavor_names(script) == ["thinca_vim-quickrun", "kana_vim-smartinput"]

    def test_after_dirs_are_reversed(self, orchestrator):
        script = orchestrator.render_bootstrap([locked("kana/vim-smartinput", "0.0.4")])

        assert "reverse(copy(flavor_dirs))" in script
        rtp_order = re.findall(r"\\ \+ (\S+)", script)
        assert rtp_order == ["[user_dir]", "flavor_dirs", "base_rtps",
                             "flavor_after_dirs", "[user_after_dir]"]

    def test_resolves_flavors_dir_from_script_location(self, orchestrator):
        script = orchestrator.render_bootstrap([])

        assert "expand('<sfile>:p:h')" in script
        assert flavor_names(script) == []

    def test_quotes_are_escaped(self):
        assert vim_string_list(["it's", "plain"]) == "'it''s', 'plain'"

    def test_render_template(self):
        assert render_template("a ${x} $y", {'x': 1, 'y': 'b'}) == "a 1 b"
        assert render_template("a $missing", {}, safe=True) == "a $missing"


class TestDeploy:
    def test_deploys_every_flavor(self, orchestrator, vimfiles):
        bootstrap = orchestrator.deploy([
            locked("thinca/vim-quickrun", "0.5.0"),
            locked("kana/vim-smartinput", "0.0.4"),
        ], vimfiles)

        flavors_dir = vimfiles / "flavors"
        assert bootstrap == flavors_dir / "bootstrap.vim"
        assert sorted(p.name for p in flavors_dir.iterdir()) == [
            "bootstrap.vim", "kana_vim-smartinput", "thinca_vim-quickrun"
        ]
        assert (flavors_dir / "thinca_vim-quickrun" / "plugin" / "vim-quickrun.vim").read_text() == \
            '" vim-quickrun 0.5.0\n'

    def test_wipes_previous_deployment(self, orchestrator, vimfiles):
        stale = vimfiles / "flavors" / "old_plugin"
        stale.mkdir(parents=True)
        (stale / "plugin.vim").write_text("")

        orchestrator.deploy([locked("kana/vim-smartinput", "0.0.4")], vimfiles)

        assert not stale.exists()

    def test_leaves_rest_of_vimfiles_alone(self, orchestrator, vimfiles):
        vimrc = vimfiles / "vimrc"
        vimfiles.mkdir()
        vimrc.write_text("runtime flavors/bootstrap.vim\n")

        orchestrator.deploy([], vimfiles)

        assert vimrc.read_text() == "runtime flavors/bootstrap.vim\n"
        assert (vimfiles / "flavors" / "bootstrap.vim").exists()

    def test_checkout_revision_and_help_index(self, fake_vcs, dot_path, vimfiles):
        fake_vcs.files[(SMARTINPUT, "0.0.4")] = {
            "plugin/smartinput.vim": "",
            "doc/smartinput.txt": "*smartinput.txt*",
            "after/plugin/smartinput.vim": "",
        }
        indexer = FakeHelpIndexer()
        orchestrator = DeploymentOrchestrator(fake_vcs, dot_path, indexer)

        orchestrator.deploy([locked("kana/vim-smartinput", "0.0.4")], vimfiles)

        target = vimfiles / "flavors" / "kana_vim-smartinput"
        assert fake_vcs.operations('checkout') == [
            ('checkout', dot_path / "repos" / "kana_vim-smartinput", "0.0.4", target)
        ]
        assert (target / "doc" / "smartinput.txt").exists()
        assert (target / "after" / "plugin" / "smartinput.vim").exists()
        assert indexer.directories == [target]

    def test_progress_messages(self, fake_vcs, dot_path, vimfiles):
        messages = []
        orchestrator = DeploymentOrchestrator(fake_vcs, dot_path, progress=messages.append)

        orchestrator.deploy([
            locked("thinca/vim-quickrun", "0.5.0"),
            locked("kana/vim-smartinput", "0.0.4"),
        ], vimfiles)

        assert messages == [
            "Deploying thinca/vim-quickrun (0.5.0)",
            "Deploying kana/vim-smartinput (0.0.4)",
        ]

    def test_failure_aborts_remaining_flavors(self, fake_vcs, dot_path, vimfiles):
        fake_vcs.tags[QUICKRUN] = []
        orchestrator = DeploymentOrchestrator(fake_vcs, dot_path)

        with pytest.raises(DeploymentError) as exc_info:
            orchestrator.deploy([
                locked("thinca/vim-quickrun", "0.5.0"),
                locked("kana/vim-smartinput", "0.0.4"),
            ], vimfiles)

        assert exc_info.value.source_name == "thinca/vim-quickrun"
        assert exc_info.value.step == "checkout"
        assert not (vimfiles / "flavors" / "kana_vim-smartinput").exists()

    def test_unlocked_flavor_fails(self, orchestrator, vimfiles):
        with pytest.raises(DeploymentError):
            orchestrator.deploy([Flavor.declare("kana/vim-smartinput")], vimfiles)
