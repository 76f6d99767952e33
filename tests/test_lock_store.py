"""Tests for lock file persistence."""

import textwrap

import pytest
import yaml

from fakes import SMARTINPUT, TEXTOBJ_USER
from vim_flavor.api.exceptions import LockFileFormatError
from vim_flavor.core import LockStore
from vim_flavor.models import Flavor, Version


def locked_flavor(name, constraint, version, groups=("default",)):
    flavor = Flavor.declare(name, constraint, list(groups))
    flavor.lock(Version(version))
    return flavor


@pytest.fixture
def lock(tmp_path):
    return LockStore(tmp_path / "VimFlavor.lock", {
        TEXTOBJ_USER: locked_flavor("kana/vim-textobj-user", "~> 0.3", "0.3.12"),
        SMARTINPUT: locked_flavor("kana/vim-smartinput", ">= 0", "1.0", ["default", "dev"]),
    })


class TestLockStore:
    def test_missing_file_is_empty(self, tmp_path):
        store = LockStore.load(tmp_path / "VimFlavor.lock")

        assert len(store) == 0
        assert store.path == tmp_path / "VimFlavor.lock"

    def test_save_load_round_trip(self, lock):
        lock.save()

        assert LockStore.load(lock.path) == lock

    def test_load_save_keeps_content(self, lock):
        lock.save()
        content = lock.path.read_text()

        LockStore.load(lock.path).save()

        assert lock.path.read_text() == content

    def test_file_format(self, lock):
        lock.save()
        data = yaml.safe_load(lock.path.read_text())

        assert data == {
            'flavors': {
                TEXTOBJ_USER: {
                    'groups': ['default'],
                    'locked_version': '0.3.12',
                    'source_name': 'kana/vim-textobj-user',
                    'constraint': '~> 0.3',
                },
                SMARTINPUT: {
                    'groups': ['default', 'dev'],
                    'locked_version': '1.0',
                    'source_name': 'kana/vim-smartinput',
                    'constraint': '>= 0',
                },
            }
        }

    def test_insertion_order_is_kept(self, lock):
        lock.save()
        assert list(LockStore.load(lock.path).flavors) == [TEXTOBJ_USER, SMARTINPUT]

    def test_save_leaves_no_temporary_files(self, lock, tmp_path):
        lock.save()

        assert sorted(p.name for p in tmp_path.iterdir()) == ["VimFlavor.lock"]

    def test_save_to_new_path(self, lock, tmp_path):
        target = tmp_path / "nested" / "VimFlavor.lock"

        assert lock.save(target) == target
        assert lock.path == target
        assert LockStore.load(target) == lock

    def test_save_without_path(self):
        with pytest.raises(ValueError):
            LockStore().save()

    def test_save_rejects_version_outside_constraint(self, lock):
        flavor = Flavor.declare("thinca/vim-quickrun", ">= 1.0", ["default"])
        flavor.locked_version = Version("0.1")
        lock.flavors[flavor.source_uri] = flavor

        with pytest.raises(LockFileFormatError, match="does not satisfy"):
            lock.save()
        assert not lock.path.exists()

    def test_save_rejects_unlocked_entry(self, lock):
        lock.save()
        content = lock.path.read_text()
        flavor = Flavor.declare("thinca/vim-quickrun")
        lock.flavors[flavor.source_uri] = flavor

        with pytest.raises(LockFileFormatError, match="no locked version"):
            lock.save()
        assert lock.path.read_text() == content

    def test_loads_hand_written_file(self):
        store = LockStore.loads(textwrap.dedent(f"""
            flavors:
              {TEXTOBJ_USER}:
                groups: [default]
                locked_version: 0.3.12
                source_name: kana/vim-textobj-user
                constraint: ~> 0.3
        """))

        flavor = store.get(TEXTOBJ_USER)
        assert flavor.locked_version == Version("0.3.12")
        assert str(flavor.constraint) == "~> 0.3"
        assert flavor.groups == ["default"]

    def test_numeric_version_is_read_as_text(self):
        store = LockStore.loads(textwrap.dedent(f"""
            flavors:
              {SMARTINPUT}:
                groups: [default]
                locked_version: 1.0
                source_name: kana/vim-smartinput
                constraint: '>= 0'
        """))

        assert store.get(SMARTINPUT).locked_version == Version("1.0")


class TestLockFileValidation:
    @pytest.mark.parametrize("content", [
        "[]\n",
        "something: else\n",
        "flavors: [a, b]\n",
        f"flavors:\n  {TEXTOBJ_USER}: 0.3\n",
        f"flavors:\n  {TEXTOBJ_USER}:\n    source_name: kana/vim-textobj-user\n",
        (f"flavors:\n  {TEXTOBJ_USER}:\n    groups: default\n    locked_version: '0.3'\n"
         f"    source_name: kana/vim-textobj-user\n    constraint: '>= 0'\n"),
        (f"flavors:\n  {TEXTOBJ_USER}:\n    groups: [default]\n    locked_version: latest\n"
         f"    source_name: kana/vim-textobj-user\n    constraint: '>= 0'\n"),
        (f"flavors:\n  {TEXTOBJ_USER}:\n    groups: [default]\n    locked_version: '0.3'\n"
         f"    source_name: kana/vim-textobj-user\n    constraint: 'newest'\n"),
        (f"flavors:\n  {TEXTOBJ_USER}:\n    groups: [default]\n    locked_version: null\n"
         f"    source_name: kana/vim-textobj-user\n    constraint: '>= 0'\n"),
        (f"flavors:\n  {TEXTOBJ_USER}:\n    groups: [default]\n    locked_version: '0.3'\n"
         f"    source_name: 123\n    constraint: '>= 0'\n"),
        (f"flavors:\n  {TEXTOBJ_USER}:\n    groups: [default, 7]\n    locked_version: '0.3'\n"
         f"    source_name: kana/vim-textobj-user\n    constraint: '>= 0'\n"),
        "flavors: [unclosed\n",
    ])
    def test_invalid_content(self, content):
        with pytest.raises(LockFileFormatError):
            LockStore.loads(content)

    def test_locked_version_must_satisfy_constraint(self):
        content = (
            f"flavors:\n  {TEXTOBJ_USER}:\n    groups: [default]\n    locked_version: '0.4.0'\n"
            f"    source_name: kana/vim-textobj-user\n    constraint: '~> 0.3'\n"
        )

        with pytest.raises(LockFileFormatError, match="does not satisfy"):
            LockStore.loads(content)

    @pytest.mark.parametrize("content", ["", "flavors:\n"])
    def test_empty_content(self, content):
        assert len(LockStore.loads(content)) == 0
