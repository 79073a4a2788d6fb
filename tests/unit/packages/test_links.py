"""Tests for vendor link cleanup."""
from __future__ import annotations

import os
from pathlib import Path

import pytest

from devlink.core.exceptions import FileWriteError
from devlink.core.packages.links import link_status, remove_local_package_links
from helpers.projects import ComposerProject


def _link(project: ComposerProject, package_name: str, target: Path) -> Path:
    entry = project.vendor_dir / package_name
    entry.parent.mkdir(parents=True, exist_ok=True)
    os.symlink(target, entry)
    return entry


class TestRemoveLocalPackageLinks:
    def test_removes_symlinks_of_discovered_packages(self, project: ComposerProject) -> None:
        foo = project.add_package("foo", "vendor/foo")
        entry = _link(project, "vendor/foo", foo)

        result = remove_local_package_links({"vendor/foo": foo}, project.vendor_dir)

        assert not entry.is_symlink()
        assert not entry.exists()
        assert foo.is_dir()
        assert result.removed == (str(entry),)

    def test_real_directory_is_left_untouched(self, project: ComposerProject) -> None:
        foo = project.add_package("foo", "vendor/foo")
        installed = project.vendor_dir / "vendor" / "foo"
        installed.mkdir(parents=True)
        (installed / "composer.json").write_text("{}", encoding="utf-8")

        result = remove_local_package_links({"vendor/foo": foo}, project.vendor_dir)

        assert (installed / "composer.json").is_file()
        assert result.removed == ()
        assert result.skipped == (str(installed),)

    def test_only_discovered_names_are_touched(self, project: ComposerProject) -> None:
        foo = project.add_package("foo", "vendor/foo")
        other = _link(project, "vendor/other", foo)
        _link(project, "vendor/foo", foo)

        remove_local_package_links({"vendor/foo": foo}, project.vendor_dir)

        assert other.is_symlink()

    def test_dangling_symlink_is_removed(self, project: ComposerProject) -> None:
        entry = _link(project, "vendor/gone", project.root / "nowhere")

        result = remove_local_package_links({"vendor/gone": project.root / "nowhere"}, project.vendor_dir)

        assert not entry.is_symlink()
        assert result.removed == (str(entry),)

    def test_empty_index_and_missing_vendor_dir_are_noops(self, project: ComposerProject) -> None:
        assert remove_local_package_links({}, project.vendor_dir).removed == ()
        result = remove_local_package_links({"vendor/foo": project.root}, project.vendor_dir)
        assert result.removed == () and result.skipped == ()

    def test_names_escaping_vendor_dir_are_skipped(self, project: ComposerProject) -> None:
        outside = project.root / "keep-me"
        os.symlink(project.root, outside)

        result = remove_local_package_links({"../keep-me": project.root}, project.vendor_dir)

        assert outside.is_symlink()
        assert result.removed == ()

    def test_unlink_failure_names_the_link(self, project: ComposerProject, monkeypatch: pytest.MonkeyPatch) -> None:
        foo = project.add_package("foo", "vendor/foo")
        entry = _link(project, "vendor/foo", foo)

        def _fail(self, *args, **kwargs):
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr(Path, "unlink", _fail)

        with pytest.raises(FileWriteError) as exc_info:
            remove_local_package_links({"vendor/foo": foo}, project.vendor_dir)

        assert exc_info.value.path == entry
        assert exc_info.value.context["package"] == "vendor/foo"
        assert "Permission denied" in str(exc_info.value)


class TestLinkStatus:
    def test_reports_each_state(self, project: ComposerProject) -> None:
        foo = project.add_package("foo", "vendor/foo")
        bar = project.add_package("bar", "vendor/bar")
        baz = project.add_package("baz", "vendor/baz")
        _link(project, "vendor/foo", foo)
        (project.vendor_dir / "vendor" / "bar").mkdir(parents=True)

        statuses = link_status(
            {"vendor/foo": foo, "vendor/bar": bar, "vendor/baz": baz},
            project.vendor_dir,
        )

        assert statuses == {"vendor/foo": "linked", "vendor/bar": "installed", "vendor/baz": "missing"}
