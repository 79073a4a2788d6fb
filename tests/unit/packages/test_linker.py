"""Tests for the dev package linker."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from devlink.core.exceptions import FileReadError, FileWriteError
from devlink.core.packages import snapshot as snapshot_mod
from devlink.core.packages.exceptions import ManifestFormatError, RestoreError
from devlink.core.packages.linker import DevPackageLinker
from helpers.projects import ComposerProject, RecordingExecutor, RecordingIO


def _linker(project: ComposerProject, executor: RecordingExecutor, io: RecordingIO | None = None) -> DevPackageLinker:
    return DevPackageLinker(project.root, executor=executor, io=io)


class TestInstallLocalPackages:
    def test_no_packages_is_a_no_op(self, project: ComposerProject, executor: RecordingExecutor) -> None:
        """Nothing discovered: no resolver run, files untouched."""
        project.lock_path.unlink()
        before = project.manifest_path.read_bytes()

        result = _linker(project, executor).install_local_packages()

        assert result.status == "skipped"
        assert result.success
        assert executor.commands == []
        assert project.manifest_path.read_bytes() == before
        assert not project.lock_path.exists()

    def test_links_single_package_and_restores_manifest(
        self, project: ComposerProject, executor: RecordingExecutor
    ) -> None:
        project.add_package("foo", "vendor/foo")
        before = project.state()

        result = _linker(project, executor).install_local_packages()

        assert result.status == "linked"
        assert result.packages == ("vendor/foo",)
        assert project.state() == before
        assert project.manifest_path.read_text(encoding="utf-8") == "{}"
        assert executor.commands == [[
            "composer",
            "--no-plugins",
            "--no-scripts",
            f"--working-dir={project.root}",
            "update",
            "--no-audit",
            "vendor/foo",
        ]]

    def test_resolver_sees_path_repository_and_dev_constraint(
        self, project: ComposerProject, executor: RecordingExecutor
    ) -> None:
        project.add_package("foo", "vendor/foo")

        _linker(project, executor).install_local_packages()

        assert len(executor.manifests_seen) == 1
        seen = json.loads(executor.manifests_seen[0])
        assert seen == {
            "repositories": [
                {"type": "path", "url": "dev-packages/foo", "options": {"symlink": True}},
            ],
            "require": {"vendor/foo": "@dev"},
        }

    def test_existing_repositories_keep_their_order_after_new_entries(
        self, tmp_path: Path, executor: RecordingExecutor
    ) -> None:
        manifest = json.dumps({
            "name": "acme/app",
            "repositories": [{"type": "vcs", "url": "https://example.com/lib.git"}],
            "require": {"php": ">=8.1"},
        }, indent=2)
        project = ComposerProject.create(tmp_path / "app", manifest=manifest)
        project.add_package("a", "acme/a")
        project.add_package("b", "acme/b")

        _linker(project, executor).install_local_packages()

        seen = json.loads(executor.manifests_seen[0])
        assert list(seen) == ["name", "repositories", "require"]
        assert [repo["url"] for repo in seen["repositories"]] == [
            "dev-packages/b",
            "dev-packages/a",
            "https://example.com/lib.git",
        ]
        assert seen["require"] == {"php": ">=8.1", "acme/a": "@dev", "acme/b": "@dev"}
        assert project.manifest_path.read_text(encoding="utf-8") == manifest

    def test_resolver_failure_is_reported_not_raised(self, project: ComposerProject) -> None:
        project.add_package("foo", "vendor/foo")
        before = project.state()
        executor = RecordingExecutor(exit_code=2, stderr="Your requirements could not be resolved")
        io = RecordingIO()

        result = _linker(project, executor, io).install_local_packages()

        assert result.status == "failed"
        assert not result.success
        assert result.exit_code == 2
        assert result.error_output == "Your requirements could not be resolved"
        assert io.errors == ["Could not link dev packages:\nYour requirements could not be resolved"]
        assert project.state() == before

    def test_exception_during_resolve_restores_and_propagates(self, project: ComposerProject) -> None:
        project.add_package("foo", "vendor/foo")
        before = project.state()

        def _boom(argv):
            project.lock_path.write_text('{"packages": ["partial"]}', encoding="utf-8")
            raise RuntimeError("resolver crashed")

        executor = RecordingExecutor(on_execute=_boom)

        with pytest.raises(RuntimeError, match="resolver crashed"):
            _linker(project, executor).install_local_packages()

        assert project.state() == before

    def test_resolver_changes_to_lockfile_are_discarded(self, project: ComposerProject) -> None:
        project.add_package("foo", "vendor/foo")
        before = project.state()
        executor = RecordingExecutor(
            on_execute=lambda argv: project.lock_path.write_text("{}", encoding="utf-8")
        )

        _linker(project, executor).install_local_packages()

        assert project.state() == before

    def test_announces_linked_packages(self, project: ComposerProject, executor: RecordingExecutor) -> None:
        project.add_package("foo", "vendor/foo")
        project.add_package("bar", "vendor/bar")
        io = RecordingIO()

        _linker(project, executor, io).install_local_packages()

        assert io.messages == ["Linking dev packages: vendor/bar vendor/foo"]
        assert io.errors == []

    def test_missing_lockfile_is_fatal(self, project: ComposerProject, executor: RecordingExecutor) -> None:
        project.add_package("foo", "vendor/foo")
        project.lock_path.unlink()

        with pytest.raises(FileReadError):
            _linker(project, executor).install_local_packages()

        assert executor.commands == []
        assert project.manifest_path.read_text(encoding="utf-8") == "{}"

    def test_malformed_manifest_is_restored(self, tmp_path: Path, executor: RecordingExecutor) -> None:
        manifest = '{"repositories": {"packagist.org": false}}'
        project = ComposerProject.create(tmp_path / "app", manifest=manifest)
        project.add_package("foo", "vendor/foo")

        with pytest.raises(ManifestFormatError):
            _linker(project, executor).install_local_packages()

        assert executor.commands == []
        assert project.manifest_path.read_text(encoding="utf-8") == manifest

    def test_restore_failure_surfaces(
        self, project: ComposerProject, executor: RecordingExecutor, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        project.add_package("foo", "vendor/foo")
        real_write = snapshot_mod.write_bytes

        def _write(path, data):
            if Path(path) == project.manifest_path:
                raise FileWriteError("read-only file system", path=path)
            real_write(path, data)

        monkeypatch.setattr(snapshot_mod, "write_bytes", _write)

        with pytest.raises(RestoreError) as exc_info:
            _linker(project, executor).install_local_packages()

        assert str(project.manifest_path) in exc_info.value.context["paths"]

    def test_extra_resolver_args_follow_package_names(
        self, project: ComposerProject, executor: RecordingExecutor
    ) -> None:
        project.add_package("foo", "vendor/foo")
        config_dir = project.root / ".devlink"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text(
            "devlink:\n  resolver:\n    binary: /opt/bin/composer\n    extraArgs: ['--no-interaction']\n",
            encoding="utf-8",
        )

        result = _linker(project, executor).install_local_packages()

        assert executor.commands[0][0] == "/opt/bin/composer"
        assert executor.commands[0][-2:] == ["vendor/foo", "--no-interaction"]
        assert result.command == tuple(executor.commands[0])


class TestRemovePackageLinks:
    def test_removes_symlink_of_discovered_package(
        self, project: ComposerProject, executor: RecordingExecutor
    ) -> None:
        package = project.add_package("foo", "vendor/foo")
        link = project.vendor_dir / "vendor" / "foo"
        link.parent.mkdir(parents=True)
        link.symlink_to(package, target_is_directory=True)

        result = _linker(project, executor).remove_package_links()

        assert result.removed == (str(link),)
        assert not link.is_symlink()
        assert package.is_dir()

    def test_no_packages_removes_nothing(self, project: ComposerProject, executor: RecordingExecutor) -> None:
        result = _linker(project, executor).remove_package_links()

        assert result.removed == ()
        assert result.skipped == ()

    def test_discovery_is_shared_between_entry_points(
        self, project: ComposerProject, executor: RecordingExecutor
    ) -> None:
        """Packages added after the first discovery are not picked up."""
        project.add_package("foo", "vendor/foo")
        linker = _linker(project, executor)

        linker.remove_package_links()
        project.add_package("late", "vendor/late")
        result = linker.install_local_packages()

        assert result.packages == ("vendor/foo",)


class TestSymlinkedManifest:
    def test_symlinked_files_stay_symlinks(self, tmp_path: Path, executor: RecordingExecutor) -> None:
        """Manifest and lockfile shared through symlinks are restored in place."""
        project = ComposerProject.create(tmp_path / "app")
        shared = tmp_path / "shared"
        shared.mkdir()
        for path in (project.manifest_path, project.lock_path):
            target = shared / path.name
            target.write_bytes(path.read_bytes())
            path.unlink()
            path.symlink_to(target)
        project.add_package("foo", "vendor/foo")
        before = project.state()

        result = _linker(project, executor).install_local_packages()

        assert result.status == "linked"
        assert project.manifest_path.is_symlink()
        assert project.lock_path.is_symlink()
        assert project.state() == before
        assert '"vendor/foo": "@dev"' in executor.manifests_seen[0]
