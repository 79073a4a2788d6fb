"""Tests for the lifecycle plugin."""
from __future__ import annotations

import pytest

from devlink.core.packages.exceptions import UnknownEventError
from devlink.core.packages.host import HostContext
from devlink.core.packages.models import CleanupResult, LinkResult
from devlink.core.packages.plugin import DevPackagesPlugin, ScriptEvents
from helpers.projects import ComposerProject, RecordingExecutor, RecordingIO


@pytest.fixture
def plugin(project: ComposerProject, executor: RecordingExecutor, host_io: RecordingIO) -> DevPackagesPlugin:
    plugin = DevPackagesPlugin()
    plugin.activate(HostContext(working_dir=project.root, executor=executor, io=host_io))
    return plugin


class TestSubscribedEvents:
    def test_pre_events_clean_vendor_links(self) -> None:
        events = DevPackagesPlugin.get_subscribed_events()

        assert events[ScriptEvents.PRE_INSTALL_CMD] == "remove_package_vendor_directories"
        assert events[ScriptEvents.PRE_UPDATE_CMD] == "remove_package_vendor_directories"

    def test_post_events_link_packages(self) -> None:
        events = DevPackagesPlugin.get_subscribed_events()

        assert events[ScriptEvents.POST_INSTALL_CMD] == "install_local_packages"
        assert events[ScriptEvents.POST_UPDATE_CMD] == "install_local_packages"

    def test_exactly_four_events(self) -> None:
        assert set(DevPackagesPlugin.get_subscribed_events()) == {
            "pre-install-cmd",
            "pre-update-cmd",
            "post-install-cmd",
            "post-update-cmd",
        }


class TestDispatch:
    def test_post_update_links_packages(
        self, plugin: DevPackagesPlugin, project: ComposerProject, executor: RecordingExecutor
    ) -> None:
        project.add_package("foo", "vendor/foo")

        result = plugin.dispatch("post-update-cmd")

        assert isinstance(result, LinkResult)
        assert result.status == "linked"
        assert executor.commands[0][-1] == "vendor/foo"

    def test_pre_install_removes_links(self, plugin: DevPackagesPlugin, project: ComposerProject) -> None:
        package = project.add_package("foo", "vendor/foo")
        link = project.vendor_dir / "vendor" / "foo"
        link.parent.mkdir(parents=True)
        link.symlink_to(package, target_is_directory=True)

        result = plugin.dispatch("pre-install-cmd")

        assert isinstance(result, CleanupResult)
        assert not link.is_symlink()

    def test_unknown_event_is_rejected(self, plugin: DevPackagesPlugin) -> None:
        with pytest.raises(UnknownEventError) as exc_info:
            plugin.dispatch("post-autoload-dump")

        assert exc_info.value.context["event"] == "post-autoload-dump"

    def test_inactive_plugin_raises(self) -> None:
        with pytest.raises(RuntimeError):
            DevPackagesPlugin().dispatch("post-install-cmd")

    def test_deactivate_drops_linker(self, plugin: DevPackagesPlugin, project: ComposerProject) -> None:
        plugin.deactivate(HostContext(working_dir=project.root))

        with pytest.raises(RuntimeError):
            plugin.dispatch("pre-update-cmd")


class TestHostContext:
    def test_activate_starts_fresh_discovery(
        self, plugin: DevPackagesPlugin, project: ComposerProject, executor: RecordingExecutor, host_io: RecordingIO
    ) -> None:
        project.add_package("foo", "vendor/foo")
        plugin.dispatch("pre-update-cmd")
        project.add_package("bar", "vendor/bar")

        plugin.activate(HostContext(working_dir=project.root, executor=executor, io=host_io))
        result = plugin.dispatch("post-update-cmd")

        assert result.packages == ("vendor/bar", "vendor/foo")

    def test_host_extra_selects_package_dir(
        self, project: ComposerProject, executor: RecordingExecutor, host_io: RecordingIO
    ) -> None:
        project.add_package("foo", "vendor/foo", package_dir="packages")
        plugin = DevPackagesPlugin()
        plugin.activate(HostContext(
            working_dir=project.root,
            extra={"devlink": {"package-dir": "packages/"}},
            executor=executor,
            io=host_io,
        ))

        result = plugin.dispatch("post-install-cmd")

        assert result.packages == ("vendor/foo",)
        assert '"url": "packages/foo"' in executor.manifests_seen[0]

    def test_host_vendor_dir_is_used_for_cleanup(
        self, project: ComposerProject, executor: RecordingExecutor, host_io: RecordingIO
    ) -> None:
        package = project.add_package("foo", "vendor/foo")
        vendor_dir = project.root / "deps"
        link = vendor_dir / "vendor" / "foo"
        link.parent.mkdir(parents=True)
        link.symlink_to(package, target_is_directory=True)
        plugin = DevPackagesPlugin()
        plugin.activate(HostContext(working_dir=project.root, vendor_dir=vendor_dir, executor=executor, io=host_io))

        result = plugin.dispatch("pre-update-cmd")

        assert result.removed == (str(link),)

    def test_resolver_failure_goes_to_host_io(self, project: ComposerProject, host_io: RecordingIO) -> None:
        project.add_package("foo", "vendor/foo")
        plugin = DevPackagesPlugin()
        plugin.activate(HostContext(
            working_dir=project.root,
            executor=RecordingExecutor(exit_code=1, stderr="boom"),
            io=host_io,
        ))

        result = plugin.dispatch("post-update-cmd")

        assert not result.success
        assert host_io.errors == ["Could not link dev packages:\nboom"]
