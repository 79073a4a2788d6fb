"""
devlink hooks run command.

SUMMARY: Dispatch a dependency manager lifecycle event
"""
from __future__ import annotations

import argparse

from devlink.cli import EXIT_ERROR, EXIT_OK, OutputFormatter, add_standard_flags, load_config
from devlink.cli.packages.link import render_link_result
from devlink.cli.packages.unlink import render_cleanup_result

SUMMARY = "Dispatch a dependency manager lifecycle event"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    from devlink.core.packages.plugin import DevPackagesPlugin

    parser.add_argument(
        "event",
        choices=sorted(DevPackagesPlugin.get_subscribed_events()),
        help="Lifecycle event name",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit non-zero when the resolver fails",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    """Dispatch ``args.event`` to the plugin."""
    from devlink.core.packages.host import ConsoleIO, HostContext, NullIO
    from devlink.core.packages.models import LinkResult
    from devlink.core.packages.plugin import DevPackagesPlugin

    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        config = load_config(args)
        plugin = DevPackagesPlugin()
        io = NullIO() if formatter.json_mode else ConsoleIO()
        plugin.activate(HostContext(working_dir=config.repo_root, io=io))
        result = plugin.dispatch(args.event)

        if isinstance(result, LinkResult):
            render_link_result(formatter, result)
            if not result.success and args.strict:
                return EXIT_ERROR
        else:
            render_cleanup_result(formatter, result)
        return EXIT_OK

    except Exception as e:
        return formatter.fail(e)


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    parsed = parser.parse_args()
    exit(main(parsed))
