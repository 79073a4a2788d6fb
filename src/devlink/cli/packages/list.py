"""
devlink packages list command.

SUMMARY: List discovered local packages
"""
from __future__ import annotations

import argparse

from devlink.cli import OutputFormatter, add_standard_flags, load_config

SUMMARY = "List discovered local packages"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    """List local packages and their vendor state."""
    from devlink.core.packages.discovery import PackageDiscovery
    from devlink.core.packages.links import link_status

    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        config = load_config(args)
        package_dir = config.get_package_dir()
        discovery = PackageDiscovery(
            config.repo_root,
            package_dir,
            manifest_name=config.manifest_name,
        )
        records = discovery.records()
        statuses = link_status(discovery.discover(), config.get_vendor_dir())

        if formatter.json_mode:
            formatter.json_output({
                "package_dir": package_dir,
                "packages": [
                    {**record.to_dict(), "status": statuses[record.name]}
                    for record in records
                ],
            })
            return 0

        if not records:
            formatter.text(f"No local packages found in {package_dir}/.")
            formatter.text("")
            formatter.text("Check out a package with its own composer.json, e.g.:")
            formatter.text(f"  {package_dir}/widget/composer.json")
            return 0

        formatter.text(f"Local packages in {package_dir}/ ({len(records)}):")
        formatter.text("")
        for record in records:
            formatter.text(f"  {record.name}")
            formatter.text(f"    Path:   {record.path.relative_to(config.repo_root)}")
            formatter.text(f"    Status: {statuses[record.name]}")
            formatter.text("")
        return 0

    except Exception as e:
        return formatter.fail(e)


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    parsed = parser.parse_args()
    exit(main(parsed))
