"""Viewfinder CLI — inspect search order and probe a template tree.

Entry point registered as ``viewfinder`` in ``pyproject.toml``::

    [project.scripts]
    viewfinder = "viewfinder.cli:main"
"""

import argparse
import sys

_PRESETS = ("html", "webforms")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``viewfinder`` command."""
    parser = argparse.ArgumentParser(
        prog="viewfinder",
        description="Viewfinder — device-aware view location for template-driven web apps.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- viewfinder probe -------------------------------------------------
    probe_parser = subparsers.add_parser("probe", help="Resolve a view against a directory")
    probe_parser.add_argument("root", help="Application root directory (what ~/ maps to)")
    probe_parser.add_argument("view", help="View name (e.g. Index) or path (e.g. ~/Views/x.html)")
    probe_parser.add_argument("--group", default="Home", help="Group id / controller name")
    probe_parser.add_argument("--master", default="", help="Layout (master) name")
    probe_parser.add_argument(
        "--partial",
        action="store_true",
        help="Resolve as a partial view (no layout)",
    )
    device = probe_parser.add_mutually_exclusive_group()
    device.add_argument("--mobile", action="store_true", help="Treat the request as mobile")
    device.add_argument("--user-agent", default=None, help="Classify using this User-Agent")
    probe_parser.add_argument("--preset", choices=_PRESETS, default="html")
    probe_parser.add_argument("--verbose", "-v", action="store_true", help="Log every probe")

    # -- viewfinder locations ---------------------------------------------
    loc_parser = subparsers.add_parser("locations", help="Show the effective search order")
    loc_parser.add_argument("--mobile", action="store_true", help="Show the mobile search order")
    loc_parser.add_argument("--preset", choices=_PRESETS, default="html")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "probe":
        from viewfinder.cli._probe import run_probe

        run_probe(args)
    elif args.command == "locations":
        from viewfinder.cli._locations import run_locations

        run_locations(args)
