"""``viewfinder probe`` — resolve a view against a directory on disk.

Prints the confirmed paths and exits 0, or prints every searched
location and exits 1.
"""

import argparse
import logging
import sys
from pathlib import Path

from viewfinder.config import LocationFormatSet, ViewEngineConfig
from viewfinder.context import ViewContext
from viewfinder.engine import ViewEngine
from viewfinder.errors import ViewFinderError
from viewfinder.filesystem import FileSystemChecker
from viewfinder.results import ViewFound


def build_context(args: argparse.Namespace) -> ViewContext:
    """Build the request context described by the command-line flags."""
    headers = {"User-Agent": args.user_agent} if args.user_agent else {}
    return ViewContext(
        route_values={"controller": args.group},
        headers=headers,
        is_mobile_device=True if args.mobile else None,
    )


def run_probe(args: argparse.Namespace) -> None:
    """Resolve ``args.view`` (and ``args.master``) under ``args.root``."""
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    root = Path(args.root)
    if not root.is_dir():
        print(f"Error: {root} is not a directory", file=sys.stderr)
        raise SystemExit(1)

    config = ViewEngineConfig(locations=LocationFormatSet.preset(args.preset))
    engine = ViewEngine(FileSystemChecker(root), config)
    context = build_context(args)

    try:
        if args.partial:
            result = engine.find_partial_view(context, args.view, use_cache=False)
        else:
            result = engine.find_view(context, args.view, args.master, use_cache=False)
    except ViewFinderError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if isinstance(result, ViewFound):
        print(f"view: {result.view_path}")
        if result.master_path:
            print(f"master: {result.master_path}")
        if result.mobile:
            print("(mobile locations searched first)")
        return

    print(f"View {args.view!r} was not found. Searched locations:")
    for location in result.searched_locations:
        print(f"  {location}")
    raise SystemExit(1)
