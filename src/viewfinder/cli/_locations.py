"""``viewfinder locations`` — print the effective search order per kind."""

import argparse

from viewfinder.config import LocationFormatSet
from viewfinder.mobile import augment


def run_locations(args: argparse.Namespace) -> None:
    """Print view, master and partial formats in the order they are searched."""
    locations = LocationFormatSet.preset(args.preset)
    kinds = (
        ("view", locations.view_locations, locations.mobile_view_locations),
        ("master", locations.master_locations, locations.mobile_master_locations),
        ("partial", locations.partial_view_locations, locations.mobile_partial_view_locations),
    )
    for label, base, mobile in kinds:
        print(f"{label}:")
        for index, fmt in enumerate(augment(base, mobile, args.mobile), start=1):
            print(f"  {index}. {fmt}")
