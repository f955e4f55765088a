#!/usr/bin/env python3
"""
Enrich data/items.json with derived recycle/salvage values and reverse lookups.

Adds recycleValue, salvageValue, recycledFrom, salvagedFrom and droppedBy to
every item, using data/bots.json for drop sources. The items file is
overwritten in place (two-space indented JSON).

Usage:
    python scripts/prebuild.py
    python scripts/prebuild.py --data-dir path/to/data
"""
import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from enrichment_service import run_prebuild  # noqa: E402
from settings import DATA_DIR  # noqa: E402


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--data-dir", type=Path, default=DATA_DIR, help="directory holding items.json and bots.json")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    items = run_prebuild(args.data_dir)
    print(f"Prebuild completed successfully ({len(items)} items)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
