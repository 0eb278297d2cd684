"""
BMS Catalog - Command Line

Prints the metadata of BMS charts, one song folder at a time.

Usage:
    bms-catalog <chart_file_or_folder> [...]
    bms-catalog --recursive "BMS/"
    bms-catalog --json --infer-titles "BMS/Some Song/"

Flags:
    --recursive     Walk folders and load every song folder found
    --json          Output results as JSON
    --infer-titles  Backfill missing difficulties from titles and file names
    --verbose       Debug logging
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from bms_catalog.config import DEBUG, LOG_FORMAT, LOG_LEVEL
from bms_catalog.services.difficulty import fill_missing_difficulty
from bms_catalog.services.errors import ChartError
from bms_catalog.services.loader import (
    find_chart_groups,
    is_bms_path,
    load_chart,
    load_group,
)
from bms_catalog.services.models import BmsDirectory

DIFFICULTY_NAMES = {
    "1": "BEGINNER",
    "2": "NORMAL",
    "3": "HYPER",
    "4": "ANOTHER",
    "5": "INSANE",
}


def configure_logging(verbose: bool = False) -> None:
    """Send log output to stderr so stdout stays machine-readable."""
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if (verbose or DEBUG) else LOG_LEVEL,
        format=LOG_FORMAT,
        colorize=True,
    )


def _load_target(target: Path, recursive: bool) -> List[BmsDirectory]:
    if target.is_dir():
        if recursive:
            return find_chart_groups(target)
        return [load_group(target)]
    if target.is_file() and is_bms_path(target.name):
        bms = load_chart(target)
        return [BmsDirectory(path=str(target.parent), name=bms.title, charts=[bms])]
    raise ValueError(f"Not a chart file or folder: {target}")


def _print_group(group: BmsDirectory) -> None:
    print()
    print("=" * 60)
    print(f"🎵 {group.name or '(no charts)'}")
    print(f"   {group.path}")
    print("-" * 60)
    for chart in group.charts:
        difficulty = DIFFICULTY_NAMES.get(chart.difficulty, "?")
        print(
            f"  {Path(chart.path).name:<32} {chart.keymode:>2}K "
            f"Lv.{chart.playlevel or '?':<3} {difficulty:<8} "
            f"notes={chart.total_notes}"
        )


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Extract metadata from BMS / BMSON charts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("path", nargs="+", help="Chart file(s) or song folder(s)")
    parser.add_argument(
        "--recursive",
        "-r",
        action="store_true",
        help="Search sub-folders for song folders",
    )
    parser.add_argument("--json", action="store_true", help="Output results as JSON")
    parser.add_argument(
        "--infer-titles",
        action="store_true",
        help="Backfill missing difficulties from titles and file names",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Show debug logging"
    )

    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    groups: List[BmsDirectory] = []
    failed = False

    for target in args.path:
        try:
            loaded = _load_target(Path(target), args.recursive)
        except (ChartError, ValueError) as e:
            logger.error("❌ {}", e)
            failed = True
            continue
        groups.extend(loaded)

    if args.infer_titles:
        for group in groups:
            for chart in group.charts:
                fill_missing_difficulty(chart)

    if args.json:
        print(json.dumps([g.to_dict() for g in groups], indent=2, ensure_ascii=False))
    else:
        for group in groups:
            _print_group(group)
        print()

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
