"""
BMS Catalog - Chart Loader

Turns paths into metadata records:

- ``classify_chart_path()`` — decide the chart format from the extension
- ``load_chart()``          — parse one chart with the matching parser
- ``load_group()``          — load every chart directly inside a folder
- ``find_chart_groups()``   — walk a tree and load each song folder

Folders are scanned sequentially in sorted order.  The first chart that
fails to load aborts the whole group (and the whole walk); callers that
prefer to skip bad charts should catch ``ChartError`` per path instead.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path

from loguru import logger

from bms_catalog.config import BMS_EXTENSIONS, BMSON_EXTENSION
from bms_catalog.services.bms_parser import parse_text_chart
from bms_catalog.services.bmson_parser import parse_json_chart
from bms_catalog.services.difficulty import apply_group_difficulties
from bms_catalog.services.models import BmsData, BmsDirectory
from bms_catalog.utils import file_extension


class ChartFormat(Enum):
    """On-disk chart formats."""

    BMS = "bms"  # Line-oriented text (.bms/.bme/.bml/.pms)
    BMSON = "bmson"  # JSON document


# ---------------------------------------------------------------------------
# Path classification
# ---------------------------------------------------------------------------


def classify_chart_path(path: str | Path) -> ChartFormat | None:
    """Return the chart format of *path*, or None if it is not a chart."""
    ext = file_extension(str(path))
    if ext == BMSON_EXTENSION:
        return ChartFormat.BMSON
    if ext in BMS_EXTENSIONS:
        return ChartFormat.BMS
    return None


def is_bms_path(path: str | Path) -> bool:
    """True for any chart file, text or JSON."""
    return classify_chart_path(path) is not None


def is_bmson_path(path: str | Path) -> bool:
    return classify_chart_path(path) is ChartFormat.BMSON


def _list_dir(folder: str) -> list[os.DirEntry[str]]:
    """
    Sorted entries of *folder*.

    A folder that cannot be listed is treated as empty.
    """
    try:
        with os.scandir(folder) as it:
            return sorted(it, key=lambda entry: entry.name)
    except OSError as e:
        logger.warning("⚠️ Cannot list {}: {}", folder, e)
        return []


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def load_chart(path: str | Path) -> BmsData:
    """
    Parse one chart, choosing the parser by extension.

    Raises ``ValueError`` if *path* does not name a chart file; parser
    failures propagate as ``ChartError``.
    """
    chart_format = classify_chart_path(path)
    if chart_format is ChartFormat.BMSON:
        return parse_json_chart(path)
    if chart_format is ChartFormat.BMS:
        return parse_text_chart(path)
    raise ValueError(f"Not a chart file: {path}")


def load_group(folder: str | Path) -> BmsDirectory:
    """
    Load every chart directly inside *folder* as one song.

    Charts without notes are dropped.  The group is named after the first
    remaining chart's title, and charts that still lack a difficulty get
    one inferred from their sibling file names.
    """
    group = BmsDirectory(path=str(folder))

    for entry in _list_dir(str(folder)):
        if not entry.is_file() or not is_bms_path(entry.name):
            continue
        bms = load_chart(os.path.join(str(folder), entry.name))
        if bms.total_notes > 0:
            group.charts.append(bms)

    if group.charts:
        group.name = group.charts[0].title
    apply_group_difficulties(group)

    logger.info("🎵 Loaded {}: {} chart(s)", group.path, len(group.charts))
    return group


def find_chart_groups(root: str | Path) -> list[BmsDirectory]:
    """
    Walk *root* depth-first and load each folder that holds charts.

    A folder containing any chart file is loaded as a group and its
    sub-folders are not visited.  Symlinks to folders are skipped.
    """
    groups: list[BmsDirectory] = []
    _collect_groups(str(root), groups)
    return groups


def _collect_groups(folder: str, groups: list[BmsDirectory]) -> None:
    entries = _list_dir(folder)

    if any(entry.is_file() and is_bms_path(entry.name) for entry in entries):
        groups.append(load_group(folder))
        return

    # Symlinked folders are not followed
    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            _collect_groups(os.path.join(folder, entry.name), groups)
