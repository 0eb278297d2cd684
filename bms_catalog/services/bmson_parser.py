"""
BMS Catalog - BMSON Chart Parser

Maps the ``info`` object of a ``.bmson`` JSON document onto the same
:class:`~bms_catalog.services.models.BmsData` record the text parser
produces.  Only metadata is read; the note arrays are not inspected.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from loguru import logger

from bms_catalog.services.errors import ChartFormatError
from bms_catalog.services.hashing import compute_hashes, read_chart_bytes
from bms_catalog.services.models import BmsData

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Substring of info.mode_hint → keymode.  Checked in this order so that the
# most specific hint wins ("keyboard-24k-double" also contains "24k").
MODE_HINT_KEYMODES: tuple[tuple[str, int], ...] = (
    ("keyboard-24k-double", 48),
    ("24k", 24),
    ("14k", 14),
    ("10k", 10),
    ("9k", 9),
    ("7k", 7),
    ("5k", 5),
)


def keymode_from_mode_hint(mode_hint: str) -> int | None:
    """Return the keymode named by *mode_hint*, or None if none is recognised."""
    for token, keymode in MODE_HINT_KEYMODES:
        if token in mode_hint:
            return keymode
    return None


def _text(info: dict[str, Any], key: str) -> str:
    value = info.get(key)
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_bmson_document(document: Any, path: str) -> BmsData:
    """
    Build a record from an already-decoded BMSON document.

    Raises ``ChartFormatError`` if the document or its ``info`` member is not
    a JSON object.
    """
    if not isinstance(document, dict):
        raise ChartFormatError(path, "document root is not an object")
    info = document.get("info") or {}
    if not isinstance(info, dict):
        raise ChartFormatError(path, "'info' is not an object")

    bms = BmsData(path=path)
    bms.title = _text(info, "title") + _text(info, "subtitle")
    bms.subtitle = _text(info, "chart_name")
    bms.playlevel = str(info.get("level") or 0)
    bms.artist = _text(info, "artist")
    bms.genre = _text(info, "genre")

    keymode = keymode_from_mode_hint(_text(info, "mode_hint"))
    if keymode is not None:
        bms.keymode = keymode

    # TODO: count sound_channels[].notes instead of flagging "has content"
    bms.total_notes = 1
    return bms


def parse_json_chart(path: str | Path) -> BmsData:
    """
    Parse a BMSON chart from disk.

    Only the SHA-256 digest is computed; ``md5`` stays empty.

    Raises
    ------
    ChartOpenError / ChartReadError
        If the file cannot be read.
    ChartFormatError
        If the content is not a well-formed BMSON document.
    """
    chart_path = str(path)
    data = read_chart_bytes(chart_path)

    try:
        document = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as e:
        raise ChartFormatError(chart_path, e) from e

    bms = parse_bmson_document(document, chart_path)
    bms.sha256 = compute_hashes(data).sha256

    logger.debug(
        "📄 Parsed BMSON: {} | keymode={} | level={}",
        Path(chart_path).name,
        bms.keymode,
        bms.playlevel,
    )
    return bms
