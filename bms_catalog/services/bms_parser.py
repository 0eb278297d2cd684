"""
BMS Catalog - BMS Text Chart Parser

Parses the line-oriented BMS family (``.bms``, ``.bme``, ``.bml``, ``.pms``)
into a :class:`~bms_catalog.services.models.BmsData` record.

Every line of a BMS file is one of:

    #TITLE Foo              – scalar header command
    #WAV01 kick.wav         – indexed resource definition (WAV / BMP)
    #00111:01010101         – note placement: measure 001, channel 11
    anything else           – ignored (comments, #RANDOM blocks, …)

Only the headers the catalog needs are kept.  Channel codes are not played
back; they are only used as evidence for the keymode and as a rough note
count.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from loguru import logger

from bms_catalog.config import BMS_ENCODING, BMS_MAX_LINE_BYTES, PMS_EXTENSION
from bms_catalog.services.difficulty import canonical_difficulty
from bms_catalog.services.errors import ChartDecodeError, ChartReadError
from bms_catalog.services.hashing import compute_hashes, read_chart_bytes
from bms_catalog.services.models import BmsData, ResourceDefinitions
from bms_catalog.utils import file_extension

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Scalar header commands in match order: (command, BmsData attribute)
HEADER_COMMANDS: tuple[tuple[str, str], ...] = (
    ("TITLE", "title"),
    ("SUBTITLE", "subtitle"),
    ("PLAYLEVEL", "playlevel"),
    ("DIFFICULTY", "difficulty"),
    ("ARTIST", "artist"),
    ("GENRE", "genre"),
)

_RE_HEADERS: tuple[tuple[re.Pattern[str], str], ...] = tuple(
    (re.compile(rf"^#{command}(?:\s+(.*))?$", re.IGNORECASE), attr)
    for command, attr in HEADER_COMMANDS
)

# Command name is case-insensitive; index and value keep their case
_RE_RESOURCE = re.compile(r"^#((?i:WAV|BMP))([0-9A-Za-z]{2}) (.+)$")

_RE_NOTE_LINE = re.compile(r"^#([0-9]{3})([0-9A-Za-z]{2}):(.+)$")

# Channel ranges that only appear in charts using the extra lanes
SEVEN_KEY_CHANNELS = (range(18, 20), range(38, 40))
TEN_KEY_LOWER_CHANNELS = (range(21, 27), range(41, 47))
TEN_KEY_UPPER_CHANNELS = (range(28, 30), range(48, 50))

# Visible note lanes for player 1 and player 2
PLAYABLE_CHANNELS = (range(11, 20), range(21, 30))


def _in_ranges(channel: int, ranges: tuple[range, ...]) -> bool:
    return any(channel in r for r in ranges)


# ---------------------------------------------------------------------------
# Keymode classification
# ---------------------------------------------------------------------------


@dataclass
class KeymodeEvidence:
    """Extra-lane channels seen while scanning a chart."""

    seven_key: bool = False
    ten_key_lower: bool = False
    ten_key_upper: bool = False

    def observe(self, channel: int) -> None:
        if _in_ranges(channel, SEVEN_KEY_CHANNELS):
            self.seven_key = True
        elif _in_ranges(channel, TEN_KEY_LOWER_CHANNELS):
            self.ten_key_lower = True
        elif _in_ranges(channel, TEN_KEY_UPPER_CHANNELS):
            self.ten_key_upper = True

    def keymode(self, extension: str) -> int:
        """Resolve the keymode; the PMS extension always means 9 buttons."""
        if extension == PMS_EXTENSION:
            return 9
        if self.ten_key_lower or self.ten_key_upper:
            if self.seven_key or self.ten_key_upper:
                return 14
            return 10
        if self.seven_key:
            return 7
        return 5


# ---------------------------------------------------------------------------
# Line classifiers
# ---------------------------------------------------------------------------


def _decode_line(raw: bytes, path: str) -> str:
    try:
        return raw.decode(BMS_ENCODING)
    except UnicodeDecodeError as e:
        raise ChartDecodeError(path, e) from e


def _apply_header(line: str, bms: BmsData) -> bool:
    for pattern, attr in _RE_HEADERS:
        m = pattern.match(line)
        if m:
            value = (m.group(1) or "").strip()
            if attr == "difficulty":
                value = canonical_difficulty(value)
            setattr(bms, attr, value)
            return True
    return False


def _apply_resource(line: str, definitions: ResourceDefinitions) -> bool:
    m = _RE_RESOURCE.match(line)
    if not m:
        return False
    definitions.define(m.group(1), m.group(2), m.group(3).strip())
    return True


def _apply_note_line(line: str, bms: BmsData, evidence: KeymodeEvidence) -> bool:
    m = _RE_NOTE_LINE.match(line)
    if not m:
        return False
    code = m.group(2)
    if not code.isdigit():
        # Base-36 channels (BGA layers, extended commands) carry no lane info
        return True
    channel = int(code)
    evidence.observe(channel)
    if _in_ranges(channel, PLAYABLE_CHANNELS):
        # NOTE: counts lines, not objects: "#00111:01010101" is one note here
        # even though it places four.  Known approximation, kept so totals
        # stay comparable with previously catalogued charts.
        bms.total_notes += 1
    return True


def split_lines(data: bytes, path: str) -> list[bytes]:
    """Split raw chart bytes into lines without their ``\\n``/``\\r\\n``."""
    lines = data.split(b"\n")
    if lines and lines[-1] == b"":
        lines.pop()
    result: list[bytes] = []
    for raw in lines:
        if raw.endswith(b"\r"):
            raw = raw[:-1]
        if len(raw) > BMS_MAX_LINE_BYTES:
            raise ChartReadError(
                path, f"line exceeds {BMS_MAX_LINE_BYTES} bytes ({len(raw)})"
            )
        result.append(raw)
    return result


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_bms_lines(lines: Iterable[bytes], path: str) -> BmsData:
    """
    Build a record from raw chart lines.

    *path* is stored on the record and its extension decides whether the
    chart is a PMS (9-button) chart.  Content hashes are not computed here.

    Raises
    ------
    ChartDecodeError
        If any line is not valid in ``BMS_ENCODING``; the whole parse is
        abandoned.
    """
    definitions = ResourceDefinitions()
    bms = BmsData(path=path, definitions=definitions)
    evidence = KeymodeEvidence()

    for raw in lines:
        line = _decode_line(raw, path)
        if _apply_header(line, bms):
            continue
        if _apply_resource(line, definitions):
            continue
        _apply_note_line(line, bms, evidence)

    bms.keymode = evidence.keymode(file_extension(path))
    return bms


def parse_text_chart(path: str | Path) -> BmsData:
    """
    Parse a BMS text chart from disk.

    Raises
    ------
    ChartOpenError
        If the file cannot be opened.
    ChartReadError
        If reading fails or a line is unreasonably long.
    ChartDecodeError
        If a line cannot be decoded.
    """
    chart_path = str(path)
    data = read_chart_bytes(chart_path)

    bms = parse_bms_lines(split_lines(data, chart_path), chart_path)
    bms.md5, bms.sha256 = compute_hashes(data)

    logger.debug(
        "📄 Parsed BMS: {} | keymode={} | notes={} | wav={} bmp={}",
        Path(chart_path).name,
        bms.keymode,
        bms.total_notes,
        len(bms.definitions.wav) if bms.definitions else 0,
        len(bms.definitions.bmp) if bms.definitions else 0,
    )
    return bms
