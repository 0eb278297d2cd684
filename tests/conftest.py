"""
BMS Catalog - Pytest Configuration & Shared Fixtures

Provides reusable fixtures for:
- Sample BMS text charts (5-key, 7-key, double play, PMS)
- Sample BMSON documents
- Helpers for creating song folders with sibling charts
"""

import json
from pathlib import Path
from typing import Any, Dict

import pytest

# ---------------------------------------------------------------------------
# Sample chart content
# ---------------------------------------------------------------------------

SAMPLE_BMS_HEADER = """\
*---------------------- HEADER FIELD
#PLAYER 1
#GENRE Eurobeat
#TITLE Test Song [HYPER]
#ARTIST Test Artist
#BPM 150
#PLAYLEVEL 7
#RANK 2
#WAV01 kick.wav
#WAV02 snare.ogg
#BMP01 bg.bmp
"""

# Only lanes 11-15: a 5-key chart
SAMPLE_BMS_5KEY = (
    SAMPLE_BMS_HEADER
    + """\
*---------------------- MAIN DATA FIELD
#00101:01000200
#00111:01010101
#00112:00010000
#00115:01000000
"""
)

# Scratch (16) and lanes 18/19: a 7-key chart
SAMPLE_BMS_7KEY = (
    SAMPLE_BMS_5KEY
    + """\
#00116:01000000
#00118:00000100
#00219:01000000
"""
)

# Player 2 lanes 21-26 alongside 18/19: double play (14 keys)
SAMPLE_BMS_14KEY = (
    SAMPLE_BMS_7KEY
    + """\
#00121:01000000
#00225:00010000
"""
)

# Player 2 lanes without any 7-key evidence: 10 keys
SAMPLE_BMS_10KEY = (
    SAMPLE_BMS_5KEY
    + """\
#00121:01000000
#00126:00000001
"""
)

SAMPLE_BMS_NO_NOTES = """\
#TITLE Empty Song
#ARTIST Nobody
#BPM 120
#00101:01000000
"""

SAMPLE_BMSON: Dict[str, Any] = {
    "version": "1.0.0",
    "info": {
        "title": "Json Song",
        "subtitle": " -remix-",
        "artist": "Json Artist",
        "genre": "Trance",
        "mode_hint": "beat-7k",
        "chart_name": "HYPER",
        "level": 9,
        "init_bpm": 160.0,
    },
    "sound_channels": [],
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def write_bms(path: Path, text: str, encoding: str = "cp932") -> Path:
    """Write *text* as a BMS file with CRLF line endings, like most editors."""
    path.write_bytes(text.replace("\n", "\r\n").encode(encoding))
    return path


def write_bmson(path: Path, document: Dict[str, Any]) -> Path:
    path.write_text(json.dumps(document, ensure_ascii=False), encoding="utf-8")
    return path


def bms_lines(text: str, encoding: str = "cp932") -> list:
    """Split chart text into the raw byte lines the parser consumes."""
    return [line.encode(encoding) for line in text.splitlines()]


# ---------------------------------------------------------------------------
# Chart fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def bms_7key_file(tmp_path: Path) -> Path:
    return write_bms(tmp_path / "song_7h.bme", SAMPLE_BMS_7KEY)


@pytest.fixture
def bmson_file(tmp_path: Path) -> Path:
    return write_bmson(tmp_path / "song.bmson", SAMPLE_BMSON)


@pytest.fixture
def song_folder(tmp_path: Path) -> Path:
    """
    Create a song folder with three sibling charts sharing the stem "bms":
    - bmsN.bms, bmsH.bms, bmsA.bms   (normal / hyper / another)
    - readme.txt                       (ignored)
    - bg.bmp                           (ignored)
    """
    folder = tmp_path / "Test Artist - Test Song"
    folder.mkdir()

    for stem in ("bmsN", "bmsH", "bmsA"):
        text = SAMPLE_BMS_7KEY.replace("Test Song [HYPER]", "Test Song")
        write_bms(folder / f"{stem}.bms", text)

    (folder / "readme.txt").write_text("not a chart", encoding="utf-8")
    (folder / "bg.bmp").write_bytes(b"BM" + b"\x00" * 62)

    return folder
