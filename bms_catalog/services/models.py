"""
BMS Catalog - Chart Metadata Models

The shared output shape of both chart parsers:

    BmsData              – one record per chart file
    ResourceDefinitions  – #WAVxx / #BMPxx tables (BMS text format only)
    BmsDirectory         – the charts found in one folder, treated as
                           variants of the same song
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Closed set of controller layouts a chart can target.
KEYMODES = (5, 7, 9, 10, 14, 24, 48)
DEFAULT_KEYMODE = 7

# Canonical difficulty labels, 1 (beginner) .. 5 (insane).
DIFFICULTY_LABELS = ("1", "2", "3", "4", "5")


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class ResourceDefinitions:
    """Index → filename tables for audio samples and images."""

    wav: dict[str, str] = field(default_factory=dict)
    bmp: dict[str, str] = field(default_factory=dict)

    def define(self, kind: str, index: str, value: str) -> None:
        """Record *value* under *index*; keys are upper-cased, last write wins."""
        table = self.wav if kind.upper() == "WAV" else self.bmp
        table[index.upper()] = value


@dataclass
class BmsData:
    """
    Metadata for a single chart.

    ``difficulty`` is empty until known; the inference helpers in
    :mod:`bms_catalog.services.difficulty` may fill it after parsing.
    """

    path: str = ""
    title: str = ""
    subtitle: str = ""
    playlevel: str = ""
    difficulty: str = ""
    artist: str = ""
    genre: str = ""
    keymode: int = DEFAULT_KEYMODE  # 5, 7, 9, 10, 14, 24, 48
    md5: str = ""
    sha256: str = ""
    total_notes: int = 0

    # Only populated by the BMS text parser
    definitions: ResourceDefinitions | None = field(default=None, repr=False)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "path": self.path,
            "title": self.title,
            "subtitle": self.subtitle,
            "playlevel": self.playlevel,
            "difficulty": self.difficulty,
            "artist": self.artist,
            "genre": self.genre,
            "keymode": self.keymode,
            "md5": self.md5,
            "sha256": self.sha256,
            "total_notes": self.total_notes,
        }
        if self.definitions is not None:
            data["wav_defs"] = dict(self.definitions.wav)
            data["bmp_defs"] = dict(self.definitions.bmp)
        return data


@dataclass
class BmsDirectory:
    """All charts with content found directly inside one folder."""

    path: str = ""
    name: str = ""
    charts: list[BmsData] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "name": self.name,
            "charts": [chart.to_dict() for chart in self.charts],
        }
