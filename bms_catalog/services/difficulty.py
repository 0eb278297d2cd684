"""
BMS Catalog - Difficulty Inference

Most BMS charts never state ``#DIFFICULTY``; the information is instead
encoded in the title (``Song [ANOTHER]``) or in the file name
(``song_7h.bme``, ``songN.bms``).  This module recovers it as one of the
canonical labels ``"1"`` (beginner) .. ``"5"`` (insane).

Entry points:

- ``difficulty_from_title()``      — bracketed keyword at the end of a title
- ``difficulty_from_pure_name()``  — abbreviation tokens in a bare name
- ``difficulty_from_path()``       — the above applied to a file stem
- ``infer_group_difficulties()``   — strip the shared prefix of sibling file
  names and match what is left
- ``recover_title_suffix()``       — drop a trailing variant tag from a title

All matchers return ``""`` when nothing matches.
"""

from __future__ import annotations

import os
import re
from itertools import product
from typing import Sequence

from loguru import logger

from bms_catalog.services.models import DIFFICULTY_LABELS, BmsData, BmsDirectory
from bms_catalog.utils import pure_file_name, trim_both_space

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DIFFICULTY_KEYWORDS = ("beginner", "normal", "hyper", "another", "insane")

# Bracket pairs that may close a title, in match order
TITLE_BRACKETS = (("[", "]"), ("(", ")"), ("-", "-"), ("【", "】"))

# Bracket pairs recognised as a trailing variant tag by recover_title_suffix()
SUFFIX_BRACKETS = (
    ("[", "]"),
    ("［", "］"),
    ("(", ")"),
    ("（", "）"),
    ("-", "-"),
    ("【", "】"),
    ("<", ">"),
    ("〈", "〉"),
    ("⟨", "⟩"),
)

# Optional qualifiers written in front of a difficulty abbreviation
NAME_PREFIXES = ("", "sp", "dp", "5", "7", "9", "14", "5k", "7k", "9k", "14k")
NAME_SPELLINGS = (
    "b",
    "n",
    "h",
    "a",
    "i",
    "beginner",
    "normal",
    "hyper",
    "another",
    "insane",
)
NAME_SEPARATORS = (" ", "-", "_")
NAME_BRACKETS = (("[", "]"), ("(", ")"))


# (token, label): every prefix crossed with every spelling, prefix-major
NAME_CANDIDATES: tuple[tuple[str, str], ...] = tuple(
    (prefix + spelling, DIFFICULTY_LABELS[index % 5])
    for index, (prefix, spelling) in enumerate(product(NAME_PREFIXES, NAME_SPELLINGS))
)
_RE_BMS_EDIT = re.compile(r"bms ?edit")


# ---------------------------------------------------------------------------
# Title heuristic
# ---------------------------------------------------------------------------


def _bracketed_tail(text: str, opening: str, closing: str) -> str | None:
    """
    Content of the widest ``opening … closing`` pair that ends *text*.

    The opening bracket must follow at least one other character.  The
    leftmost qualifying opening is used, since any keyword found inside a
    narrower pair is also inside the widest one.
    """
    if not text.endswith(closing):
        return None
    end = len(text) - len(closing)
    start = text.find(opening, 1, end)
    if start < 0:
        return None
    return text[start + len(opening) : end]


def _black_another(content: str) -> bool:
    black = content.find("black")
    return black >= 0 and content.find("another", black + len("black")) >= 0


def difficulty_from_title(title: str, subtitle: str = "") -> str:
    """
    Infer a difficulty from a bracketed keyword closing the full title.

    ``"foo [Another]"`` gives ``"4"``; ``"foo [Black Another]"`` gives ``"5"``.
    """
    full_title = (title + subtitle).strip().lower()
    tails = [_bracketed_tail(full_title, o, c) for o, c in TITLE_BRACKETS]

    # "[black another]" is the community spelling of insane; checked first
    if any(tail is not None and _black_another(tail) for tail in tails):
        return DIFFICULTY_LABELS[4]

    for label, keyword in zip(DIFFICULTY_LABELS, DIFFICULTY_KEYWORDS):
        if any(tail is not None and keyword in tail for tail in tails):
            return label
    return ""


# ---------------------------------------------------------------------------
# Bare-name heuristic
# ---------------------------------------------------------------------------


def _bracketed_suffix(name: str, token: str) -> bool:
    """True if *name* ends with ``[token]`` or ``(token)`` after other text."""
    for opening, closing in NAME_BRACKETS:
        tag = opening + token + closing
        if len(name) > len(tag) and name.endswith(tag):
            return True
    return False


def difficulty_from_pure_name(name: str, strict: bool = False) -> str:
    """
    Match a bare name against the difficulty abbreviation table.

    In strict mode only an exact token (``"7h"``, ``"another"``) matches.
    Otherwise the token may also close the name after a space, hyphen or
    underscore (``"song_7h"``), or be bracketed at its end (``"song [h]"``).
    The first candidate in table order wins.
    """
    if not name:
        return ""
    name = name.lower()

    for token, label in NAME_CANDIDATES:
        if name == token:
            return label
        if strict:
            continue
        if any(name.endswith(sep + token) for sep in NAME_SEPARATORS):
            return label
        if _bracketed_suffix(name, token):
            return label
    return ""


def difficulty_from_path(path: str) -> str:
    """Loose bare-name match on the file name of *path* (extension dropped)."""
    return difficulty_from_pure_name(pure_file_name(path))


def canonical_difficulty(value: str) -> str:
    """
    Normalise a raw ``#DIFFICULTY`` value to a canonical label.

    Labels ``"1"``..``"5"`` are kept, difficulty words and abbreviations are
    mapped, anything else becomes ``""``.
    """
    value = value.strip()
    if value in DIFFICULTY_LABELS:
        return value
    return difficulty_from_pure_name(value, strict=True)


# ---------------------------------------------------------------------------
# Sibling file names
# ---------------------------------------------------------------------------


def infer_group_difficulties(names: Sequence[str]) -> list[str]:
    """
    Infer one label per name by stripping the prefix all names share.

    ``["bmsN", "bmsH", "BmsA"]`` → ``["n", "h", "a"]`` → ``["2", "3", "4"]``.
    Nothing is inferred for fewer than two names, or when the names already
    differ at their first character.
    """
    if len(names) < 2:
        return [""] * len(names)

    lowered = [name.lower() for name in names]
    shared = len(os.path.commonprefix(lowered))
    if shared == 0:
        logger.debug("No shared file name prefix among {} charts", len(names))
        return [""] * len(names)

    return [difficulty_from_pure_name(name[shared:], strict=True) for name in lowered]


def apply_group_difficulties(group: BmsDirectory) -> None:
    """Fill still-empty difficulties of *group* from its charts' file names."""
    inferred = infer_group_difficulties(
        [pure_file_name(chart.path) for chart in group.charts]
    )
    for chart, label in zip(group.charts, inferred):
        if not chart.difficulty:
            chart.difficulty = label


def fill_missing_difficulty(bms: BmsData) -> str:
    """Backfill an empty difficulty from the title, then the file name."""
    if not bms.difficulty:
        bms.difficulty = difficulty_from_title(
            bms.title, bms.subtitle
        ) or difficulty_from_path(bms.path)
    return bms.difficulty


# ---------------------------------------------------------------------------
# Title cleanup
# ---------------------------------------------------------------------------


def _suffix_tag_start(title: str, opening: str, closing: str) -> int:
    """
    Index where a trailing ``opening … closing`` tag starts, or -1.

    The tag may not contain another *opening*, must not be empty, and must
    follow at least one other character.
    """
    if not title.endswith(closing):
        return -1
    end = len(title) - len(closing)
    start = title.rfind(opening, 0, end)
    if start < 1 or start + len(opening) >= end:
        return -1
    return start


def recover_title_suffix(title: str) -> str:
    """
    Strip a trailing bracketed variant tag from *title*.

    ``"Song [Hard]"`` becomes ``"Song"``.  Tags naming a BMS edit
    (``"Song [BMS Edit]"``) are part of the song's identity and are kept.
    """
    title = trim_both_space(title)

    for opening, closing in SUFFIX_BRACKETS:
        start = _suffix_tag_start(title, opening, closing)
        if start >= 0:
            if _RE_BMS_EDIT.search(title[start:].lower()):
                return title
            return trim_both_space(title[:start])
    return title
