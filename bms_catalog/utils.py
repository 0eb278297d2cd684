"""
BMS Catalog - Shared Utilities

Common helpers used across multiple modules to avoid duplication.
"""

import os

# Ideographic space, common padding in Japanese chart titles.
FULLWIDTH_SPACE = "　"


def trim_both_space(text: str) -> str:
    """Strip ASCII whitespace, then any full-width spaces left at either end."""
    return text.strip().strip(FULLWIDTH_SPACE)


def pure_file_name(path: str) -> str:
    """
    Return the file name of *path* without its directory or extension.

    ``"songs/foo/bar_7h.bme"`` becomes ``"bar_7h"``.
    """
    stem, _ = os.path.splitext(path)
    return os.path.basename(stem)


def file_extension(path: str) -> str:
    """Lower-cased extension of *path*, including the leading dot."""
    return os.path.splitext(path)[1].lower()
