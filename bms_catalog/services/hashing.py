"""
BMS Catalog - Raw Chart Bytes & Content Hashes

Charts are identified by digests of their exact on-disk bytes, never of the
decoded text, so that the same file hashes identically no matter which
encoding the parser assumed.
"""

import hashlib
from pathlib import Path
from typing import NamedTuple, Union

from bms_catalog.services.errors import ChartOpenError, ChartReadError


class ChartHashes(NamedTuple):
    md5: str
    sha256: str


def read_chart_bytes(path: Union[str, Path]) -> bytes:
    """
    Read the full content of a chart file.

    Raises ``ChartOpenError`` if the file cannot be opened and
    ``ChartReadError`` if reading fails afterwards.
    """
    try:
        f = open(path, "rb")
    except OSError as e:
        raise ChartOpenError(str(path), e) from e

    with f:
        try:
            return f.read()
        except OSError as e:
            raise ChartReadError(str(path), e) from e


def compute_hashes(data: bytes) -> ChartHashes:
    """Return the MD5 and SHA-256 hex digests of *data*."""
    return ChartHashes(
        md5=hashlib.md5(data).hexdigest(),
        sha256=hashlib.sha256(data).hexdigest(),
    )
