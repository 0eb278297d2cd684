"""
BMS Catalog - BMSON Parser Tests

Tests for bms_catalog.services.bmson_parser. Validates:
- info fields map onto the shared record (title + subtitle concatenated)
- mode_hint resolves keymodes deterministically, most specific hint first
- only the SHA-256 digest is set
- malformed JSON and wrong document shapes raise ChartFormatError
"""

import copy
import hashlib
from pathlib import Path

import pytest

from bms_catalog.services.bmson_parser import (
    keymode_from_mode_hint,
    parse_bmson_document,
    parse_json_chart,
)
from bms_catalog.services.errors import ChartFormatError, ChartOpenError
from tests.conftest import SAMPLE_BMSON, write_bmson

# ---------------------------------------------------------------------------
# Field mapping
# ---------------------------------------------------------------------------


class TestFieldMapping:
    """Test the info → record projection."""

    def test_sample_document(self, bmson_file: Path):
        bms = parse_json_chart(bmson_file)
        assert bms.path == str(bmson_file)
        assert bms.title == "Json Song -remix-"
        assert bms.subtitle == "HYPER"
        assert bms.playlevel == "9"
        assert bms.artist == "Json Artist"
        assert bms.genre == "Trance"
        assert bms.keymode == 7
        assert bms.difficulty == ""
        assert bms.definitions is None

    def test_total_notes_is_content_flag(self, bmson_file: Path):
        assert parse_json_chart(bmson_file).total_notes == 1

    def test_only_sha256(self, bmson_file: Path):
        bms = parse_json_chart(bmson_file)
        assert bms.md5 == ""
        assert bms.sha256 == hashlib.sha256(bmson_file.read_bytes()).hexdigest()

    def test_missing_fields_default(self):
        bms = parse_bmson_document({"info": {}}, "empty.bmson")
        assert bms.title == ""
        assert bms.playlevel == "0"
        assert bms.keymode == 7

    def test_missing_info(self):
        bms = parse_bmson_document({"version": "1.0.0"}, "x.bmson")
        assert bms.title == ""
        assert bms.total_notes == 1


# ---------------------------------------------------------------------------
# mode_hint
# ---------------------------------------------------------------------------


class TestModeHint:
    """Test keymode lookup from mode_hint."""

    @pytest.mark.parametrize(
        "hint,expected",
        [
            ("beat-5k", 5),
            ("beat-7k", 7),
            ("popn-9k", 9),
            ("beat-10k", 10),
            ("beat-14k", 14),
            ("keyboard-24k", 24),
            ("keyboard-24k-double", 48),
        ],
    )
    def test_known_hints(self, hint, expected):
        assert keymode_from_mode_hint(hint) == expected

    def test_unknown_hint(self):
        assert keymode_from_mode_hint("generic-6keys") is None
        assert keymode_from_mode_hint("") is None

    def test_document_hint_applied(self):
        doc = copy.deepcopy(SAMPLE_BMSON)
        doc["info"]["mode_hint"] = "keyboard-24k-double"
        assert parse_bmson_document(doc, "x.bmson").keymode == 48

    def test_unknown_hint_keeps_default(self):
        doc = copy.deepcopy(SAMPLE_BMSON)
        doc["info"]["mode_hint"] = "generic-6keys"
        assert parse_bmson_document(doc, "x.bmson").keymode == 7


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


class TestFailures:
    """Test error reporting."""

    def test_malformed_json(self, tmp_path: Path):
        path = tmp_path / "broken.bmson"
        path.write_text('{"info": {"title": "x"', encoding="utf-8")
        with pytest.raises(ChartFormatError) as exc_info:
            parse_json_chart(path)
        assert exc_info.value.path == str(path)

    def test_root_not_object(self, tmp_path: Path):
        path = tmp_path / "list.bmson"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        with pytest.raises(ChartFormatError):
            parse_json_chart(path)

    def test_info_not_object(self):
        with pytest.raises(ChartFormatError):
            parse_bmson_document({"info": "title"}, "x.bmson")

    def test_deeply_nested_document(self, tmp_path: Path):
        path = tmp_path / "deep.bmson"
        depth = 200_000
        path.write_text('{"x": ' + "[" * depth + "]" * depth + "}", encoding="utf-8")
        with pytest.raises(ChartFormatError) as exc_info:
            parse_json_chart(path)
        assert exc_info.value.path == str(path)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ChartOpenError):
            parse_json_chart(tmp_path / "missing.bmson")

    def test_japanese_text(self, tmp_path: Path):
        doc = copy.deepcopy(SAMPLE_BMSON)
        doc["info"]["title"] = "夜明けの歌"
        doc["info"]["subtitle"] = ""
        bms = parse_json_chart(write_bmson(tmp_path / "jp.bmson", doc))
        assert bms.title == "夜明けの歌"
