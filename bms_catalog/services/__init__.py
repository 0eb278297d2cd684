"""
BMS Catalog - Services

Public entry points re-exported for callers that only need the catalog API.
"""

from bms_catalog.services.bms_parser import parse_text_chart
from bms_catalog.services.bmson_parser import parse_json_chart
from bms_catalog.services.difficulty import (
    apply_group_difficulties,
    difficulty_from_path,
    difficulty_from_pure_name,
    difficulty_from_title,
    fill_missing_difficulty,
    infer_group_difficulties,
    recover_title_suffix,
)
from bms_catalog.services.errors import (
    ChartDecodeError,
    ChartError,
    ChartFormatError,
    ChartOpenError,
    ChartReadError,
)
from bms_catalog.services.loader import (
    classify_chart_path,
    find_chart_groups,
    load_chart,
    load_group,
)
from bms_catalog.services.models import BmsData, BmsDirectory, ResourceDefinitions

__all__ = [
    "BmsData",
    "BmsDirectory",
    "ChartDecodeError",
    "ChartError",
    "ChartFormatError",
    "ChartOpenError",
    "ChartReadError",
    "ResourceDefinitions",
    "apply_group_difficulties",
    "classify_chart_path",
    "difficulty_from_path",
    "difficulty_from_pure_name",
    "difficulty_from_title",
    "fill_missing_difficulty",
    "find_chart_groups",
    "infer_group_difficulties",
    "load_chart",
    "load_group",
    "parse_json_chart",
    "parse_text_chart",
    "recover_title_suffix",
]
