"""
BMS Catalog - Configuration
All settings loaded from environment variables with sensible defaults.

The catalog runs as a one-shot command over local folders, so there is no
persistent state to configure: only logging and the knobs that shape how
raw chart bytes are decoded.
"""

import os

from dotenv import load_dotenv

# Load environment variables from .env file
_ = load_dotenv()

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
DEBUG = os.getenv("DEBUG", "false").lower() == "true"

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

# ---------------------------------------------------------------------------
# BMS text decoding
# ---------------------------------------------------------------------------
# Legacy charts are Shift_JIS; cp932 is the Windows superset most tools wrote.
BMS_ENCODING = os.getenv("BMS_ENCODING", "cp932")

# Lines longer than this are treated as a read failure rather than parsed.
BMS_MAX_LINE_BYTES = int(os.getenv("BMS_MAX_LINE_BYTES", "1000000"))

# ---------------------------------------------------------------------------
# Chart file extensions
# ---------------------------------------------------------------------------
PMS_EXTENSION = ".pms"
BMSON_EXTENSION = ".bmson"
BMS_EXTENSIONS = {".bms", ".bme", ".bml", PMS_EXTENSION}
CHART_EXTENSIONS = BMS_EXTENSIONS | {BMSON_EXTENSION}
