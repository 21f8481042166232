"""
Wareflow - Centralised configuration.

All tunables live here.  Every other module imports from config
instead of reading os.environ directly.
"""

from __future__ import annotations
import os
from pathlib import Path


# ── Paths ──────────────────────────────────────────────────────────────
BASE_DIR      = Path(__file__).resolve().parent
CSV_SEED_PATH = Path(os.environ.get("WAREFLOW_CSV_SEED", BASE_DIR / "seed_inventory.csv"))

# ── Database ───────────────────────────────────────────────────────────
DB_URL = os.environ.get("WAREFLOW_DB", f"sqlite+aiosqlite:///{BASE_DIR / 'wareflow.sqlite'}")

# ── Server ─────────────────────────────────────────────────────────────
HOST   = os.environ.get("WAREFLOW_HOST", "0.0.0.0")
PORT   = int(os.environ.get("WAREFLOW_PORT", "5000"))
DEBUG  = os.environ.get("WAREFLOW_DEBUG", "0") == "1"
SECRET = os.environ.get("WAREFLOW_SECRET", "wareflow-dev-key-change-in-prod")

# ── Logging ────────────────────────────────────────────────────────────
LOG_LEVEL = os.environ.get("WAREFLOW_LOG_LEVEL", "INFO").upper()

# ── Import limits ──────────────────────────────────────────────────────
MAX_IMPORT_BYTES    = 10 * 1024 * 1024          # 10 MiB
ACCEPTED_EXTENSIONS = (".csv",)
PREVIEW_ROWS        = 10
SAMPLE_ROWS         = 3

# ── Commit defaults ────────────────────────────────────────────────────
DEFAULT_WAREHOUSE_NAME   = "Main Warehouse"
DEFAULT_WAREHOUSE_FLOORS = 6
DEFAULT_SECTOR_NAME      = "Default"
DEFAULT_UNIT             = "pcs"

# ── Pagination ─────────────────────────────────────────────────────────
API_MAX_LIMIT     = 1000
API_DEFAULT_LIMIT = 100
