#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants and configuration for the mediameta project.

The project structure:
    ROOT/
    ├── mediameta/     # Package code
    ├── data/          # Database (metadata.db)
    └── logs/          # Application logs

The database and log locations can be moved with the ``MEDIAMETA_DB_PATH``
and ``MEDIAMETA_LOG_DIR`` environment variables; the CLI options
``--db-path`` and ``--log-dir`` take precedence over both.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import os
from pathlib import Path


def _get_project_root() -> Path:
    """
    Determine project root directory.

    Assumes this file is at ROOT/mediameta/core/paths.py.
    """
    return Path(__file__).resolve().parent.parent.parent


# ----- Project directory -----
ROOT: Path = _get_project_root()
DATA_DIR = ROOT / "data"

# --- Database ---
DB_PATH = Path(os.environ.get("MEDIAMETA_DB_PATH", DATA_DIR / "metadata.db"))

# ---- Logs ----
LOG_DIR = Path(os.environ.get("MEDIAMETA_LOG_DIR", ROOT / "logs"))
