"""
Runtime settings read from the environment (a local .env is loaded first).
"""

from __future__ import annotations

import os
from pathlib import Path

import dotenv

dotenv.load_dotenv()

MODEL_DEFAULT = os.getenv("STORYPROMPT_MODEL", "gpt-4o")
# default for the CLI --endpoint option
ENDPOINT_DEFAULT = os.getenv("STORYPROMPT_ENDPOINT", "https://api.example.com/generate")
ARTIFACTS_DIR = Path(os.getenv("STORYPROMPT_ARTIFACTS", "artifacts"))
LOG_LEVEL = os.getenv("STORYPROMPT_LOG_LEVEL", "INFO")
COST_LOG = Path(os.getenv("STORYPROMPT_COST_LOG", str(Path.home() / ".storyprompt_costs.csv")))

# ─── editing-session defaults ─────────────────────────────────────────────
DEFAULT_GENRE = "fantasy"
DEFAULT_MIN_WORDS = 75
DEFAULT_MAX_WORDS = 125
DEFAULT_CHAPTERS = 1
DEFAULT_UNIQUENESS = 100
