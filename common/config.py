"""
Runtime configuration for the reports app.

Values come from environment variables (a `.env` file is loaded by `main.py`
through `python-dotenv`) with defaults that work out of the box:

    - `MDR_STORAGE_BACKEND`: "json" (default) or "sqlite",
    - `MDR_DATA_DIR`: where the reports blob / database lives,
    - `MDR_STORAGE_KEY`: name of the blob (file stem or key/value row),
    - `MDR_LOG_LEVEL`: root logging level, e.g. "DEBUG".

Settings are read when `load_settings()` is called, not at import time, so
`load_dotenv()` only has to run before the first call.
"""

from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from common.constants import STORAGE_KEY

# Project root = .../matchday_reports
APP_ROOT = Path(__file__).resolve().parents[1]

BACKENDS = ("json", "sqlite")
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


@dataclass(frozen=True)
class Settings:
    storage_backend: str
    data_dir: Path
    storage_key: str
    log_level: str


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if env is None else env

    backend = (env.get("MDR_STORAGE_BACKEND") or "json").strip().lower()
    if backend not in BACKENDS:
        raise ValueError(f"MDR_STORAGE_BACKEND must be one of {BACKENDS}, got {backend!r}")

    data_dir = env.get("MDR_DATA_DIR") or str(APP_ROOT / "data")
    return Settings(
        storage_backend=backend,
        data_dir=Path(data_dir).expanduser(),
        storage_key=(env.get("MDR_STORAGE_KEY") or STORAGE_KEY).strip(),
        log_level=(env.get("MDR_LOG_LEVEL") or "INFO").strip().upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    # basicConfig is a no-op once handlers exist, which keeps Streamlit reruns quiet
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
    logging.getLogger("reports").setLevel(getattr(logging, level, logging.INFO))
