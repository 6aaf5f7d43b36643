"""
Logging setup, environment-driven configuration, safe_print.
"""

import os
import sys
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .constants import DEFAULT_API_BASE_URL, DEFAULT_API_TIMEOUT_SEC


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
LOG_MAX_BYTES = 1_000_000

log = logging.getLogger("desk")


# ─── Safe print (no crash when there is no console) ──────────────

def safe_print(*args, **kwargs):
    try:
        print(*args, **kwargs)
    except Exception:
        pass


# ─── Logging ─────────────────────────────────────────────────────

def setup_logging(level=logging.INFO, log_file=None):
    """Attach console (and optional file) handlers to the shared logger.

    Safe to call more than once; handlers installed by a previous call are
    replaced rather than duplicated.
    """
    for handler in list(log.handlers):
        log.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    log.addHandler(console_handler)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        # Keep the file small: start over once it passes ~1 MB
        try:
            if path.exists() and path.stat().st_size > LOG_MAX_BYTES:
                path.write_text("", encoding="utf-8")
        except OSError as e:
            log.warning("Could not truncate log file %s: %s", path, e)
        file_handler = logging.FileHandler(str(path), encoding="utf-8")
        file_handler.setFormatter(formatter)
        log.addHandler(file_handler)

    log.setLevel(level)
    log.propagate = False
    return log


def resolve_log_level(value):
    """Map a level name like "debug" to a logging constant (INFO on junk)."""
    name = (value or "").strip().upper()
    level = logging.getLevelName(name) if name else logging.INFO
    return level if isinstance(level, int) else logging.INFO


# ─── Config ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class AppConfig:
    api_base_url: str = DEFAULT_API_BASE_URL
    api_timeout_seconds: int = DEFAULT_API_TIMEOUT_SEC
    log_level: int = logging.INFO
    log_file: Optional[str] = None


def _positive_int(raw, default):
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


def load_config(env=None):
    """Build AppConfig from the process environment (or a given mapping)."""
    env = os.environ if env is None else env
    base_url = (env.get("API_BASE_URL") or "").strip() or DEFAULT_API_BASE_URL
    return AppConfig(
        api_base_url=base_url.rstrip("/"),
        api_timeout_seconds=_positive_int(env.get("API_TIMEOUT_SECONDS"), DEFAULT_API_TIMEOUT_SEC),
        log_level=resolve_log_level(env.get("DESK_LOG_LEVEL")),
        log_file=(env.get("DESK_LOG_FILE") or "").strip() or None,
    )
