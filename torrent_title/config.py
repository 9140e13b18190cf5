"""
Load configuration (env + clues JSON path).

Prefer .env for simple environment values and clues.json (shipped inside
the package) for the evolving catalog of handlers.
"""
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent


def resolve_env_path(name: str, default) -> Path:
    raw = os.getenv(name)
    p = Path(raw) if raw else Path(default)
    if not p.is_absolute():
        return (BASE_DIR / p).resolve()
    return p.resolve()


def resolve_log_level(raw) -> str:
    """Upper-cased level name, WARNING when raw is not a logging level."""
    level = (raw or "WARNING").upper()
    if not isinstance(logging.getLevelName(level), int):
        return "WARNING"
    return level


CLUES_FILE = resolve_env_path("CLUES_FILE", BASE_DIR / "clues.json")
LOG_LEVEL = resolve_log_level(os.getenv("LOG_LEVEL"))
