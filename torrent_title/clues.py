"""
Handler catalog loading.

The parser ships no handlers of its own; the catalog lives in a JSON file
(clues.json next to this module by default), one entry per handler, in run order:

    [
      {"name": "year", "pattern": "\\b(19\\d{2}|20\\d{2})\\b", "transformer": "integer",
       "options": {"remove": true}},
      {"name": "resolution", "pattern": "\\b(\\d{3,4}p)\\b", "flags": "i",
       "transformer": "lowercase"}
    ]
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import regex

from . import transformers
from .config import CLUES_FILE
from .parser import ConfigurationError, Parser

logger = logging.getLogger(__name__)

TRANSFORMERS = {
    "none": transformers.none,
    "integer": transformers.integer,
    "boolean": transformers.boolean,
    "lowercase": transformers.lowercase,
    "uppercase": transformers.uppercase,
    "range": transformers.range_func,
    "array": transformers.array(),
    "uniq_concat": transformers.uniq_concat(),
}

FLAGS = {
    "i": regex.IGNORECASE,
    "m": regex.MULTILINE,
    "s": regex.DOTALL,
    "x": regex.VERBOSE,
}


def load_clues(filepath: Path = CLUES_FILE) -> List[Dict[str, Any]]:
    """
    Load the handler catalog from file.

    Args:
        filepath: JSON file path.

    Returns:
        list: catalog entries, or an empty list if the file is missing.
    """
    path = Path(filepath)
    if not path.exists():
        logger.warning("No clues file at %s, starting with an empty catalog", path)
        return []
    with path.open("r", encoding="utf-8") as fh:
        clues = json.load(fh)
    if not isinstance(clues, list):
        raise ConfigurationError(f"{path} should hold a list of handlers")
    return clues


def _compile(entry: Dict[str, Any]):
    flags = 0
    for letter in entry.get("flags", ""):
        if letter not in FLAGS:
            raise ConfigurationError(f"Unknown regex flag {letter!r} for {entry.get('name')}")
        flags |= FLAGS[letter]
    try:
        return regex.compile(entry["pattern"], flags)
    except regex.error as exc:
        raise ConfigurationError(f"Bad pattern for {entry.get('name')}: {exc}") from exc


def register_clues(parser: Parser, clues: List[Dict[str, Any]]) -> Parser:
    """Compile every catalog entry and add it to parser in file order."""
    for entry in clues:
        if "name" not in entry or "pattern" not in entry:
            raise ConfigurationError(f"Catalog entry needs 'name' and 'pattern': {entry}")
        transformer_name = entry.get("transformer", "none")
        if transformer_name not in TRANSFORMERS:
            raise ConfigurationError(f"Unknown transformer {transformer_name!r} for {entry['name']}")
        parser.add_handler(entry["name"], _compile(entry), TRANSFORMERS[transformer_name], entry.get("options"))
    logger.debug("Registered %d handlers from catalog", len(clues))
    return parser


def build_parser(filepath: Optional[Path] = None) -> Parser:
    return register_clues(Parser(), load_clues(filepath or CLUES_FILE))
