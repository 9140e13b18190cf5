"""
Directory processing: parse the names of root folders or files.
"""

import logging
from pathlib import Path
from typing import Any, Dict

from .parser import Parser

logger = logging.getLogger(__name__)


def parse_directory(source_dir: str, parser: Parser, mode: str = "dirs") -> Dict[str, Dict[str, Any]]:
    """
    Parse the immediate children of source_dir.

    Args:
        source_dir: path to scan
        parser: parser with its handlers already registered
        mode: "dirs" (default) or "files"

    Returns:
        mapping absolute_path -> parse result dict (title plus matched fields)
    """
    root = Path(source_dir)
    if mode == "dirs":
        items = [p for p in root.iterdir() if p.is_dir()]
    elif mode == "files":
        items = [p for p in root.iterdir() if p.is_file()]
    else:
        raise ValueError("mode must be 'dirs' or 'files'")

    raw: Dict[str, Dict[str, Any]] = {}
    for p in sorted(items):
        result = parser.parse(p.name).to_dict()
        logger.debug("%s -> %s", p.name, result["title"])
        raw[str(p.resolve())] = result
    logger.info("Parsed %d %s under %s", len(raw), mode, root)
    return raw
