"""
Parser package initialization.

Exposes the handler engine and the title cleaner.
"""

from .parser import ConfigurationError, HandlerOptions, Parser, ParseResult
from .utils import clean_title
from .clues import build_parser, load_clues, register_clues
