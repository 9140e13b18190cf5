"""
Core parser module.

Runs an ordered list of handlers over a release name, tracks where the
title ends and hands the surviving slice to utils.clean_title.

Provides Parser().parse(name) -> ParseResult
"""

import logging
import re
from dataclasses import dataclass, field, fields as dc_fields
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

import regex

from .transformers import none
from .utils import clean_title

logger = logging.getLogger(__name__)

PATTERN_TYPES = (re.Pattern, type(regex.compile("")))
BEFORE_TITLE_RE = regex.compile(r"^\[([^\[\]]+)\]")
UNDERSCORES_RE = regex.compile(r"_+")

# camelCase keys are accepted so catalogs written for other ports load as-is
OPTION_ALIASES = {
    "skipIfAlreadyFound": "skip_if_already_found",
    "skipFromTitle": "skip_from_title",
    "skipIfFirst": "skip_if_first",
    "skipIfBefore": "skip_if_before",
}


class ConfigurationError(ValueError):
    """Raised when a handler cannot be registered."""


@dataclass(frozen=True)
class HandlerOptions:
    skip_if_already_found: bool = True  # skip if this field already has a value
    skip_from_title: bool = False  # a match does not end the title
    skip_if_first: bool = False  # skip if the match precedes every other matched field
    skip_if_before: Tuple[str, ...] = ()  # skip if the match precedes any of these fields
    remove: bool = False  # cut the match out for the handlers that follow
    value: Any = None  # stored instead of the transformed match

    @classmethod
    def from_dict(cls, options: Optional[Dict[str, Any]]) -> "HandlerOptions":
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if not isinstance(options, Mapping):
            raise ConfigurationError(f"Handler options should be a mapping. Got: {type(options).__name__}")
        known = {f.name for f in dc_fields(cls)}
        kwargs = {}
        for key, val in options.items():
            name = OPTION_ALIASES.get(key, key)
            if name not in known:
                raise ConfigurationError(f"Unknown handler option: {key}")
            kwargs[name] = val
        if "skip_if_before" in kwargs:
            kwargs["skip_if_before"] = _field_names(kwargs["skip_if_before"])
        return cls(**kwargs)


def _field_names(groups) -> Tuple[str, ...]:
    # a bare string names one field, not a sequence of letters
    if not groups:
        return ()
    if isinstance(groups, str):
        return (groups,)
    if not isinstance(groups, (list, tuple, set, frozenset)) or not all(isinstance(g, str) for g in groups):
        raise ConfigurationError(f"skipIfBefore should list field names. Got: {groups!r}")
    return tuple(groups)


@dataclass
class ParseResult:
    title: str
    fields: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        out = dict(self.fields)
        out["title"] = self.title
        return out


def _clean_match(match) -> str:
    """First capturing group, or the whole match when there is none."""
    if match.re.groups:
        group = match.group(1)
        if group:
            return group
    return match.group(0)


def create_handler_from_regex(name: str, pattern, transformer: Callable, options: HandlerOptions) -> Callable:
    """
    Wrap a compiled pattern into a handler with the context contract.

    The returned function takes {"title", "result", "matched"} and returns
    None or {"raw_match", "match_index", "remove", "skip_from_title"}.
    """

    def handler(context: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        title = context["title"]
        result = context["result"]
        matched = context["matched"]

        if result.get(name) and options.skip_if_already_found:
            return None

        match = pattern.search(title)
        if not match or not match.group(0):
            return None

        raw_match = match.group(0)
        match_index = match.start()
        transformed = transformer(_clean_match(match), result.get(name))
        if not transformed:
            logger.debug("%s: transformer rejected %r", name, raw_match)
            return None

        before_title = BEFORE_TITLE_RE.match(title)
        is_before_title = bool(before_title) and raw_match in before_title.group(1)

        others = [entry for key, entry in matched.items() if key != name]
        if options.skip_if_first and others and all(match_index < e["match_index"] for e in others):
            logger.debug("%s: %r precedes every other match, skipped", name, raw_match)
            return None

        if any(group in matched and match_index < matched[group]["match_index"]
               for group in options.skip_if_before):
            logger.debug("%s: %r found before %s, skipped", name, raw_match, options.skip_if_before)
            return None

        if name not in matched:
            matched[name] = {"raw_match": raw_match, "match_index": match_index}
        result[name] = options.value if options.value is not None else transformed
        logger.debug("%s: matched %r at %d", name, raw_match, match_index)
        return {
            "raw_match": raw_match,
            "match_index": match_index,
            "remove": options.remove,
            "skip_from_title": is_before_title or options.skip_from_title,
        }

    handler.handler_name = name
    return handler


def _named_handler(name: str, fn: Callable) -> Callable:
    """Own wrapper per registration so the caller's function stays untouched."""

    def handler(context: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return fn(context)

    handler.handler_name = name
    return handler


class Parser:
    """
    Ordered handler registry.

    Handlers run in registration order; that order decides which one wins
    a field and how far the title reaches.
    """

    def __init__(self):
        self.handlers: List[Callable] = []

    def add_handler(self, handler_name, handler=None, transformer=None, options=None):
        if handler is None and callable(handler_name):
            handler = handler_name
            handler_name = "unknown"

        if not isinstance(handler_name, str):
            raise ConfigurationError(f"Handler name should be a string. Got: {type(handler_name).__name__}")

        if isinstance(handler, PATTERN_TYPES):
            if isinstance(transformer, (Mapping, HandlerOptions)) and options is None:
                options, transformer = transformer, None
            if transformer is None:
                transformer = none
            elif not callable(transformer):
                raise ConfigurationError(f"Transformer for {handler_name} should be callable. Got: {type(transformer).__name__}")
            handler = create_handler_from_regex(handler_name, handler, transformer, HandlerOptions.from_dict(options))
        elif callable(handler):
            handler = _named_handler(handler_name, handler)
        else:
            raise ConfigurationError(f"Handler for {handler_name} should be a compiled pattern or a function. Got: {type(handler).__name__}")

        self.handlers.append(handler)
        logger.debug("Registered handler #%d for %s", len(self.handlers), handler_name)

    register = add_handler

    def parse(self, raw_title: str) -> ParseResult:
        """
        Parse a release name.

        Args:
            raw_title: raw name (not path)

        Returns:
            ParseResult with the cleaned title and every matched field
        """
        title = UNDERSCORES_RE.sub(" ", raw_title)
        result: Dict[str, Any] = {}
        matched: Dict[str, Dict[str, Any]] = {}
        end_of_title = len(title)

        for handler in self.handlers:
            match_result = handler({"title": title, "result": result, "matched": matched})
            if not match_result:
                continue

            raw_match = match_result["raw_match"]
            match_index = match_result["match_index"]
            remove = match_result.get("remove", False)
            skip_from_title = match_result.get("skip_from_title", False)

            if remove:
                title = title[:match_index] + title[match_index + len(raw_match):]
            if not skip_from_title and match_index and match_index < end_of_title:
                end_of_title = match_index
            if remove and skip_from_title and match_index < end_of_title:
                # removed text sat inside the title, pull the boundary back by its length
                end_of_title = max(0, end_of_title - len(raw_match))
            logger.debug("Title ends at %d after %s", end_of_title, handler.handler_name)

        return ParseResult(title=clean_title(title[:end_of_title]), fields=result)
