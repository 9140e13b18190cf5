"""
Value transformers for pattern handlers.

Every transformer is called as transformer(input_value, previous) where
previous is the value already stored for the field (or None). Returning
a falsy value rejects the match.
"""

import regex
from typing import Any, Callable, List, Optional

NON_DIGITS_RE = regex.compile(r"\D+")


def none(input_value: str, previous: Any = None) -> str:
    return input_value


def value(template: Any) -> Callable:
    """Fixed value; a "$1" inside a string template is replaced by the match."""

    def transformer(input_value: str, previous: Any = None) -> Any:
        if isinstance(template, str):
            return template.replace("$1", input_value)
        return template

    return transformer


def integer(input_value: str, previous: Any = None) -> Optional[int]:
    try:
        return int(input_value)
    except (TypeError, ValueError):
        return None


def boolean(input_value: str, previous: Any = None) -> bool:
    return True


def lowercase(input_value: str, previous: Any = None) -> str:
    return input_value.lower()


def uppercase(input_value: str, previous: Any = None) -> str:
    return input_value.upper()


def array(chain: Optional[Callable] = None) -> Callable:
    def transformer(input_value: str, previous: Any = None) -> List[Any]:
        return [chain(input_value) if chain else input_value]

    return transformer


def uniq_concat(chain: Optional[Callable] = None) -> Callable:
    """Append to the list already stored for the field, skipping duplicates."""

    def transformer(input_value: str, previous: Any = None) -> List[Any]:
        out = list(previous or [])
        item = chain(input_value) if chain else input_value
        if item not in out:
            out.append(item)
        return out

    return transformer


def range_func(input_value: str, previous: Any = None) -> Optional[List[int]]:
    """
    "1-3" -> [1, 2, 3]; "1 2 3" -> [1, 2, 3].
    Anything that is not an increasing run is rejected.
    """
    numbers = [int(n) for n in NON_DIGITS_RE.sub(" ", input_value).split()]
    if len(numbers) == 2 and numbers[0] < numbers[1]:
        return list(range(numbers[0], numbers[1] + 1))
    if len(numbers) > 2 and all(b == a + 1 for a, b in zip(numbers, numbers[1:])):
        return numbers
    return None
