"""
Utility helpers for parser project.

clean_title is the final pass over whatever slice of the name the
handlers left as the title.
"""

import regex

# Hiragana/Katakana, CJK (ext A, unified, compatibility), half-width Katakana, Cyrillic
NON_ENGLISH_CHARS = "\u3040-\u30ff\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufaff\uff66-\uff9f\u0400-\u04ff"

MOVIE_FLAG_RE = regex.compile(r"[\[(]movie[)\]]", regex.IGNORECASE)
RUSSIAN_CAST_RE = regex.compile(r"\([^)]*[\u0400-\u04ff][^)]*\)$|(?<=/.*)\(.*\)$")
LEADING_MARKINGS_RE = regex.compile(r"^[\[【★].*[\]】★][ .]?(.+)")
TRAILING_MARKINGS_RE = regex.compile(r"(.+)[ .]?[\[【★].*[\]】★]$")
ALT_TITLES_RE = regex.compile(
    rf"[^/|(]*[{NON_ENGLISH_CHARS}][^/|]*[/|]|[/|][^/|(]*[{NON_ENGLISH_CHARS}][^/|]*"
)
NOT_ONLY_NON_ENGLISH_RE = regex.compile(
    rf"(?<=[a-zA-Z][^{NON_ENGLISH_CHARS}]+)[{NON_ENGLISH_CHARS}].*[{NON_ENGLISH_CHARS}]"
    rf"|[{NON_ENGLISH_CHARS}].*[{NON_ENGLISH_CHARS}](?=[^{NON_ENGLISH_CHARS}]+[a-zA-Z])"
)
NOT_ALLOWED_SYMBOLS_AT_START_AND_END = regex.compile(
    rf"^[^\w{NON_ENGLISH_CHARS}#\[【★]+|[ \-:/\\\[|{{(#$&^]+$"
)
REMAINING_NOT_ALLOWED_SYMBOLS_AT_START_AND_END = regex.compile(
    rf"^[^\w{NON_ENGLISH_CHARS}#]+|[\[\]({{}} ]+$"
)


def clean_title(raw_title: str) -> str:
    """
    Tidy the title slice:
      - dot-delimited names (no spaces at all) get dots turned into spaces
      - [movie] flags, Cyrillic cast lists and bracketed release markings go
      - alternate-language titles split by / or | are dropped
      - stray CJK/Cyrillic runs next to Latin text are dropped
    """
    cleaned = raw_title

    if " " not in cleaned and "." in cleaned:
        cleaned = cleaned.replace(".", " ")

    cleaned = cleaned.replace("_", " ")
    cleaned = MOVIE_FLAG_RE.sub("", cleaned, count=1)
    cleaned = NOT_ALLOWED_SYMBOLS_AT_START_AND_END.sub("", cleaned)
    cleaned = RUSSIAN_CAST_RE.sub("", cleaned, count=1)
    cleaned = LEADING_MARKINGS_RE.sub(r"\1", cleaned, count=1)
    cleaned = TRAILING_MARKINGS_RE.sub(r"\1", cleaned, count=1)
    cleaned = ALT_TITLES_RE.sub("", cleaned)
    cleaned = NOT_ONLY_NON_ENGLISH_RE.sub("", cleaned)
    cleaned = REMAINING_NOT_ALLOWED_SYMBOLS_AT_START_AND_END.sub("", cleaned)
    return cleaned.strip()
