import re
from collections.abc import Callable, Iterable, Sequence
from typing import TypeVar

T = TypeVar("T")
Normalizer = Callable[[str | None], str | None]

HTML_ENTITIES = {
    "amp": "&",
    "quot": '"',
    "#39": "'",
    "lt": "<",
    "gt": ">",
}

_ENTITY_RE = re.compile(r"&(amp|quot|#39|lt|gt);")
_WHITESPACE_RE = re.compile(r"\s+")


def decode_entities(value: str) -> str:
    """
    Decode the common HTML entities until the string stops changing,
    so doubly-escaped text like "&amp;amp;" ends up fully decoded.
    """
    while True:
        decoded = _ENTITY_RE.sub(lambda m: HTML_ENTITIES[m.group(1)], value)
        if decoded == value:
            return decoded
        value = decoded


def squash(value: str | None) -> str | None:
    """Collapse whitespace runs and trim. Returns None instead of an empty string."""
    if not value:
        return None
    return _WHITESPACE_RE.sub(" ", value).strip() or None


def clean(value: str | None) -> str | None:
    """
    Decode entities, collapse whitespace runs and trim.
    Returns None instead of an empty string.
    """
    if not value:
        return None
    return squash(decode_entities(value))


def clean_lines(text: str | None, normalize: Normalizer = clean) -> list[str]:
    """Split text into normalized, non-empty lines."""
    if not text:
        return []
    return [line for line in (normalize(raw) for raw in text.split("\n")) if line]


def first_non_empty(*values: str | None) -> str | None:
    for value in values:
        if value:
            return value
    return None


def first_match(
    text: str | None,
    patterns: Iterable[re.Pattern[str]],
    normalize: Normalizer = clean,
) -> str | None:
    """Return the first normalized, non-empty group 1 capture across the patterns."""
    if not text:
        return None
    for pattern in patterns:
        match = pattern.search(text)
        if match and match.group(1):
            parsed = normalize(match.group(1))
            if parsed:
                return parsed
    return None


def classify(text: str, rules: Sequence[tuple[re.Pattern[str], T]], default: T) -> T:
    """
    Evaluate ordered (pattern, label) rules against the text.
    The first pattern that matches decides the label.
    """
    for pattern, label in rules:
        if pattern.search(text):
            return label
    return default
