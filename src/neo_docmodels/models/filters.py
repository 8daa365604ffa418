"""
Attribute filters applied to model values before validation.
"""
import math
import re
from numbers import Number
from typing import Any, Callable, Dict, Optional, Union

from .schema import STRIP_TAGS, NUMERIC_FILTER

TAG_PATTERN = re.compile(r"</?[^>]+>", re.IGNORECASE)
LINE_BREAKS_PATTERN = re.compile(r"([^\r\n]*)?(\r\n|\n|\r)+([^\r\n]*)?")
NUMBER_PATTERN = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*$")
INTEGER_PATTERN = re.compile(r"^\s*[+-]?\d+\s*$")


def to_number(value: Any) -> Optional[Union[int, float]]:
    """Convert a value to a finite number.

    Numbers are returned unchanged, numeric strings are parsed (``int`` for
    integral text, ``float`` otherwise). Booleans and anything that is not
    a finite number give ``None``.
    """
    if isinstance(value, bool) or value is None:
        return None

    if isinstance(value, Number):
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
        return value if math.isfinite(number) else None

    if isinstance(value, str) and NUMBER_PATTERN.match(value):
        if INTEGER_PATTERN.match(value):
            return int(value)
        number = float(value)
        return number if math.isfinite(number) else None

    return None


def is_numeric(value: Any) -> bool:
    """Check that a value parses to a finite number."""
    return to_number(value) is not None


def is_float(value: Any) -> bool:
    """Check that a numeric value has a fractional part."""
    number = to_number(value)
    if number is None:
        return False
    return float(number) % 1 != 0


def strip_tags(value: str) -> str:
    """Remove html tags and collapse runs of line breaks into one newline."""
    value = TAG_PATTERN.sub("", value)
    return LINE_BREAKS_PATTERN.sub(r"\1\n\3", value)


def _strip_tags_filter(value: Any) -> Any:
    if isinstance(value, str):
        return strip_tags(value)
    return value


def _numeric_filter(value: Any) -> Any:
    number = to_number(value)
    return value if number is None else number


FILTERS: Dict[str, Callable[[Any], Any]] = {
    STRIP_TAGS: _strip_tags_filter,
    NUMERIC_FILTER: _numeric_filter,
}


def get_filter(kind: str) -> Optional[Callable[[Any], Any]]:
    """Return the filter function for a kind, or None if unknown."""
    return FILTERS.get(kind)
