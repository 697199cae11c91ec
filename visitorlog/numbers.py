"""Helpers for reading numeric cells that arrive as free text."""

from __future__ import annotations

import math
import re
import unicodedata
from typing import Any

# \d on str patterns matches every Unicode decimal digit (Devanagari, Bengali, ...)
DIGIT_PATTERN = re.compile(r"\d")
NUMBER_PATTERN = re.compile(r"-?[0-9]+(?:[.,][0-9]+)?")


def _latin_digit(match: re.Match) -> str:
    char = match.group(0)
    value = unicodedata.decimal(char, None)
    return char if value is None else str(value)


def normalize_digits(value: Any) -> str:
    """Return ``str(value)`` with every decimal digit glyph mapped to 0-9."""
    text = str(value)
    if text.isascii():
        return text
    return DIGIT_PATTERN.sub(_latin_digit, text)


def coerce_number(value: Any) -> float:
    """
    Turn an arbitrary cell into a finite float.

    Rules:
    - None, booleans and non-finite floats become 0.
    - Text has its digits normalized, then the first signed integer or
      decimal (``.`` or ``,`` as separator) is parsed.
    - No match means 0. The sign is preserved.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return 0.0
        return number if math.isfinite(number) else 0.0

    text = normalize_digits(value).strip()
    if not text:
        return 0.0
    match = NUMBER_PATTERN.search(text)
    if match is None:
        return 0.0
    try:
        number = float(match.group(0).replace(",", "."))
    except ValueError:
        return 0.0
    return number if math.isfinite(number) else 0.0


def coerce_count(value: Any) -> float:
    """Like :func:`coerce_number` but never negative."""
    return max(coerce_number(value), 0.0)


__all__ = ["normalize_digits", "coerce_number", "coerce_count"]
