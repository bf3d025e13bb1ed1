"""Year-month tokenization and display formatting.

Periods arrive as ``"YYYY-MM"`` strings (``.`` and ``/`` separators are
accepted too). Parsing is lenient by policy: anything that is not exactly a
numeric year and a valid month degrades to blank tokens instead of raising.
"""

from __future__ import annotations

import logging
import re
from typing import NamedTuple

logger = logging.getLogger(__name__)

PERIOD_SEPARATORS = re.compile(r"[-./]")

# Words some sources put in place of an end date for active entries
CURRENT_WORDS = frozenset({"現在", "在職中", "在学中", "present", "current", "now"})

ONGOING_LABEL = "現在"


class YearMonth(NamedTuple):
    """Year and month tokens; either may be an empty string."""

    year: str
    month: str

    @property
    def is_blank(self) -> bool:
        return not self.year and not self.month


BLANK = YearMonth("", "")


def tokenize_period(value: str | None) -> YearMonth:
    """Split a year-month string into ``(year, month)`` tokens.

    Returns ``BLANK`` for absent values, "current" words and malformed input.
    """
    if value is None:
        return BLANK

    text = value.strip()
    if not text:
        return BLANK

    if text.lower() in CURRENT_WORDS:
        return BLANK

    tokens = PERIOD_SEPARATORS.split(text)
    if len(tokens) != 2 or not all(token.isdecimal() for token in tokens):
        logger.debug(f"Unparseable period {value!r}, rendering blank")
        return BLANK

    year, month = tokens
    if len(year) != 4 or not 1 <= int(month) <= 12:
        logger.debug(f"Out-of-range period {value!r}, rendering blank")
        return BLANK

    return YearMonth(year, month)


def format_period(value: str | None) -> str:
    """Format a period for prose, e.g. ``"2020-04"`` -> ``"2020年04月"``.

    Unparseable values are shown verbatim; absent values become ``""``.
    """
    tokens = tokenize_period(value)
    if tokens.is_blank:
        return (value or "").strip()
    return f"{tokens.year}年{tokens.month.zfill(2)}月"


def format_span(start: str | None, end: str | None, ongoing: bool) -> str:
    """Format a start/end pair, substituting the ongoing label when active."""
    start_text = format_period(start)
    end_text = ONGOING_LABEL if ongoing else format_period(end)
    if not start_text and not end_text:
        return ""
    return f"{start_text} 〜 {end_text}".strip()


def format_birth_date(value: str | None) -> str:
    """Format ``"1990-01-01"`` as ``"1990年01月01日生"``; otherwise verbatim."""
    if not value or not value.strip():
        return ""

    text = value.strip()
    match = re.fullmatch(r"(\d{4})[-./](\d{1,2})[-./](\d{1,2})", text)
    if not match:
        return text

    year, month, day = match.groups()
    return f"{year}年{month.zfill(2)}月{day.zfill(2)}日生"
