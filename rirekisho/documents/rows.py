"""Intermediate row model for fixed-form tables.

Layout engines describe tables as an ordered list of typed rows; the renderer
lowers them into the document engine. Padding therefore works on plain data
and can be tested without producing a document.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from rirekisho.documents.dates import BLANK, YearMonth

# The printed Rirekisho form has a fixed number of ruled lines per table.
# Short histories are padded with empty ruled rows so the document keeps the
# shape recruiters expect from the paper form.
HISTORY_MIN_ROWS = 15
CERTIFICATION_MIN_ROWS = 6


class RowKind(str, Enum):
    """Kinds of table rows."""

    HEADING = "heading"  # centered caption such as 学歴 / 職歴
    ENTRY = "entry"  # year | month | text
    CLOSING = "closing"  # right-aligned 以上
    PADDING = "padding"  # empty ruled row


@dataclass(frozen=True)
class Row:
    """One table row of a fixed-form table."""

    kind: RowKind
    text: str = ""
    year: str = ""
    month: str = ""
    align_right: bool = False

    @property
    def is_substantive(self) -> bool:
        return self.kind is RowKind.ENTRY

    @classmethod
    def heading(cls, text: str) -> Row:
        return cls(kind=RowKind.HEADING, text=text)

    @classmethod
    def entry(cls, text: str, period: YearMonth = BLANK) -> Row:
        return cls(kind=RowKind.ENTRY, text=text, year=period.year, month=period.month)

    @classmethod
    def marker(cls, text: str) -> Row:
        """Dateless, right-aligned entry such as 現在に至る."""
        return cls(kind=RowKind.ENTRY, text=text, align_right=True)

    @classmethod
    def closing(cls, text: str) -> Row:
        return cls(kind=RowKind.CLOSING, text=text, align_right=True)

    @classmethod
    def padding(cls) -> Row:
        return cls(kind=RowKind.PADDING)


def pad_rows(rows: list[Row], minimum: int) -> list[Row]:
    """Append padding rows until ``rows`` has at least ``minimum`` rows.

    Returns a new list; rows beyond the minimum are kept as they are.
    """
    shortfall = max(0, minimum - len(rows))
    return [*rows, *(Row.padding() for _ in range(shortfall))]


def count_kind(rows: list[Row], kind: RowKind) -> int:
    """Count rows of a given kind."""
    return sum(1 for row in rows if row.kind is kind)
