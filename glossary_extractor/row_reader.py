from collections.abc import Sequence
from typing import Protocol

from glossary_extractor.types import Row


class RowReader(Protocol):
    """
    Forward-only stream of data rows (the header row is never part of it).
    - has_more(): no side effects; repeat calls give the same answer until read_next()
    - read_next(): only valid while has_more() is True
    """

    def has_more(self) -> bool: ...

    def read_next(self) -> Row: ...


def cell(row: Row, index: int) -> str:
    """Text at `index`; missing cells (short row or None) read as ''."""
    if index < 0 or index >= len(row):
        return ""
    value = row[index]
    return "" if value is None else str(value)


class SequenceRowReader:
    """Cursor over rows already in memory (e.g. a sheet read by sources.open_source)."""

    def __init__(self, rows: Sequence[Row]) -> None:
        self._rows = rows
        self._offset = 0

    def has_more(self) -> bool:
        return self._offset < len(self._rows)

    def read_next(self) -> Row:
        if not self.has_more():
            raise IndexError("read_next() called with no rows left")
        row = self._rows[self._offset]
        self._offset += 1
        return row
