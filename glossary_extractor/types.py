from collections.abc import Sequence
from typing import Literal, TypedDict

# a row is plain text cells, 0-indexed; richer cell types are converted at the source boundary
Row = Sequence[str]

# logical field name -> resolved column index, e.g. {"key": 0, "value": 3}
HeaderMap = dict[str, int]

# column index before the header scan has found it
UNRESOLVED = -1

# --- header-specific reason codes ---
HeaderErrorCode = Literal[
    "MISSING_COLUMN",
    "DUPLICATE_COLUMN",
]

# --- what to do when a normalized key shows up again ---
DuplicatePolicy = Literal[
    "overwrite-and-log",   # latest value wins
    "reject",              # first value wins
]

DUPLICATE_POLICIES: tuple[DuplicatePolicy, ...] = ("overwrite-and-log", "reject")


class HeaderError(TypedDict):
    code: HeaderErrorCode
    field: str    # logical field, e.g. "key"
    column: str   # header text we looked for, e.g. "stringID"


class DuplicateKey(TypedDict):
    key: str        # normalized (lower-cased) key
    new_value: str
    old_value: str


class ExtractionSummary(TypedDict):
    name: str
    rows: int         # data rows read (header excluded)
    entries: int      # distinct normalized keys
    duplicates: int
    duration_s: float
