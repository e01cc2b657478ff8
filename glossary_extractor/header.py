import logging
from collections.abc import Mapping

from glossary_extractor.types import UNRESOLVED, HeaderError, HeaderMap, Row

logger = logging.getLogger(__name__)


def _fold(text: object) -> str:
    """Header comparison form: case-folded, whitespace kept. None -> ''."""
    if text is None:
        return ""
    return str(text).casefold()


def resolve_header(
    header_row: Row,
    columns: Mapping[str, str],
) -> tuple[bool, HeaderError | None, HeaderMap | None]:
    """
    Locate each wanted column in `header_row`.
    `columns` maps a logical field to the header text it lives under,
    e.g. {"key": "stringID", "value": "EN"}.
      - single left-to-right pass over the header cells
      - case-insensitive, whole-cell match (" stringID" does not match "stringID")
      - a header text seen twice -> DUPLICATE_COLUMN (reported at the 2nd hit)
      - a header text never seen -> MISSING_COLUMN (first missing field in `columns` order)
    Returns:
      (True, None, {field: index, ...})    on success
      (False, <HeaderError>, None)         on failure
    Raises ValueError only when two fields are configured with the same header text.
    """
    if not columns:
        raise ValueError("at least one column must be requested")

    # folded header text -> logical field
    wanted: dict[str, str] = {}
    for field, column in columns.items():
        folded = _fold(column)
        if not folded.strip():
            raise ValueError(f"column name for field {field!r} is empty")
        if folded in wanted:
            raise ValueError(
                f"fields {wanted[folded]!r} and {field!r} both map to column {column!r}"
            )
        wanted[folded] = field

    found: dict[str, int] = {field: UNRESOLVED for field in columns}

    for index, cell in enumerate(header_row):
        field = wanted.get(_fold(cell))
        if field is None:
            continue
        if found[field] != UNRESOLVED:
            logger.debug(
                "Header column %r seen at %d and %d", columns[field], found[field], index
            )
            return False, {"code": "DUPLICATE_COLUMN", "field": field, "column": columns[field]}, None
        found[field] = index

    for field, index in found.items():
        if index == UNRESOLVED:
            return False, {"code": "MISSING_COLUMN", "field": field, "column": columns[field]}, None

    logger.debug("Resolved header columns: %s", found)
    return True, None, found
