import csv
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from openpyxl import load_workbook

from glossary_extractor.row_reader import RowReader, SequenceRowReader
from glossary_extractor.types import Row

logger = logging.getLogger(__name__)

XLSX_SUFFIXES = frozenset({".xlsx", ".xlsm"})
CSV_SUFFIXES = frozenset({".csv"})


@dataclass
class TabularSource:
    """An opened sheet: its header row plus a reader over the data rows below it."""
    name: str
    header: Row
    reader: RowReader


def _text(value: object) -> str:
    """Cell value -> text. Empty cells become ''."""
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _split_header(path: str, raw_rows: Iterable[Iterable[object]]) -> tuple[Row | None, list[Row]]:
    """
    First row is the header; the rest are data rows as text tuples.
    Blank rows (every cell empty) are skipped, they carry no entry.
    """
    header: Row | None = None
    rows: list[Row] = []
    for line_index, raw in enumerate(raw_rows, start=1):
        row = tuple(_text(v) for v in raw)
        if header is None:
            header = row
            continue
        if not any(c.strip() for c in row):
            logger.debug("%s: skipping blank row %d", path, line_index)
            continue
        rows.append(row)
    if header is not None and not any(c.strip() for c in header):
        # no header; empty sheets can still report one blank row
        return None, rows
    return header, rows


def _read_xlsx(path: str) -> tuple[Row | None, list[Row]]:
    # read_only streams the sheet; data_only returns cached formula results instead of formulas
    workbook = load_workbook(path, read_only=True, data_only=True)
    try:
        if len(workbook.worksheets) > 1:
            logger.warning(
                "%s has %d sheets. Only the first sheet (%r) will be processed; "
                "please delete the remaining sheets.",
                path, len(workbook.worksheets), workbook.sheetnames[0],
            )
        sheet = workbook.worksheets[0]
        return _split_header(path, sheet.iter_rows(values_only=True))
    finally:
        workbook.close()


def _read_csv(path: str, *, encoding: str = "utf-8-sig") -> tuple[Row | None, list[Row]]:
    # utf-8-sig tolerates a BOM written by spreadsheet exports
    with open(path, "r", encoding=encoding, newline="") as f:
        return _split_header(path, csv.reader(f))


def open_source(path: str) -> tuple[bool, str | None, TabularSource | None]:
    """
    Open a workbook (.xlsx/.xlsm, first sheet) or a .csv file.
    The file is fully read and closed before returning.
    Returns:
      (True, None, TabularSource)       on success
      (False, <diagnostic>, None)       when the file cannot be used
    """
    p = Path(path)
    suffix = p.suffix.lower()

    if suffix in XLSX_SUFFIXES:
        read = _read_xlsx
    elif suffix in CSV_SUFFIXES:
        read = _read_csv
    else:
        return False, f"Unsupported file type {suffix or '(none)'!r} for {path}. Expected .xlsx, .xlsm or .csv", None

    try:
        header, rows = read(path)
    except FileNotFoundError:
        logger.debug("Source file not found: %s", path)
        return False, f"File not found: {path}", None
    except Exception as e:
        logger.debug("Could not read %s: %s", path, e)
        return False, f"Could not read {path}: {e.__class__.__name__}: {e}", None

    if header is None:
        logger.debug("%s: no header row found (data rows below: %d)", path, len(rows))
        if rows:
            return False, f"Row 1 of {path} is blank; it must hold the column headers", None
        return False, f"{path} is empty; row 1 must hold the column headers", None

    logger.info("Opened %s: %d data rows", p.name, len(rows))
    return True, None, TabularSource(name=p.name, header=header, reader=SequenceRowReader(rows))
