import logging
import time
from collections.abc import Mapping
from typing import Literal

from .config import Config
from .errors import DEFAULT_EXIT_CODE, FatalReporter, header_error_message, raise_fatal
from .glossary import Glossary
from .header import resolve_header
from .row_reader import RowReader, cell
from .sources import TabularSource
from .types import DuplicatePolicy, ExtractionSummary, Row

logger = logging.getLogger(__name__)

DriverState = Literal["START", "HEADER_RESOLVED", "READING", "DONE", "FAILED"]


class ExtractionDriver:
    """
    Header row + row reader -> Glossary.

    States: START -> HEADER_RESOLVED -> READING -> DONE, or START -> FAILED when the
    header does not resolve. A failed header goes to `report_fatal` before any row is
    read; duplicate keys are only recorded on the glossary.

    The default reporter raises errors.FatalError. A reporter that returns instead
    makes run() return None.
    """

    def __init__(
        self,
        columns: Mapping[str, str],
        *,
        on_duplicate: DuplicatePolicy = "overwrite-and-log",
        report_fatal: FatalReporter = raise_fatal,
        log_every_rows: int = 10_000,
    ) -> None:
        if "key" not in columns or "value" not in columns:
            raise ValueError(f"columns must name a 'key' and a 'value' field (got {sorted(columns)})")
        if log_every_rows <= 0:
            raise ValueError("log_every_rows must be > 0")
        self._columns = dict(columns)
        self._on_duplicate: DuplicatePolicy = on_duplicate
        self._report_fatal = report_fatal
        self._log_every_rows = log_every_rows

        self.state: DriverState = "START"
        self.rows_read = 0

    def run(self, name: str, header_row: Row, reader: RowReader) -> Glossary | None:
        if self.state != "START":
            raise RuntimeError(f"driver already used (state={self.state})")

        # --- START: resolve header ---
        _, header_err, header_map = resolve_header(header_row, self._columns)
        if header_err is not None or header_map is None:
            self.state = "FAILED"
            message = header_error_message(header_err) if header_err else f"Header of {name} could not be resolved"
            logger.debug("%s: %s (header: %s)", name, message, list(header_row))
            self._report_fatal(message, DEFAULT_EXIT_CODE)
            return None
        self.state = "HEADER_RESOLVED"

        key_col = header_map["key"]
        value_col = header_map["value"]
        logger.debug("%s: key column=%d value column=%d", name, key_col, value_col)

        glossary = Glossary(name, on_duplicate=self._on_duplicate)

        # --- READING: one entry per data row ---
        self.state = "READING"
        while reader.has_more():
            row = reader.read_next()
            self.rows_read += 1

            # absent/empty cells are taken as '' (no per-cell validation)
            glossary.add_entry(cell(row, key_col), cell(row, value_col))

            if self.rows_read % self._log_every_rows == 0:
                logger.info("Progress: rows=%d entries=%d duplicates=%d",
                            self.rows_read, len(glossary), len(glossary.duplicates))

        self.state = "DONE"
        logger.info("%s: read %d rows -> %d entries, %d duplicates",
                    name, self.rows_read, len(glossary), len(glossary.duplicates))
        return glossary


def summarize(glossary: Glossary, rows: int, duration_s: float) -> ExtractionSummary:
    return {
        "name": glossary.name,
        "rows": rows,
        "entries": len(glossary),
        "duplicates": len(glossary.duplicates),
        "duration_s": round(duration_s, 3),
    }


def extract_from_source(
    source: TabularSource,
    cfg: Config,
    *,
    report_fatal: FatalReporter = raise_fatal,
    log_every_rows: int = 10_000,
) -> tuple[Glossary | None, ExtractionSummary | None]:
    """
    Run one extraction over an opened source with the configured columns/policy.
    Returns (glossary, summary), or (None, None) if the header failed and
    `report_fatal` returned.
    """
    t0 = time.time()
    driver = ExtractionDriver(
        cfg.columns(),
        on_duplicate=cfg.on_duplicate(),
        report_fatal=report_fatal,
        log_every_rows=log_every_rows,
    )
    glossary = driver.run(source.name, source.header, source.reader)
    if glossary is None:
        return None, None

    summary = summarize(glossary, driver.rows_read, time.time() - t0)
    logger.debug("Final summary: %s", summary)
    return glossary, summary
