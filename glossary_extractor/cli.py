import argparse
import logging
import sys
from typing import NoReturn

from dotenv import load_dotenv

from glossary_extractor.config import Config
from glossary_extractor.errors import DEFAULT_EXIT_CODE, FatalError
from glossary_extractor.extractor import extract_from_source
from glossary_extractor.report import render_report
from glossary_extractor.sources import open_source
from glossary_extractor.types import DUPLICATE_POLICIES

logger = logging.getLogger("cli")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="glossary-extractor",
        description="Read a localization sheet (stringID + one language column) and report its glossary.",
    )
    p.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Path to the .xlsx (first sheet) or .csv dictionary. Omit to use the example file.",
    )

    # Config (CLI > file > env > defaults)
    p.add_argument(
        "--config-file",
        default=None,
        help='Path to JSON config (e.g., {"key_column": "stringID", "value_column": "EN"})',
    )
    p.add_argument("--key-column", default=None, help="Header of the string id column (default: stringID)")
    p.add_argument("--value-column", default=None, help="Header of the language column (default: EN)")
    p.add_argument(
        "--on-duplicate",
        default=None,
        choices=list(DUPLICATE_POLICIES),
        help="Which value wins on a duplicate string id: latest (overwrite-and-log) or first (reject)",
    )

    # Pipeline
    p.add_argument("--log-every-rows", type=int, default=10_000, help="Progress log cadence")

    # Logging
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level",
    )
    return p


def _print_info() -> None:
    print("Pass in an xlsx dictionary to parse and export")


def error_exit(message: str, exit_code: int = DEFAULT_EXIT_CODE) -> NoReturn:
    """Fatal reporter for the command line: print the cause and stop the process."""
    print("\n~~~~~~~~~~~~~~~~~~~~~~", file=sys.stderr)
    print(f"Error:\n{message}", file=sys.stderr)
    sys.exit(exit_code)


def main(argv: list[str] | None = None) -> None:
    load_dotenv()  # loads .env into process env

    parser = _build_parser()
    args = parser.parse_args(argv)

    # --- logging setup ---
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # --- build config ---
    try:
        cfg = Config(
            file_path=args.config_file,
            key_column=args.key_column,
            value_column=args.value_column,
            on_duplicate=args.on_duplicate,
        )
    except ValueError as e:
        error_exit(f"Invalid configuration: {e}")
    if args.log_every_rows <= 0:
        error_exit(f"Invalid configuration: --log-every-rows must be > 0 (got {args.log_every_rows})")

    path = args.path
    if path is None:
        _print_info()
        path = cfg.example_file()
        print(f"No file given, using the example dictionary: {path}")

    # --- open source ---
    ok, open_err, source = open_source(path)
    if not ok or source is None:
        error_exit(open_err or f"Could not open {path}")

    # --- run extraction ---
    try:
        glossary, summary = extract_from_source(
            source, cfg, report_fatal=error_exit, log_every_rows=args.log_every_rows,
        )
    except FatalError as e:
        error_exit(e.message, e.exit_code)
    except Exception as e:
        logger.exception("Fatal error: %s", e)
        sys.exit(2)

    if glossary is None:
        sys.exit(DEFAULT_EXIT_CODE)

    logger.info("Summary: %s", summary)
    sys.stdout.write(render_report(glossary))
    sys.exit(0)


if __name__ == "__main__":
    main()
