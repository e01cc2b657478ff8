import json
import logging
import os

from glossary_extractor.types import DUPLICATE_POLICIES, DuplicatePolicy

logger = logging.getLogger(__name__)

# Defaults and env var names
DEFAULT_KEY_COLUMN = "stringID"
DEFAULT_VALUE_COLUMN = "EN"     # ISO 639 language code of the single value column
DEFAULT_ON_DUPLICATE: DuplicatePolicy = "overwrite-and-log"
DEFAULT_EXAMPLE_FILE = "ExampleDictionary/example.xlsx"

ENV_KEY_COLUMN = "GLOSSARY_KEY_COLUMN"
ENV_VALUE_COLUMN = "GLOSSARY_VALUE_COLUMN"
ENV_ON_DUPLICATE = "GLOSSARY_ON_DUPLICATE"
ENV_EXAMPLE_FILE = "GLOSSARY_EXAMPLE_FILE"

# JSON config file keys
_FILE_KEYS = ("key_column", "value_column", "on_duplicate", "example_file")


# ---------- helper functions ----------

def _env_str(name: str, default: str) -> str:
    """Read a trimmed string from the environment; return default if missing or blank."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def _load_json_file(path: str) -> dict:
    """
    Read a small JSON file. If the file is missing or invalid,
    return {} and log a message.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.info("Config file not found: %s (using env/defaults)", path)
        return {}
    except Exception as e:
        logger.warning("Could not read config file %s: %s (using env/defaults)", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Config file %s must hold a JSON object, got %s (ignored)", path, type(data).__name__)
        return {}
    return data


def _validate(key_column: str, value_column: str, on_duplicate: str) -> None:
    """Make sure the settings make sense together."""
    if not key_column.strip() or not value_column.strip():
        raise ValueError(f"Column names must be non-empty (got key={key_column!r} value={value_column!r})")
    if key_column.strip().casefold() == value_column.strip().casefold():
        raise ValueError(f"Key and value columns must differ (both {key_column!r})")
    if on_duplicate not in DUPLICATE_POLICIES:
        raise ValueError(f"on_duplicate must be one of {DUPLICATE_POLICIES} (got {on_duplicate!r})")


# ---------- config ----------

class Config:
    """
    Run settings for one extraction, loaded once at startup.
    Precedence: CLI overrides > JSON file > env vars (.env is loaded by the CLI) > defaults.
      cfg = Config(file_path="glossary.json", value_column=args.value_column)
      cfg.columns()   # {'key': 'stringID', 'value': 'EN'}
    Invalid combined values raise ValueError.
    """

    def __init__(
        self,
        *,
        file_path: str | None = None,
        key_column: str | None = None,
        value_column: str | None = None,
        on_duplicate: str | None = None,
        example_file: str | None = None,
    ) -> None:
        self._file_path = file_path

        # env
        key = _env_str(ENV_KEY_COLUMN, DEFAULT_KEY_COLUMN)
        value = _env_str(ENV_VALUE_COLUMN, DEFAULT_VALUE_COLUMN)
        policy = _env_str(ENV_ON_DUPLICATE, DEFAULT_ON_DUPLICATE)
        example = _env_str(ENV_EXAMPLE_FILE, DEFAULT_EXAMPLE_FILE)

        # file
        if file_path:
            data = _load_json_file(file_path)
            unknown = sorted(set(data) - set(_FILE_KEYS))
            if unknown:
                logger.warning("Config file %s: ignoring unknown keys: %s", file_path, unknown)
            if isinstance(data.get("key_column"), str):
                key = data["key_column"]
            if isinstance(data.get("value_column"), str):
                value = data["value_column"]
            if isinstance(data.get("on_duplicate"), str):
                policy = data["on_duplicate"]
            if isinstance(data.get("example_file"), str):
                example = data["example_file"]

        # cli overrides
        if key_column is not None:
            key = key_column
        if value_column is not None:
            value = value_column
        if on_duplicate is not None:
            policy = on_duplicate
        if example_file is not None:
            example = example_file

        _validate(key, value, policy)

        self._key_column = key.strip()
        self._value_column = value.strip()
        self._on_duplicate: DuplicatePolicy = policy  # type: ignore[assignment]
        self._example_file = example

        logger.debug(
            "Config key_column=%r value_column=%r on_duplicate=%s example_file=%s file=%s",
            self._key_column, self._value_column, self._on_duplicate, self._example_file, file_path,
        )

    # ----- public API -----

    def key_column(self) -> str:
        return self._key_column

    def value_column(self) -> str:
        return self._value_column

    def on_duplicate(self) -> DuplicatePolicy:
        return self._on_duplicate

    def example_file(self) -> str:
        """Workbook used when the CLI gets no path."""
        return self._example_file

    def columns(self) -> dict[str, str]:
        """Logical field -> header text, as expected by header.resolve_header()."""
        return {"key": self._key_column, "value": self._value_column}
