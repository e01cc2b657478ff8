from typing import NoReturn, Protocol

from glossary_extractor.types import HeaderError

DEFAULT_EXIT_CODE = 1

# ---- exceptions ----

class FatalError(Exception):
    """Configuration-level failure: the run stops before producing a glossary."""

    def __init__(self, message: str, *, exit_code: int = DEFAULT_EXIT_CODE) -> None:
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code


class FatalReporter(Protocol):
    def __call__(self, message: str, exit_code: int = DEFAULT_EXIT_CODE) -> None: ...


# ---- helpers ----

def raise_fatal(message: str, exit_code: int = DEFAULT_EXIT_CODE) -> NoReturn:
    """Default fatal reporter: raise, and let the outermost caller decide how to exit."""
    raise FatalError(message, exit_code=exit_code)


def header_error_message(err: HeaderError) -> str:
    """Tell the user which header cell to fix."""
    column = err["column"]
    if err["code"] == "DUPLICATE_COLUMN":
        return f"{column} column found twice. Remove one and try again."
    if err["code"] == "MISSING_COLUMN":
        return f"Unable to find {column} column, add it to row 1 and retry"
    raise ValueError(f"unknown header error code {err['code']!r}")
