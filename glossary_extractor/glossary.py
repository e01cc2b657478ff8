import logging
from collections.abc import Mapping
from types import MappingProxyType

from glossary_extractor.types import DUPLICATE_POLICIES, DuplicateKey, DuplicatePolicy

logger = logging.getLogger(__name__)

OVERWRITE_FORMAT = 'string id {key} duplicated. Was: "{old_value}" Now: "{new_value}"'
REJECT_FORMAT = 'string id {key} duplicated. Kept: "{old_value}" Ignored: "{new_value}"'


def normalize_key(key: str) -> str:
    """Identity used for duplicate detection: keys differing only by case are the same entry."""
    return key.lower()


class Glossary:
    """
    Normalized key -> value store for one extraction run.

    Duplicate keys never stop ingestion. Each collision is recorded (see `duplicates`
    and `errors`) and resolved by the policy:
      - "overwrite-and-log" (default): the later value replaces the stored one
      - "reject": the stored value is kept, the later one dropped
    Values are stored verbatim; only keys are lower-cased.
    """

    def __init__(self, name: str, *, on_duplicate: DuplicatePolicy = "overwrite-and-log") -> None:
        if on_duplicate not in DUPLICATE_POLICIES:
            raise ValueError(f"unknown duplicate policy {on_duplicate!r} (expected one of {DUPLICATE_POLICIES})")
        self._name = name
        self._policy: DuplicatePolicy = on_duplicate
        self._entries: dict[str, str] = {}
        self._duplicates: list[DuplicateKey] = []

    # ----- public API -----

    @property
    def name(self) -> str:
        """Provenance label, usually the source file name."""
        return self._name

    @property
    def on_duplicate(self) -> DuplicatePolicy:
        return self._policy

    @property
    def entries(self) -> Mapping[str, str]:
        """Read-only view of normalized key -> value."""
        return MappingProxyType(self._entries)

    @property
    def duplicates(self) -> list[DuplicateKey]:
        """Collision records in detection order (copy)."""
        return list(self._duplicates)

    @property
    def errors(self) -> list[str]:
        """Human-readable collision messages in detection order."""
        fmt = OVERWRITE_FORMAT if self._policy == "overwrite-and-log" else REJECT_FORMAT
        return [fmt.format(**d) for d in self._duplicates]

    def __len__(self) -> int:
        return len(self._entries)

    def add_entry(self, key: str, value: str) -> None:
        lower_key = normalize_key(key)

        if lower_key in self._entries:
            old_value = self._entries[lower_key]
            self._track_duplicate(lower_key, value, old_value)
            if self._policy == "reject":
                return

        self._entries[lower_key] = value

    def add_pair(self, pair: tuple[str, str]) -> None:
        """Same as add_entry() for an already paired (key, value)."""
        key, value = pair
        self.add_entry(key, value)

    # ----- internal helpers -----

    def _track_duplicate(self, key: str, new_value: str, old_value: str) -> None:
        self._duplicates.append({"key": key, "new_value": new_value, "old_value": old_value})
        logger.warning(
            "Duplicate string id %r in %s (old=%r new=%r policy=%s)",
            key, self._name, old_value, new_value, self._policy,
        )
