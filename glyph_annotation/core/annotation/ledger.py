"""
Entry ledger: the ordered list of dataset records.

The ledger is append-only except for retracting its last entry, which
only the undo path does.
"""

import json
from collections import Counter
from typing import Dict, Iterator, List, Optional

from .errors import ParseError, StateMismatchError
from .state import Entry
from .utils import normalize_label


class EntryLedger:
    """Ordered sequence of entries; insertion order is dataset order."""

    def __init__(self, entries: Optional[List[Entry]] = None):
        self._entries: List[Entry] = list(entries or [])

    @classmethod
    def load(cls, serialized: str) -> "EntryLedger":
        """
        Parse a previously persisted ledger.

        Args:
            serialized: JSON text, an array of ``{"path", "label"}`` objects

        Returns:
            Ledger with the entries in file order

        Raises:
            ParseError: If the text is not a well-formed ledger
        """
        try:
            data = json.loads(serialized)
        except json.JSONDecodeError as e:
            raise ParseError(f"Ledger is not valid JSON: {e}") from e

        if not isinstance(data, list):
            raise ParseError(
                f"Ledger must be a JSON array, got {type(data).__name__}"
            )

        entries = []
        for index, record in enumerate(data):
            if not isinstance(record, dict):
                raise ParseError(f"Record {index} is not an object")
            path = record.get("path")
            label = record.get("label")
            if not isinstance(path, str) or not isinstance(label, str):
                raise ParseError(
                    f"Record {index} needs string 'path' and 'label' fields"
                )
            entries.append(Entry.from_dict(record))

        return cls(entries)

    def dump(self) -> str:
        """Serialize to the on-disk JSON form."""
        return json.dumps(
            [entry.to_dict() for entry in self._entries],
            indent=2,
            ensure_ascii=False,
        )

    def count_by_label(self, label: str) -> int:
        """Count entries whose normalized label equals ``label``'s."""
        wanted = normalize_label(label)
        return sum(1 for e in self._entries if normalize_label(e.label) == wanted)

    def append(self, entry: Entry):
        self._entries.append(entry)

    def remove_last(self, entry: Entry):
        """
        Retract the last entry.

        Args:
            entry: The entry expected at the tail (the popped undo entry)

        Raises:
            StateMismatchError: If ``entry`` is not the last element
        """
        if not self._entries or self._entries[-1] is not entry:
            raise StateMismatchError(
                f"Cannot remove {entry.path!r}: it is not the last ledger entry"
            )
        self._entries.pop()

    def aggregate_counts(self) -> Dict[str, int]:
        """Tally entries per label."""
        return dict(Counter(entry.label for entry in self._entries))

    def last(self) -> Optional[Entry]:
        return self._entries[-1] if self._entries else None

    def paths(self) -> List[str]:
        return [entry.path for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(list(self._entries))

    def __getitem__(self, index) -> Entry:
        return self._entries[index]
