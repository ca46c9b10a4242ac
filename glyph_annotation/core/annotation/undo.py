"""
Undo stack for committed entries.

Each session owns one stack; it only ever holds entries committed by
that session, most recent last.
"""

from typing import List

from .errors import EmptyStackError
from .state import Entry


class UndoStack:
    """LIFO of committed entries that have not been undone yet."""

    def __init__(self):
        self._stack: List[Entry] = []

    def push(self, entry: Entry):
        self._stack.append(entry)

    def pop(self) -> Entry:
        """
        Remove and return the most recent entry.

        Raises:
            EmptyStackError: If there is nothing to undo
        """
        if not self._stack:
            raise EmptyStackError("Nothing to undo")
        return self._stack.pop()

    def is_empty(self) -> bool:
        return not self._stack

    def clear(self):
        self._stack.clear()

    def __len__(self) -> int:
        return len(self._stack)
