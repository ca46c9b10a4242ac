"""
State types for annotation sessions.

Contains the data classes shared by the ledger, the undo stack and the
session controller.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SessionState(Enum):
    """Lifecycle of a session operation."""

    IDLE = "idle"
    COMMITTING = "committing"
    UNDOING = "undoing"


@dataclass(eq=False)
class Entry:
    """
    One dataset record: an image path and its label.

    Entries compare by identity, so the undo stack can check that the
    entry it pops is the very object at the tail of the ledger.
    """

    path: str
    label: str

    def to_dict(self):
        """Convert to dictionary for serialization."""
        return {"path": self.path, "label": self.label}

    @classmethod
    def from_dict(cls, data: dict):
        """Create from dictionary."""
        return cls(path=data["path"], label=data["label"])

    def as_pair(self):
        return (self.path, self.label)


@dataclass
class OperationResult:
    """Outcome of a user-triggered session operation."""

    success: bool
    message: str = ""
    entry: Optional[Entry] = None

    def __bool__(self):
        return self.success
