"""
Error types raised by the annotation core.

Filesystem failures are converted to ``PersistenceError`` at the
persistence boundary; the session turns them into user-facing messages.
"""


class AnnotationError(Exception):
    """Base class for annotation core errors."""


class ParseError(AnnotationError, ValueError):
    """The persisted ledger exists but is structurally invalid."""


class PersistenceError(AnnotationError, OSError):
    """Writing, reading or deleting dataset files failed."""


class EmptyStackError(AnnotationError, IndexError):
    """Undo was requested with nothing left to undo."""


class StateMismatchError(AnnotationError, RuntimeError):
    """The ledger tail and the undo stack disagree."""
