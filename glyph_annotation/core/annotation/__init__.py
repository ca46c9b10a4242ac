"""
Core annotation module - UI-agnostic glyph annotation logic.

This module provides the drawing surface, the entry ledger, its
persistence and the undo machinery, usable from any UI framework
(Tkinter, CLI, tests).
"""

from .canvas import CanvasSurface
from .errors import (
    AnnotationError,
    EmptyStackError,
    ParseError,
    PersistenceError,
    StateMismatchError,
)
from .events import AnnotationEvent, EventEmitter, EventType
from .ledger import EntryLedger
from .persistence import PersistenceGateway
from .session import AnnotationSession
from .state import Entry, OperationResult, SessionState
from .undo import UndoStack

__all__ = [
    "AnnotationSession",
    "AnnotationEvent",
    "EventType",
    "EventEmitter",
    "CanvasSurface",
    "EntryLedger",
    "PersistenceGateway",
    "UndoStack",
    "Entry",
    "OperationResult",
    "SessionState",
    "AnnotationError",
    "ParseError",
    "PersistenceError",
    "EmptyStackError",
    "StateMismatchError",
]
