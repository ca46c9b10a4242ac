"""
Annotation session management.

Core logic for drawing glyphs, committing them as labeled entries and
undoing commits. UI-agnostic - can be used with any interface (GUI, CLI).
"""

import logging
import threading
from gettext import gettext as _
from typing import Dict, List, Optional

import numpy as np

from .canvas import CanvasSurface
from .errors import ParseError, PersistenceError
from .events import AnnotationEvent, EventEmitter, EventType
from .ledger import EntryLedger
from .persistence import PersistenceGateway
from .state import Entry, OperationResult, SessionState
from .undo import UndoStack
from .utils import SENTINEL_LABEL, derive_filename, format_counts, normalize_label

logger = logging.getLogger(__name__)


class AnnotationSession:
    """
    Manages the state and logic of a glyph annotation session.

    This class handles:
    - Forwarding strokes to the canvas
    - Committing the canvas as a labeled entry
    - Undoing the most recent commits
    - Keeping ledger, image files and undo stack consistent
    - Event emission for UI updates

    The session is UI-agnostic - it emits events that UI components
    can listen to, rather than directly manipulating UI elements.
    """

    def __init__(
        self,
        gateway: PersistenceGateway,
        canvas: Optional[CanvasSurface] = None,
        sentinel_label: str = SENTINEL_LABEL,
    ):
        """
        Initialize annotation session.

        Args:
            gateway: Persistence for the dataset directory
            canvas: Drawing surface; a default 128x128 canvas if omitted
            sentinel_label: Label used when the operator leaves it empty
        """
        self.gateway = gateway
        self.canvas = canvas if canvas is not None else CanvasSurface()
        self.sentinel_label = sentinel_label

        self.ledger = EntryLedger()
        self.undo_stack = UndoStack()
        self.status = SessionState.IDLE
        self._ledger_read_only = False

        # Event emitter for UI notifications
        self.events = EventEmitter()

        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, cfg, root) -> "AnnotationSession":
        """Build a session from a configuration tree (see ``utils.config``)."""
        gateway = PersistenceGateway(
            root,
            ledger_name=cfg.dataset.ledger_file,
            image_dir=cfg.dataset.image_dir,
        )
        canvas = CanvasSurface(
            width=int(cfg.canvas.width),
            height=int(cfg.canvas.height),
            stroke_width=int(cfg.canvas.stroke_width),
            background=tuple(cfg.canvas.background),
            foreground=tuple(cfg.canvas.foreground),
        )
        return cls(gateway, canvas=canvas, sentinel_label=cfg.label.sentinel)

    def open(self):
        """
        Prepare the dataset directory and load the existing ledger.

        An unparsable ledger is copied aside and the session starts
        empty, so the next write cannot destroy its content. If the copy
        fails, the session still starts empty but never rewrites the ledger.
        """
        self.gateway.ensure_storage_ready()
        try:
            self.ledger = self.gateway.read_ledger()
        except ParseError as e:
            logger.warning(f"Ignoring unparsable ledger: {e}")
            try:
                backup = self.gateway.preserve_unparsable_ledger()
            except PersistenceError as copy_error:
                logger.error(
                    f"Could not keep a copy of the unparsable ledger, "
                    f"it will not be overwritten: {copy_error}"
                )
                backup = None
                self._ledger_read_only = True
            self.ledger = EntryLedger()
            self.events.emit(
                AnnotationEvent(
                    EventType.LEDGER_UNPARSABLE,
                    {"error": str(e), "backup": str(backup) if backup else None},
                )
            )
        self.undo_stack.clear()

        self.events.emit(
            AnnotationEvent(
                EventType.SESSION_STARTED,
                {"root": str(self.gateway.root), "num_entries": len(self.ledger)},
            )
        )

    # Drawing

    def begin_stroke(self, x: float, y: float):
        self.canvas.begin_stroke((x, y))

    def extend_stroke(self, x: float, y: float):
        self.canvas.extend_stroke((x, y))
        self.events.emit(AnnotationEvent(EventType.CANVAS_CHANGED))

    def end_stroke(self):
        self.canvas.end_stroke()

    def clear(self):
        """Reset the canvas; the ledger and disk are untouched."""
        self.canvas.clear()
        self.events.emit(AnnotationEvent(EventType.CANVAS_CLEARED))

    def snapshot(self) -> np.ndarray:
        return self.canvas.snapshot()

    # Dataset operations

    def commit(self, label_text: str) -> OperationResult:
        """
        Save the current drawing as a new labeled entry.

        Args:
            label_text: Label typed by the operator

        Returns:
            Result with the new entry; ``success`` is False if the image
            or the ledger could not be written
        """
        with self._lock:
            self._set_status(SessionState.COMMITTING)
            try:
                return self._commit(label_text)
            finally:
                self._set_status(SessionState.IDLE)

    def undo(self) -> OperationResult:
        """
        Reverse the most recent commit of this session.

        Returns:
            Result with the removed entry; a no-op result when there is
            nothing to undo
        """
        with self._lock:
            if self.undo_stack.is_empty():
                self.events.emit(AnnotationEvent(EventType.NOTHING_TO_UNDO))
                return OperationResult(False, _("Nothing to undo."))

            self._set_status(SessionState.UNDOING)
            try:
                return self._undo()
            finally:
                self._set_status(SessionState.IDLE)

    def show_counts(self) -> Dict[str, int]:
        """Tally entries per label."""
        counts = self.ledger.aggregate_counts()
        self.events.emit(
            AnnotationEvent(
                EventType.COUNTS_REPORTED,
                {"counts": counts, "report": format_counts(counts)},
            )
        )
        return counts

    @property
    def entries(self) -> List[Entry]:
        return list(self.ledger)

    @property
    def can_undo(self) -> bool:
        return not self.undo_stack.is_empty()

    def _commit(self, label_text: str) -> OperationResult:
        label = normalize_label(label_text, self.sentinel_label)
        count = self.ledger.count_by_label(label)
        path = self.gateway.image_relpath(derive_filename(label, count))
        # Files left by an unparsable ledger or an interrupted commit are kept.
        while self.gateway.image_exists(path):
            logger.warning(f"{path} already exists, trying the next index")
            count += 1
            path = self.gateway.image_relpath(derive_filename(label, count))

        try:
            self.gateway.write_image(path, self.canvas.snapshot())
        except PersistenceError as e:
            logger.error(f"Failed to save image {path}: {e}")
            message = _("Failed to save image: {error}").format(error=e)
            self.events.emit(
                AnnotationEvent(
                    EventType.IMAGE_SAVE_FAILED, {"path": path, "error": str(e)}
                )
            )
            return OperationResult(False, message)

        entry = Entry(path=path, label=label)
        self.ledger.append(entry)
        self.undo_stack.push(entry)

        # The image is durable at this point, so the canvas is reset
        # whether or not the ledger write succeeds.
        failure = self._write_ledger()
        self.canvas.clear()

        self.events.emit(
            AnnotationEvent(
                EventType.ENTRY_COMMITTED,
                {"entry": entry.to_dict(), "num_entries": len(self.ledger)},
            )
        )

        if failure is not None:
            return OperationResult(False, failure, entry)
        return OperationResult(
            True, _("Saved {path} as '{label}'").format(path=path, label=label), entry
        )

    def _undo(self) -> OperationResult:
        entry = self.undo_stack.pop()
        self.gateway.delete_image(entry.path)
        self.ledger.remove_last(entry)

        failure = self._write_ledger()

        self.events.emit(
            AnnotationEvent(
                EventType.ENTRY_UNDONE,
                {"entry": entry.to_dict(), "num_entries": len(self.ledger)},
            )
        )

        if failure is not None:
            return OperationResult(False, failure, entry)
        return OperationResult(
            True, _("Removed {path}").format(path=entry.path), entry
        )

    def _write_ledger(self) -> Optional[str]:
        """Persist the ledger; returns a user-facing message on failure."""
        if self._ledger_read_only:
            return _(
                "Not updating {name}: it could not be parsed or backed up"
            ).format(name=self.gateway.ledger_name)
        try:
            self.gateway.write_ledger(self.ledger)
        except PersistenceError as e:
            logger.error(f"Failed to update {self.gateway.ledger_path}: {e}")
            self.events.emit(
                AnnotationEvent(EventType.LEDGER_SAVE_FAILED, {"error": str(e)})
            )
            return _("Failed to update {name}: {error}").format(
                name=self.gateway.ledger_name, error=e
            )
        return None

    def _set_status(self, status: SessionState):
        self.status = status
        self.events.emit(
            AnnotationEvent(EventType.STATE_CHANGED, {"status": status.value})
        )
