"""
GUI adapter for annotation session.

Bridges the AnnotationSession with widget toolkits: maps widget
coordinates onto the canvas, routes button actions to session
operations and renders the display image.
"""

from gettext import gettext as _
from typing import Callable, Optional

import cv2
import numpy as np

from ..core.annotation import AnnotationEvent, AnnotationSession, EventType
from ..core.annotation.utils import format_counts, to_canvas_coords, upscale_for_display


class GUIAnnotationAdapter:
    """
    Adapter connecting AnnotationSession to a GUI.

    Provides a compatibility layer that:
    - Converts zoomed widget coordinates to canvas pixels
    - Translates events to GUI callbacks
    - Handles visualization rendering
    """

    def __init__(
        self,
        session: AnnotationSession,
        update_image_callback: Optional[Callable] = None,
        message_callback: Optional[Callable[[str], None]] = None,
        scale: int = 4,
    ):
        """
        Initialize adapter.

        Args:
            session: Core annotation session
            update_image_callback: Callback to refresh the displayed canvas
            message_callback: Callback receiving user-facing messages
            scale: Zoom factor between canvas pixels and widget pixels
        """
        self.session = session
        self.update_image_callback = update_image_callback
        self.message_callback = message_callback
        self.scale = max(int(scale), 1)

        # Subscribe to session events
        self._setup_event_handlers()

    def _setup_event_handlers(self):
        """Setup event handlers for session events."""
        for event_type in (
            EventType.CANVAS_CHANGED,
            EventType.CANVAS_CLEARED,
            EventType.ENTRY_COMMITTED,
        ):
            self.session.events.on(event_type, self._on_canvas_update)
        self.session.events.on(
            EventType.LEDGER_UNPARSABLE,
            self._on_ledger_unparsable
        )

    def _on_canvas_update(self, event: AnnotationEvent):
        """Handle any change of the canvas pixels."""
        if self.update_image_callback:
            self.update_image_callback()

    def _on_ledger_unparsable(self, event: AnnotationEvent):
        if event.data.get("backup"):
            message = _(
                "Could not read the existing ledger ({error}); "
                "a copy was kept at {backup}"
            )
        else:
            message = _(
                "Could not read the existing ledger ({error}); "
                "it will be left untouched and new entries will not be recorded"
            )
        self._notify(message.format(**event.data))

    def _notify(self, message: str):
        if message and self.message_callback:
            self.message_callback(message)

    # Pointer input, in widget coordinates

    def press(self, x: float, y: float):
        self.session.begin_stroke(*to_canvas_coords(x, y, self.scale))

    def drag(self, x: float, y: float):
        self.session.extend_stroke(*to_canvas_coords(x, y, self.scale))

    def release(self):
        self.session.end_stroke()

    # Button actions

    def save(self, label_text: str):
        result = self.session.commit(label_text)
        self._notify(result.message)
        return result

    def undo(self):
        result = self.session.undo()
        self._notify(result.message)
        return result

    def clear(self):
        self.session.clear()

    def show_counts(self) -> str:
        report = format_counts(self.session.show_counts())
        self._notify(report)
        return report

    def get_visualization(self) -> np.ndarray:
        """
        Get visualization for display.

        Returns:
            RGB image of the zoomed canvas
        """
        rgb = self.session.snapshot()[..., :3].copy()
        return upscale_for_display(rgb, self.scale)

    def encode_visualization(self) -> bytes:
        """PNG bytes of the visualization, for toolkits that load images from data."""
        vis = np.ascontiguousarray(self.get_visualization()[..., ::-1])
        ok, encoded = cv2.imencode(".png", vis)
        if not ok:
            raise RuntimeError("Could not encode canvas for display")
        return encoded.tobytes()

    @property
    def display_size(self):
        return self.session.canvas.width * self.scale, self.session.canvas.height * self.scale
