"""
Drawing surface for glyph annotation.

Owns a fixed-size RGBA pixel buffer. Callers can only draw stroke
segments, clear, and take read-only snapshots.
"""

from typing import Optional, Tuple

import cv2
import numpy as np

Color = Tuple[int, int, int, int]
Point = Tuple[float, float]

WHITE: Color = (255, 255, 255, 255)
BLACK: Color = (0, 0, 0, 255)


class CanvasSurface:
    """
    Live scratchpad the operator draws glyphs on.

    The buffer is stored as (height, width, 4) uint8 in RGBA order.
    Strokes are rendered with OpenCV, whose thick lines have round caps,
    so consecutive segments join smoothly.
    """

    def __init__(
        self,
        width: int = 128,
        height: int = 128,
        stroke_width: int = 8,
        background: Color = WHITE,
        foreground: Color = BLACK,
    ):
        """
        Initialize canvas.

        Args:
            width: Canvas width in pixels
            height: Canvas height in pixels
            stroke_width: Thickness of drawn segments
            background: RGBA fill used on creation and clear
            foreground: RGBA color of strokes
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid canvas size: {width}x{height}")
        if stroke_width <= 0:
            raise ValueError(f"Invalid stroke width: {stroke_width}")

        self.width = width
        self.height = height
        self.stroke_width = stroke_width
        self.background = tuple(int(c) for c in background)
        self.foreground = tuple(int(c) for c in foreground)

        self._pixels = np.empty((height, width, 4), dtype=np.uint8)
        self._prev_point: Optional[Tuple[int, int]] = None
        self.clear()

    @property
    def shape(self):
        return self._pixels.shape

    @property
    def is_stroking(self) -> bool:
        return self._prev_point is not None

    def begin_stroke(self, point: Point):
        """Record the start point of a stroke."""
        self._prev_point = self._to_pixel(point)

    def extend_stroke(self, point: Point):
        """
        Draw a segment from the previous point to ``point``.

        Without a preceding ``begin_stroke`` this only records the point.
        """
        end = self._to_pixel(point)
        if self._prev_point is None:
            self._prev_point = end
            return

        cv2.line(
            self._pixels,
            self._prev_point,
            end,
            self.foreground,
            thickness=self.stroke_width,
            lineType=cv2.LINE_AA,
        )
        self._prev_point = end

    def end_stroke(self):
        """Return to idle; the next segment needs a new start point."""
        self._prev_point = None

    def clear(self):
        """Fill the whole surface with the background color."""
        self._pixels[:, :] = self.background
        self._prev_point = None

    def snapshot(self) -> np.ndarray:
        """Get a read-only copy of the current pixels."""
        pixels = self._pixels.copy()
        pixels.flags.writeable = False
        return pixels

    def is_blank(self) -> bool:
        """Check whether nothing has been drawn since the last clear."""
        return bool(np.all(self._pixels == np.array(self.background, dtype=np.uint8)))

    @staticmethod
    def _to_pixel(point: Point) -> Tuple[int, int]:
        x, y = point
        return int(round(x)), int(round(y))
