"""
Pure utility functions for annotation logic.

These functions have no side effects and can be tested in isolation.
"""

from typing import Dict, Tuple
from urllib.parse import quote

import cv2
import numpy as np

SENTINEL_LABEL = "?"


def normalize_label(text: str, sentinel: str = SENTINEL_LABEL) -> str:
    """
    Canonicalize a label typed by the user.

    Args:
        text: Raw label text (may be None or blank)
        sentinel: Label used when the text is empty

    Returns:
        Stripped, lower-cased label, or the sentinel
    """
    label = (text or "").strip().lower()
    if not label:
        return sentinel
    return label


def derive_filename(label: str, count: int, extension: str = ".png") -> str:
    """
    Build the image filename for the ``count``-th entry with ``label``.

    The label is lower-cased and percent-quoted so that separators and
    other unsafe characters never leave the image directory, and two
    different labels never share a filename stem.

    Args:
        label: Entry label
        count: Number of entries with this label before the commit
        extension: File extension including the dot

    Returns:
        Filename such as ``b_0.png``
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    stem = quote(label.lower(), safe="")
    return f"{stem}_{count}{extension}"


def format_counts(counts: Dict[str, int]) -> str:
    """
    Render a label -> count mapping as a small text table.

    Args:
        counts: Mapping produced by ``EntryLedger.aggregate_counts``

    Returns:
        Multi-line report, sorted by label
    """
    if not counts:
        return "No entries found."

    lines = ["Label Counts:"]
    for label in sorted(counts):
        lines.append(f"{label}: {counts[label]}")
    return "\n".join(lines)


def validate_snapshot(snapshot: np.ndarray) -> None:
    """
    Validate that a canvas snapshot can be encoded.

    Raises:
        ValueError: If snapshot is invalid
    """
    if snapshot is None:
        raise ValueError("Snapshot is None")

    if not isinstance(snapshot, np.ndarray):
        raise ValueError(f"Snapshot must be numpy array, got {type(snapshot)}")

    if snapshot.ndim != 3 or snapshot.shape[2] != 4:
        raise ValueError(f"Snapshot must be (H, W, 4), got shape {snapshot.shape}")

    if snapshot.dtype != np.uint8:
        raise ValueError(f"Invalid snapshot dtype: {snapshot.dtype}")


def rgba_to_bgra(snapshot: np.ndarray) -> np.ndarray:
    """Convert an RGBA snapshot to the BGRA order OpenCV encodes."""
    return np.ascontiguousarray(snapshot[..., [2, 1, 0, 3]])


def upscale_for_display(snapshot: np.ndarray, scale: int) -> np.ndarray:
    """
    Enlarge a snapshot with nearest-neighbour sampling for display.

    Args:
        snapshot: (H, W, C) image
        scale: Integer zoom factor

    Returns:
        (H * scale, W * scale, C) image
    """
    if scale <= 1:
        return snapshot.copy()
    h, w = snapshot.shape[:2]
    return cv2.resize(
        snapshot, (w * scale, h * scale), interpolation=cv2.INTER_NEAREST
    )


def to_canvas_coords(x: float, y: float, scale: int) -> Tuple[int, int]:
    """Map display coordinates back to canvas pixel coordinates."""
    scale = max(int(scale), 1)
    return int(x // scale), int(y // scale)
