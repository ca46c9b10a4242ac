"""
Test fixtures and utilities for glyph annotation tests.

Provides reusable fixtures for canvases, gateways, sessions and
dataset directories.
"""

import json

import pytest
import numpy as np


@pytest.fixture
def dataset_dir(tmp_path):
    """Empty dataset directory."""
    root = tmp_path / "dataset"
    root.mkdir()
    return root


@pytest.fixture
def canvas():
    """Small canvas with the default stroke width."""
    from glyph_annotation.core.annotation import CanvasSurface

    return CanvasSurface(width=32, height=32, stroke_width=4)


@pytest.fixture
def gateway(dataset_dir):
    """Gateway for the empty dataset directory."""
    from glyph_annotation.core.annotation import PersistenceGateway

    return PersistenceGateway(dataset_dir)


@pytest.fixture
def session(gateway, canvas):
    """Opened session on the empty dataset directory."""
    from glyph_annotation.core.annotation import AnnotationSession

    s = AnnotationSession(gateway, canvas=canvas)
    s.open()
    return s


@pytest.fixture
def draw_stroke():
    """Draw a diagonal stroke through a session."""

    def _draw(session, start=(4, 4), end=(20, 20)):
        session.begin_stroke(*start)
        session.extend_stroke(*end)
        session.end_stroke()

    return _draw


@pytest.fixture
def read_ledger_file():
    """Read the raw ledger JSON of a dataset directory."""

    def _read(root, name="data.json"):
        path = root / name
        if not path.exists():
            return None
        return json.loads(path.read_text(encoding="utf-8"))

    return _read


@pytest.fixture
def blank_snapshot():
    """White opaque RGBA snapshot."""
    return np.full((16, 16, 4), 255, dtype=np.uint8)
