"""
Tests for pure annotation utility functions.

These tests validate individual pure functions that have no side effects.
"""

import pytest
import numpy as np
from glyph_annotation.core.annotation.utils import (
    SENTINEL_LABEL,
    derive_filename,
    format_counts,
    normalize_label,
    rgba_to_bgra,
    to_canvas_coords,
    upscale_for_display,
    validate_snapshot,
)


class TestPureFunctions:
    """Tests for pure utility functions."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("a", "a"),
            ("A", "a"),
            ("  Q ", "q"),
            ("", SENTINEL_LABEL),
            ("   ", SENTINEL_LABEL),
            (None, SENTINEL_LABEL),
            ("Ä", "ä"),
        ],
    )
    def test_normalize_label(self, text, expected):
        assert normalize_label(text) == expected

    def test_normalize_label_custom_sentinel(self):
        assert normalize_label("", sentinel="blank") == "blank"

    def test_derive_filename(self):
        assert derive_filename("x", 0) == "x_0.png"
        assert derive_filename("x", 1) == "x_1.png"
        assert derive_filename("X", 3) == "x_3.png"
        assert derive_filename("x", 0, extension=".bmp") == "x_0.bmp"

    def test_derive_filename_quotes_unsafe_characters(self):
        assert derive_filename("?", 0) == "%3F_0.png"
        assert derive_filename("/", 0) == "%2F_0.png"
        assert derive_filename("%3f", 0) == "%253f_0.png"
        assert "/" not in derive_filename("a/b\\c", 2)

    def test_derive_filename_is_injective_on_labels(self):
        labels = ["?", "%3f", "%3F", "a", "a_0", "a b", "a%20b"]
        distinct = {normalize_label(label) for label in labels}
        names = {derive_filename(label, 0) for label in distinct}
        assert len(names) == len(distinct)

    def test_derive_filename_negative_count(self):
        with pytest.raises(ValueError):
            derive_filename("x", -1)

    def test_format_counts(self):
        report = format_counts({"b": 1, "a": 2})
        assert report.splitlines() == ["Label Counts:", "a: 2", "b: 1"]

    def test_format_counts_empty(self):
        assert format_counts({}) == "No entries found."

    def test_validate_snapshot(self):
        validate_snapshot(np.zeros((8, 8, 4), dtype=np.uint8))

        with pytest.raises(ValueError):
            validate_snapshot(None)
        with pytest.raises(ValueError):
            validate_snapshot([[0]])
        with pytest.raises(ValueError):
            validate_snapshot(np.zeros((8, 8, 3), dtype=np.uint8))
        with pytest.raises(ValueError):
            validate_snapshot(np.zeros((8, 8, 4), dtype=np.float32))

    def test_rgba_to_bgra(self):
        rgba = np.zeros((2, 2, 4), dtype=np.uint8)
        rgba[..., 0] = 10
        rgba[..., 2] = 30
        rgba[..., 3] = 255
        rgba.flags.writeable = False

        bgra = rgba_to_bgra(rgba)
        assert bgra.flags.c_contiguous
        assert tuple(bgra[0, 0]) == (30, 0, 10, 255)

    def test_upscale_for_display(self):
        image = np.array([[[0], [255]]], dtype=np.uint8).reshape(1, 2, 1)
        image = np.repeat(image, 3, axis=2)
        big = upscale_for_display(image, 3)
        assert big.shape == (3, 6, 3)
        assert np.all(big[:, :3] == 0)
        assert np.all(big[:, 3:] == 255)

    def test_upscale_scale_one_is_copy(self):
        image = np.zeros((2, 2, 3), dtype=np.uint8)
        same = upscale_for_display(image, 1)
        assert same is not image
        np.testing.assert_array_equal(same, image)

    def test_to_canvas_coords(self):
        assert to_canvas_coords(0, 0, 4) == (0, 0)
        assert to_canvas_coords(7, 9, 4) == (1, 2)
        assert to_canvas_coords(7, 9, 0) == (7, 9)
