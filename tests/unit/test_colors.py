"""Unit tests for breakdown color assignment."""

import pytest

from frontend.flange_dashboard.colors import (
    DEFAULT_COLOR,
    ICON_COLORS,
    PALETTE,
    get_icon_color,
    get_inspection_status_color,
    get_status_color,
    hash_color,
    label_hash,
)


class TestLookupColors:
    """Test fixed color tables."""

    def test_status_colors(self):
        """Test known and unknown statuses."""
        assert get_status_color("Completed") == "#22c55e"
        assert get_status_color("Delayed") == "#ef4444"
        assert get_status_color("Unknown") == DEFAULT_COLOR
        assert get_status_color("Something Else") == DEFAULT_COLOR

    def test_inspection_colors(self):
        """Test inspection status colors."""
        assert get_inspection_status_color("Passed") == "#22c55e"
        assert get_inspection_status_color("Not Inspected") == DEFAULT_COLOR
        assert get_inspection_status_color("Unheard Of") == DEFAULT_COLOR

    def test_icon_colors_fall_back_to_gray(self):
        """Test icon color names."""
        assert get_icon_color("blue") == ICON_COLORS["blue"]
        assert get_icon_color("magenta") == ICON_COLORS["gray"]


class TestHashColor:
    """Test palette selection by label hash."""

    @pytest.mark.parametrize(
        "label, expected_hash",
        [("", 0), ("A", 65), ("AB", 2081), ("CS", 2160)],
    )
    def test_label_hash(self, label, expected_hash):
        """Test hash values of short labels."""
        assert label_hash(label) == expected_hash

    def test_known_colors(self):
        """Test palette picks for short labels."""
        assert hash_color("A") == PALETTE[5]
        assert hash_color("AB") == "#22c55e"
        assert hash_color("CS") == "#3b82f6"

    def test_long_labels_stay_in_palette(self):
        """Test that overflowing hashes still index the palette."""
        for label in ["SPIRAL WOUND GASKET MATERIAL", "OCI Clean Ammonia LLC" * 5, "16.000"]:
            assert hash_color(label) in PALETTE

    def test_color_is_stable(self):
        """Test that the same label always gets the same color."""
        assert hash_color("RFWN") == hash_color("RFWN")

    def test_non_ascii_labels(self):
        """Test labels outside the BMP hash per UTF-16 code unit."""
        # One astral character is two code units: 0xD83D then 0xDE00
        expected = 0xDE00 + ((0xD83D << 5) - 0xD83D)

        assert label_hash("\U0001F600") == expected
