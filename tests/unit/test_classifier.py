"""Unit tests for curve tag classification."""

import pytest

from glyphpath.core.classifier import classify, split_contours, to_raw_tag
from glyphpath.domain import TAG_CONIC, TAG_CUBIC, TAG_ON, Point, RawOutline, Tag


class TestClassify:
    """Tests for classify function."""

    @pytest.mark.parametrize(
        ("raw_tag", "expected"),
        [
            (0x00, Tag.QUADRATIC),
            (0x01, Tag.ON_CURVE),
            (0x02, Tag.CUBIC),
            (0x03, Tag.ON_CURVE),
        ],
    )
    def test_low_bits(self, raw_tag: int, expected: Tag) -> None:
        """Test the two low bits decide the curve role."""
        assert classify(raw_tag) is expected

    def test_high_bits_ignored(self) -> None:
        """Test format-specific high bits are never inspected."""
        assert classify(0xFC) is Tag.QUADRATIC
        assert classify(0x19) is Tag.ON_CURVE
        assert classify(0xE6) is Tag.CUBIC

    def test_to_raw_tag(self) -> None:
        """Test the canonical raw byte maps back to the same role."""
        for tag in Tag:
            assert classify(to_raw_tag(tag)) is tag
        assert to_raw_tag(Tag.ON_CURVE) == TAG_ON
        assert to_raw_tag(Tag.QUADRATIC) == TAG_CONIC
        assert to_raw_tag(Tag.CUBIC) == TAG_CUBIC


class TestSplitContours:
    """Tests for split_contours function."""

    def test_empty_outline(self) -> None:
        """Test an outline without contours yields nothing."""
        assert split_contours(RawOutline()) == []

    def test_split_and_classify(self) -> None:
        """Test points are grouped by contour and tagged."""
        outline = RawOutline(
            points=(Point(0, 0), Point(5, 5), Point(10, 0), Point(1, 1)),
            tags=(TAG_ON, 0x08, TAG_ON | 0x20, TAG_ON),
            contour_ends=(2, 3),
        )

        contours = split_contours(outline)

        assert contours == [
            [
                (Point(0, 0), Tag.ON_CURVE),
                (Point(5, 5), Tag.QUADRATIC),
                (Point(10, 0), Tag.ON_CURVE),
            ],
            [(Point(1, 1), Tag.ON_CURVE)],
        ]
