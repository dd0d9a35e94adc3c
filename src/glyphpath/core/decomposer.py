"""Contour decomposition into path commands.

Walks one contour's (point, tag) pairs in order and emits the path commands
they encode, following the curve rules of scalable font formats:

- consecutive on-curve points are joined by straight lines
- two consecutive quadratic controls imply an on-curve point at their
  midpoint, which becomes the anchor for the next segment
- cubic controls come in pairs between two on-curve points
- the contour closes back to its first point

Only a short look-back is needed, so the walk keeps a bounded window of the
last four classified pairs instead of indexing back into the contour.
"""

from collections import deque
from collections.abc import Sequence

from glyphpath.config import ContourStartPolicy
from glyphpath.domain import ClosePath, CubicTo, LineTo, MoveTo, PathCommand, Point, QuadTo, Tag
from glyphpath.exceptions import (
    ContourStartError,
    IllFormedCubicError,
    IllFormedQuadraticError,
    UnknownControlTagError,
)

_Slot = tuple[Point, Tag]

WINDOW_SIZE = 4


def _half(value: int) -> int:
    """Halve an integer, truncating toward zero."""
    if value < 0:
        return -(-value // 2)
    return value // 2


def implied_midpoint(a: Point, b: Point) -> Point:
    """Return the on-curve point implied between two quadratic controls.

    Coordinates are halved with truncation toward zero, so
    ``implied_midpoint(Point(-3, 0), Point(0, 0))`` is ``Point(-1, 0)``.
    """
    return Point(_half(a.x + b.x), _half(a.y + b.y))


class ContourDecomposer:
    """Turns a single contour into a MoveTo ... ClosePath command block.

    The decomposer holds no state between calls and is safe to share.

    Example:
        decomposer = ContourDecomposer()
        commands = decomposer.decompose([
            (Point(0, 0), Tag.ON_CURVE),
            (Point(0, 100), Tag.QUADRATIC),
            (Point(100, 100), Tag.ON_CURVE),
        ])
    """

    def __init__(
        self,
        start_policy: ContourStartPolicy = ContourStartPolicy.NORMALIZE,
    ) -> None:
        """Initialize the decomposer.

        Args:
            start_policy: What to do with contours that start off-curve
        """
        self.start_policy = start_policy

    def decompose(self, points: Sequence[_Slot]) -> list[PathCommand]:
        """Decompose one contour.

        Args:
            points: Ordered (point, tag) pairs of the contour, at least one

        Returns:
            Path commands for the contour, starting with MoveTo and ending
            with ClosePath

        Raises:
            ValueError: If the contour is empty
            IllFormedQuadraticError: A cubic control follows a quadratic one
            IllFormedCubicError: A cubic run is not exactly two controls
            UnknownControlTagError: A tag outside the transition table
            ContourStartError: The contour starts off-curve and the start
                policy is REJECT
        """
        if not points:
            raise ValueError("Contour has no points")

        ordered, origin = self._normalize(points)

        first_point = ordered[0][0]
        commands: list[PathCommand] = [MoveTo(first_point)]

        window: deque[_Slot] = deque(maxlen=WINDOW_SIZE)
        window.append((first_point, Tag.ON_CURVE))

        for j in range(1, len(ordered)):
            window.append(ordered[j])
            command = self._transition(window, origin[j])
            if command is not None:
                commands.append(command)

        # Close back to the first point, always on-curve.
        window.append((first_point, Tag.ON_CURVE))
        command = self._transition(window, origin[0])
        if command is not None:
            commands.append(command)

        commands.append(ClosePath())
        return commands

    def _normalize(
        self, points: Sequence[_Slot]
    ) -> tuple[list[_Slot], list[int | None]]:
        """Make sure the walk starts at an on-curve point.

        Returns the reordered pairs and, for each, its index in the original
        contour (None for a synthesized start point).
        """
        count = len(points)
        if points[0][1] is Tag.ON_CURVE:
            return list(points), list(range(count))

        if self.start_policy is ContourStartPolicy.REJECT:
            raise ContourStartError(point_index=0)

        for i, (_, tag) in enumerate(points):
            if tag is Tag.ON_CURVE:
                order = [(i + k) % count for k in range(count)]
                return [points[k] for k in order], list(order)

        first_point, first_tag = points[0]
        if first_tag is not Tag.QUADRATIC:
            # A contour made only of cubic controls has no anchor to start from.
            raise IllFormedCubicError(point_index=0)

        start = implied_midpoint(points[-1][0], first_point)
        return [(start, Tag.ON_CURVE), *points], [None, *range(count)]

    @staticmethod
    def _transition(window: deque[_Slot], point_index: int | None) -> PathCommand | None:
        """Apply one step of the transition table to the window.

        ``window[-1]`` is the current point and ``window[-2]`` the pending
        one. A quadratic-quadratic step rewrites ``window[-2]`` with the
        implied on-curve midpoint.
        """
        current_point, current_tag = window[-1]
        pending_point, pending_tag = window[-2]

        if pending_tag is Tag.ON_CURVE:
            if current_tag is Tag.ON_CURVE:
                return LineTo(current_point)
            if current_tag in (Tag.QUADRATIC, Tag.CUBIC):
                return None

        elif pending_tag is Tag.QUADRATIC:
            if current_tag is Tag.ON_CURVE:
                return QuadTo(pending_point, current_point)
            if current_tag is Tag.QUADRATIC:
                midpoint = implied_midpoint(pending_point, current_point)
                window[-2] = (midpoint, Tag.ON_CURVE)
                return QuadTo(pending_point, midpoint)
            if current_tag is Tag.CUBIC:
                raise IllFormedQuadraticError(point_index=point_index)

        elif pending_tag is Tag.CUBIC:
            if current_tag is Tag.ON_CURVE:
                if (
                    len(window) == WINDOW_SIZE
                    and window[-3][1] is Tag.CUBIC
                    and window[-4][1] is Tag.ON_CURVE
                ):
                    return CubicTo(window[-3][0], pending_point, current_point)
                raise IllFormedCubicError(point_index=point_index)
            if current_tag is Tag.CUBIC:
                # Deferred; a third control fails at the next on-curve point.
                return None
            if current_tag is Tag.QUADRATIC:
                raise IllFormedCubicError(point_index=point_index)

        raise UnknownControlTagError(point_index=point_index)


def decompose_contour(
    points: Sequence[_Slot],
    start_policy: ContourStartPolicy = ContourStartPolicy.NORMALIZE,
) -> list[PathCommand]:
    """Decompose one contour with a throwaway ContourDecomposer."""
    return ContourDecomposer(start_policy).decompose(points)
