from __future__ import annotations
import math
import warnings
import numpy as np
from typing import Iterable, Iterator, List, Tuple, Dict, Callable, Sequence, Union

from .types import SetPoint, Interval
from .exceptions import (
    XValuesOutOfOrderError,
    YValueOutOfRangeError,
    NoXValueForMembershipError,
)

PointLike = Union[SetPoint, Tuple[float, float], Sequence[float]]

WEAK = "weak"
STRONG = "strong"


# ==============================================================================
# 1. POINT LIST HELPERS
# ==============================================================================

def _resolve_tolerance(tolerance: float | None) -> float:
    from .config import configure_parameters
    return configure_parameters.resolve_tolerance(tolerance)


def _validate_points(points: Iterable[PointLike], tolerance: float) -> List[Tuple[float, float]]:
    """Converts raw points to (x, y) floats, checking range and ordering."""
    validated: List[Tuple[float, float]] = []
    for point in points:
        x, y = float(point[0]), float(point[1])
        if math.isnan(x) or math.isnan(y):
            raise ValueError(f"FuzzySet points must be numbers, got ({x}, {y})")
        if y < -tolerance or y > 1.0 + tolerance:
            raise YValueOutOfRangeError(y)
        y = min(1.0, max(0.0, y))
        if validated:
            x_previous = validated[-1][0]
            if x < x_previous - tolerance:
                raise XValuesOutOfOrderError(x_previous, x)
            x = max(x, x_previous)
        validated.append((x, y))
    return validated


def _is_redundant_middle(a: Tuple[float, float], b: Tuple[float, float],
                         c: Tuple[float, float], tolerance: float) -> bool:
    """True if b lies on the straight path from a to c."""
    if abs(a[0] - c[0]) <= tolerance:
        # vertical run: the middle point only matters when the direction reverses
        return min(a[1], c[1]) - tolerance <= b[1] <= max(a[1], c[1]) + tolerance
    if abs(a[0] - b[0]) <= tolerance or abs(b[0] - c[0]) <= tolerance:
        return False
    expected = a[1] + (c[1] - a[1]) * (b[0] - a[0]) / (c[0] - a[0])
    return abs(expected - b[1]) <= tolerance


def _simplify_points(points: List[Tuple[float, float]], tolerance: float) -> List[Tuple[float, float]]:
    """
    Returns the canonical form of a point list.

    Consecutive duplicates and redundant middle points are removed in one
    pass, then leading and trailing points that are horizontal with their
    neighbour are trimmed (the curve extends horizontally beyond its ends).
    """
    result: List[Tuple[float, float]] = []
    for point in points:
        if result and abs(result[-1][0] - point[0]) <= tolerance and abs(result[-1][1] - point[1]) <= tolerance:
            continue
        result.append(point)
        while len(result) >= 3 and _is_redundant_middle(result[-3], result[-2], result[-1], tolerance):
            del result[-2]

    while len(result) >= 2 and abs(result[0][1] - result[1][1]) <= tolerance:
        del result[0]
    while len(result) >= 2 and abs(result[-1][1] - result[-2][1]) <= tolerance:
        del result[-1]
    return result


def _values_at(points: Sequence[Tuple[float, float]], x: float, tolerance: float) -> Tuple[float, float, float]:
    """
    Returns (left limit, peak, right limit) of the membership function at x.

    The three values only differ where the curve has a vertical segment at x.
    An empty point list is the zero line.
    """
    n = len(points)
    if n == 0:
        return (0.0, 0.0, 0.0)
    if x < points[0][0] - tolerance:
        y = points[0][1]
        return (y, y, y)
    if x > points[-1][0] + tolerance:
        y = points[-1][1]
        return (y, y, y)

    for i in range(n):
        xi, yi = points[i]
        if abs(xi - x) <= tolerance:
            j = i
            while j + 1 < n and abs(points[j + 1][0] - x) <= tolerance:
                j += 1
            peak = max(p[1] for p in points[i:j + 1])
            return (yi, peak, points[j][1])
        if xi > x:
            x0, y0 = points[i - 1]
            y = y0 + (yi - y0) * (x - x0) / (xi - x0)
            return (y, y, y)
    y = points[-1][1]
    return (y, y, y)


def _merge_grid(first: Sequence[Tuple[float, float]], second: Sequence[Tuple[float, float]],
                tolerance: float) -> List[float]:
    xs = sorted({p[0] for p in first} | {p[0] for p in second})
    grid: List[float] = []
    for x in xs:
        if not grid or x - grid[-1] > tolerance:
            grid.append(x)
    return grid


def _combine_points(first: Sequence[Tuple[float, float]], second: Sequence[Tuple[float, float]],
                    op: Callable[[float, float], float],
                    kink: Callable[[float, float], float],
                    tolerance: float) -> List[Tuple[float, float]]:
    """
    Applies `op` pointwise to two membership functions.

    Both curves are linear between consecutive x values of the merged grid, so
    the result only needs the grid points plus the points where `kink`
    changes sign inside a grid interval (e.g. where the curves cross).
    """
    grid = _merge_grid(first, second, tolerance)
    result: List[Tuple[float, float]] = []
    previous = None
    for x in grid:
        left_a, peak_a, right_a = _values_at(first, x, tolerance)
        left_b, peak_b, right_b = _values_at(second, x, tolerance)

        if previous is not None:
            x_prev, right_a_prev, right_b_prev = previous
            d0 = kink(right_a_prev, right_b_prev)
            d1 = kink(left_a, left_b)
            if (d0 > tolerance and d1 < -tolerance) or (d0 < -tolerance and d1 > tolerance):
                t = d0 / (d0 - d1)
                xc = x_prev + t * (x - x_prev)
                ya = right_a_prev + t * (left_a - right_a_prev)
                yb = right_b_prev + t * (left_b - right_b_prev)
                result.append((xc, op(ya, yb)))

        result.append((x, op(left_a, left_b)))
        result.append((x, op(peak_a, peak_b)))
        result.append((x, op(right_a, right_b)))
        previous = (x, right_a, right_b)
    return result


def _bounded_sum(a: float, b: float) -> float:
    return min(1.0, a + b)


def _difference(a: float, b: float) -> float:
    return a - b


def _sum_overflow(a: float, b: float) -> float:
    return a + b - 1.0


# ==============================================================================
# 2. THE FUZZY SET (PIECEWISE-LINEAR CURVE)
# ==============================================================================

class FuzzySet:
    """
    A piecewise-linear membership function defined by an ordered list of points.

    A FuzzySet is immutable: every operation returns a new set in simplified
    (canonical) form. Outside its first and last point the membership extends
    horizontally, so a single point denotes a constant line and a triangle
    (0,0)(5,1)(10,0) is zero everywhere outside [0, 10].

    Consecutive points may share an x value, which describes a vertical
    segment. The singleton spike at x is (x,0)(x,1)(x,0).
    """
    _defuzzify_methods: Dict[str, Callable] = {}

    def __init__(self, points: Iterable[PointLike] | None = None, tolerance: float | None = None):
        """
        Initializes a FuzzySet.

        Args:
            points: An iterable of (x, y) pairs or SetPoints with ascending x.
            tolerance: Comparison tolerance used while simplifying.

        Raises:
            XValuesOutOfOrderError: If an x value is lower than its predecessor.
            YValueOutOfRangeError: If a y value lies outside [0, 1].
        """
        final_tolerance = _resolve_tolerance(tolerance)
        if isinstance(points, FuzzySet):
            raw = list(points._points)
        else:
            raw = _validate_points([] if points is None else points, final_tolerance)
        self._points: Tuple[Tuple[float, float], ...] = tuple(_simplify_points(raw, final_tolerance))

    @classmethod
    def _from_trusted(cls, points: List[Tuple[float, float]], tolerance: float | None = None) -> FuzzySet:
        """Builds a set from points produced by an operation (clamps y, skips ordering checks)."""
        final_tolerance = _resolve_tolerance(tolerance)
        instance = cls.__new__(cls)
        clamped = [(x, min(1.0, max(0.0, y))) for x, y in points]
        instance._points = tuple(_simplify_points(clamped, final_tolerance))
        return instance

    @classmethod
    def from_arrays(cls, x_values: Sequence[float], y_values: Sequence[float],
                    tolerance: float | None = None) -> FuzzySet:
        """Creates a set from parallel arrays of x and y values."""
        if len(x_values) != len(y_values):
            raise ValueError(f"x and y arrays must have the same length ({len(x_values)} != {len(y_values)})")
        return cls(zip(x_values, y_values), tolerance=tolerance)

    @classmethod
    def constant(cls, y: float, x: float = 0.0) -> FuzzySet:
        """A constant membership line at height y."""
        return cls([(x, y)])

    # --- Basic accessors ---

    @property
    def points(self) -> List[SetPoint]:
        return [SetPoint(x, y) for x, y in self._points]

    @property
    def size(self) -> int:
        return len(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[SetPoint]:
        return iter(self.points)

    def get_point(self, index: int) -> SetPoint:
        x, y = self._points[index]
        return SetPoint(x, y)

    @property
    def x_values(self) -> np.ndarray:
        return np.array([p[0] for p in self._points], dtype=float)

    @property
    def y_values(self) -> np.ndarray:
        return np.array([p[1] for p in self._points], dtype=float)

    @property
    def max_y(self) -> float:
        return max((p[1] for p in self._points), default=0.0)

    @property
    def min_y(self) -> float:
        return min((p[1] for p in self._points), default=0.0)

    def is_empty(self) -> bool:
        return not self._points

    def signature(self) -> Tuple[Tuple[float, float], ...]:
        """The exact point tuple, suitable for structural hashing."""
        return self._points

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FuzzySet):
            return False
        return self.equals(other)

    def equals(self, other: FuzzySet, tolerance: float | None = None) -> bool:
        """Point-for-point comparison within the tolerance."""
        final_tolerance = _resolve_tolerance(tolerance)
        if len(self._points) != len(other._points):
            return False
        return all(abs(a[0] - b[0]) <= final_tolerance and abs(a[1] - b[1]) <= final_tolerance
                   for a, b in zip(self._points, other._points))

    def __hash__(self) -> int:
        # Equality is tolerance based so only the point count is stable.
        return hash(len(self._points))

    def __repr__(self) -> str:
        inner = ", ".join(f"({x:.4f}, {y:.4f})" for x, y in self._points)
        return f"FuzzySet([{inner}])"

    def __str__(self) -> str:
        from .config import configure_parameters
        p = configure_parameters.DISPLAY_PRECISION
        body = " ".join(f"{y:.{p}f}/{x:.{p}f}" for x, y in self._points)
        return f"{{ {body} }}"

    # --- Evaluation ---

    def get_membership(self, x: float, tolerance: float | None = None) -> float:
        """
        Returns the membership value at x.

        At a vertical segment the highest membership at that x is returned.
        """
        return _values_at(self._points, float(x), _resolve_tolerance(tolerance))[1]

    def sample(self, x_values: Sequence[float]) -> np.ndarray:
        """Evaluates the membership function at each of the given x values."""
        return np.array([self.get_membership(x) for x in x_values], dtype=float)

    def is_normal(self, tolerance: float | None = None) -> bool:
        """A set is normal when its maximum membership is 1."""
        return abs(self.max_y - 1.0) <= _resolve_tolerance(tolerance)

    def is_convex(self, tolerance: float | None = None) -> bool:
        """A set is convex when its membership never falls and then rises again."""
        final_tolerance = _resolve_tolerance(tolerance)
        falling = False
        for (_, y0), (_, y1) in zip(self._points, self._points[1:]):
            if y1 < y0 - final_tolerance:
                falling = True
            elif y1 > y0 + final_tolerance and falling:
                return False
        return True

    # --- Construction helpers ---

    def append(self, x: float, y: float, tolerance: float | None = None) -> FuzzySet:
        """
        Returns a new set with (x, y) appended.

        Raises:
            XValuesOutOfOrderError: If x is lower than the last x of the set.
        """
        return FuzzySet(list(self._points) + [(x, y)], tolerance=tolerance)

    def simplify(self, tolerance: float | None = None) -> FuzzySet:
        """Returns the canonical form of the set (idempotent)."""
        return FuzzySet._from_trusted(list(self._points), tolerance)

    def map_y(self, func: Callable[[float], float], tolerance: float | None = None) -> FuzzySet:
        """Applies func to every membership value, keeping the x values."""
        return FuzzySet._from_trusted([(x, func(y)) for x, y in self._points], tolerance)

    # ==========================================================================
    # 3. SET ALGEBRA
    # ==========================================================================

    def union(self, other: FuzzySet, tolerance: float | None = None) -> FuzzySet:
        """Pointwise maximum of the two membership functions."""
        if other is self:
            return self
        final_tolerance = _resolve_tolerance(tolerance)
        points = _combine_points(self._points, other._points, max, _difference, final_tolerance)
        return FuzzySet._from_trusted(points, final_tolerance)

    def intersection(self, other: FuzzySet, tolerance: float | None = None) -> FuzzySet:
        """Pointwise minimum of the two membership functions."""
        if other is self:
            return self
        final_tolerance = _resolve_tolerance(tolerance)
        points = _combine_points(self._points, other._points, min, _difference, final_tolerance)
        return FuzzySet._from_trusted(points, final_tolerance)

    def sum(self, other: FuzzySet, tolerance: float | None = None) -> FuzzySet:
        """Bounded sum min(1, a + b) of the two membership functions."""
        final_tolerance = _resolve_tolerance(tolerance)
        points = _combine_points(self._points, other._points, _bounded_sum, _sum_overflow, final_tolerance)
        return FuzzySet._from_trusted(points, final_tolerance)

    def complement(self, tolerance: float | None = None) -> FuzzySet:
        """y -> 1 - y at every point."""
        return self.map_y(lambda y: 1.0 - y, tolerance)

    def __or__(self, other: FuzzySet) -> FuzzySet:
        return self.union(other)

    def __and__(self, other: FuzzySet) -> FuzzySet:
        return self.intersection(other)

    def __add__(self, other: FuzzySet) -> FuzzySet:
        return self.sum(other)

    def __invert__(self) -> FuzzySet:
        return self.complement()

    def _constant_like(self, y: float, tolerance: float | None) -> FuzzySet:
        final_tolerance = _resolve_tolerance(tolerance)
        if y < -final_tolerance or y > 1.0 + final_tolerance:
            raise YValueOutOfRangeError(y)
        x = self._points[0][0] if self._points else 0.0
        return FuzzySet.constant(min(1.0, max(0.0, y)), x)

    def horizontal_intersection(self, y: float, tolerance: float | None = None) -> FuzzySet:
        """Clips the set at height y (intersection with a constant line)."""
        return self.intersection(self._constant_like(y, tolerance), tolerance)

    def horizontal_union(self, y: float, tolerance: float | None = None) -> FuzzySet:
        """Lifts the set to at least height y (union with a constant line)."""
        return self.union(self._constant_like(y, tolerance), tolerance)

    def multiply(self, factor: float, tolerance: float | None = None) -> FuzzySet:
        """Multiplies every membership value by factor (clamped to [0, 1])."""
        factor = min(1.0, max(0.0, float(factor)))
        return self.map_y(lambda y: y * factor, tolerance)

    def scale(self, factor: float, tolerance: float | None = None) -> FuzzySet:
        """
        Scales the set so its maximum membership becomes `factor`.

        A factor above 1 is treated as 1. A factor of 0 or less gives the zero
        line. Sets whose maximum is already at or below the factor are returned
        unchanged.
        """
        factor = min(1.0, float(factor))
        if factor <= 0.0:
            x = self._points[0][0] if self._points else 0.0
            return FuzzySet.constant(0.0, x)
        peak = self.max_y
        if peak <= factor:
            return self
        ratio = factor / peak
        return self.map_y(lambda y: y * ratio, tolerance)

    def normalize(self, tolerance: float | None = None) -> FuzzySet:
        """
        Scales the set so that its maximum membership is 1.

        A set whose maximum membership is 0 cannot be normalized; it is returned
        unchanged and a UserWarning is issued.
        """
        final_tolerance = _resolve_tolerance(tolerance)
        peak = self.max_y
        if peak <= final_tolerance:
            warnings.warn("Cannot normalize a fuzzy set whose maximum membership is 0; "
                          "returning it unchanged.", UserWarning)
            return self
        return self.map_y(lambda y: y / peak, final_tolerance)

    def confine_to_bounds(self, low: float, high: float, tolerance: float | None = None) -> FuzzySet:
        """
        Restricts the set to [low, high], with zero membership outside.

        Where the set is non-zero at a bound a vertical drop to 0 is added.

        Raises:
            XValuesOutOfOrderError: If low > high.
        """
        if low > high:
            raise XValuesOutOfOrderError(low, high)
        final_tolerance = _resolve_tolerance(tolerance)
        points: List[Tuple[float, float]] = []
        if not math.isinf(low):
            y_low = _values_at(self._points, low, final_tolerance)[2]
            if y_low > final_tolerance:
                points.append((low, 0.0))
            points.append((low, y_low))
        points.extend(p for p in self._points if low + final_tolerance < p[0] < high - final_tolerance)
        if not math.isinf(high):
            y_high = _values_at(self._points, high, final_tolerance)[0]
            points.append((high, y_high))
            if y_high > final_tolerance:
                points.append((high, 0.0))
        return FuzzySet._from_trusted(points, final_tolerance)

    def maximum_of_intersection(self, other: FuzzySet, tolerance: float | None = None) -> float:
        """The peak membership of the intersection of the two sets."""
        if other is self:
            return self.max_y
        return self.intersection(other, tolerance).max_y

    def _nonzero_range(self, tolerance: float) -> Tuple[float, float] | None:
        pts = self._points
        if not pts or all(p[1] <= tolerance for p in pts):
            return None
        low = -math.inf if pts[0][1] > tolerance else next(
            pts[i][0] for i in range(len(pts) - 1) if pts[i + 1][1] > tolerance)
        high = math.inf if pts[-1][1] > tolerance else next(
            pts[i][0] for i in range(len(pts) - 1, 0, -1) if pts[i - 1][1] > tolerance)
        return (low, high)

    def no_intersection_test(self, other: FuzzySet, tolerance: float | None = None) -> bool:
        """True when the two sets definitely do not overlap (disjoint supports)."""
        final_tolerance = _resolve_tolerance(tolerance)
        first = self._nonzero_range(final_tolerance)
        second = other._nonzero_range(final_tolerance)
        if first is None or second is None:
            return True
        if first[1] < second[0] or second[1] < first[0]:
            return True
        # ranges touching at one x overlap only if both sets are nonzero there
        if first[1] == second[0]:
            touch = first[1]
        elif second[1] == first[0]:
            touch = second[1]
        else:
            return False
        return min(self.get_membership(touch, final_tolerance),
                   other.get_membership(touch, final_tolerance)) <= final_tolerance

    # ==========================================================================
    # 4. AREA, ALPHA-CUTS AND INVERSE LOOKUP
    # ==========================================================================

    def segments(self, x_min: float | None = None, x_max: float | None = None,
                 tolerance: float | None = None) -> List[Tuple[float, float, float, float]]:
        """
        Returns the linear pieces (x0, y0, x1, y1) of the set over [x_min, x_max].

        Bounds default to the first and last x of the set, widened to the
        other bound when only one is given. Horizontal extensions are
        included when a bound lies beyond the set's points.

        Raises:
            XValuesOutOfOrderError: If x_min > x_max.
        """
        final_tolerance = _resolve_tolerance(tolerance)
        pts = self._points
        if not pts:
            return []
        if x_min is None:
            x_min = pts[0][0] if x_max is None else min(pts[0][0], float(x_max))
        if x_max is None:
            x_max = max(pts[-1][0], float(x_min))
        x_min, x_max = float(x_min), float(x_max)
        if x_min > x_max:
            raise XValuesOutOfOrderError(x_min, x_max)
        if math.isinf(x_min) or math.isinf(x_max):
            raise ValueError("segments() requires finite bounds")

        breaks = [x_min] + [p[0] for p in pts if x_min < p[0] < x_max] + [x_max]
        pieces = []
        for x0, x1 in zip(breaks, breaks[1:]):
            if x1 - x0 <= final_tolerance:
                continue
            y0 = _values_at(pts, x0, final_tolerance)[2]
            y1 = _values_at(pts, x1, final_tolerance)[0]
            pieces.append((x0, y0, x1, y1))
        return pieces

    def area(self, x_min: float | None = None, x_max: float | None = None,
             tolerance: float | None = None) -> float:
        """
        Area under the membership function over [x_min, x_max].

        Trapezoidal summation over each linear segment clipped to the bounds.
        Bounds default to the set's first and last x. An infinite bound is
        allowed when the set is zero beyond it; otherwise the area is infinite.

        Raises:
            XValuesOutOfOrderError: If x_min > x_max.
        """
        final_tolerance = _resolve_tolerance(tolerance)
        if x_min is not None and x_max is not None and x_min > x_max:
            raise XValuesOutOfOrderError(x_min, x_max)
        pts = self._points
        if not pts:
            return 0.0
        if x_min is not None and math.isinf(x_min):
            if pts[0][1] > final_tolerance:
                return math.inf
            x_min = None
        if x_max is not None and math.isinf(x_max):
            if pts[-1][1] > final_tolerance:
                return math.inf
            x_max = None
        return sum((x1 - x0) * (y0 + y1) / 2.0
                   for x0, y0, x1, y1 in self.segments(x_min, x_max, final_tolerance))

    def alpha_cut(self, alpha: float, cut_type: str = WEAK,
                  min_uod: float = -math.inf, max_uod: float = math.inf,
                  tolerance: float | None = None) -> List[Interval]:
        """
        Returns the x intervals where the membership is >= alpha (weak) or > alpha (strong).

        Args:
            alpha: The cut level in [0, 1].
            cut_type: 'weak' or 'strong'.
            min_uod, max_uod: The domain the result is confined to.

        Returns:
            A list of disjoint Intervals in ascending order (empty when no x
            qualifies). Non-convex sets can yield several intervals. Ends of a
            strong cut that fall on an interpolated crossing are open.
        """
        final_tolerance = _resolve_tolerance(tolerance)
        if cut_type not in (WEAK, STRONG):
            raise ValueError(f"cut_type must be '{WEAK}' or '{STRONG}', got '{cut_type}'")
        if alpha < 0.0 or alpha > 1.0:
            raise YValueOutOfRangeError(alpha)
        if min_uod > max_uod:
            raise XValuesOutOfOrderError(min_uod, max_uod)
        strong = cut_type == STRONG

        def qualifies(y: float) -> bool:
            return y > alpha + final_tolerance if strong else y >= alpha - final_tolerance

        if not strong and alpha <= final_tolerance:
            return [Interval(min_uod, False, max_uod, False)]

        pts = self._points
        if not pts:
            return []
        if len(pts) == 1:
            return [Interval(min_uod, False, max_uod, False)] if qualifies(pts[0][1]) else []

        pieces: List[Interval] = []
        if qualifies(pts[0][1]) and min_uod < pts[0][0]:
            pieces.append(Interval(min_uod, False, pts[0][0], False))
        for (x0, y0), (x1, y1) in zip(pts, pts[1:]):
            q0, q1 = qualifies(y0), qualifies(y1)
            if x1 - x0 <= final_tolerance:
                if q0 or q1:
                    pieces.append(Interval(x0, False, x0, False))
                continue
            if q0 and q1:
                pieces.append(Interval(x0, False, x1, False))
            elif q0 or q1:
                xc = x0 + (alpha - y0) * (x1 - x0) / (y1 - y0)
                if q0:
                    pieces.append(Interval(x0, False, xc, strong))
                else:
                    pieces.append(Interval(xc, strong, x1, False))
        if qualifies(pts[-1][1]) and max_uod > pts[-1][0]:
            pieces.append(Interval(pts[-1][0], False, max_uod, False))

        merged: List[Interval] = []
        for piece in pieces:
            if merged:
                last = merged[-1]
                touching = abs(piece.low - last.high) <= final_tolerance and not (last.open_high and piece.open_low)
                if piece.low < last.high - final_tolerance or touching:
                    if piece.high > last.high + final_tolerance:
                        last.high, last.open_high = piece.high, piece.open_high
                    elif abs(piece.high - last.high) <= final_tolerance:
                        last.open_high = last.open_high and piece.open_high
                    continue
            merged.append(Interval(piece.low, piece.open_low, piece.high, piece.open_high))

        confined: List[Interval] = []
        for interval in merged:
            low, open_low = interval.low, interval.open_low
            high, open_high = interval.high, interval.open_high
            if low < min_uod:
                low, open_low = min_uod, False
            if high > max_uod:
                high, open_high = max_uod, False
            if high < low - final_tolerance:
                continue
            confined.append(Interval(low, open_low, high, open_high))
        return confined

    def support(self, min_uod: float = -math.inf, max_uod: float = math.inf,
                tolerance: float | None = None) -> List[Interval]:
        """The x intervals with non-zero membership (strong alpha-cut at 0)."""
        return self.alpha_cut(0.0, STRONG, min_uod, max_uod, tolerance)

    def get_x_for_membership(self, membership: float, from_: str = "left",
                             min_uod: float = -math.inf, max_uod: float = math.inf,
                             tolerance: float | None = None) -> float:
        """
        Finds the first (from the left) or last (from the right) x with the given membership.

        Segments are scanned in order and the x is interpolated inside the first
        segment that reaches the membership. For a one-point (constant) set the
        domain bound on the requested side is returned when it is finite.

        Raises:
            NoXValueForMembershipError: If no x has that membership.
        """
        final_tolerance = _resolve_tolerance(tolerance)
        if from_ not in ("left", "right"):
            raise ValueError(f"from_ must be 'left' or 'right', got '{from_}'")
        pts = list(self._points)
        if not pts:
            raise NoXValueForMembershipError(membership)
        if len(pts) == 1:
            x, y = pts[0]
            if abs(y - membership) > final_tolerance:
                raise NoXValueForMembershipError(membership)
            bound = min_uod if from_ == "left" else max_uod
            return x if math.isinf(bound) else bound

        if from_ == "right":
            pts.reverse()
        for (x0, y0), (x1, y1) in zip(pts, pts[1:]):
            if abs(y0 - membership) <= final_tolerance:
                return x0
            if (y0 - membership) * (y1 - membership) < 0:
                return x0 + (membership - y0) * (x1 - x0) / (y1 - y0)
        if abs(pts[-1][1] - membership) <= final_tolerance:
            return pts[-1][0]
        raise NoXValueForMembershipError(membership)

    # ==========================================================================
    # 5. DEFUZZIFICATION DISPATCH
    # ==========================================================================

    def defuzzify(self, method: str | None = None, **kwargs) -> float:
        """
        Reduces the set to a crisp value with a registered method.

        Args:
            method: Name of a registered method (default from configuration).
            **kwargs: Passed on to the method (e.g. min_uod, max_uod, policy).
        """
        from .config import configure_parameters
        method = method or configure_parameters.DEFAULT_DEFUZZIFY_METHOD
        func = FuzzySet._defuzzify_methods.get(method)
        if func is None:
            available = list(FuzzySet._defuzzify_methods.keys())
            raise ValueError(f"Method '{method}' not implemented for FuzzySet. Available: {available}")
        return func(self, **kwargs)

    @classmethod
    def get_available_defuzzify_methods(cls) -> List[str]:
        return list(cls._defuzzify_methods.keys())

    @classmethod
    def register_defuzzify_method(cls, name: str, func: Callable):
        """Registers a new defuzzification function for fuzzy sets."""
        if name in cls._defuzzify_methods:
            print(f"Warning: Overwriting defuzzify method '{name}' for {cls.__name__}")
        cls._defuzzify_methods[name] = func


# ==============================================================================
# 6. FUNCTIONAL INTERFACE
# ==============================================================================

def union(a: FuzzySet, b: FuzzySet, tolerance: float | None = None) -> FuzzySet:
    return a.union(b, tolerance)

def intersection(a: FuzzySet, b: FuzzySet, tolerance: float | None = None) -> FuzzySet:
    return a.intersection(b, tolerance)

def complement(a: FuzzySet, tolerance: float | None = None) -> FuzzySet:
    return a.complement(tolerance)

def simplify(a: FuzzySet, tolerance: float | None = None) -> FuzzySet:
    return a.simplify(tolerance)

def area(a: FuzzySet, x_min: float | None = None, x_max: float | None = None,
         tolerance: float | None = None) -> float:
    return a.area(x_min, x_max, tolerance)

def alpha_cut(a: FuzzySet, alpha: float, cut_type: str = WEAK,
              min_uod: float = -math.inf, max_uod: float = math.inf) -> List[Interval]:
    return a.alpha_cut(alpha, cut_type, min_uod, max_uod)
