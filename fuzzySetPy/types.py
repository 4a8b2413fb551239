from __future__ import annotations
import math
from typing import Protocol, Sequence, Iterator, List, TYPE_CHECKING, runtime_checkable

if TYPE_CHECKING:
    from .fuzzy_set import FuzzySet
    from .variable import FuzzyValue
    from .rule import FuzzyRule


# ==============================================================================
# 1. THE PROTOCOL BLUEPRINTS
# ==============================================================================

@runtime_checkable
class CombineOperator(Protocol):
    """Reduces the match values of a rule's antecedents to one firing strength."""

    def combine(self, values: Sequence[float]) -> float: ...


@runtime_checkable
class SimilarityOperator(Protocol):
    """
    A similarity measure in [0, 1] between two compatible fuzzy values.

    Identical values score 1. Implementations need not be symmetric:
    possibility based similarity depends on argument order for sub-normal
    values.
    """

    def similarity(self, first: FuzzyValue, second: FuzzyValue) -> float: ...


@runtime_checkable
class ModifierFunction(Protocol):
    """A linguistic hedge: a stateless transform of one fuzzy set into another."""

    def __call__(self, fuzzy_set: FuzzySet) -> FuzzySet: ...


@runtime_checkable
class RuleExecutor(Protocol):
    """
    The implication strategy used when a rule fires.

    An executor computes the match value of each antecedent/input pair and
    applies the combined firing strength to each conclusion.
    """

    def match(self, antecedent: FuzzyValue, given: FuzzyValue) -> float: ...
    def implicate(self, conclusion: FuzzyValue, firing_strength: float) -> FuzzyValue: ...


# ==============================================================================
# 2. SIMPLE DATA HOLDERS
# ==============================================================================

class SetPoint:
    """
    A single (x, y) point of a piecewise-linear membership function.

    Points are immutable and unpack like a tuple: ``x, y = point``.
    """
    __slots__ = ("_x", "_y")

    def __init__(self, x: float, y: float):
        self._x = float(x)
        self._y = float(y)

    @property
    def x(self) -> float:
        return self._x

    @property
    def y(self) -> float:
        return self._y

    def __iter__(self) -> Iterator[float]:
        yield self._x
        yield self._y

    def __getitem__(self, index: int) -> float:
        return (self._x, self._y)[index]

    def __len__(self) -> int:
        return 2

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SetPoint):
            return self._x == other._x and self._y == other._y
        if isinstance(other, tuple) and len(other) == 2:
            return self._x == other[0] and self._y == other[1]
        return False

    def __hash__(self) -> int:
        return hash((self._x, self._y))

    def __repr__(self) -> str:
        return f"SetPoint({self._x:.4f}, {self._y:.4f})"

    def is_close(self, other: SetPoint, tolerance: float | None = None) -> bool:
        """Checks whether both coordinates agree within the tolerance."""
        from .config import configure_parameters
        final_tolerance = configure_parameters.resolve_tolerance(tolerance)
        return abs(self._x - other.x) <= final_tolerance and abs(self._y - other.y) <= final_tolerance


class Interval:
    """
    An interval of the real line with independently open or closed ends.

    Used to represent alpha-cuts and supports. ``low <= high`` is not enforced;
    callers normalize before use. Infinite ends are always open.
    """

    def __init__(self, low: float, open_low: bool, high: float, open_high: bool):
        self.low = float(low)
        self.high = float(high)
        self.open_low = bool(open_low) or math.isinf(self.low)
        self.open_high = bool(open_high) or math.isinf(self.high)

    @property
    def width(self) -> float:
        return self.high - self.low

    def contains(self, x: float) -> bool:
        """Checks whether x lies in the interval, honouring the open ends."""
        above_low = x > self.low if self.open_low else x >= self.low
        below_high = x < self.high if self.open_high else x <= self.high
        return above_low and below_high

    def __contains__(self, x: float) -> bool:
        return self.contains(x)

    def is_close(self, other: Interval, tolerance: float | None = None) -> bool:
        from .config import configure_parameters
        final_tolerance = configure_parameters.resolve_tolerance(tolerance)

        def _close(a: float, b: float) -> bool:
            if math.isinf(a) or math.isinf(b):
                return a == b
            return abs(a - b) <= final_tolerance

        return (_close(self.low, other.low) and _close(self.high, other.high)
                and self.open_low == other.open_low and self.open_high == other.open_high)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Interval):
            return False
        return self.is_close(other)

    def __hash__(self) -> int:
        return hash((round(self.low, 6), self.open_low, round(self.high, 6), self.open_high))

    def __repr__(self) -> str:
        return f"Interval({self.low:.4f}, {self.open_low}, {self.high:.4f}, {self.open_high})"

    def __str__(self) -> str:
        from .config import configure_parameters
        p = configure_parameters.DISPLAY_PRECISION
        left = "(" if self.open_low else "["
        right = ")" if self.open_high else "]"
        return f"{left}{self.low:.{p}f}, {self.high:.{p}f}{right}"


def intervals_to_str(intervals: List[Interval]) -> str:
    """Renders a list of intervals as a union, e.g. ``[0.00, 1.00] U (2.00, 3.00]``."""
    if not intervals:
        return "{}"
    return " U ".join(str(i) for i in intervals)
