from __future__ import annotations
import math
from typing import List, Tuple

from .fuzzy_set import FuzzySet
from .exceptions import InvalidDefuzzifyError, XValuesOutOfOrderError


def available_methods() -> dict:
    """
    Get a dictionary containing list of available defuzzification methods.

    Returns:
    --------
    dict
        List of method names registered on FuzzySet
    """
    return {"FuzzySet": FuzzySet.get_available_defuzzify_methods()}


def _check_bounds(min_uod: float, max_uod: float):
    if min_uod >= max_uod:
        raise XValuesOutOfOrderError(min_uod, max_uod)


def _integration_bounds(fuzzy_set: FuzzySet, min_uod: float, max_uod: float) -> Tuple[float | None, float | None]:
    """Finite bounds to integrate over; infinite ones fall back to the set's own ends."""
    pts = fuzzy_set.signature()
    low = None if math.isinf(min_uod) else min_uod
    high = None if math.isinf(max_uod) else max_uod
    if low is None and pts[0][1] > 0.0:
        raise InvalidDefuzzifyError("the set has non-zero membership towards -infinity")
    if high is None and pts[-1][1] > 0.0:
        raise InvalidDefuzzifyError("the set has non-zero membership towards +infinity")
    return low, high


def moment_defuzzify(fuzzy_set: FuzzySet, min_uod: float = -math.inf,
                     max_uod: float = math.inf) -> float:
    """
    Defuzzify a fuzzy set using the moment (center of gravity) method.

    Returns the x-coordinate of the centroid of the area under the membership
    function, restricted to [min_uod, max_uod]. Open-ended sets (non-zero at
    their first or last point) contribute the rectangle that extends to the
    domain bound.

    .. note::
        A one-point set is a constant line, so its centroid is the midpoint of
        the domain.

    Args:
        fuzzy_set: The set to defuzzify.
        min_uod, max_uod: The domain of the variable the set belongs to.

    Raises:
        InvalidDefuzzifyError: If the set is empty or its area is 0.
    """
    _check_bounds(min_uod, max_uod)
    if fuzzy_set.is_empty():
        raise InvalidDefuzzifyError("the fuzzy set has no points")
    if fuzzy_set.size == 1:
        if fuzzy_set.max_y <= 0.0:
            raise InvalidDefuzzifyError("the area of the fuzzy set is 0")
        if math.isinf(min_uod) or math.isinf(max_uod):
            raise InvalidDefuzzifyError("a constant set needs a finite domain")
        return (min_uod + max_uod) / 2.0

    low, high = _integration_bounds(fuzzy_set, min_uod, max_uod)
    total_area = 0.0
    total_moment = 0.0
    for x0, y0, x1, y1 in fuzzy_set.segments(low, high):
        width = x1 - x0
        total_area += width * (y0 + y1) / 2.0
        # exact for a linear y (Simpson's rule on a quadratic integrand)
        x_mid = (x0 + x1) / 2.0
        y_mid = (y0 + y1) / 2.0
        total_moment += width * (x0 * y0 + 4.0 * x_mid * y_mid + x1 * y1) / 6.0

    if total_area <= 0.0:
        raise InvalidDefuzzifyError("the area of the fuzzy set is 0")
    return total_moment / total_area


def center_of_area_defuzzify(fuzzy_set: FuzzySet, min_uod: float = -math.inf,
                             max_uod: float = math.inf) -> float:
    """
    Defuzzify a fuzzy set using the center of area (bisector) method.

    Returns the x value that splits the area under the membership function
    into two equal halves.

    Raises:
        InvalidDefuzzifyError: If the set is empty or its area is 0.
    """
    _check_bounds(min_uod, max_uod)
    if fuzzy_set.is_empty():
        raise InvalidDefuzzifyError("the fuzzy set has no points")
    if fuzzy_set.size == 1:
        return moment_defuzzify(fuzzy_set, min_uod, max_uod)

    low, high = _integration_bounds(fuzzy_set, min_uod, max_uod)
    pieces = fuzzy_set.segments(low, high)
    total_area = sum((x1 - x0) * (y0 + y1) / 2.0 for x0, y0, x1, y1 in pieces)
    if total_area <= 0.0:
        raise InvalidDefuzzifyError("the area of the fuzzy set is 0")

    remaining = total_area / 2.0
    for x0, y0, x1, y1 in pieces:
        piece_area = (x1 - x0) * (y0 + y1) / 2.0
        if piece_area < remaining:
            remaining -= piece_area
            continue
        slope = (y1 - y0) / (x1 - x0)
        # solve y0*s + slope*s^2/2 = remaining for the offset s
        if abs(slope) < 1e-12:
            return x0 + remaining / y0
        offset = (-y0 + math.sqrt(max(0.0, y0 * y0 + 2.0 * slope * remaining))) / slope
        return x0 + offset
    return pieces[-1][2]


def _maxima_regions(fuzzy_set: FuzzySet, min_uod: float, max_uod: float,
                    tolerance: float) -> List[Tuple[float, float]]:
    """The [low, high] x ranges where the set reaches its maximum membership."""
    pts = fuzzy_set.signature()
    peak = fuzzy_set.max_y
    regions: List[List[float]] = []
    previous_at_max = False
    for x, y in pts:
        at_max = abs(y - peak) <= tolerance
        if at_max and previous_at_max:
            regions[-1][1] = x
        elif at_max:
            regions.append([x, x])
        previous_at_max = at_max
    if abs(pts[0][1] - peak) <= tolerance and not math.isinf(min_uod):
        regions[0][0] = min(regions[0][0], min_uod)
    if abs(pts[-1][1] - peak) <= tolerance and not math.isinf(max_uod):
        regions[-1][1] = max(regions[-1][1], max_uod)
    return [(low, high) for low, high in regions]


def maximum_defuzzify(fuzzy_set: FuzzySet, policy: str = "average",
                      min_uod: float = -math.inf, max_uod: float = math.inf,
                      tolerance: float | None = None) -> float:
    """
    Defuzzify a fuzzy set using the x value(s) at its maximum membership.

    Args:
        policy: How ties between several maxima are resolved:
            - 'first': the smallest x at the maximum.
            - 'last': the largest x at the maximum.
            - 'average': mean of maxima. Each plateau contributes both of its
              ends; plateaus that run off the end of the set extend to the
              domain bound.

    Raises:
        InvalidDefuzzifyError: If the set is empty or all of its memberships are 0.
        ValueError: If the policy is unknown.
    """
    from .config import configure_parameters
    final_tolerance = configure_parameters.resolve_tolerance(tolerance)
    if policy not in ("first", "last", "average"):
        raise ValueError(f"Unknown maximum policy '{policy}'. Use 'first', 'last' or 'average'.")
    _check_bounds(min_uod, max_uod)
    if fuzzy_set.is_empty():
        raise InvalidDefuzzifyError("the fuzzy set has no points")
    if fuzzy_set.max_y <= final_tolerance:
        raise InvalidDefuzzifyError("all membership values are 0")

    confined = fuzzy_set
    if not (math.isinf(min_uod) and math.isinf(max_uod)) and fuzzy_set.size > 1:
        confined = fuzzy_set.confine_to_bounds(min_uod, max_uod)
        if confined.max_y <= final_tolerance:
            raise InvalidDefuzzifyError("all membership values inside the domain are 0")
    regions = _maxima_regions(confined, min_uod, max_uod, final_tolerance)

    if policy == "first":
        return regions[0][0]
    if policy == "last":
        return regions[-1][1]
    xs: List[float] = []
    for low, high in regions:
        xs.append(low)
        if high > low:
            xs.append(high)
    return sum(xs) / len(xs)


def weighted_average_defuzzify(fuzzy_set: FuzzySet, min_uod: float = -math.inf,
                               max_uod: float = math.inf) -> float:
    """
    Defuzzify a fuzzy set as the membership-weighted average of its points' x values.

    Only points with non-zero membership inside the domain take part. This is
    the natural choice for outputs made of singletons (zero order
    Takagi-Sugeno-Kang rules), where the moment method fails on a zero area.

    Raises:
        InvalidDefuzzifyError: If no point has non-zero membership.
    """
    _check_bounds(min_uod, max_uod)
    if fuzzy_set.is_empty():
        raise InvalidDefuzzifyError("the fuzzy set has no points")
    weights = 0.0
    weighted_sum = 0.0
    for x, y in fuzzy_set.signature():
        if y > 0.0 and min_uod <= x <= max_uod:
            weights += y
            weighted_sum += y * x
    if weights == 0.0:
        raise InvalidDefuzzifyError("no points with membership value > 0")
    return weighted_sum / weights


FuzzySet.register_defuzzify_method('moment', moment_defuzzify)
FuzzySet.register_defuzzify_method('centroid', moment_defuzzify)
FuzzySet.register_defuzzify_method('center_of_area', center_of_area_defuzzify)
FuzzySet.register_defuzzify_method('maximum', maximum_defuzzify)
FuzzySet.register_defuzzify_method('weighted_average', weighted_average_defuzzify)
