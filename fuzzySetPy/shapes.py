from __future__ import annotations
import numpy as np
from typing import Callable, Dict, List, Tuple

from .fuzzy_set import FuzzySet
from .exceptions import XValuesOutOfOrderError


SHAPE_REGISTRY: Dict[str, Callable[..., FuzzySet]] = {}

def register_shape(name: str):
    """A decorator to register a new fuzzy set shape constructor."""
    def decorator(func: Callable[..., FuzzySet]) -> Callable[..., FuzzySet]:
        if name in SHAPE_REGISTRY:
            print(f"Warning: Overwriting shape '{name}'")
        SHAPE_REGISTRY[name] = func
        return func
    return decorator


def create_shape(name: str, *args, **kwargs) -> FuzzySet:
    """
    Builds a fuzzy set from a registered shape name.

    Example:
    >>> create_shape("triangle", 0, 5, 10)
    FuzzySet([(0.0000, 0.0000), (5.0000, 1.0000), (10.0000, 0.0000)])
    """
    func = SHAPE_REGISTRY.get(name.lower())
    if func is None:
        raise ValueError(f"Shape '{name}' is not registered. Available: {list(SHAPE_REGISTRY.keys())}")
    return func(*args, **kwargs)


def _check_ascending(*values: float):
    for previous, current in zip(values, values[1:]):
        if previous > current:
            raise XValuesOutOfOrderError(previous, current,
                                         f"Shape parameters must be ascending, got {previous} > {current}")


def _sample_curve(left: float, right: float, func: Callable[[np.ndarray], np.ndarray],
                  num_points: int) -> List[Tuple[float, float]]:
    """Samples func on num_points evenly spaced x values in [left, right]."""
    if num_points < 2:
        raise ValueError(f"At least 2 points are needed to approximate a curve, got {num_points}")
    if left == right:
        return [(left, 0.0), (right, 1.0)]
    xs = np.linspace(left, right, num_points)
    ys = np.clip(func(xs), 0.0, 1.0)
    return list(zip(xs.tolist(), ys.tolist()))


def _s_function(left: float, right: float) -> Callable[[np.ndarray], np.ndarray]:
    """Zadeh's S function rising from 0 at `left` to 1 at `right`."""
    width = right - left
    middle = (left + right) / 2.0

    def func(xs: np.ndarray) -> np.ndarray:
        lower = 2.0 * ((xs - left) / width) ** 2
        upper = 1.0 - 2.0 * ((xs - right) / width) ** 2
        return np.where(xs <= middle, lower, upper)
    return func


def _default_points(num_points: int | None, key: str) -> int:
    from .config import configure_parameters
    return num_points if num_points is not None else getattr(configure_parameters, key)


# ==============================================================================
# 1. LINEAR SHAPES
# ==============================================================================

@register_shape("triangle")
def triangle(a: float, b: float, c: float) -> FuzzySet:
    """Triangle with membership 0 at a and c and 1 at b (a <= b <= c)."""
    _check_ascending(a, b, c)
    return FuzzySet([(a, 0.0), (b, 1.0), (c, 0.0)])


@register_shape("trapezoid")
def trapezoid(a: float, b: float, c: float, d: float) -> FuzzySet:
    """Trapezoid rising on [a, b], flat at 1 on [b, c] and falling on [c, d]."""
    _check_ascending(a, b, c, d)
    return FuzzySet([(a, 0.0), (b, 1.0), (c, 1.0), (d, 0.0)])


@register_shape("singleton")
def singleton(x: float) -> FuzzySet:
    """A spike of membership 1 at x and 0 everywhere else."""
    return FuzzySet([(x, 0.0), (x, 1.0), (x, 0.0)])


@register_shape("rectangle")
def rectangle(a: float, b: float) -> FuzzySet:
    """Membership 1 on [a, b] and 0 outside."""
    _check_ascending(a, b)
    return FuzzySet([(a, 0.0), (a, 1.0), (b, 1.0), (b, 0.0)])


@register_shape("left_linear")
def left_linear(a: float, b: float) -> FuzzySet:
    """Rises linearly from 0 at a to 1 at b, constant beyond."""
    _check_ascending(a, b)
    return FuzzySet([(a, 0.0), (b, 1.0)])


@register_shape("right_linear")
def right_linear(a: float, b: float) -> FuzzySet:
    """Falls linearly from 1 at a to 0 at b, constant beyond."""
    _check_ascending(a, b)
    return FuzzySet([(a, 1.0), (b, 0.0)])


# ==============================================================================
# 2. CURVED SHAPES (PIECEWISE-LINEAR APPROXIMATIONS)
# ==============================================================================

@register_shape("s_curve")
def s_curve(a: float, c: float, num_points: int | None = None) -> FuzzySet:
    """S-shaped curve rising from 0 at a to 1 at c."""
    _check_ascending(a, c)
    n = _default_points(num_points, "SCURVE_NUM_POINTS")
    return FuzzySet(_sample_curve(a, c, _s_function(a, c), n))


@register_shape("z_curve")
def z_curve(a: float, c: float, num_points: int | None = None) -> FuzzySet:
    """Z-shaped curve falling from 1 at a to 0 at c (mirror of the S curve)."""
    _check_ascending(a, c)
    n = _default_points(num_points, "SCURVE_NUM_POINTS")
    rising = _s_function(a, c)
    if a == c:
        return FuzzySet([(a, 1.0), (c, 0.0)])
    return FuzzySet(_sample_curve(a, c, lambda xs: 1.0 - rising(xs), n))


@register_shape("pi_curve")
def pi_curve(center: float, bandwidth: float, num_points: int | None = None) -> FuzzySet:
    """An S curve up to center followed by a Z curve down, each `bandwidth` wide."""
    if bandwidth < 0:
        raise ValueError(f"PI curve bandwidth must be non-negative, got {bandwidth}")
    left = s_curve(center - bandwidth, center, num_points)
    right = z_curve(center, center + bandwidth, num_points)
    return FuzzySet(list(left.signature()) + list(right.signature()))


def _gaussian(mean: float, sigma: float) -> Callable[[np.ndarray], np.ndarray]:
    def func(xs: np.ndarray) -> np.ndarray:
        return np.exp(-((xs - mean) ** 2) / (2.0 * sigma ** 2))
    return func


@register_shape("left_gaussian")
def left_gaussian(mean: float, sigma: float, num_points: int | None = None) -> FuzzySet:
    """The rising half of a gaussian, from 0 at mean - k*sigma to 1 at mean."""
    from .config import configure_parameters
    if sigma <= 0:
        raise ValueError(f"Gaussian sigma must be positive, got {sigma}")
    n = _default_points(num_points, "GAUSSIAN_NUM_POINTS")
    left = mean - sigma * configure_parameters.GAUSSIAN_SIGMA_SPAN
    points = _sample_curve(left, mean, _gaussian(mean, sigma), n)
    points[0] = (points[0][0], 0.0)
    return FuzzySet(points)


@register_shape("right_gaussian")
def right_gaussian(mean: float, sigma: float, num_points: int | None = None) -> FuzzySet:
    """The falling half of a gaussian, from 1 at mean to 0 at mean + k*sigma."""
    from .config import configure_parameters
    if sigma <= 0:
        raise ValueError(f"Gaussian sigma must be positive, got {sigma}")
    n = _default_points(num_points, "GAUSSIAN_NUM_POINTS")
    right = mean + sigma * configure_parameters.GAUSSIAN_SIGMA_SPAN
    points = _sample_curve(mean, right, _gaussian(mean, sigma), n)
    points[-1] = (points[-1][0], 0.0)
    return FuzzySet(points)


@register_shape("gaussian")
def gaussian(mean: float, sigma: float, num_points: int | None = None) -> FuzzySet:
    """A symmetric gaussian bell centred on mean, cut off to 0 at mean +/- k*sigma."""
    left = left_gaussian(mean, sigma, num_points)
    right = right_gaussian(mean, sigma, num_points)
    return FuzzySet(list(left.signature()) + list(right.signature()))
