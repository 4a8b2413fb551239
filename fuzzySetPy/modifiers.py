from __future__ import annotations
import math
from typing import Callable, Dict, List, Tuple

from .fuzzy_set import FuzzySet


ModifierFunc = Callable[[FuzzySet], FuzzySet]

MODIFIER_REGISTRY: Dict[str, ModifierFunc] = {}

def register_modifier(name: str):
    """
    A decorator to register a new linguistic modifier (hedge).

    Names are case-insensitive and may then be used in linguistic
    expressions, e.g. ``"very hot"``.
    """
    def decorator(func: ModifierFunc) -> ModifierFunc:
        key = name.lower()
        if key in MODIFIER_REGISTRY:
            print(f"Warning: Overwriting modifier '{key}'")
        MODIFIER_REGISTRY[key] = func
        return func
    return decorator


def is_modifier(name: str) -> bool:
    return name.lower() in MODIFIER_REGISTRY


def get_modifier(name: str) -> ModifierFunc:
    func = MODIFIER_REGISTRY.get(name.lower())
    if func is None:
        raise ValueError(f"Modifier '{name}' is not registered. Available: {available_modifiers()}")
    return func


def apply_modifier(name: str, fuzzy_set: FuzzySet) -> FuzzySet:
    """Applies the named modifier to a fuzzy set."""
    return get_modifier(name)(fuzzy_set)


def available_modifiers() -> List[str]:
    return sorted(MODIFIER_REGISTRY.keys())


# ==============================================================================
# 1. BUILDING BLOCKS
# ==============================================================================

def expand_set(fuzzy_set: FuzzySet, delta_y: float | None = None,
               tolerance: float | None = None) -> List[Tuple[float, float]]:
    """
    Inserts interpolated points so no segment changes by more than `delta_y`.

    Nonlinear modifiers transform only the points of a set, so they first
    densify it to follow the transformed curve between the original points.
    Vertical segments are left as they are.

    Returns:
        The expanded point list (not simplified, since the extra points are
        colinear until transformed).
    """
    from .config import configure_parameters
    final_delta = delta_y if delta_y is not None else configure_parameters.MODIFIER_DELTA_Y
    final_tolerance = configure_parameters.resolve_tolerance(tolerance)
    if final_delta <= 0:
        raise ValueError(f"delta_y must be positive, got {final_delta}")

    pts = fuzzy_set.signature()
    if len(pts) < 2:
        return list(pts)
    expanded: List[Tuple[float, float]] = [pts[0]]
    for (x0, y0), (x1, y1) in zip(pts, pts[1:]):
        if x1 - x0 > final_tolerance:
            divisions = math.ceil(abs(y1 - y0) / final_delta - final_tolerance)
            for k in range(1, divisions):
                t = k / divisions
                expanded.append((x0 + t * (x1 - x0), y0 + t * (y1 - y0)))
        expanded.append((x1, y1))
    return expanded


def concentrate_dilate(fuzzy_set: FuzzySet, exponent: float) -> FuzzySet:
    """
    Raises every membership value to `exponent`.

    Exponents above 1 concentrate the set (e.g. 'very'), exponents below 1
    dilate it (e.g. 'more_or_less').
    """
    if exponent <= 0:
        raise ValueError(f"Exponent must be positive, got {exponent}")
    points = [(x, y ** exponent) for x, y in expand_set(fuzzy_set)]
    return FuzzySet._from_trusted(points)


def _hedge(name: str) -> ModifierFunc:
    def modifier(fuzzy_set: FuzzySet) -> FuzzySet:
        from .config import configure_parameters
        return concentrate_dilate(fuzzy_set, configure_parameters.HEDGE_EXPONENTS[name])
    modifier.__name__ = f"{name}_modifier"
    modifier.__doc__ = f"The '{name}' hedge: y -> y^p with p from HEDGE_EXPONENTS['{name}']."
    return modifier


# ==============================================================================
# 2. BUILT-IN MODIFIERS
# ==============================================================================

@register_modifier("not")
def not_modifier(fuzzy_set: FuzzySet) -> FuzzySet:
    return fuzzy_set.complement()


@register_modifier("norm")
def norm_modifier(fuzzy_set: FuzzySet) -> FuzzySet:
    """Scales the set so its peak is 1. A set with peak 0 is returned unchanged (with a warning)."""
    return fuzzy_set.normalize()


for _name in ("very", "extremely", "somewhat", "more_or_less", "plus"):
    register_modifier(_name)(_hedge(_name))


@register_modifier("intensify")
def intensify_modifier(fuzzy_set: FuzzySet) -> FuzzySet:
    """
    Contrast intensification.

    Memberships at or below 0.5 become 2y^2, those above become 1 - 2(1-y)^2,
    pushing values away from 0.5.
    """
    def intensify(y: float) -> float:
        return 2.0 * y * y if y <= 0.5 else 1.0 - 2.0 * (1.0 - y) ** 2
    return FuzzySet._from_trusted([(x, intensify(y)) for x, y in expand_set(fuzzy_set)])


@register_modifier("slightly")
def slightly_modifier(fuzzy_set: FuzzySet) -> FuzzySet:
    """norm(plus A and not very A)."""
    plus_set = apply_modifier("plus", fuzzy_set)
    not_very_set = apply_modifier("very", fuzzy_set).complement()
    return plus_set.intersection(not_very_set).normalize()


@register_modifier("above")
def above_modifier(fuzzy_set: FuzzySet) -> FuzzySet:
    """
    Everything beyond the peak of the set.

    Points up to and including the first maximum get membership 0, later
    points get 1 - y.
    """
    pts = fuzzy_set.signature()
    if not pts:
        return fuzzy_set
    peak = fuzzy_set.max_y
    max_pos = next(i for i, p in enumerate(pts) if p[1] == peak)
    points = [(x, 0.0 if i <= max_pos else 1.0 - y) for i, (x, y) in enumerate(pts)]
    return FuzzySet._from_trusted(points)


@register_modifier("below")
def below_modifier(fuzzy_set: FuzzySet) -> FuzzySet:
    """
    Everything before the peak of the set (mirror of 'above').

    Points from the last maximum onwards get membership 0, earlier points get
    1 - y.
    """
    pts = fuzzy_set.signature()
    if not pts:
        return fuzzy_set
    peak = fuzzy_set.max_y
    max_pos = max(i for i, p in enumerate(pts) if p[1] == peak)
    points = [(x, 0.0 if i >= max_pos else 1.0 - y) for i, (x, y) in enumerate(pts)]
    return FuzzySet._from_trusted(points)
