from __future__ import annotations
import math
from typing import Callable, Dict, Sequence, Tuple, Hashable

from .types import CombineOperator


COMBINE_REGISTRY: Dict[str, Callable[..., CombineOperator]] = {}

def register_combine_operator(name: str):
    """A decorator to register a new antecedent combine operator class or factory."""
    def decorator(factory: Callable[..., CombineOperator]) -> Callable[..., CombineOperator]:
        if name in COMBINE_REGISTRY:
            print(f"Warning: Overwriting combine operator '{name}'")
        COMBINE_REGISTRY[name] = factory
        return factory
    return decorator


def get_combine_operator(name: str, **kwargs) -> CombineOperator:
    """Creates a registered combine operator, e.g. ``get_combine_operator('compensatory_and', gamma=0.3)``."""
    factory = COMBINE_REGISTRY.get(name)
    if factory is None:
        raise ValueError(f"Combine operator '{name}' is not registered. Available: {list(COMBINE_REGISTRY.keys())}")
    return factory(**kwargs)


@register_combine_operator("minimum")
class MinimumAntecedentCombine:
    """Firing strength = smallest match value (the standard fuzzy AND)."""

    def combine(self, values: Sequence[float]) -> float:
        if len(values) == 0:
            return 0.0
        return float(min(values))

    def cache_key(self) -> Hashable:
        return ("minimum",)

    def __repr__(self) -> str:
        return "MinimumAntecedentCombine()"


@register_combine_operator("product")
class ProductAntecedentCombine:
    """Firing strength = product of the match values."""

    def combine(self, values: Sequence[float]) -> float:
        if len(values) == 0:
            return 0.0
        return float(math.prod(values))

    def cache_key(self) -> Hashable:
        return ("product",)

    def __repr__(self) -> str:
        return "ProductAntecedentCombine()"


@register_combine_operator("compensatory_and")
class CompensatoryAndAntecedentCombine:
    """
    Zimmermann's compensatory AND.

    Combines the algebraic product (a pure AND) with the algebraic sum (a pure
    OR) as ``prod(v)^(1-gamma) * (1 - prod(1-v))^gamma``. gamma = 0 gives the
    product operator, gamma = 1 the algebraic sum.

    .. note::
        **Academic Note:** The default gamma of 0.562 is the value Zimmermann
        and Zysno found to fit human aggregation of criteria best.
    """

    def __init__(self, gamma: float | None = None):
        from .config import configure_parameters
        self._gamma = 0.0
        self.gamma = gamma if gamma is not None else configure_parameters.COMPENSATORY_AND_GAMMA

    @property
    def gamma(self) -> float:
        return self._gamma

    @gamma.setter
    def gamma(self, value: float):
        """Sets gamma, clamped to [0, 1]."""
        self._gamma = min(1.0, max(0.0, float(value)))

    def combine(self, values: Sequence[float]) -> float:
        if len(values) == 0:
            return 0.0
        product = math.prod(values)
        algebraic_sum = 1.0 - math.prod(1.0 - v for v in values)
        return float(product ** (1.0 - self._gamma) * algebraic_sum ** self._gamma)

    def cache_key(self) -> Hashable:
        return ("compensatory_and", self._gamma)

    def __repr__(self) -> str:
        return f"CompensatoryAndAntecedentCombine(gamma={self._gamma:.4f})"


def combine_cache_key(operator: CombineOperator) -> Tuple:
    """A hashable key describing an operator's behaviour (used by the rule cache)."""
    key_func = getattr(operator, "cache_key", None)
    if key_func is not None:
        return (type(operator).__name__, key_func())
    return (type(operator).__name__, id(operator))
