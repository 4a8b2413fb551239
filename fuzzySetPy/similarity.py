from __future__ import annotations
from typing import TYPE_CHECKING, Callable, Dict

from .types import SimilarityOperator
from .exceptions import IncompatibleFuzzyValuesError

if TYPE_CHECKING:
    from .variable import FuzzyValue


SIMILARITY_REGISTRY: Dict[str, Callable[[], SimilarityOperator]] = {}

def register_similarity_operator(name: str):
    """A decorator to register a new similarity operator class or factory."""
    def decorator(factory: Callable[[], SimilarityOperator]) -> Callable[[], SimilarityOperator]:
        if name in SIMILARITY_REGISTRY:
            print(f"Warning: Overwriting similarity operator '{name}'")
        SIMILARITY_REGISTRY[name] = factory
        return factory
    return decorator


def get_similarity_operator(name: str) -> SimilarityOperator:
    factory = SIMILARITY_REGISTRY.get(name)
    if factory is None:
        raise ValueError(f"Similarity operator '{name}' is not registered. Available: {list(SIMILARITY_REGISTRY.keys())}")
    return factory()


def _check_compatible(first: FuzzyValue, second: FuzzyValue):
    if first.variable is not second.variable:
        raise IncompatibleFuzzyValuesError(first.variable.name, second.variable.name, "similarity")


@register_similarity_operator("area")
class SimilarityByArea:
    """
    Similarity as the ratio of the intersection area to the union area.

    Areas are measured over the universe of discourse of the shared variable.
    Identical values have similarity 1; when the union has no area (e.g. two
    singletons) the similarity is 0.
    """

    def similarity(self, first: FuzzyValue, second: FuzzyValue) -> float:
        _check_compatible(first, second)
        if first.fuzzy_set == second.fuzzy_set:
            return 1.0
        low, high = first.variable.min_uod, first.variable.max_uod
        union_area = first.fuzzy_set.union(second.fuzzy_set).area(low, high)
        if union_area == 0.0:
            return 0.0
        intersection_area = first.fuzzy_set.intersection(second.fuzzy_set).area(low, high)
        return intersection_area / union_area


@register_similarity_operator("possibility")
class SimilarityByPossibility:
    """
    Similarity based on possibility and necessity.

    ``poss = max(A and B)`` and ``nec = 1 - max(not A and B)``. When the
    necessity is above 0.5 the possibility is returned, otherwise it is
    weighted by ``nec + 0.5``. Identical values have similarity 1.

    The measure is only symmetric for normal values; for sub-normal ones the
    order of the arguments can change the result.
    """

    def similarity(self, first: FuzzyValue, second: FuzzyValue) -> float:
        _check_compatible(first, second)
        if first.fuzzy_set == second.fuzzy_set:
            return 1.0
        possibility = first.fuzzy_set.maximum_of_intersection(second.fuzzy_set)
        necessity = 1.0 - first.fuzzy_set.complement().maximum_of_intersection(second.fuzzy_set)
        if necessity > 0.5:
            return possibility
        return (necessity + 0.5) * possibility


def default_similarity_operator() -> SimilarityOperator:
    return SimilarityByPossibility()
