"""
===================================================================
Tests for the Antecedent Combine Operators
===================================================================
"""

import math
import pytest

from fuzzySetPy import combine
from fuzzySetPy.combine import (
    MinimumAntecedentCombine,
    ProductAntecedentCombine,
    CompensatoryAndAntecedentCombine,
    get_combine_operator,
    combine_cache_key,
)
from fuzzySetPy.types import CombineOperator
from fuzzySetPy.config import configure_parameters

MATCHES = [0.3, 0.7, 0.5]

# --- Tests for the Standard Operators ---

def test_minimum():
    assert MinimumAntecedentCombine().combine(MATCHES) == pytest.approx(0.3)

def test_product():
    assert ProductAntecedentCombine().combine(MATCHES) == pytest.approx(0.105)

@pytest.mark.parametrize("operator", [
    MinimumAntecedentCombine(),
    ProductAntecedentCombine(),
    CompensatoryAndAntecedentCombine(),
])
def test_no_values_gives_zero(operator):
    assert operator.combine([]) == 0.0

def test_operators_satisfy_protocol():
    for name in ("minimum", "product", "compensatory_and"):
        assert isinstance(get_combine_operator(name), CombineOperator)

# --- Tests for the Compensatory AND ---

def test_compensatory_and_extremes():
    assert CompensatoryAndAntecedentCombine(gamma=0).combine(MATCHES) == pytest.approx(0.105)
    assert CompensatoryAndAntecedentCombine(gamma=1).combine(MATCHES) == pytest.approx(0.895)

def test_compensatory_and_midpoint():
    expected = math.sqrt(0.105 * 0.895)
    assert CompensatoryAndAntecedentCombine(gamma=0.5).combine(MATCHES) == pytest.approx(expected)

def test_compensatory_and_lies_between_product_and_sum():
    value = CompensatoryAndAntecedentCombine().combine(MATCHES)
    assert 0.105 <= value <= 0.895

def test_gamma_is_clamped():
    operator = CompensatoryAndAntecedentCombine(gamma=1.5)
    assert operator.gamma == 1.0
    operator.gamma = -1
    assert operator.gamma == 0.0

def test_default_gamma_from_configuration():
    assert CompensatoryAndAntecedentCombine().gamma == pytest.approx(0.562)
    configure_parameters.COMPENSATORY_AND_GAMMA = 0.25
    assert CompensatoryAndAntecedentCombine().gamma == pytest.approx(0.25)

# --- Tests for the Registry and Cache Keys ---

def test_get_combine_operator_with_arguments():
    operator = get_combine_operator("compensatory_and", gamma=0.3)
    assert isinstance(operator, CompensatoryAndAntecedentCombine)
    assert operator.gamma == pytest.approx(0.3)

def test_get_unknown_combine_operator():
    with pytest.raises(ValueError, match="not registered"):
        get_combine_operator("maximum")

def test_cache_key_tracks_behaviour():
    assert combine_cache_key(MinimumAntecedentCombine()) == combine_cache_key(MinimumAntecedentCombine())
    assert combine_cache_key(MinimumAntecedentCombine()) != combine_cache_key(ProductAntecedentCombine())
    first = CompensatoryAndAntecedentCombine(gamma=0.2)
    second = CompensatoryAndAntecedentCombine(gamma=0.2)
    assert combine_cache_key(first) == combine_cache_key(second)
    second.gamma = 0.4
    assert combine_cache_key(first) != combine_cache_key(second)

def test_cache_key_without_cache_key_method_uses_identity():
    class Average:
        def combine(self, values):
            return sum(values) / len(values)

    first, second = Average(), Average()
    assert combine_cache_key(first) == combine_cache_key(first)
    assert combine_cache_key(first) != combine_cache_key(second)

def test_register_custom_combine_operator(capsys):
    @combine.register_combine_operator("maximum")
    class MaximumCombine:
        def combine(self, values):
            return max(values, default=0.0)
    try:
        assert get_combine_operator("maximum").combine(MATCHES) == 0.7
        combine.register_combine_operator("maximum")(MaximumCombine)
        assert "Overwriting combine operator 'maximum'" in capsys.readouterr().out
    finally:
        del combine.COMBINE_REGISTRY["maximum"]
