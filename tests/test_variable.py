"""
===================================================================
Tests for Fuzzy Variables and Fuzzy Values
===================================================================

Uses the temperature variable from conftest:
  cold = trapezoid(0, 0, 10, 30), warm = triangle(20, 50, 80),
  hot = trapezoid(60, 80, 100, 100) on [0, 100] C.
"""

import pytest

from fuzzySetPy.variable import FuzzyVariable, FuzzyValue, DEFAULT_EXPRESSION
from fuzzySetPy.shapes import triangle, rectangle
from fuzzySetPy.types import Interval
from fuzzySetPy.config import ConfigurationContextManager
from fuzzySetPy.exceptions import (
    IncompatibleFuzzyValuesError,
    InvalidFuzzyVariableTermNameError,
    InvalidLinguisticExpressionError,
    XValueOutsideUODError,
    XValuesOutOfOrderError,
)

# --- Tests for FuzzyVariable ---

def test_variable_bounds_must_be_ordered():
    with pytest.raises(XValuesOutOfOrderError, match="min_uod"):
        FuzzyVariable("broken", 10, 10)

def test_terms_are_case_insensitive(temperature):
    assert "HOT" in temperature
    assert temperature.find_term("Hot") is temperature.find_term("hot")
    assert temperature.terms() == ["cold", "warm", "hot"]

def test_add_term_from_points(temperature):
    value = temperature.add_term("tepid", [(20, 0), (30, 1), (40, 0)])
    assert value.linguistic_expression == "tepid"
    assert value.get_membership(30) == 1.0

def test_add_term_from_expression(temperature):
    mild = temperature.add_term("mild", "not cold and not hot")
    assert mild.get_membership(50) == 1.0
    assert mild.get_membership(5) == 0.0
    assert mild.get_membership(70) == pytest.approx(0.5)

def test_remove_term(temperature):
    removed = temperature.remove_term("warm")
    assert removed is not None
    assert "warm" not in temperature
    assert temperature.remove_term("warm") is None

@pytest.mark.parametrize("name", ["and", "OR", "very hot", "lo(w", "hi)gh", ""])
def test_invalid_term_names(temperature, name):
    with pytest.raises(InvalidFuzzyVariableTermNameError):
        temperature.add_term(name, triangle(0, 5, 10))

def test_add_term_from_value_of_another_variable(temperature, fan_speed):
    with pytest.raises(IncompatibleFuzzyValuesError):
        temperature.add_term("borrowed", fan_speed.find_term("low"))

def test_crisp_value(temperature):
    value = temperature.crisp_value(70)
    assert value.linguistic_expression == "70"
    assert value.get_membership(70) == 1.0
    with pytest.raises(XValueOutsideUODError):
        temperature.crisp_value(120)

def test_variable_string_lists_terms(temperature):
    text = str(temperature)
    assert "temperature" in text
    assert "warm" in text
    assert repr(temperature) == "FuzzyVariable('temperature', 0.0, 100.0, 'C')"

# --- Tests for Linguistic Expressions ---

def test_and_binds_tighter_than_or(temperature):
    fs = temperature.parse("cold or warm and hot")
    assert fs.get_membership(5) == 1.0
    assert fs.get_membership(68) == pytest.approx(0.4)

def test_parentheses_override_precedence(temperature):
    fs = temperature.parse("(cold or warm) and hot")
    assert fs.get_membership(5) == 0.0
    assert fs.get_membership(68) == pytest.approx(0.4)

def test_modifiers_in_expressions(temperature):
    assert temperature.parse("very hot").get_membership(70) == pytest.approx(0.25)
    assert temperature.parse("not cold").get_membership(20) == pytest.approx(0.5)
    assert temperature.parse("NOT VERY hot").get_membership(70) == pytest.approx(0.75)

@pytest.mark.parametrize("expression", ["", "cold and", "freezing", "(cold", "cold warm", "and cold", "very", "cold)"])
def test_invalid_expressions(temperature, expression):
    assert not temperature.is_valid_expression(expression)
    with pytest.raises(InvalidLinguisticExpressionError):
        temperature.parse(expression)

# --- Tests for FuzzyValue Construction ---

def test_value_from_expression_keeps_normalized_text(temperature):
    value = FuzzyValue(temperature, "very   hot")
    assert value.linguistic_expression == "very hot"

def test_value_from_set_has_unknown_expression(temperature):
    value = FuzzyValue(temperature, triangle(10, 20, 30))
    assert value.linguistic_expression == DEFAULT_EXPRESSION

def test_value_outside_universe_is_rejected(temperature):
    with pytest.raises(XValueOutsideUODError):
        FuzzyValue(temperature, triangle(90, 100, 110))

def test_value_outside_universe_is_confined_when_configured(temperature):
    with ConfigurationContextManager(CONFINE_TO_UOD=True):
        value = FuzzyValue(temperature, triangle(90, 100, 110))
    assert value.get_membership(100) == 1.0
    assert value.fuzzy_set.get_point(-1).x == 100.0

def test_equality_uses_variable_and_set(temperature):
    assert temperature.value("hot") == temperature.find_term("hot")
    assert hash(temperature.value("hot")) == hash(temperature.find_term("hot"))
    other = FuzzyVariable("temperature", 0, 100, "C")
    other.add_term("hot", temperature.find_term("hot").fuzzy_set)
    assert other.find_term("hot") != temperature.find_term("hot")

# --- Tests for Operations and Expression Tracking ---

def test_unary_expression_tracking(temperature):
    hot = temperature.find_term("hot")
    assert hot.fuzzy_complement().linguistic_expression == "not (hot)"
    assert hot.modify("Very").linguistic_expression == "very (hot)"
    assert hot.fuzzy_normalize().linguistic_expression == "norm (hot)"

def test_binary_expression_tracking(temperature):
    hot = temperature.find_term("hot")
    cold = temperature.find_term("cold")
    assert (hot | cold).linguistic_expression == "(hot) or (cold)"
    assert (hot & cold).linguistic_expression == "(hot) and (cold)"
    assert hot.fuzzy_union("very cold").linguistic_expression == "(hot) or (very cold)"

def test_unknown_expression_propagates(temperature):
    hot = temperature.find_term("hot")
    anonymous = FuzzyValue(temperature, triangle(10, 20, 30))
    assert (hot | anonymous).linguistic_expression == DEFAULT_EXPRESSION
    assert anonymous.fuzzy_complement().linguistic_expression == DEFAULT_EXPRESSION

def test_operations_on_different_variables_fail(temperature, fan_speed):
    with pytest.raises(IncompatibleFuzzyValuesError):
        temperature.find_term("hot") | fan_speed.find_term("high")
    with pytest.raises(TypeError):
        temperature.find_term("hot").maximum_of_intersection(fan_speed.find_term("high"))

def test_intersection_of_overlapping_terms(temperature):
    both = temperature.find_term("hot") & temperature.find_term("warm")
    assert both.max_y == pytest.approx(0.4)
    assert both.get_x_for_membership(0.4) == pytest.approx(68.0)

def test_sum_of_terms(temperature):
    total = temperature.find_term("warm") + temperature.find_term("hot")
    assert total.get_membership(70) == pytest.approx(0.8333333, abs=1e-6)
    assert total.get_membership(90) == 1.0

def test_fuzzy_match(temperature):
    hot = temperature.find_term("hot")
    assert not hot.fuzzy_match(temperature.find_term("cold"))
    assert hot.fuzzy_match("warm")
    assert hot.fuzzy_match("warm", threshold=0.3)
    assert not hot.fuzzy_match("warm", threshold=0.5)

def test_fuzzy_match_on_a_shared_edge():
    level = FuzzyVariable("level", 0, 20)
    level.add_term("lower", rectangle(0, 10))
    level.add_term("upper", rectangle(10, 20))
    lower = level.find_term("lower")
    assert lower.fuzzy_match(level.crisp_value(10))
    assert lower.fuzzy_match("upper")
    assert not lower.fuzzy_match(level.crisp_value(15))

# --- Tests for Queries ---

def test_membership_outside_universe(temperature):
    with pytest.raises(XValueOutsideUODError):
        temperature.find_term("warm").get_membership(-1)

def test_alpha_cut_and_support(temperature):
    warm = temperature.find_term("warm")
    assert warm.get_alpha_cut(0.5) == [Interval(35, False, 65, False)]
    assert warm.get_support() == [Interval(20, True, 80, True)]
    assert warm.get_x_for_membership(0.5) == pytest.approx(35.0)
    assert warm.get_x_for_membership(0.5, from_="right") == pytest.approx(65.0)

def test_alpha_cut_of_open_ended_term_stops_at_universe(temperature):
    hot = temperature.find_term("hot")
    assert hot.get_alpha_cut(0.5) == [Interval(70, False, 100, False)]

def test_area(temperature):
    assert temperature.find_term("warm").area() == pytest.approx(30.0)
    assert temperature.find_term("cold").area() == pytest.approx(20.0)

# --- Tests for Defuzzification ---

def test_defuzzify_uses_universe_of_discourse(temperature):
    warm = temperature.find_term("warm")
    hot = temperature.find_term("hot")
    assert warm.moment_defuzzify() == pytest.approx(50.0)
    assert hot.maximum_defuzzify() == pytest.approx(90.0)
    assert hot.maximum_defuzzify(policy="first") == pytest.approx(80.0)
    assert hot.defuzzify("centroid") == pytest.approx(84.4444, abs=1e-4)
    assert warm.center_of_area_defuzzify() == pytest.approx(50.0)

def test_value_string(temperature):
    text = str(temperature.find_term("warm"))
    assert "Linguistic Expression -> warm" in text
    assert "temperature" in text
