"""
===================================================================
Tests for the Similarity Operators
===================================================================
"""

import pytest

from fuzzySetPy.variable import FuzzyVariable, FuzzyValue
from fuzzySetPy.shapes import triangle, singleton, rectangle
from fuzzySetPy.similarity import (
    SimilarityByArea,
    SimilarityByPossibility,
    get_similarity_operator,
)
from fuzzySetPy.types import SimilarityOperator
from fuzzySetPy.exceptions import IncompatibleFuzzyValuesError

# --- Test Data Fixtures ---

@pytest.fixture
def scale() -> FuzzyVariable:
    var = FuzzyVariable("score", 0, 20)
    var.add_term("low", triangle(0, 5, 10))
    var.add_term("mid", triangle(5, 10, 15))
    var.add_term("far", triangle(14, 16, 18))
    return var

# --- Tests for Similarity by Area ---

def test_area_similarity_of_overlapping_triangles(scale):
    # intersection area 1.25, union area 8.75
    result = SimilarityByArea().similarity(scale.find_term("low"), scale.find_term("mid"))
    assert result == pytest.approx(1 / 7)

def test_area_similarity_of_identical_values(scale):
    assert SimilarityByArea().similarity(scale.value("low"), scale.find_term("low")) == 1.0

def test_area_similarity_of_disjoint_values(scale):
    assert SimilarityByArea().similarity(scale.find_term("low"), scale.find_term("far")) == 0.0

def test_area_similarity_of_singletons_is_zero(scale):
    first = FuzzyValue(scale, singleton(3))
    second = FuzzyValue(scale, singleton(8))
    assert SimilarityByArea().similarity(first, second) == 0.0

# --- Tests for Similarity by Possibility ---

def test_possibility_similarity_with_low_necessity(scale):
    # poss = 0.5, nec = 0, so the possibility is halved
    result = SimilarityByPossibility().similarity(scale.find_term("low"), scale.find_term("mid"))
    assert result == pytest.approx(0.25)

def test_possibility_similarity_of_identical_values(scale):
    low = scale.find_term("low")
    assert SimilarityByPossibility().similarity(low, low) == pytest.approx(1.0)

@pytest.mark.parametrize("fuzzy_set", [
    rectangle(2, 8),
    triangle(0, 5, 10).scale(0.4),
])
def test_possibility_similarity_of_identical_non_triangular_values(scale, fuzzy_set):
    value = FuzzyValue(scale, fuzzy_set)
    assert SimilarityByPossibility().similarity(value, value) == 1.0
    assert SimilarityByArea().similarity(value, value) == 1.0

def test_possibility_similarity_of_disjoint_values(scale):
    assert SimilarityByPossibility().similarity(scale.find_term("low"), scale.find_term("far")) == 0.0

def test_value_similarity_defaults_to_possibility(scale):
    low = scale.find_term("low")
    assert low.similarity("mid") == pytest.approx(0.25)
    assert low.similarity("mid", SimilarityByArea()) == pytest.approx(1 / 7)

# --- Tests for Compatibility and the Registry ---

def test_similarity_requires_same_variable(scale):
    other = FuzzyVariable("score", 0, 20)
    other.add_term("low", triangle(0, 5, 10))
    with pytest.raises(IncompatibleFuzzyValuesError):
        SimilarityByArea().similarity(scale.find_term("low"), other.find_term("low"))
    with pytest.raises(IncompatibleFuzzyValuesError):
        SimilarityByPossibility().similarity(scale.find_term("low"), other.find_term("low"))

def test_get_similarity_operator():
    assert isinstance(get_similarity_operator("area"), SimilarityByArea)
    assert isinstance(get_similarity_operator("possibility"), SimilarityOperator)
    with pytest.raises(ValueError, match="not registered"):
        get_similarity_operator("jaccard")
