"""
===================================================================
Tests for the Configuration Module
===================================================================

Verifies the global parameters, the context manager that changes them
temporarily, and that the engine actually reads them.
"""

import pytest

from fuzzySetPy.config import configure_parameters, ConfigurationContextManager
from fuzzySetPy.fuzzy_set import FuzzySet
from fuzzySetPy.shapes import triangle, trapezoid
from fuzzySetPy.exceptions import YValueOutOfRangeError

# --- Tests for Defaults ---

def test_defaults():
    assert configure_parameters.FUZZY_TOLERANCE == 1e-8
    assert configure_parameters.DISPLAY_PRECISION == 2
    assert configure_parameters.DEFAULT_DEFUZZIFY_METHOD == "moment"
    assert configure_parameters.HEDGE_EXPONENTS["very"] == 2.0

def test_reset_to_defaults():
    configure_parameters.FUZZY_TOLERANCE = 0.5
    configure_parameters.HEDGE_EXPONENTS["very"] = 4.0
    configure_parameters.reset_to_defaults()
    assert configure_parameters.FUZZY_TOLERANCE == 1e-8
    assert configure_parameters.HEDGE_EXPONENTS["very"] == 2.0

def test_resolve_tolerance():
    assert configure_parameters.resolve_tolerance(None) == 1e-8
    assert configure_parameters.resolve_tolerance(0.1) == 0.1
    assert configure_parameters.resolve_tolerance(0.0) == 0.0

def test_register_hedge_exponent(capsys):
    configure_parameters.register_hedge_exponent("quite", 1.5)
    assert configure_parameters.HEDGE_EXPONENTS["quite"] == 1.5
    configure_parameters.register_hedge_exponent("very", 2.5)
    assert "Overwriting hedge exponent 'very'" in capsys.readouterr().out
    with pytest.raises(ValueError, match="positive"):
        configure_parameters.register_hedge_exponent("never", 0)

# --- Tests for the Context Manager ---

def test_context_manager_restores_values():
    with ConfigurationContextManager(DISPLAY_PRECISION=4, MATCH_THRESHOLD=0.3) as config:
        assert config.DISPLAY_PRECISION == 4
        assert configure_parameters.MATCH_THRESHOLD == 0.3
    assert configure_parameters.DISPLAY_PRECISION == 2
    assert configure_parameters.MATCH_THRESHOLD == 0.0

def test_context_manager_restores_after_error():
    with pytest.raises(RuntimeError):
        with ConfigurationContextManager(FUZZY_TOLERANCE=0.1):
            raise RuntimeError("boom")
    assert configure_parameters.FUZZY_TOLERANCE == 1e-8

def test_context_manager_rejects_unknown_parameter():
    with pytest.raises(AttributeError, match="NOT_A_PARAMETER"):
        with ConfigurationContextManager(NOT_A_PARAMETER=1):
            pass

# --- Tests for Parameters Used by the Engine ---

def test_tolerance_controls_validation_and_simplification():
    points = [(0, 0), (5, 0.5), (10, 1.005)]
    with pytest.raises(YValueOutOfRangeError):
        FuzzySet(points)
    configure_parameters.FUZZY_TOLERANCE = 0.01
    fs = FuzzySet(points)
    assert fs.size == 2
    assert fs.get_point(-1).y == 1.0

def test_explicit_tolerance_overrides_configuration():
    configure_parameters.FUZZY_TOLERANCE = 0.01
    fs = FuzzySet([(0, 0), (5, 0.501), (10, 1)], tolerance=1e-8)
    assert fs.size == 3

def test_display_precision():
    configure_parameters.DISPLAY_PRECISION = 1
    assert str(triangle(0, 5, 10)) == "{ 0.0/0.0 1.0/5.0 0.0/10.0 }"

def test_default_defuzzify_method():
    fs = trapezoid(0, 2, 6, 10)
    with ConfigurationContextManager(DEFAULT_DEFUZZIFY_METHOD="maximum"):
        assert fs.defuzzify() == pytest.approx(4.0)
    assert fs.defuzzify() == pytest.approx(fs.defuzzify("moment"))

def test_match_threshold(temperature):
    hot = temperature.find_term("hot")
    assert hot.fuzzy_match("warm")
    configure_parameters.MATCH_THRESHOLD = 0.5
    assert not hot.fuzzy_match("warm")

def test_modifier_resolution(temperature):
    configure_parameters.MODIFIER_DELTA_Y = 0.5
    # one extra point per sloped segment of the hot term
    assert temperature.parse("very hot").size == 5
