"""
===================================================================
Tests for the Shapes Module
===================================================================

Checks the standard membership function constructors and the shape
registry used to build fuzzy sets by name.
"""

import math
import pytest

from fuzzySetPy import shapes
from fuzzySetPy.shapes import (
    triangle, trapezoid, singleton, rectangle, left_linear, right_linear,
    s_curve, z_curve, pi_curve, gaussian, left_gaussian, right_gaussian, create_shape
)
from fuzzySetPy.config import ConfigurationContextManager
from fuzzySetPy.exceptions import XValuesOutOfOrderError


def _coords(fs):
    return [c for p in fs.signature() for c in p]

# --- Tests for Linear Shapes ---

def test_triangle_points():
    assert _coords(triangle(0, 5, 10)) == [0, 0, 5, 1, 10, 0]

def test_right_angled_triangle_keeps_vertical_edge():
    fs = triangle(0, 0, 10)
    assert _coords(fs) == [0, 0, 0, 1, 10, 0]
    assert fs.get_membership(0) == 1.0

def test_trapezoid_plateau():
    fs = trapezoid(0, 2, 6, 8)
    assert fs.size == 4
    assert fs.get_membership(4) == 1.0
    assert fs.get_membership(7) == pytest.approx(0.5)

def test_singleton_is_a_spike():
    fs = singleton(4)
    assert _coords(fs) == [4, 0, 4, 1, 4, 0]
    assert fs.get_membership(4) == 1.0
    assert fs.get_membership(4.5) == 0.0
    assert fs.area() == 0.0

def test_rectangle():
    fs = rectangle(2, 6)
    assert fs.get_membership(2) == 1.0
    assert fs.get_membership(6) == 1.0
    assert fs.get_membership(1.9) == 0.0
    assert fs.area() == pytest.approx(4.0)

def test_open_ended_linear_shapes():
    rising = left_linear(0, 10)
    falling = right_linear(0, 10)
    assert rising.get_membership(-5) == 0.0
    assert rising.get_membership(50) == 1.0
    assert falling.get_membership(-5) == 1.0
    assert falling.get_membership(50) == 0.0
    assert rising.get_membership(2.5) + falling.get_membership(2.5) == pytest.approx(1.0)

@pytest.mark.parametrize("factory, args", [
    (triangle, (5, 3, 8)),
    (trapezoid, (0, 4, 2, 8)),
    (rectangle, (6, 2)),
    (left_linear, (10, 0)),
])
def test_parameters_out_of_order(factory, args):
    with pytest.raises(XValuesOutOfOrderError, match="ascending"):
        factory(*args)

# --- Tests for Curved Shapes ---

def test_s_curve_passes_through_half_at_middle():
    fs = s_curve(0, 10)
    assert fs.get_membership(0) == 0.0
    assert fs.get_membership(5) == pytest.approx(0.5)
    assert fs.get_membership(10) == 1.0
    assert fs.get_membership(20) == 1.0

def test_z_curve_mirrors_s_curve():
    s = s_curve(0, 10)
    z = z_curve(0, 10)
    for x in (0, 1.25, 3.75, 5, 8.75, 10):
        assert z.get_membership(x) == pytest.approx(1.0 - s.get_membership(x))

def test_pi_curve():
    fs = pi_curve(50, 10)
    assert fs.get_membership(50) == 1.0
    assert fs.get_membership(45) == pytest.approx(0.5)
    assert fs.get_membership(55) == pytest.approx(0.5)
    assert fs.get_membership(40) == 0.0
    assert fs.get_membership(60) == 0.0
    assert fs.is_convex()

def test_pi_curve_negative_bandwidth():
    with pytest.raises(ValueError, match="bandwidth"):
        pi_curve(50, -1)

def test_gaussian_shape():
    fs = gaussian(50, 5)
    assert fs.get_membership(50) == 1.0
    assert fs.get_membership(45) == pytest.approx(math.exp(-0.5))
    assert fs.get_membership(30) == 0.0
    assert fs.get_membership(70) == 0.0
    assert fs.get_membership(25) == 0.0
    assert fs.is_normal()

def test_gaussian_span_follows_configuration():
    with ConfigurationContextManager(GAUSSIAN_SIGMA_SPAN=2.0):
        fs = right_gaussian(0, 1)
    assert fs.get_point(-1).x == pytest.approx(2.0)
    assert fs.get_point(-1).y == 0.0

def test_half_gaussians_join_at_mean():
    left = left_gaussian(0, 2)
    right = right_gaussian(0, 2)
    assert left.get_membership(0) == 1.0
    assert right.get_membership(0) == 1.0
    assert left.get_membership(5) == 1.0
    assert right.get_membership(-5) == 1.0

def test_gaussian_requires_positive_sigma():
    with pytest.raises(ValueError, match="sigma"):
        gaussian(0, 0)

# --- Tests for the Shape Registry ---

def test_create_shape_by_name():
    assert create_shape("Triangle", 0, 5, 10) == triangle(0, 5, 10)
    assert create_shape("trapezoid", 0, 1, 2, 3) == trapezoid(0, 1, 2, 3)

def test_create_unknown_shape():
    with pytest.raises(ValueError, match="not registered"):
        create_shape("hexagon", 1, 2)

def test_register_custom_shape(capsys):
    @shapes.register_shape("plateau")
    def plateau(y):
        return shapes.FuzzySet([(0, y)])
    try:
        assert create_shape("plateau", 0.4).get_membership(123) == pytest.approx(0.4)
        shapes.register_shape("plateau")(plateau)
        assert "Overwriting shape 'plateau'" in capsys.readouterr().out
    finally:
        del shapes.SHAPE_REGISTRY["plateau"]
