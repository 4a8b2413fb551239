import pytest
from fuzzySetPy.config import configure_parameters
from fuzzySetPy.variable import FuzzyVariable
from fuzzySetPy.shapes import triangle, trapezoid


def build_temperature_variable() -> FuzzyVariable:
    """Temperature in degrees C with three overlapping terms."""
    temp = FuzzyVariable("temperature", 0, 100, "C")
    temp.add_term("cold", trapezoid(0, 0, 10, 30))
    temp.add_term("warm", triangle(20, 50, 80))
    temp.add_term("hot", trapezoid(60, 80, 100, 100))
    return temp

def build_fan_variable() -> FuzzyVariable:
    """Fan speed from 0 to 10 with a low and a high term."""
    fan = FuzzyVariable("fan_speed", 0, 10, "rps")
    fan.add_term("low", triangle(0, 0, 5))
    fan.add_term("high", triangle(5, 10, 10))
    return fan

@pytest.fixture(autouse=True)
def reset_configuration():
    """Every test starts (and leaves) the global configuration at its defaults."""
    configure_parameters.reset_to_defaults()
    yield
    configure_parameters.reset_to_defaults()

@pytest.fixture
def temperature() -> FuzzyVariable:
    return build_temperature_variable()

@pytest.fixture
def fan_speed() -> FuzzyVariable:
    return build_fan_variable()

@pytest.fixture
def humidity() -> FuzzyVariable:
    hum = FuzzyVariable("humidity", 0, 100, "%")
    hum.add_term("dry", trapezoid(0, 0, 20, 50))
    hum.add_term("humid", trapezoid(40, 70, 100, 100))
    return hum
