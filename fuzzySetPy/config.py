from typing import Dict, Tuple


class Configuration:
    """
    A singleton-like class to hold all configurable parameters for the fuzzySetPy library.

    Users can modify these attributes directly to customize comparison tolerances,
    display precision, modifier resolution and inference defaults.

    .. note::
        The configuration is process-wide and is **not** thread-isolated. Any
        caller may change it at any time, affecting all subsequent comparisons
        and simplifications. Engine functions that accept an explicit
        ``tolerance`` argument never read the global value.

    Example:
    >>> from fuzzySetPy.config import configure_parameters
    >>> # Compare membership values more loosely
    >>> configure_parameters.FUZZY_TOLERANCE = 1e-6
    >>> # Print sets with four decimals
    >>> configure_parameters.DISPLAY_PRECISION = 4
    """

    def __init__(self):
        self.reset_to_defaults()

    def reset_to_defaults(self):
        """Resets all configuration parameters to their original default values."""

        # --- Numerical Parameters (fuzzy_set.py) ---

        # Two x or y values closer than this are considered equal
        self.FUZZY_TOLERANCE: float = 1e-8

        # Number of decimals used by str(FuzzySet) and str(Interval)
        self.DISPLAY_PRECISION: int = 2

        # --- Value / Variable Parameters (variable.py) ---

        # Threshold used by FuzzyValue.fuzzy_match when none is given
        self.MATCH_THRESHOLD: float = 0.0

        # Clip curves to the universe of discourse instead of raising
        self.CONFINE_TO_UOD: bool = False

        # --- Modifier Parameters (modifiers.py) ---

        # Maximum change in membership between points of an expanded set
        self.MODIFIER_DELTA_Y: float = 0.1

        # Exponents of the concentration/dilation hedges
        self.HEDGE_EXPONENTS: Dict[str, float] = {
            "very": 2.0,
            "extremely": 3.0,
            "somewhat": 1.0 / 3.0,
            "more_or_less": 1.0 / 3.0,
            "plus": 1.25,
        }

        # --- Shape Parameters (shapes.py) ---

        # Points used on each side of a gaussian curve
        self.GAUSSIAN_NUM_POINTS: int = 9

        # Gaussian curves are cut off at mean +/- this many sigmas
        self.GAUSSIAN_SIGMA_SPAN: float = 4.0

        # Points used to approximate S, Z and PI curves
        self.SCURVE_NUM_POINTS: int = 9

        # --- Inference Parameters (combine.py, rule.py) ---

        # Default compensation factor for the compensatory-and operator
        self.COMPENSATORY_AND_GAMMA: float = 0.562

        self.DEFAULT_DEFUZZIFY_METHOD: str = "moment"

        # Samples per term used by the pandas export
        self.EXPORT_NUM_SAMPLES: int = 101

        # Figure size for plots
        self.PLOT_FIGSIZE: Tuple[float, float] = (8.0, 4.5)

    def resolve_tolerance(self, tolerance: float | None = None) -> float:
        """Returns `tolerance` if given, otherwise the configured FUZZY_TOLERANCE."""
        return tolerance if tolerance is not None else self.FUZZY_TOLERANCE

    def register_hedge_exponent(self, name: str, exponent: float):
        """Registers a new concentration/dilation exponent."""
        if exponent <= 0:
            raise ValueError(f"Hedge exponent must be positive, got {exponent}.")
        if name in self.HEDGE_EXPONENTS:
            print(f"Warning: Overwriting hedge exponent '{name}'")
        self.HEDGE_EXPONENTS[name] = exponent

configure_parameters = Configuration()



class ConfigurationContextManager:
    """
    A context manager to temporarily change configuration parameters.

    Usage:
    >>> with ConfigurationContextManager(FUZZY_TOLERANCE=1e-4):
    >>>     # Code block runs with a looser tolerance
    >>>     ...
    >>> # Tolerance reverts to its original value outside the block
    """
    def __init__(self, **kwargs):
        self.changes = kwargs
        self.original_values = {}

    def __enter__(self):
        for key, value in self.changes.items():
            if not hasattr(configure_parameters, key):
                raise AttributeError(f"Configuration object has no attribute '{key}'")
            self.original_values[key] = getattr(configure_parameters, key)
            setattr(configure_parameters, key, value)
        return configure_parameters

    def __exit__(self, exc_type, exc_val, exc_tb):
        for key, value in self.original_values.items():
            setattr(configure_parameters, key, value)
