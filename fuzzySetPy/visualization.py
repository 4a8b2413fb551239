from __future__ import annotations
from typing import TYPE_CHECKING, List, Tuple, Iterable
import math
import numpy as np

try:
    import matplotlib.pyplot as plt
    _PLOT_AVAILABLE = True
except ImportError:
    _PLOT_AVAILABLE = False

try:
    import pandas as pd
    _PANDAS_AVAILABLE = True
except ImportError:
    _PANDAS_AVAILABLE = False

if TYPE_CHECKING:
    from .fuzzy_set import FuzzySet
    from .variable import FuzzyValue, FuzzyVariable
    from .rule import FuzzyRule


def _check_pandas_availability():
    """Helper function to raise an error if pandas is not installed."""
    if not _PANDAS_AVAILABLE:
        raise ImportError("DataFrame export functionality requires the 'pandas' library. "
                          "Please install it using: pip install pandas")

def _check_plotting_availability():
    """Helper function to raise an error if plotting libraries are not installed."""
    if not _PLOT_AVAILABLE:
        raise ImportError("Plotting functionality requires matplotlib. "
                          "Please install it using: pip install matplotlib")


def _plot_coordinates(fuzzy_set: FuzzySet, x_min: float | None = None,
                      x_max: float | None = None) -> Tuple[List[float], List[float]]:
    """The set's points, extended horizontally to the given bounds."""
    pts = list(fuzzy_set.signature())
    if not pts:
        return [], []
    xs = [p[0] for p in pts]
    ys = [p[1] for p in pts]
    if x_min is not None and not math.isinf(x_min) and x_min < xs[0]:
        xs.insert(0, x_min)
        ys.insert(0, ys[0])
    if x_max is not None and not math.isinf(x_max) and x_max > xs[-1]:
        xs.append(x_max)
        ys.append(ys[-1])
    return xs, ys


# ==============================================================================
# 1. MATPLOTLIB PLOTTING FUNCTIONS
# ==============================================================================

def plot_fuzzy_set(fuzzy_set: FuzzySet, x_min: float | None = None, x_max: float | None = None,
                   label: str | None = None, ax=None, figsize=None) -> 'plt.Figure':
    """
    Plots a single membership function.

    Args:
        fuzzy_set: The set to draw.
        x_min, x_max: Optional bounds; the set is drawn with its horizontal
                      extension up to them.
        label: Legend label.
        ax: An existing matplotlib Axes to draw on.
        figsize: The size of the figure when a new one is created.

    Returns:
        The matplotlib Figure object.
    """
    _check_plotting_availability()
    from .config import configure_parameters

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize or configure_parameters.PLOT_FIGSIZE)
    else:
        fig = ax.figure
    xs, ys = _plot_coordinates(fuzzy_set, x_min, x_max)
    ax.plot(xs, ys, marker='.', label=label)
    ax.set_ylim(-0.05, 1.05)
    ax.set_ylabel("Membership")
    if label:
        ax.legend()
    return fig


def plot_fuzzy_values(values: Iterable[FuzzyValue], title: str | None = None, figsize=None) -> 'plt.Figure':
    """
    Plots several fuzzy values on one set of axes, each over its variable's
    universe of discourse and labelled with its linguistic expression.
    """
    _check_plotting_availability()
    from .config import configure_parameters

    values = list(values)
    if not values:
        raise ValueError("No fuzzy values to plot.")
    fig, ax = plt.subplots(figsize=figsize or configure_parameters.PLOT_FIGSIZE)
    for value in values:
        v = value.variable
        plot_fuzzy_set(value.fuzzy_set, v.min_uod, v.max_uod, label=value.linguistic_expression, ax=ax)

    variable = values[0].variable
    ax.set_xlim(variable.min_uod, variable.max_uod)
    ax.set_xlabel(f"{variable.name} ({variable.units})" if variable.units else variable.name)
    ax.set_title(title or f"Fuzzy values of '{variable.name}'")
    ax.grid(True, linestyle='--', alpha=0.5)
    return fig


def plot_variable_terms(variable: FuzzyVariable, figsize=None) -> 'plt.Figure':
    """Plots every term defined on a fuzzy variable."""
    terms = [variable.find_term(t) for t in variable.terms()]
    if not terms:
        raise ValueError(f"Variable '{variable.name}' has no terms to plot.")
    return plot_fuzzy_values(terms, title=f"Terms of '{variable.name}'", figsize=figsize)


def plot_rule_firing(rule: FuzzyRule, inputs: Iterable[FuzzyValue] | None = None, figsize=None) -> 'plt.Figure':
    """
    Fires a rule and draws one panel per antecedent (with its input) and one
    per conclusion (with the implicated output).

    Returns:
        The matplotlib Figure object.
    """
    _check_plotting_availability()

    outputs = rule.execute(inputs)
    panels = [(a, i) for a, i in zip(rule.antecedents, rule.inputs)]
    panels += [(c, o) for c, o in zip(rule.conclusions, outputs)]
    if not panels:
        raise ValueError("The rule has no antecedents or conclusions to plot.")

    fig, axes = plt.subplots(len(panels), 1, figsize=figsize or (8, 2.5 * len(panels)), squeeze=False)
    for ax, (reference, result) in zip(axes[:, 0], panels):
        v = reference.variable
        plot_fuzzy_set(reference.fuzzy_set, v.min_uod, v.max_uod, label=reference.linguistic_expression, ax=ax)
        plot_fuzzy_set(result.fuzzy_set, v.min_uod, v.max_uod, label=result.linguistic_expression, ax=ax)
        ax.set_xlim(v.min_uod, v.max_uod)
        ax.set_xlabel(v.name)
    fig.suptitle(f"Firing strength: {rule.firing_strength:.3f}")
    fig.tight_layout()
    return fig


# ==============================================================================
# 2. PANDAS EXPORT AND TEXT SUMMARIES
# ==============================================================================

def fuzzy_set_to_dataframe(fuzzy_set: FuzzySet) -> 'pd.DataFrame':
    """Returns the points of a set as a DataFrame with 'x' and 'membership' columns."""
    _check_pandas_availability()
    return pd.DataFrame({"x": fuzzy_set.x_values, "membership": fuzzy_set.y_values})


def variable_terms_to_dataframe(variable: FuzzyVariable, num_points: int | None = None) -> 'pd.DataFrame':
    """
    Samples every term of a variable on an even grid over its universe of discourse.

    Returns:
        A DataFrame indexed by x with one membership column per term.
    """
    _check_pandas_availability()
    from .config import configure_parameters

    n = num_points if num_points is not None else configure_parameters.EXPORT_NUM_SAMPLES
    xs = np.linspace(variable.min_uod, variable.max_uod, n)
    data = {term: variable.find_term(term).fuzzy_set.sample(xs) for term in variable.terms()}
    df = pd.DataFrame(data, index=pd.Index(xs, name=variable.name))
    return df


def format_rule_summary(rule: FuzzyRule) -> str:
    """Returns a plain-text summary of a rule and its last firing."""
    lines = ["=" * 60, f"Rule: {rule.name or '(unnamed)'}", "=" * 60]
    for antecedent in rule.antecedents:
        lines.append(f"  IF   {antecedent.variable.name} is {antecedent.linguistic_expression}")
    for conclusion in rule.conclusions:
        lines.append(f"  THEN {conclusion.variable.name} is {conclusion.linguistic_expression}")
    lines.append("-" * 60)
    lines.append(f"  Executor:          {type(rule.executor).__name__}")
    lines.append(f"  Combine operator:  {rule.combine_operator!r}")
    strength = rule.firing_strength
    lines.append(f"  Firing strength:   {'not fired' if strength is None else f'{strength:.4f}'}")
    return "\n".join(lines)
