"""
Error types raised by fuzzySetPy.

Every error derives from :class:`FuzzyException` and from the builtin exception
it specialises, so ``except ValueError`` keeps working for callers that do not
care about the fuzzy-specific type. Each error keeps the offending values as
attributes.
"""
from __future__ import annotations


class FuzzyException(Exception):
    """Base class for all fuzzySetPy errors."""


class XValuesOutOfOrderError(FuzzyException, ValueError):
    """Raised when x values are not in ascending order (or bounds are reversed)."""

    def __init__(self, x_previous: float, x_current: float, message: str | None = None):
        self.x_previous = x_previous
        self.x_current = x_current
        if message is None:
            message = f"x values out of order: {x_current} follows {x_previous}"
        super().__init__(message)


class YValueOutOfRangeError(FuzzyException, ValueError):
    """Raised when a membership value lies outside [0, 1]."""

    def __init__(self, y: float):
        self.y = y
        super().__init__(f"Membership value {y} is outside the range [0, 1]")


class IncompatibleFuzzyValuesError(FuzzyException, TypeError):
    """Raised when two FuzzyValues over different FuzzyVariables are combined."""

    def __init__(self, first_variable: str, second_variable: str, operation: str = "operation"):
        self.first_variable = first_variable
        self.second_variable = second_variable
        super().__init__(
            f"FuzzyValues must share the same FuzzyVariable for '{operation}' "
            f"(got '{first_variable}' and '{second_variable}')"
        )


class IncompatibleRuleInputsError(FuzzyException, ValueError):
    """Raised when the inputs of a rule do not match its antecedents."""

    def __init__(self, message: str, expected=None, given=None):
        self.expected = expected
        self.given = given
        super().__init__(message)


class NoXValueForMembershipError(FuzzyException, ValueError):
    """Raised when no x value has the requested membership."""

    def __init__(self, membership: float):
        self.membership = membership
        super().__init__(f"No x value found with membership {membership}")


class InvalidDefuzzifyError(FuzzyException, ValueError):
    """Raised when a fuzzy set cannot be defuzzified (empty or zero area)."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Cannot defuzzify: {reason}")


class XValueOutsideUODError(FuzzyException, ValueError):
    """Raised when a fuzzy set has non-zero membership outside a variable's universe of discourse."""

    def __init__(self, x: float, min_uod: float, max_uod: float):
        self.x = x
        self.min_uod = min_uod
        self.max_uod = max_uod
        super().__init__(f"x value {x} is outside the universe of discourse [{min_uod}, {max_uod}]")


class InvalidLinguisticExpressionError(FuzzyException, ValueError):
    """Raised when a linguistic expression cannot be parsed."""

    def __init__(self, expression: str, detail: str = ""):
        self.expression = expression
        message = f"Invalid linguistic expression '{expression}'"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class InvalidFuzzyVariableTermNameError(FuzzyException, ValueError):
    """Raised when a term name is reserved or contains forbidden characters."""

    def __init__(self, term: str, detail: str):
        self.term = term
        super().__init__(f"Invalid term name '{term}': {detail}")
