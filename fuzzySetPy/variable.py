from __future__ import annotations
import re
from typing import Dict, List, Iterable, Union, Tuple, TYPE_CHECKING

from .fuzzy_set import FuzzySet, WEAK, STRONG
from .types import Interval, SetPoint
from .modifiers import apply_modifier, is_modifier
from .exceptions import (
    IncompatibleFuzzyValuesError,
    InvalidFuzzyVariableTermNameError,
    InvalidLinguisticExpressionError,
    XValueOutsideUODError,
    XValuesOutOfOrderError,
)

if TYPE_CHECKING:
    from .types import SimilarityOperator

DEFAULT_EXPRESSION = "???"

ValueDefinition = Union[FuzzySet, str, Iterable[Union[SetPoint, Tuple[float, float]]]]


# ==============================================================================
# 1. LINGUISTIC EXPRESSION PARSER
# ==============================================================================

_TOKEN_PATTERN = re.compile(r"\(|\)|[^\s()]+")


class _ExpressionParser:
    """
    Recursive descent parser for linguistic expressions over one variable.

    Grammar (``and`` binds tighter than ``or``)::

        expression := conjunction ('or' conjunction)*
        conjunction := unary ('and' unary)*
        unary := modifier unary | '(' expression ')' | term
    """

    def __init__(self, variable: FuzzyVariable, expression: str):
        self.variable = variable
        self.expression = expression
        self.tokens = _TOKEN_PATTERN.findall(expression)
        self.position = 0

    def _error(self, detail: str) -> InvalidLinguisticExpressionError:
        return InvalidLinguisticExpressionError(self.expression, detail)

    def _peek(self) -> str | None:
        return self.tokens[self.position] if self.position < len(self.tokens) else None

    def _next(self) -> str:
        token = self._peek()
        if token is None:
            raise self._error("unexpected end of expression")
        self.position += 1
        return token

    def parse(self) -> FuzzySet:
        if not self.tokens:
            raise self._error("expression is empty")
        result = self._expression()
        if self._peek() is not None:
            raise self._error(f"unexpected '{self._peek()}'")
        return result

    def _expression(self) -> FuzzySet:
        result = self._conjunction()
        while self._peek() is not None and self._peek().lower() == "or":
            self._next()
            result = result.union(self._conjunction())
        return result

    def _conjunction(self) -> FuzzySet:
        result = self._unary()
        while self._peek() is not None and self._peek().lower() == "and":
            self._next()
            result = result.intersection(self._unary())
        return result

    def _unary(self) -> FuzzySet:
        token = self._next()
        lowered = token.lower()
        if token == "(":
            result = self._expression()
            if self._next() != ")":
                raise self._error("missing ')'")
            return result
        if token == ")" or lowered in ("and", "or"):
            raise self._error(f"unexpected '{token}'")

        following = self._peek()
        operand_follows = following is not None and following != ")" and following.lower() not in ("and", "or")
        if is_modifier(lowered) and operand_follows:
            return apply_modifier(lowered, self._unary())

        term = self.variable.find_term(lowered)
        if term is None:
            raise self._error(f"'{token}' is not a term of variable '{self.variable.name}'")
        return term.fuzzy_set


# ==============================================================================
# 2. FUZZY VARIABLE
# ==============================================================================

class FuzzyVariable:
    """
    A named universe of discourse [min_uod, max_uod] with linguistic terms.

    Terms are stored case-insensitively and may be defined from a FuzzySet, a
    point list or a linguistic expression over earlier terms.

    Example:
    >>> temp = FuzzyVariable("temperature", 0, 100, "C")
    >>> temp.add_term("cold", trapezoid(0, 0, 10, 20))
    >>> temp.add_term("hot", triangle(60, 80, 100))
    >>> temp.add_term("mild", "not cold and not hot")
    """

    def __init__(self, name: str, min_uod: float, max_uod: float, units: str = ""):
        if min_uod >= max_uod:
            raise XValuesOutOfOrderError(min_uod, max_uod,
                                         f"FuzzyVariable '{name}': min_uod must be lower than max_uod")
        self._name = name
        self._min_uod = float(min_uod)
        self._max_uod = float(max_uod)
        self._units = units
        self._terms: Dict[str, FuzzyValue] = {}

    @property
    def name(self) -> str:
        return self._name

    @property
    def min_uod(self) -> float:
        return self._min_uod

    @property
    def max_uod(self) -> float:
        return self._max_uod

    @property
    def units(self) -> str:
        return self._units

    def __repr__(self) -> str:
        return f"FuzzyVariable('{self._name}', {self._min_uod}, {self._max_uod}, '{self._units}')"

    def __str__(self) -> str:
        lines = [f"FuzzyVariable -> {self._name} [ {self._min_uod}, {self._max_uod} ] {self._units}", "Terms:"]
        lines.extend(f"  {term} -> {value.fuzzy_set}" for term, value in self._terms.items())
        return "\n".join(lines)

    # --- Terms ---

    @staticmethod
    def _check_term_name(term: str):
        lowered = term.lower()
        if lowered in ("and", "or"):
            raise InvalidFuzzyVariableTermNameError(term, f"term name cannot be '{lowered}'")
        for forbidden, label in ((" ", "a space"), ("(", "a '('"), (")", "a ')'")):
            if forbidden in lowered:
                raise InvalidFuzzyVariableTermNameError(term, f"term name cannot contain {label}")
        if not lowered:
            raise InvalidFuzzyVariableTermNameError(term, "term name cannot be empty")

    def add_term(self, term: str, definition: ValueDefinition | FuzzyValue) -> FuzzyValue:
        """
        Adds (or replaces) a named term.

        Args:
            term: The term name (case-insensitive, no spaces or parentheses,
                  not 'and'/'or').
            definition: A FuzzySet, a list of (x, y) points, a linguistic
                        expression over existing terms, or a FuzzyValue of this
                        variable.

        Returns:
            The FuzzyValue stored for the term.
        """
        self._check_term_name(term)
        if isinstance(definition, FuzzyValue):
            if definition.variable is not self:
                raise IncompatibleFuzzyValuesError(self._name, definition.variable.name, "add_term")
            fuzzy_set = definition.fuzzy_set
        elif isinstance(definition, str):
            fuzzy_set = self.parse(definition)
        else:
            fuzzy_set = definition if isinstance(definition, FuzzySet) else FuzzySet(definition)
        value = FuzzyValue(self, fuzzy_set, linguistic_expression=term)
        self._terms[term.lower()] = value
        return value

    def find_term(self, term: str) -> FuzzyValue | None:
        return self._terms.get(term.lower())

    def remove_term(self, term: str) -> FuzzyValue | None:
        return self._terms.pop(term.lower(), None)

    def terms(self) -> List[str]:
        return list(self._terms.keys())

    def __contains__(self, term: str) -> bool:
        return term.lower() in self._terms

    # --- Expressions ---

    def parse(self, expression: str) -> FuzzySet:
        """Evaluates a linguistic expression (e.g. ``"very hot or cold"``) to a FuzzySet."""
        return _ExpressionParser(self, expression).parse()

    def is_valid_expression(self, expression: str) -> bool:
        try:
            self.parse(expression)
        except InvalidLinguisticExpressionError:
            return False
        return True

    def value(self, expression: str) -> FuzzyValue:
        """Shortcut for ``FuzzyValue(self, expression)``."""
        return FuzzyValue(self, expression)

    def crisp_value(self, x: float) -> FuzzyValue:
        """A singleton value at x, used to feed a crisp measurement to rules."""
        from .shapes import singleton
        if x < self._min_uod or x > self._max_uod:
            raise XValueOutsideUODError(x, self._min_uod, self._max_uod)
        return FuzzyValue(self, singleton(x), linguistic_expression=f"{x:g}")


# ==============================================================================
# 3. FUZZY VALUE
# ==============================================================================

class FuzzyValue:
    """
    A FuzzySet bound to a FuzzyVariable, with the linguistic expression that produced it.

    FuzzyValues are immutable. Every operation returns a new value on the
    same variable whose expression records the operation, e.g.
    ``very (hot)`` or ``(hot) or (cold)``. Binary operations require both
    values to belong to the same FuzzyVariable.
    """

    def __init__(self, variable: FuzzyVariable, definition: ValueDefinition,
                 linguistic_expression: str | None = None):
        """
        Initializes a FuzzyValue.

        Args:
            variable: The FuzzyVariable the value belongs to.
            definition: A FuzzySet, a list of (x, y) points, or a linguistic
                        expression over the variable's terms.
            linguistic_expression: Optional description; defaults to the
                                   expression string when one is given.

        Raises:
            XValueOutsideUODError: If the set has points outside the universe of
                                   discourse and CONFINE_TO_UOD is off.
            InvalidLinguisticExpressionError: If the expression cannot be parsed.
        """
        if isinstance(definition, str):
            fuzzy_set = variable.parse(definition)
            if linguistic_expression is None:
                linguistic_expression = " ".join(definition.split())
        elif isinstance(definition, FuzzySet):
            fuzzy_set = definition
        else:
            fuzzy_set = FuzzySet(definition)
        self._variable = variable
        self._fuzzy_set = self._bind(variable, fuzzy_set)
        self._expression = linguistic_expression or DEFAULT_EXPRESSION

    @staticmethod
    def _bind(variable: FuzzyVariable, fuzzy_set: FuzzySet) -> FuzzySet:
        from .config import configure_parameters
        if configure_parameters.CONFINE_TO_UOD:
            return fuzzy_set.confine_to_bounds(variable.min_uod, variable.max_uod)
        tolerance = configure_parameters.FUZZY_TOLERANCE
        for x, _ in fuzzy_set.signature():
            if x < variable.min_uod - tolerance or x > variable.max_uod + tolerance:
                raise XValueOutsideUODError(x, variable.min_uod, variable.max_uod)
        return fuzzy_set

    def _derive(self, fuzzy_set: FuzzySet, expression: str) -> FuzzyValue:
        """Wraps the result of an operation that cannot widen the x-range."""
        try:
            return FuzzyValue(self._variable, fuzzy_set, linguistic_expression=expression)
        except XValueOutsideUODError as e:
            raise RuntimeError(f"Internal error: operation produced a set outside the universe of discourse ({e})") from e

    def _unary_expression(self, operator: str) -> str:
        if self._expression == DEFAULT_EXPRESSION:
            return DEFAULT_EXPRESSION
        return f"{operator} ({self._expression})"

    def _binary_expression(self, operator: str, other: FuzzyValue) -> str:
        if DEFAULT_EXPRESSION in (self._expression, other._expression):
            return DEFAULT_EXPRESSION
        return f"({self._expression}) {operator} ({other._expression})"

    def _coerce(self, other: FuzzyValue | str, operation: str) -> FuzzyValue:
        if isinstance(other, str):
            return FuzzyValue(self._variable, other)
        if other._variable is not self._variable:
            raise IncompatibleFuzzyValuesError(self._variable.name, other._variable.name, operation)
        return other

    # --- Accessors ---

    @property
    def variable(self) -> FuzzyVariable:
        return self._variable

    @property
    def fuzzy_set(self) -> FuzzySet:
        return self._fuzzy_set

    @property
    def linguistic_expression(self) -> str:
        return self._expression

    def with_expression(self, expression: str) -> FuzzyValue:
        """A copy of this value described by a different linguistic expression."""
        return FuzzyValue(self._variable, self._fuzzy_set, linguistic_expression=expression)

    @property
    def max_y(self) -> float:
        return self._fuzzy_set.max_y

    def is_normal(self) -> bool:
        return self._fuzzy_set.is_normal()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FuzzyValue):
            return False
        return self._variable is other._variable and self._fuzzy_set == other._fuzzy_set

    def __hash__(self) -> int:
        return hash(self._variable)

    def __repr__(self) -> str:
        return f"FuzzyValue({self._variable.name!r}, {self._expression!r}, {self._fuzzy_set!r})"

    def __str__(self) -> str:
        v = self._variable
        return (f"FuzzyVariable         -> {v.name} [ {v.min_uod}, {v.max_uod} ] {v.units}\n"
                f"Linguistic Expression -> {self._expression}\n"
                f"FuzzySet              -> {self._fuzzy_set}")

    # --- Unary operations ---

    def fuzzy_complement(self) -> FuzzyValue:
        return self._derive(self._fuzzy_set.complement(), self._unary_expression("not"))

    def fuzzy_normalize(self) -> FuzzyValue:
        return self._derive(self._fuzzy_set.normalize(), self._unary_expression("norm"))

    def fuzzy_scale(self, factor: float) -> FuzzyValue:
        return self._derive(self._fuzzy_set.scale(factor), self._unary_expression(f"scale {factor}"))

    def modify(self, modifier: str) -> FuzzyValue:
        """Applies a registered modifier, e.g. ``hot.modify("very")``."""
        return self._derive(apply_modifier(modifier, self._fuzzy_set), self._unary_expression(modifier.lower()))

    def horizontal_intersection(self, y: float) -> FuzzyValue:
        return self._derive(self._fuzzy_set.horizontal_intersection(y), self._expression)

    def horizontal_union(self, y: float) -> FuzzyValue:
        return self._derive(self._fuzzy_set.horizontal_union(y), self._expression)

    def __invert__(self) -> FuzzyValue:
        return self.fuzzy_complement()

    # --- Binary operations ---

    def fuzzy_union(self, other: FuzzyValue | str) -> FuzzyValue:
        other = self._coerce(other, "union")
        return self._derive(self._fuzzy_set.union(other._fuzzy_set), self._binary_expression("or", other))

    def fuzzy_intersection(self, other: FuzzyValue | str) -> FuzzyValue:
        other = self._coerce(other, "intersection")
        return self._derive(self._fuzzy_set.intersection(other._fuzzy_set), self._binary_expression("and", other))

    def fuzzy_sum(self, other: FuzzyValue | str) -> FuzzyValue:
        other = self._coerce(other, "sum")
        return self._derive(self._fuzzy_set.sum(other._fuzzy_set), self._binary_expression("+", other))

    def __or__(self, other: FuzzyValue) -> FuzzyValue:
        return self.fuzzy_union(other)

    def __and__(self, other: FuzzyValue) -> FuzzyValue:
        return self.fuzzy_intersection(other)

    def __add__(self, other: FuzzyValue) -> FuzzyValue:
        return self.fuzzy_sum(other)

    def maximum_of_intersection(self, other: FuzzyValue | str) -> float:
        other = self._coerce(other, "maximum_of_intersection")
        return self._fuzzy_set.maximum_of_intersection(other._fuzzy_set)

    def fuzzy_match(self, other: FuzzyValue | str, threshold: float | None = None) -> bool:
        """
        Checks whether two values match.

        With a threshold of 0 the values match when their intersection is not
        empty; otherwise the peak of their intersection must reach the
        threshold (clamped to [0, 1]).
        """
        from .config import configure_parameters
        other = self._coerce(other, "fuzzy_match")
        final_threshold = threshold if threshold is not None else configure_parameters.MATCH_THRESHOLD
        final_threshold = min(1.0, max(0.0, final_threshold))
        if final_threshold == 0.0:
            if self._fuzzy_set.no_intersection_test(other._fuzzy_set):
                return False
            return self.maximum_of_intersection(other) > 0.0
        return self.maximum_of_intersection(other) >= final_threshold

    def similarity(self, other: FuzzyValue | str, operator: SimilarityOperator | None = None) -> float:
        """Similarity with another value (possibility based unless an operator is given)."""
        from .similarity import default_similarity_operator
        other = self._coerce(other, "similarity")
        final_operator = operator if operator is not None else default_similarity_operator()
        return final_operator.similarity(self, other)

    # --- Queries ---

    def get_membership(self, x: float) -> float:
        if x < self._variable.min_uod or x > self._variable.max_uod:
            raise XValueOutsideUODError(x, self._variable.min_uod, self._variable.max_uod)
        return self._fuzzy_set.get_membership(x)

    def get_x_for_membership(self, membership: float, from_: str = "left") -> float:
        return self._fuzzy_set.get_x_for_membership(membership, from_, self._variable.min_uod, self._variable.max_uod)

    def get_alpha_cut(self, alpha: float, cut_type: str = WEAK) -> List[Interval]:
        return self._fuzzy_set.alpha_cut(alpha, cut_type, self._variable.min_uod, self._variable.max_uod)

    def get_support(self) -> List[Interval]:
        return self._fuzzy_set.alpha_cut(0.0, STRONG, self._variable.min_uod, self._variable.max_uod)

    def area(self) -> float:
        return self._fuzzy_set.area(self._variable.min_uod, self._variable.max_uod)

    # --- Defuzzification ---

    def defuzzify(self, method: str | None = None, **kwargs) -> float:
        """Defuzzifies the value over its variable's universe of discourse."""
        kwargs.setdefault("min_uod", self._variable.min_uod)
        kwargs.setdefault("max_uod", self._variable.max_uod)
        return self._fuzzy_set.defuzzify(method, **kwargs)

    def moment_defuzzify(self) -> float:
        return self.defuzzify("moment")

    def center_of_area_defuzzify(self) -> float:
        return self.defuzzify("center_of_area")

    def maximum_defuzzify(self, policy: str = "average") -> float:
        return self.defuzzify("maximum", policy=policy)

    def weighted_average_defuzzify(self) -> float:
        return self.defuzzify("weighted_average")
