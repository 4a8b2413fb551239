from __future__ import annotations
import threading
from typing import Callable, Dict, Hashable, Iterable, List, Sequence, Tuple

from .variable import FuzzyValue, FuzzyVariable
from .combine import MinimumAntecedentCombine, combine_cache_key
from .types import CombineOperator, RuleExecutor
from .exceptions import IncompatibleRuleInputsError


RULE_EXECUTOR_REGISTRY: Dict[str, Callable[[], RuleExecutor]] = {}

def register_rule_executor(name: str):
    """A decorator to register a new rule executor (implication strategy)."""
    def decorator(factory: Callable[[], RuleExecutor]) -> Callable[[], RuleExecutor]:
        if name in RULE_EXECUTOR_REGISTRY:
            print(f"Warning: Overwriting rule executor '{name}'")
        RULE_EXECUTOR_REGISTRY[name] = factory
        return factory
    return decorator


def get_rule_executor(name: str) -> RuleExecutor:
    factory = RULE_EXECUTOR_REGISTRY.get(name)
    if factory is None:
        raise ValueError(f"Rule executor '{name}' is not registered. Available: {list(RULE_EXECUTOR_REGISTRY.keys())}")
    return factory()


# ==============================================================================
# 1. RULE EXECUTORS
# ==============================================================================

@register_rule_executor("mamdani")
class MamdaniMinMaxMinRuleExecutor:
    """
    Mamdani min implication with max-min composition.

    The match value of an antecedent is the peak of its intersection with the
    input; each conclusion is clipped at the firing strength.
    """

    def match(self, antecedent: FuzzyValue, given: FuzzyValue) -> float:
        return antecedent.maximum_of_intersection(given)

    def implicate(self, conclusion: FuzzyValue, firing_strength: float) -> FuzzyValue:
        return conclusion.horizontal_intersection(firing_strength)

    def cache_key(self) -> Hashable:
        return ("mamdani",)


@register_rule_executor("larsen")
class LarsenProductMaxMinRuleExecutor:
    """
    Larsen product implication with max-min composition.

    Same match values as Mamdani, but each conclusion is scaled so that its
    peak equals the firing strength instead of being clipped.
    """

    def match(self, antecedent: FuzzyValue, given: FuzzyValue) -> float:
        return antecedent.maximum_of_intersection(given)

    def implicate(self, conclusion: FuzzyValue, firing_strength: float) -> FuzzyValue:
        return conclusion.fuzzy_scale(firing_strength).with_expression(conclusion.linguistic_expression)

    def cache_key(self) -> Hashable:
        return ("larsen",)


# ==============================================================================
# 2. FUZZY RULE
# ==============================================================================

class FuzzyRule:
    """
    A rule ``if A1 and A2 ... then C1, C2 ...`` over fuzzy values.

    Firing a rule with inputs (one per antecedent, on the same variable)
    computes a match value per antecedent, combines them into a firing
    strength and implicates each conclusion with it.

    The firing strength is cached against a structural signature of the
    antecedents, inputs, conclusions and strategies. A later firing with an
    equal signature skips the match and combine steps and only re-runs the
    implication. The cache is read and written under a per-rule lock, so a
    rule may be shared between threads.
    """

    def __init__(self, executor: RuleExecutor | None = None,
                 combine: CombineOperator | None = None, name: str = ""):
        self.name = name
        self.executor: RuleExecutor = executor if executor is not None else MamdaniMinMaxMinRuleExecutor()
        self.combine_operator: CombineOperator = combine if combine is not None else MinimumAntecedentCombine()
        self._antecedents: List[FuzzyValue] = []
        self._conclusions: List[FuzzyValue] = []
        self._inputs: List[FuzzyValue] = []
        self._lock = threading.Lock()
        self._cached_signature: Tuple | None = None
        self._cached_firing_strength: float | None = None

    def __repr__(self) -> str:
        ifs = " and ".join(f"{a.variable.name} is {a.linguistic_expression}" for a in self._antecedents)
        thens = ", ".join(f"{c.variable.name} is {c.linguistic_expression}" for c in self._conclusions)
        label = f"{self.name}: " if self.name else ""
        return f"FuzzyRule({label}if {ifs or 'true'} then {thens})"

    # --- Antecedents, conclusions and inputs ---

    @property
    def antecedents(self) -> List[FuzzyValue]:
        return list(self._antecedents)

    @property
    def conclusions(self) -> List[FuzzyValue]:
        return list(self._conclusions)

    @property
    def inputs(self) -> List[FuzzyValue]:
        return list(self._inputs)

    def add_antecedent(self, value: FuzzyValue) -> FuzzyRule:
        self._antecedents.append(value)
        return self

    def insert_antecedent(self, index: int, value: FuzzyValue) -> FuzzyRule:
        self._antecedents.insert(index, value)
        return self

    def remove_antecedent(self, index: int) -> FuzzyValue:
        return self._antecedents.pop(index)

    def add_conclusion(self, value: FuzzyValue) -> FuzzyRule:
        self._conclusions.append(value)
        return self

    def insert_conclusion(self, index: int, value: FuzzyValue) -> FuzzyRule:
        self._conclusions.insert(index, value)
        return self

    def remove_conclusion(self, index: int) -> FuzzyValue:
        return self._conclusions.pop(index)

    def add_input(self, value: FuzzyValue) -> FuzzyRule:
        self._inputs.append(value)
        return self

    def insert_input(self, index: int, value: FuzzyValue) -> FuzzyRule:
        self._inputs.insert(index, value)
        return self

    def remove_input(self, index: int) -> FuzzyValue:
        return self._inputs.pop(index)

    def set_inputs(self, values: Iterable[FuzzyValue]) -> FuzzyRule:
        self._inputs = list(values)
        return self

    def clear_antecedents(self):
        self._antecedents = []

    def clear_conclusions(self):
        self._conclusions = []

    def clear_inputs(self):
        self._inputs = []

    @property
    def firing_strength(self) -> float | None:
        """The firing strength of the last successful execution (None before the first)."""
        return self._cached_firing_strength

    # --- Firing ---

    def check_antecedents_and_inputs(self, inputs: Sequence[FuzzyValue]):
        """
        Raises IncompatibleRuleInputsError unless there is exactly one input per
        antecedent and each input is on the same variable as its antecedent.
        """
        if len(inputs) != len(self._antecedents):
            raise IncompatibleRuleInputsError(
                f"Rule has {len(self._antecedents)} antecedents but {len(inputs)} inputs were given",
                expected=len(self._antecedents), given=len(inputs))
        for position, (antecedent, given) in enumerate(zip(self._antecedents, inputs)):
            if antecedent.variable is not given.variable:
                raise IncompatibleRuleInputsError(
                    f"Input {position} is on variable '{given.variable.name}' but the antecedent "
                    f"is on '{antecedent.variable.name}'",
                    expected=antecedent.variable.name, given=given.variable.name)

    @staticmethod
    def _values_signature(values: Sequence[FuzzyValue]) -> Tuple:
        return tuple((v.variable, v.fuzzy_set.signature()) for v in values)

    def _signature(self, inputs: Sequence[FuzzyValue]) -> Tuple:
        executor_key = getattr(self.executor, "cache_key", None)
        return (
            self._values_signature(self._antecedents),
            self._values_signature(inputs),
            self._values_signature(self._conclusions),
            combine_cache_key(self.combine_operator),
            executor_key() if executor_key is not None else (type(self.executor).__name__, id(self.executor)),
        )

    def _compute_firing_strength(self, inputs: Sequence[FuzzyValue]) -> float:
        matches = [self.executor.match(antecedent, given)
                   for antecedent, given in zip(self._antecedents, inputs)]
        if not matches:
            return 1.0
        if len(matches) == 1:
            return matches[0]
        return self.combine_operator.combine(matches)

    def execute(self, inputs: Iterable[FuzzyValue] | None = None) -> List[FuzzyValue]:
        """
        Fires the rule and returns the implicated conclusions.

        Args:
            inputs: One input per antecedent. When given they replace the
                    rule's stored inputs (only if the firing succeeds).

        Raises:
            IncompatibleRuleInputsError: If the inputs do not match the antecedents.
                                         The rule's state is left untouched.
        """
        given = list(inputs) if inputs is not None else list(self._inputs)
        with self._lock:
            self.check_antecedents_and_inputs(given)
            signature = self._signature(given)
            if signature == self._cached_signature:
                strength = self._cached_firing_strength
            else:
                strength = self._compute_firing_strength(given)
            outputs = [self.executor.implicate(conclusion, strength) for conclusion in self._conclusions]
            self._cached_signature = signature
            self._cached_firing_strength = strength
            self._inputs = given
        return outputs

    def test_rule_matching(self, threshold: float | None = None,
                           inputs: Iterable[FuzzyValue] | None = None) -> bool:
        """Checks whether every input fuzzy-matches its antecedent at the threshold."""
        given = list(inputs) if inputs is not None else list(self._inputs)
        self.check_antecedents_and_inputs(given)
        return all(antecedent.fuzzy_match(value, threshold)
                   for antecedent, value in zip(self._antecedents, given))


# ==============================================================================
# 3. COMPOSITION AND RULE BASES
# ==============================================================================

def compose(values: Iterable[FuzzyValue]) -> List[FuzzyValue]:
    """
    Max-min composition: unions all values that share a variable.

    Returns one value per variable, in order of first appearance.
    """
    composed: Dict[FuzzyVariable, FuzzyValue] = {}
    for value in values:
        current = composed.get(value.variable)
        composed[value.variable] = value if current is None else current.fuzzy_union(value)
    return list(composed.values())


class RuleBase:
    """
    An ordered collection of rules fired together.

    Inputs are routed to each rule by variable, all rules are fired, and the
    outputs for each variable are composed with the pointwise maximum.
    """

    def __init__(self, rules: Iterable[FuzzyRule] | None = None):
        self.rules: List[FuzzyRule] = list(rules) if rules is not None else []

    def add_rule(self, rule: FuzzyRule) -> RuleBase:
        self.rules.append(rule)
        return self

    def __len__(self) -> int:
        return len(self.rules)

    def fire(self, inputs: Iterable[FuzzyValue]) -> Dict[str, FuzzyValue]:
        """
        Fires every rule and composes the outputs.

        Returns:
            A dict mapping each output variable's name to its composed value.
        """
        by_variable: Dict[FuzzyVariable, FuzzyValue] = {}
        for value in inputs:
            if value.variable in by_variable:
                raise ValueError(f"More than one input given for variable '{value.variable.name}'")
            by_variable[value.variable] = value

        outputs: List[FuzzyValue] = []
        for rule in self.rules:
            rule_inputs = []
            for antecedent in rule.antecedents:
                given = by_variable.get(antecedent.variable)
                if given is None:
                    raise IncompatibleRuleInputsError(
                        f"No input given for variable '{antecedent.variable.name}' used by {rule!r}",
                        expected=antecedent.variable.name, given=None)
                rule_inputs.append(given)
            outputs.extend(rule.execute(rule_inputs))
        return {value.variable.name: value for value in compose(outputs)}

    def defuzzify(self, inputs: Iterable[FuzzyValue], method: str | None = None, **kwargs) -> Dict[str, float]:
        """Fires the rule base and defuzzifies each composed output."""
        return {name: value.defuzzify(method, **kwargs) for name, value in self.fire(inputs).items()}
