__version__ = "0.1.0"

from fuzzySetPy import defuzzification
from .config import configure_parameters, ConfigurationContextManager
from .types import SetPoint, Interval
from .fuzzy_set import FuzzySet, WEAK, STRONG
from .shapes import (
    triangle, trapezoid, singleton, rectangle, gaussian, left_gaussian, right_gaussian,
    s_curve, z_curve, pi_curve, left_linear, right_linear, create_shape,
)
from .variable import FuzzyVariable, FuzzyValue
from .combine import (
    MinimumAntecedentCombine, ProductAntecedentCombine, CompensatoryAndAntecedentCombine,
)
from .similarity import SimilarityByArea, SimilarityByPossibility
from .rule import FuzzyRule, RuleBase, MamdaniMinMaxMinRuleExecutor, LarsenProductMaxMinRuleExecutor, compose

from .shapes import register_shape
from .modifiers import register_modifier
from .combine import register_combine_operator
from .similarity import register_similarity_operator
from .rule import register_rule_executor
