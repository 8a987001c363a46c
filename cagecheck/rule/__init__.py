from .base import CallbackRule, RegexRule, Rule, TemplateRule, get_parameters
from .boolean import BooleanRule
from .filter import FILTER_FUNCTIONS, FilterRule
from .matches import MatchesRule
from .number import (
    DecimalRule,
    GreaterThanRule,
    IntegerRule,
    LessThanRule,
    NumericRule,
    RangeRule,
    to_number,
)
from .special import NullableRule, RequiredRule
from .string import (
    AlphaNumericDashRule,
    AlphaNumericRule,
    AlphaRule,
    EmailRule,
    ExactLengthRule,
    MaxLengthRule,
    MinLengthRule,
    PatternRule,
)

__all__ = [
    # Base classes
    "Rule",
    "CallbackRule",
    "TemplateRule",
    "RegexRule",
    "get_parameters",
    # Engine-level rules
    "RequiredRule",
    "NullableRule",
    "FilterRule",
    "FILTER_FUNCTIONS",
    "MatchesRule",
    # Specific rule implementations
    "AlphaRule",
    "AlphaNumericRule",
    "AlphaNumericDashRule",
    "EmailRule",
    "PatternRule",
    "MinLengthRule",
    "MaxLengthRule",
    "ExactLengthRule",
    "BooleanRule",
    "NumericRule",
    "IntegerRule",
    "DecimalRule",
    "RangeRule",
    "GreaterThanRule",
    "LessThanRule",
    "to_number",
]
