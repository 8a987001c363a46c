from enum import Enum

from .base import Rule
from .boolean import BooleanRule
from .filter import FilterRule
from .matches import MatchesRule
from .number import (
    DecimalRule,
    GreaterThanRule,
    IntegerRule,
    LessThanRule,
    NumericRule,
    RangeRule,
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


class DEFAULT_RULES(Enum):
    REQUIRED = RequiredRule
    NULLABLE = NullableRule
    FILTER = FilterRule
    MATCHES = MatchesRule
    ALPHA = AlphaRule
    ALPHA_NUMERIC = AlphaNumericRule
    ALPHA_NUMERIC_DASH = AlphaNumericDashRule
    EMAIL = EmailRule
    BOOLEAN = BooleanRule
    NUMERIC = NumericRule
    INTEGER = IntegerRule
    DECIMAL = DecimalRule
    RANGE = RangeRule
    GREATER_THAN = GreaterThanRule
    LESS_THAN = LessThanRule
    MIN_LENGTH = MinLengthRule
    MAX_LENGTH = MaxLengthRule
    EXACT_LENGTH = ExactLengthRule
    REGEX = PatternRule

    @property
    def rule_name(self) -> str:
        """Registry name, e.g. ``ALPHA_NUMERIC`` -> ``alphaNumeric``."""
        head, *rest = self.name.lower().split("_")
        return head + "".join(part.title() for part in rest)


def default_rules() -> dict[str, type[Rule]]:
    return {member.rule_name: member.value for member in DEFAULT_RULES}
