# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

import math
import re
from typing import Any

from .._errors import InvalidRuleError
from .._types import ValidationContext
from .base import RegexRule, Rule, get_parameters

__all__ = (
    "NumericRule",
    "IntegerRule",
    "DecimalRule",
    "RangeRule",
    "GreaterThanRule",
    "LessThanRule",
    "to_number",
)

_NUMERIC_PATTERN = re.compile(
    r"\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*"
)


def to_number(value: Any, *, allow_bool: bool = False) -> float | None:
    """Coerce a number or numeric string to float.

    Returns None when ``value`` is not numeric. Booleans count as 0/1 only
    when ``allow_bool`` is set.
    """
    if isinstance(value, bool):
        return float(value) if allow_bool else None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
        return number if math.isfinite(number) else None
    if isinstance(value, str) and _NUMERIC_PATTERN.fullmatch(value):
        number = float(value)
        return number if math.isfinite(number) else None
    return None


def _parse_bound(raw: str) -> float:
    bound = to_number(raw)
    if bound is None:
        raise InvalidRuleError(
            f"Rule parameter must be numeric, got '{raw}'",
            details={"parameter": raw},
        )
    return bound


class NumericRule(Rule):

    error_template = "{field_name} must be a number"

    def is_valid(
        self, value: Any, context: ValidationContext | None = None
    ) -> bool:
        return to_number(value) is not None


class IntegerRule(RegexRule):

    error_template = "{field_name} must be a whole number"
    pattern = re.compile(r"[+-]?\d+")

    def is_valid(
        self, value: Any, context: ValidationContext | None = None
    ) -> bool:
        if isinstance(value, float):
            return False
        return super().is_valid(value, context)


class DecimalRule(RegexRule):
    """Plain decimal notation; exponent forms are rejected."""

    error_template = "{field_name} must be a decimal number"
    pattern = re.compile(r"-?\d+(\.\d+)?")

    def is_valid(
        self, value: Any, context: ValidationContext | None = None
    ) -> bool:
        if isinstance(value, bool):
            value = int(value)
        return super().is_valid(value, context)


class RangeRule(Rule):
    """``range[min,max]``, inclusive on both ends."""

    error_template = "{field_name} must be between {min} and {max}"

    def is_valid(
        self, value: Any, context: ValidationContext | None = None
    ) -> bool:
        low, high = (_parse_bound(p) for p in get_parameters(context, count=2))
        number = to_number(value, allow_bool=True)
        if number is None:
            return False
        return low <= number <= high

    def convert_formatting_context(
        self, context: dict[str, Any]
    ) -> dict[str, Any]:
        context = dict(context)
        params = context.get("parameters") or []
        if len(params) == 2:
            context["min"], context["max"] = params
        return context


class _BoundRule(Rule):

    def _bound(self, context: ValidationContext | None) -> float:
        (raw,) = get_parameters(context, count=1)
        return _parse_bound(raw)

    def convert_formatting_context(
        self, context: dict[str, Any]
    ) -> dict[str, Any]:
        context = dict(context)
        params = context.get("parameters") or []
        if params:
            context["limit"] = params[0]
        return context


class GreaterThanRule(_BoundRule):

    error_template = "{field_name} must be greater than {limit}"

    def is_valid(
        self, value: Any, context: ValidationContext | None = None
    ) -> bool:
        limit = self._bound(context)
        number = to_number(value)
        return number is not None and number > limit


class LessThanRule(_BoundRule):

    error_template = "{field_name} must be less than {limit}"

    def is_valid(
        self, value: Any, context: ValidationContext | None = None
    ) -> bool:
        limit = self._bound(context)
        number = to_number(value)
        return number is not None and number < limit
