# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

import re
from abc import abstractmethod
from typing import Any

from .._errors import InvalidRuleError
from .._types import ValidationContext
from .base import RegexRule, Rule, get_parameters

__all__ = (
    "AlphaRule",
    "AlphaNumericRule",
    "AlphaNumericDashRule",
    "EmailRule",
    "PatternRule",
    "MinLengthRule",
    "MaxLengthRule",
    "ExactLengthRule",
)


class AlphaRule(Rule):
    """Letters only, any script."""

    error_template = "{field_name} must contain only letters"

    def is_valid(
        self, value: Any, context: ValidationContext | None = None
    ) -> bool:
        return isinstance(value, str) and value.isalpha()


class AlphaNumericRule(RegexRule):

    error_template = "{field_name} must contain only letters and numbers"
    pattern = re.compile(r"[^\W_]+")


class AlphaNumericDashRule(RegexRule):

    error_template = (
        "{field_name} must contain only letters, numbers, underscores and dashes"
    )
    pattern = re.compile(r"[\w-]+")


class EmailRule(RegexRule):

    error_template = "{field_name} must be a valid email address"
    pattern = re.compile(r"[A-Za-z0-9_.+$'-]+@[A-Za-z0-9_.-]+\.[A-Za-z0-9_-]+")


class PatternRule(Rule):
    """``regex[pattern]``: the string value must fully match ``pattern``.

    Commas cannot appear in the pattern, the parameter list is split on them.
    """

    error_template = "{field_name} is not in the correct format"

    def is_valid(
        self, value: Any, context: ValidationContext | None = None
    ) -> bool:
        (source,) = get_parameters(context, count=1)
        try:
            pattern = re.compile(source)
        except re.error as e:
            raise InvalidRuleError(
                f"Invalid regex parameter '{source}'", cause=e
            ) from e
        return isinstance(value, str) and pattern.fullmatch(value) is not None


class _LengthRule(Rule):

    def _length(self, context: ValidationContext | None) -> int:
        (raw,) = get_parameters(context, count=1)
        try:
            length = int(raw)
        except (TypeError, ValueError) as e:
            raise InvalidRuleError(
                f"Length parameter must be an integer, got '{raw}'", cause=e
            ) from e
        if length < 0:
            raise InvalidRuleError(
                f"Length parameter must not be negative, got {length}"
            )
        return length

    @abstractmethod
    def _compare(self, actual: int, expected: int) -> bool:
        """Compare the value length with the configured length."""

    def is_valid(
        self, value: Any, context: ValidationContext | None = None
    ) -> bool:
        expected = self._length(context)
        if isinstance(value, bool):
            return False
        if isinstance(value, (int, float)):
            value = str(value)
        if not isinstance(value, str):
            return False
        return self._compare(len(value), expected)

    def convert_formatting_context(
        self, context: dict[str, Any]
    ) -> dict[str, Any]:
        context = dict(context)
        params = context.get("parameters") or []
        if params:
            context["length"] = params[0]
        return context


class MinLengthRule(_LengthRule):

    error_template = "{field_name} must be at least {length} characters long"

    def _compare(self, actual: int, expected: int) -> bool:
        return actual >= expected


class MaxLengthRule(_LengthRule):

    error_template = "{field_name} must be at most {length} characters long"

    def _compare(self, actual: int, expected: int) -> bool:
        return actual <= expected


class ExactLengthRule(_LengthRule):

    error_template = "{field_name} must be exactly {length} characters long"

    def _compare(self, actual: int, expected: int) -> bool:
        return actual == expected
