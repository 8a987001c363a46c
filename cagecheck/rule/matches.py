# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from typing import Any

from .._errors import RuleRequirementError
from .._types import ValidationContext
from .base import Rule, get_parameters

__all__ = ("MatchesRule",)


class MatchesRule(Rule):
    """Cross-field rule: ``matches[other_key]``.

    Compares the value with the raw cage value of ``other_key`` using strict
    equality (same type and equal). ``None`` never matches.
    """

    error_template = "{field_name} must match {matches_field_name}"

    def is_valid(
        self, value: Any, context: ValidationContext | None = None
    ) -> bool:
        (other_key,) = get_parameters(context, count=1)
        if context.validator is None:
            raise RuleRequirementError(
                "Matches rule requires a validator in its context"
            )

        other = context.validator.get_cage_data_value(other_key)
        if value is None or other is None:
            return False
        return type(value) is type(other) and value == other

    def convert_formatting_context(
        self, context: dict[str, Any]
    ) -> dict[str, Any]:
        context = dict(context)
        params = context.get("parameters") or []
        validator = context.get("validator")
        if params:
            other_name = validator.get_field_name(params[0]) if validator else ""
            context["matches_field_name"] = other_name or params[0]
        return context
