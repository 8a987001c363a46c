# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

import hashlib
import re
from collections.abc import Callable
from typing import Any

from .._errors import InvalidRuleError, RuleRequirementError
from .._types import ValidationContext
from .base import Rule, get_parameters

__all__ = ("FilterRule", "FILTER_FUNCTIONS")

_TAG_PATTERN = re.compile(r"<[^>]*>")


def _digest(algorithm: str) -> Callable[[str], str]:
    def _hash(value: str) -> str:
        return hashlib.new(algorithm, value.encode("utf-8")).hexdigest()

    _hash.__name__ = algorithm
    return _hash


FILTER_FUNCTIONS: dict[str, Callable[[Any], Any]] = {
    "trim": str.strip,
    "ltrim": str.lstrip,
    "rtrim": str.rstrip,
    "upper": str.upper,
    "lower": str.lower,
    "title": str.title,
    "capitalize": str.capitalize,
    "strip_tags": lambda s: _TAG_PATTERN.sub("", s),
    "md5": _digest("md5"),
    "sha1": _digest("sha1"),
    "int": int,
    "float": float,
}


class FilterRule(Rule):
    """Rewrites a string value through the transforms named in its parameters.

    ``filter[trim,lower]`` strips and then lower-cases the value. Transforms
    run left to right; a non-string input, or a transform rejecting its
    input, fails the rule and leaves the value untouched.
    """

    error_template = "{field_name} could not be filtered"

    def __init__(
        self,
        functions: dict[str, Callable[[Any], Any]] | None = None,
        error_template: str | None = None,
    ):
        super().__init__(error_template)
        self.functions = {**FILTER_FUNCTIONS, **(functions or {})}

    def _resolve(self, names: list[str]) -> list[Callable[[Any], Any]]:
        if not names:
            raise RuleRequirementError(
                "Filter rule requires at least one function parameter"
            )
        resolved = []
        for name in names:
            func = self.functions.get(name.strip())
            if func is None:
                raise InvalidRuleError(
                    f"Unknown filter function '{name}'",
                    details={"available": sorted(self.functions)},
                )
            resolved.append(func)
        return resolved

    def apply_filter(
        self, value: Any, context: ValidationContext | None = None
    ) -> tuple[Any, bool]:
        """Return ``(filtered_value, passed)``."""
        funcs = self._resolve(get_parameters(context))
        if not isinstance(value, str):
            return value, False

        filtered = value
        for func in funcs:
            if not isinstance(filtered, str):
                return value, False
            try:
                filtered = func(filtered)
            except ValueError:
                return value, False
        return filtered, True

    def is_valid(
        self, value: Any, context: ValidationContext | None = None
    ) -> bool:
        return self.apply_filter(value, context)[1]

    def get_closure(self) -> Callable[..., tuple[Any, bool]]:
        return self.apply_filter
