# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, ClassVar

from .._errors import InvalidRuleError, RuleRequirementError
from .._types import ValidationContext

__all__ = (
    "Rule",
    "CallbackRule",
    "TemplateRule",
    "RegexRule",
    "get_parameters",
)


def get_parameters(
    context: ValidationContext | None, count: int | None = None
) -> list[str]:
    """Return the rule parameters carried by ``context``.

    Args:
        context: The invocation context, may be None when a rule is called
            directly.
        count: When given, exactly this many parameters are required.

    Raises:
        RuleRequirementError: If ``count`` is given and does not match.
    """
    params = list(context.parameters) if context is not None else []
    if count is not None and len(params) != count:
        rule = context.rule_name if context is not None else None
        raise RuleRequirementError(
            f"Rule '{rule}' requires {count} parameter(s), {len(params)} given",
            details={"rule": rule, "parameters": params},
        )
    return params


class Rule(ABC):
    """A named check applied to a single field value.

    Subclasses implement ``is_valid`` as a pure predicate. The error template
    is rendered lazily with the formatting context built by
    ``convert_formatting_context``.
    """

    error_template: ClassVar[str] = "{field_name} is invalid"

    def __init__(self, error_template: str | None = None):
        self._error_template = error_template

    @abstractmethod
    def is_valid(
        self, value: Any, context: ValidationContext | None = None
    ) -> bool:
        """Return True when ``value`` satisfies the rule."""

    def get_error_template(self) -> str:
        """Raw, unsubstituted error template."""
        if self._error_template is not None:
            return self._error_template
        return self.error_template

    def convert_formatting_context(
        self, context: dict[str, Any]
    ) -> dict[str, Any]:
        """Enrich a context before it is used for rendering.

        The default implementation returns a shallow copy unchanged.
        """
        return dict(context)

    def get_closure(self) -> Callable[..., Any]:
        """Callable the engine invokes as ``closure(value, context)``.

        Predicate rules return ``is_valid``. A rule registered as ``filter``
        must return a callable producing ``(value, passed)`` instead.
        """
        return self.is_valid

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class CallbackRule(Rule):
    """Wraps an ad-hoc callable ``(value, context) -> bool``."""

    def __init__(
        self,
        func: Callable[..., bool],
        error_template: str | None = None,
    ):
        if not callable(func):
            raise InvalidRuleError(
                f"Callback rule requires a callable, got {type(func).__name__}"
            )
        super().__init__(error_template)
        self.func = func

    def is_valid(
        self, value: Any, context: ValidationContext | None = None
    ) -> bool:
        return bool(self.func(value, context))

    def __repr__(self) -> str:
        name = getattr(self.func, "__name__", repr(self.func))
        return f"CallbackRule({name})"


class TemplateRule(Rule):
    """Carries a caller-supplied template for failures added by hand.

    Such failures are decided outside the chain, so the rule never passes.
    """

    def __init__(self, error_template: str):
        super().__init__(error_template)

    def set_error_template(self, template: str) -> None:
        self._error_template = template

    def is_valid(
        self, value: Any, context: ValidationContext | None = None
    ) -> bool:
        return False


class RegexRule(Rule):
    """Passes string (or plain number) values matching ``pattern``."""

    pattern: ClassVar[re.Pattern[str]]

    def is_valid(
        self, value: Any, context: ValidationContext | None = None
    ) -> bool:
        if isinstance(value, bool):
            return False
        if isinstance(value, (int, float)):
            value = str(value)
        if not isinstance(value, str):
            return False
        return self.pattern.fullmatch(value) is not None
