# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

import re
from collections.abc import Mapping
from typing import Any

from .rule.base import Rule

__all__ = ("ErrorFormatter", "render_template")

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def _stringify(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return str(value)


def render_template(template: str, context: Mapping[str, Any]) -> str:
    """Substitute ``{name}`` placeholders found in ``context``.

    Placeholders without a matching key are left as written.
    """

    def _replace(match: re.Match[str]) -> str:
        key = match.group(1)
        if key not in context:
            return match.group(0)
        return _stringify(context[key])

    return _PLACEHOLDER.sub(_replace, template)


class ErrorFormatter:
    """Binds a failed rule to the context it failed with.

    Nothing is rendered until ``render`` is called, so template or context
    changes made after the failure still apply.
    """

    __slots__ = ("rule", "context")

    def __init__(self, rule: Rule, context: dict[str, Any]):
        self.rule = rule
        self.context = context

    def get_rule(self) -> Rule:
        return self.rule

    def get_context(self) -> dict[str, Any]:
        return self.context

    def render(self, context: Mapping[str, Any] | None = None) -> str:
        """Render the rule's template.

        Args:
            context: Extra values overriding the stored context for this
                render only.
        """
        merged = {**self.context, **(context or {})}
        return render_template(self.rule.get_error_template(), merged)

    def __repr__(self) -> str:
        return f"ErrorFormatter(rule={self.rule!r})"
