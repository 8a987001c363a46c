# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from typing import Any

from .._types import ValidationContext
from .base import Rule

__all__ = ("BooleanRule",)

_BOOLEAN_STRINGS = frozenset({"true", "false", "1", "0"})


class BooleanRule(Rule):
    """Accepts real booleans, 0/1 and their common string forms."""

    error_template = "{field_name} must be true or false"

    def is_valid(
        self, value: Any, context: ValidationContext | None = None
    ) -> bool:
        if isinstance(value, bool):
            return True
        if isinstance(value, int):
            return value in (0, 1)
        if isinstance(value, str):
            return value.strip().lower() in _BOOLEAN_STRINGS
        return False
