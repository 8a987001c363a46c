# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

"""Rules backing the ``required`` and ``nullable`` chain markers.

The engine consults these directly instead of running them inside a chain.
"""

from typing import Any

from .._types import ValidationContext
from .base import Rule

__all__ = ("RequiredRule", "NullableRule")


class RequiredRule(Rule):

    error_template = "{field_name} is required"

    def is_valid(
        self, value: Any, context: ValidationContext | None = None
    ) -> bool:
        if value is None:
            return False
        if isinstance(value, str):
            return value.strip() != ""
        if isinstance(value, (list, dict, tuple, set)):
            return len(value) > 0
        return True


class NullableRule(Rule):
    """Decides whether a present value counts as intentionally empty."""

    error_template = "{field_name} must be empty"

    def is_valid(
        self, value: Any, context: ValidationContext | None = None
    ) -> bool:
        return value is None or (isinstance(value, str) and value == "")
