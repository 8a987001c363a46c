# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from dataclasses import field as dataclass_field
from typing import TYPE_CHECKING, Any, Union

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from .validator import Validator

__all__ = (
    "RuleToken",
    "RuleSpec",
    "ValidationContext",
    "FieldDefinition",
)

RuleToken = Union[str, Callable[..., bool]]
"""A chain entry: ``name``, ``name[p1,p2]`` or an ad-hoc callable."""


@dataclass(slots=True, frozen=True)
class RuleSpec:
    """Canonical ``(name, parameters)`` form of a single rule token."""

    name: str
    parameters: tuple[str, ...] = ()


@dataclass(slots=True)
class ValidationContext:
    """Context handed to every rule invocation.

    ``rule_name`` and ``parameters`` describe the rule currently running,
    the remaining attributes are stable for the field being validated.
    """

    field: str
    validator: Validator | None = None
    field_name: str | None = None
    rule_name: str | None = None
    parameters: list[str] = dataclass_field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data = {"field": self.field, "validator": self.validator}
        if self.field_name is not None:
            data["field_name"] = self.field_name
        if self.rule_name is not None:
            data["rule_name"] = self.rule_name
            data["parameters"] = list(self.parameters)
        return data


class FieldDefinition(BaseModel):
    """A registered field: readable name plus its unfiltered rule chain."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    key: str
    field_name: str
    rules: list[Any] = Field(min_length=1)

    def with_rule(self, rule: RuleToken) -> FieldDefinition:
        return self.model_copy(update={"rules": [*self.rules, rule]})
