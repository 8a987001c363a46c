# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

import logging

from ._errors import (
    CageError,
    FailureError,
    InvalidRuleError,
    NotRunError,
    RuleRequirementError,
)
from ._protocol import RulesProvider
from ._types import FieldDefinition, RuleSpec, ValidationContext
from .config import ValidatorSettings, settings
from .formatter import ErrorFormatter
from .parser import parse_rule
from .rule import CallbackRule, FilterRule, Rule, TemplateRule
from .rulebook import RuleBook
from .validator import Validator
from .version import __version__

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

__all__ = (
    "__version__",
    "CageError",
    "CallbackRule",
    "ErrorFormatter",
    "FailureError",
    "FieldDefinition",
    "FilterRule",
    "InvalidRuleError",
    "NotRunError",
    "Rule",
    "RuleBook",
    "RuleRequirementError",
    "RuleSpec",
    "RulesProvider",
    "TemplateRule",
    "ValidationContext",
    "Validator",
    "ValidatorSettings",
    "logger",
    "parse_rule",
    "settings",
)
