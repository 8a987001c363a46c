# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

"""Rule token parsing.

A chain is either ``"required|alpha|range[1,10]"`` or an explicit list of
tokens. A token is ``name``, ``name[p1,p2,...]`` or a callable.
"""

import logging
import uuid
from collections.abc import Sequence
from typing import Any

from ._errors import RuleRequirementError
from ._types import RuleSpec, RuleToken
from .config import settings
from ._protocol import RulesProvider

__all__ = (
    "RULE_REQUIRED",
    "RULE_NULLABLE",
    "RULE_FILTER",
    "SPECIAL_RULES",
    "normalize_rule_name",
    "split_rule_chain",
    "filter_special_rules",
    "parse_rule",
)

logger = logging.getLogger(__name__)

RULE_REQUIRED = "required"
RULE_NULLABLE = "nullable"
RULE_FILTER = "filter"  # rewrites the value as it moves through the chain

SPECIAL_RULES: tuple[str, ...] = (RULE_REQUIRED, RULE_NULLABLE)


def normalize_rule_name(name: str) -> str:
    """Lower-case the first character so lookups are case consistent."""
    return name[:1].lower() + name[1:]


def split_rule_chain(rules: str | Sequence[RuleToken]) -> list[RuleToken]:
    """Turn a ``|``-delimited string or a token sequence into a list.

    Empty segments of a string chain are dropped.
    """
    if isinstance(rules, str):
        return [token for token in rules.split("|") if token]
    return list(rules)


def filter_special_rules(rules: Sequence[RuleToken]) -> list[RuleToken]:
    """Drop the ``required``/``nullable`` markers, preserving order."""
    return [
        rule
        for rule in rules
        if not (isinstance(rule, str) and rule in SPECIAL_RULES)
    ]


def _callback_name() -> str:
    return normalize_rule_name(
        f"{settings.CALLBACK_RULE_PREFIX}_{uuid.uuid4().hex}"
    )


def parse_rule(token: Any, field: str, rulebook: RulesProvider) -> RuleSpec:
    """Parse one chain token into a RuleSpec.

    Callables are registered with ``rulebook`` under a generated name and
    referenced with no parameters.

    Args:
        token: The chain entry
        field: Key of the field being processed, used in error messages
        rulebook: Provider receiving callable registrations

    Raises:
        RuleRequirementError: If a parameter list is not terminated by ``]``
    """
    if callable(token):
        name = _callback_name()
        rulebook.set_callback_rule(name, token)
        logger.debug("Registered callable rule for '%s' as '%s'", field, name)
        return RuleSpec(name=name)

    if not isinstance(token, str):
        raise RuleRequirementError(
            f"Field '{field}' has a rule of unsupported type "
            f"{type(token).__name__}",
            details={"field": field, "rule": repr(token)},
        )

    name, bracket, arguments = token.partition("[")
    if not bracket:
        return RuleSpec(name=normalize_rule_name(token))

    if not token.endswith("]"):
        raise RuleRequirementError(
            f"Field '{field}' needs rule parameters encapsulated by []",
            details={"field": field, "rule": token},
        )

    # no escaping, a literal comma always separates parameters
    parameters = tuple(arguments[:-1].split(","))
    return RuleSpec(name=normalize_rule_name(name), parameters=parameters)
