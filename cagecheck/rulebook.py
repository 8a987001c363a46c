# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

"""
RuleBook: name -> rule registry consulted by the validator.

Rule classes are registered by name and instantiated lazily with their
configuration; ad-hoc callables are registered as callback rules under the
same lookup path.
"""

import logging
from collections import OrderedDict
from collections.abc import Callable
from typing import Any, Dict, List, Optional

from ._errors import InvalidRuleError
from .rule.base import CallbackRule, Rule

__all__ = ("RuleBook",)

logger = logging.getLogger(__name__)


class RuleBook:
    """Registry of validation rules, resolved by name."""

    def __init__(
        self,
        rules: Optional[Dict[str, type[Rule]]] = None,
        config: Optional[Dict[str, Dict[str, Any]]] = None,
    ):
        """Initialize RuleBook with rules and configuration.

        Args:
            rules: Mapping of rule names to Rule classes
            config: Keyword arguments used to build each rule
        """
        self._rules = OrderedDict(rules or {})
        self._config = config or {}
        self._instances: Dict[str, Rule] = {}

    @classmethod
    def default(cls, **config: Dict[str, Any]) -> "RuleBook":
        """Build a RuleBook holding the default rule set.

        Args:
            **config: Per-rule keyword arguments, keyed by rule name
        """
        from .rule._default import default_rules

        return cls(rules=default_rules(), config=dict(config))

    @property
    def rules(self) -> Dict[str, type[Rule]]:
        """Get rule classes."""
        return dict(self._rules)

    @property
    def rule_names(self) -> List[str]:
        """Get ordered list of rule names."""
        return list(self._rules.keys())

    def get_rule(self, name: str) -> Rule:
        """Get or create a rule instance.

        Args:
            name: Rule name

        Returns:
            Rule instance

        Raises:
            InvalidRuleError: If no rule is registered under ``name``
        """
        if name not in self._rules:
            raise InvalidRuleError(
                f"Rule '{name}' is not registered",
                details={"rule": name},
            )

        if name not in self._instances:
            rule_class = self._rules[name]
            rule_config = self._config.get(name, {})
            logger.debug("Building rule '%s' from %s", name, rule_class.__name__)
            try:
                self._instances[name] = rule_class(**rule_config)
            except TypeError as e:
                raise InvalidRuleError(
                    f"Invalid configuration for rule '{name}'",
                    details={"rule": name, "config": sorted(rule_config)},
                    cause=e,
                ) from e

        return self._instances[name]

    def add_rule(
        self,
        name: str,
        rule_class: type[Rule],
        config: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Add a rule to the book, replacing any rule of the same name.

        Args:
            name: Rule name
            rule_class: Rule class to add
            config: Optional keyword arguments for the rule
        """
        if not (isinstance(rule_class, type) and issubclass(rule_class, Rule)):
            raise InvalidRuleError(
                f"Rule '{name}' must be a Rule subclass, got {rule_class!r}"
            )
        self._rules[name] = rule_class
        if config:
            self._config[name] = config
        else:
            self._config.pop(name, None)
        # Clear cached instance if exists
        self._instances.pop(name, None)

    def set_callback_rule(
        self,
        name: str,
        func: Callable[..., bool],
        error_template: Optional[str] = None,
    ) -> None:
        """Register an ad-hoc callable ``(value, context) -> bool``.

        Args:
            name: Rule name the callable is resolved by
            func: The predicate
            error_template: Optional template rendered on failure
        """
        config: Dict[str, Any] = {"func": func}
        if error_template is not None:
            config["error_template"] = error_template
        self.add_rule(name, CallbackRule, config)

    def remove_rule(self, name: str) -> None:
        """Remove a rule from the book.

        Args:
            name: Rule name to remove
        """
        self._rules.pop(name, None)
        self._config.pop(name, None)
        self._instances.pop(name, None)

    def update_config(self, name: str, config: Dict[str, Any]) -> None:
        """Update configuration for a rule.

        Args:
            name: Rule name
            config: New configuration
        """
        if name in self._rules:
            self._config[name] = config
            # Clear cached instance to force recreation with new config
            self._instances.pop(name, None)

    def __len__(self) -> int:
        """Number of rules in the book."""
        return len(self._rules)

    def __contains__(self, name: str) -> bool:
        """Check if a rule exists."""
        return name in self._rules

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"RuleBook({len(self._rules)} rules: {list(self._rules.keys())})"
        )
