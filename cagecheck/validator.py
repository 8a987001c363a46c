# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

"""
Validator: registers per-field rule chains and runs them over cage data.

Each registered field is processed independently:

1. presence - a key missing from the cage data fails only when the field is
   ``required``, and nothing else runs for it;
2. nullability - a ``nullable`` field whose value the ``nullable`` rule
   accepts is passed through untouched;
3. chain - the remaining rules run in order, ``filter`` rules may rewrite the
   value, and the first failing rule is recorded.
"""

import logging
from collections.abc import Callable, Hashable, Mapping, Sequence
from typing import Any

import pydantic
from typing_extensions import Self

from ._errors import (
    FailureError,
    InvalidRuleError,
    NotRunError,
    RuleRequirementError,
)
from ._protocol import RulesProvider
from ._sentinel import Undefined, is_undefined
from ._types import FieldDefinition, RuleSpec, RuleToken, ValidationContext
from .config import ValidatorSettings
from .config import settings as default_settings
from .formatter import ErrorFormatter
from .parser import (
    RULE_FILTER,
    RULE_NULLABLE,
    RULE_REQUIRED,
    SPECIAL_RULES,
    filter_special_rules,
    parse_rule,
    split_rule_chain,
)
from .rule.base import Rule, TemplateRule

__all__ = ("Validator",)

logger = logging.getLogger(__name__)


class Validator:
    """Validation engine bound to one cage data snapshot.

    Examples:
        validator = Validator(RuleBook.default(), {"age": "11"})
        validator.set_rule("age", "Age", "required|numeric|range[1,10]")
        validator.run()                        # False
        validator.get_field_error_message("age")
        # 'Age must be between 1 and 10'

    An instance is meant to be configured and run on a single thread.
    """

    def __init__(
        self,
        rulebook: RulesProvider,
        cage_data: Mapping[str, Any] | None = None,
        *,
        settings: ValidatorSettings | None = None,
    ):
        """Initialize the validator.

        Args:
            rulebook: Provider resolving rule names to rules
            cage_data: Key/value pairs to validate
            settings: Overrides for the package defaults
        """
        if not isinstance(rulebook, RulesProvider):
            raise TypeError(
                "rulebook must provide get_rule() and set_callback_rule(), "
                f"got {type(rulebook).__name__}"
            )
        self._rulebook = rulebook
        self._settings = settings or default_settings
        self._delimiter = self._settings.MESSAGE_DELIMITER

        self._cage_data: dict[str, Any] = {}
        self._fields: dict[str, FieldDefinition] = {}
        self._valid_data: dict[str, Any] = {}
        self._errors: dict[str, ErrorFormatter] = {}
        self._callable_specs: dict[Callable[..., bool], RuleSpec] = {}
        self._run_complete = False

        if cage_data is not None:
            self.set_cage_data(cage_data)

    # ------------------------------------------------------------------
    # cage data
    # ------------------------------------------------------------------

    def set_cage_data(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Replace the data to validate with a copy of ``data``."""
        if not isinstance(data, Mapping):
            raise TypeError(
                f"Cage data must be a mapping, got {type(data).__name__}"
            )
        self._cage_data = dict(data)
        return self._cage_data

    def get_cage_data(self) -> dict[str, Any]:
        return dict(self._cage_data)

    def get_cage_data_value(self, key: str, default: Any = None) -> Any:
        """Unvalidated value for ``key``, ``default`` when absent."""
        return self._cage_data.get(key, default)

    # ------------------------------------------------------------------
    # field registry
    # ------------------------------------------------------------------

    def set_rule(
        self,
        key: str,
        field_name: str,
        rules: str | Sequence[RuleToken],
    ) -> Self:
        """Set the rule chain for a field, replacing any previous one.

        Args:
            key: Cage data key the chain applies to
            field_name: Readable name used in error messages
            rules: ``|``-delimited string or ordered sequence of tokens

        Raises:
            RuleRequirementError: If the chain is empty or holds only
                ``required``/``nullable``
            InvalidRuleError: If the input has the wrong shape
        """
        if not isinstance(rules, (str, Sequence)):
            raise InvalidRuleError(
                f"Rules for '{key}' must be a string or a sequence, "
                f"got {type(rules).__name__}"
            )
        chain = split_rule_chain(rules)
        if not chain:
            raise RuleRequirementError(
                f"No validation rules specified for '{key}'",
                details={"field": key},
            )

        # special markers alone do not make a ruleset
        if not filter_special_rules(chain):
            raise RuleRequirementError(
                f'A valid ruleset for "{key}" must be more than just special '
                f'rules ("{", ".join(SPECIAL_RULES)}")',
                details={"field": key, "rules": chain},
            )

        try:
            definition = FieldDefinition(
                key=key, field_name=field_name, rules=chain
            )
        except pydantic.ValidationError as e:
            raise InvalidRuleError(
                f"Invalid registration for '{key}'", cause=e
            ) from e

        self._fields[key] = definition
        logger.debug("Set %d rule(s) for '%s'", len(chain), key)
        return self

    def set_rules(self, rule_groups: Sequence[Sequence[Any]]) -> Self:
        """Register several fields from ``(key, field_name, rules)`` groups.

        Raises:
            InvalidRuleError: If a group does not hold exactly three items
        """
        for group in rule_groups:
            if isinstance(group, str) or not isinstance(group, Sequence):
                raise InvalidRuleError(
                    f"Rule group must be a (key, field_name, rules) sequence, "
                    f"got {type(group).__name__}"
                )
            if len(group) != 3:
                raise InvalidRuleError(
                    f"3 parameters required for set_rule, {len(group)} given"
                )
            key, field_name, rules = group
            self.set_rule(key, field_name, rules)
        return self

    def append_rule(self, key: str, rule: RuleToken) -> Self:
        """Append one token to an existing chain.

        Raises:
            InvalidRuleError: If ``key`` has not been set
        """
        if key not in self._fields:
            raise InvalidRuleError(
                f"Key {key} not yet set, cannot be appended",
                details={"field": key},
            )
        self._fields[key] = self._fields[key].with_rule(rule)
        return self

    def get_field_name(self, key: str) -> str:
        definition = self._fields.get(key)
        return definition.field_name if definition else ""

    def get_fields(self) -> list[str]:
        return list(self._fields)

    def get_field_rules(self, key: str) -> list[RuleToken]:
        if key not in self._fields:
            raise InvalidRuleError(
                f"Missing rules for '{key}'", details={"field": key}
            )
        return list(self._fields[key].rules)

    def get_all_field_rules(self) -> dict[str, list[RuleToken]]:
        return {key: list(d.rules) for key, d in self._fields.items()}

    def is_field_required(self, key: str) -> bool:
        return RULE_REQUIRED in self.get_field_rules(key)

    def is_field_nullable(self, key: str) -> bool:
        return RULE_NULLABLE in self.get_field_rules(key)

    @property
    def rulebook(self) -> RulesProvider:
        return self._rulebook

    # ------------------------------------------------------------------
    # execution
    # ------------------------------------------------------------------

    def run(self) -> bool:
        """Validate every registered field against the cage data.

        Validated data and errors are recomputed from scratch on each call.
        A run that raises leaves the previous results untouched.

        Returns:
            True when no field failed

        Raises:
            NotRunError: If no rules have been set
            RuleRequirementError: If a rule is malformed or lacks parameters
            InvalidRuleError: If a rule is unknown or its parameters invalid
        """
        if not self._fields:
            raise NotRunError("No validation rules to execute")

        # results replace the previous run only once every field is processed
        valid_data: dict[str, Any] = {}
        errors: dict[str, ErrorFormatter] = {}
        for key, definition in self._fields.items():
            self._validate_field(key, definition, valid_data, errors)

        self._valid_data = valid_data
        self._errors = errors
        self._run_complete = True
        logger.debug(
            "Validation run complete: %d passed, %d failed",
            len(self._valid_data),
            len(self._errors),
        )
        return not self._errors

    def run_strict(self) -> bool:
        """Same as ``run`` but raises on failure.

        Raises:
            FailureError: Carrying every rendered message and this validator
        """
        valid = self.run()
        if not valid:
            raise FailureError.from_validator(self)
        return valid

    def _validate_field(
        self,
        key: str,
        definition: FieldDefinition,
        valid_data: dict[str, Any],
        errors: dict[str, ErrorFormatter],
    ) -> None:
        raw = self._cage_data.get(key, Undefined)
        context = ValidationContext(field=key, validator=self)

        # missing data stops processing, only `required` can fail it
        if is_undefined(raw):
            if self.is_field_required(key):
                required = self._rulebook.get_rule(RULE_REQUIRED)
                errors[key] = self._build_error(key, required, context)
            return

        if self.is_field_nullable(key):
            nullable = self._rulebook.get_rule(RULE_NULLABLE)
            if nullable.is_valid(raw, context):
                valid_data[key] = raw
                return

        value = raw
        for token in filter_special_rules(definition.rules):
            spec = self._parse(token, key)
            rule = self._rulebook.get_rule(spec.name)
            context = ValidationContext(
                field=key,
                validator=self,
                field_name=definition.field_name,
                rule_name=spec.name,
                parameters=list(spec.parameters),
            )

            if spec.name == RULE_FILTER:
                value, passed = self._apply_filter(rule, value, context)
            else:
                passed = rule.get_closure()(value, context)

            if not passed:
                logger.debug("Field '%s' failed rule '%s'", key, spec.name)
                errors[key] = self._build_error(key, rule, context)
                return

        valid_data[key] = value

    def _apply_filter(
        self, rule: Rule, value: Any, context: ValidationContext
    ) -> tuple[Any, bool]:
        result = rule.get_closure()(value, context)
        if not (isinstance(result, tuple) and len(result) == 2):
            raise InvalidRuleError(
                f"Rule registered as '{RULE_FILTER}' must return "
                f"(value, passed), got {result!r}",
                details={"rule": repr(rule)},
            )
        return result

    def _parse(self, token: RuleToken, key: str) -> RuleSpec:
        # a callable keeps its synthetic name across runs
        if callable(token) and isinstance(token, Hashable):
            if token not in self._callable_specs:
                self._callable_specs[token] = parse_rule(
                    token, key, self._rulebook
                )
            return self._callable_specs[token]
        return parse_rule(token, key, self._rulebook)

    # ------------------------------------------------------------------
    # errors
    # ------------------------------------------------------------------

    def _build_error(
        self, key: str, rule: Rule, context: ValidationContext
    ) -> ErrorFormatter:
        data = context.to_dict()
        data.setdefault("field_name", self.get_field_name(key))
        return ErrorFormatter(rule, rule.convert_formatting_context(data))

    def _add_error(
        self, key: str, rule: Rule, context: ValidationContext
    ) -> None:
        # a failed field must never expose validated data
        self._valid_data.pop(key, None)
        self._errors[key] = self._build_error(key, rule, context)

    def add_field_failure(self, key: str, message: str) -> None:
        """Fail a registered field with a custom message template.

        Raises:
            InvalidRuleError: If ``key`` has not been set
        """
        self.get_field_rules(key)
        rule = TemplateRule(message)
        self._add_error(key, rule, ValidationContext(field=key, validator=self))

    def get_failed_fields(self) -> list[str]:
        return list(self._errors)

    def is_field_failed(self, key: str) -> bool:
        return key in self._errors

    def get_field_error_message(
        self, key: str, context: Mapping[str, Any] | None = None
    ) -> str:
        """Rendered message for ``key``, empty when it did not fail."""
        error = self._errors.get(key)
        return error.render(context) if error else ""

    def get_field_error_template(self, key: str) -> str:
        error = self._errors.get(key)
        return error.get_rule().get_error_template() if error else ""

    def get_all_field_error_templates(self) -> dict[str, str]:
        return {key: self.get_field_error_template(key) for key in self._errors}

    def get_field_error_context(self, key: str) -> dict[str, Any] | None:
        error = self._errors.get(key)
        return error.get_context() if error else None

    def get_all_field_error_messages(self) -> dict[str, str]:
        return {key: self.get_field_error_message(key) for key in self._errors}

    def get_all_field_error_messages_string(
        self, delimiter: str | None = None
    ) -> str:
        if delimiter is None:
            delimiter = self._delimiter
        return delimiter.join(self.get_all_field_error_messages().values())

    def set_message_delimiter(self, delimiter: str) -> Self:
        self._delimiter = delimiter
        return self

    def get_message_delimiter(self) -> str:
        return self._delimiter

    # ------------------------------------------------------------------
    # validated data
    # ------------------------------------------------------------------

    @property
    def is_run_complete(self) -> bool:
        return self._run_complete

    def get_validated_data(self) -> dict[str, Any]:
        return dict(self._valid_data)

    def get_validated_fields(self) -> list[str]:
        return list(self._valid_data)

    def get_validated_field(self, key: str) -> Any:
        """Validated value for ``key``, None when the field did not pass.

        Raises:
            InvalidRuleError: If ``key`` has not been set
            NotRunError: If ``run`` has not been called yet
        """
        if key not in self._fields:
            raise InvalidRuleError(
                f"Call set_rule() for '{key}' first", details={"field": key}
            )
        if not self._run_complete:
            raise NotRunError(
                "Validator must be run() before retrieving values"
            )
        return self._valid_data.get(key)

    def __repr__(self) -> str:
        return (
            f"Validator(fields={len(self._fields)}, "
            f"run_complete={self._run_complete}, rulebook={self._rulebook!r})"
        )
