# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for numeric rules."""

import pytest

from cagecheck import InvalidRuleError, RuleRequirementError
from cagecheck.rule import (
    BooleanRule,
    DecimalRule,
    GreaterThanRule,
    IntegerRule,
    LessThanRule,
    NumericRule,
    RangeRule,
    to_number,
)


class TestToNumber:
    """Tests for to_number coercion."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (1, 1.0),
            ("1.5", 1.5),
            (" 2 ", 2.0),
            ("1e3", 1000.0),
            (".5", 0.5),
            ("abc", None),
            ("", None),
            (None, None),
            ([], None),
            (float("inf"), None),
            (10**400, None),
            (-(10**400), None),
            ("1e400", None),
            (True, None),
        ],
    )
    def test_coercion(self, value, expected):
        assert to_number(value) == expected

    def test_allow_bool(self):
        assert to_number(True, allow_bool=True) == 1.0
        assert to_number(False, allow_bool=True) == 0.0


class TestDecimalRule:
    """Tests for DecimalRule."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("abc", False),
            ("ábč", False),
            ("ábčabc123", False),
            ("", False),
            (0, True),
            ("0", True),
            ("10", True),
            (True, True),
            ("true", False),
            (int(False), True),
            ("false", False),
            (123, True),
            (456, True),
            (123.123, True),
            (123.1, True),
            (123.0, True),
            (123.0e26, False),
            (object(), False),
            (lambda: None, False),
        ],
    )
    def test_is_valid(self, value, expected):
        assert DecimalRule().is_valid(value) is expected


class TestNumericAndInteger:
    """Tests for NumericRule and IntegerRule."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("12", True),
            ("-1.5", True),
            ("1e3", True),
            (1.5, True),
            ("abc", False),
            (True, False),
            (None, False),
            (float("nan"), False),
        ],
    )
    def test_numeric(self, value, expected):
        assert NumericRule().is_valid(value) is expected

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("12", True),
            ("-3", True),
            (12, True),
            ("1.5", False),
            (12.0, False),
            (True, False),
            ("", False),
        ],
    )
    def test_integer(self, value, expected):
        assert IntegerRule().is_valid(value) is expected


class TestRangeRule:
    """Tests for RangeRule."""

    @pytest.mark.parametrize(
        "value, low, high, expected",
        [
            (1, "1", "10", True),
            ("1", "1", "10", True),
            (10, "1", "10", True),
            ("10", "1", "10", True),
            (5, "1", "10", True),
            ("5", "1", "10", True),
            (0, "1", "10", False),
            ("0", "1", "10", False),
            (11, "1", "10", False),
            ("11", "1", "10", False),
            (-1, "1", "10", False),
            ("-1", "1", "10", False),
            (1.1, "1", "10", True),
            ("1.1", "1", "10", True),
            (9.9, "1", "10", True),
            ("9.9", "1", "10", True),
            ("five", "1", "10", False),
            ([], "1", "10", False),
            (False, "1", "10", False),
            ("false", "1", "10", False),
            (True, "1", "10", True),
            ("true", "1", "10", False),
            (object(), "1", "10", False),
            (lambda: None, "1", "10", False),
        ],
    )
    def test_is_valid(self, make_context, value, low, high, expected):
        assert RangeRule().is_valid(value, make_context([low, high])) is expected

    @pytest.mark.parametrize("params", [["1", "a"], ["a", "1"]])
    def test_invalid_bounds(self, make_context, params):
        with pytest.raises(InvalidRuleError):
            RangeRule().is_valid("abc", make_context(params))

    @pytest.mark.parametrize("params", [[], ["1"], ["1", "2", "3"]])
    def test_parameter_count(self, make_context, params):
        with pytest.raises(RuleRequirementError):
            RangeRule().is_valid(5, make_context(params))


class TestBoundRules:
    """Tests for GreaterThanRule and LessThanRule."""

    def test_greater_than(self, make_context):
        rule = GreaterThanRule()
        assert rule.is_valid("6", make_context(["5"]))
        assert not rule.is_valid(5, make_context(["5"]))
        assert not rule.is_valid("x", make_context(["5"]))

    def test_less_than(self, make_context):
        rule = LessThanRule()
        assert rule.is_valid(4, make_context(["5"]))
        assert not rule.is_valid("5.0", make_context(["5"]))
        with pytest.raises(InvalidRuleError):
            rule.is_valid(4, make_context(["five"]))

    def test_limit_in_context(self):
        context = GreaterThanRule().convert_formatting_context(
            {"parameters": ["5"]}
        )
        assert context["limit"] == "5"


class TestBooleanRule:
    """Tests for BooleanRule."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (True, True),
            (False, True),
            (1, True),
            (0, True),
            (2, False),
            ("true", True),
            ("FALSE", True),
            ("1", True),
            ("yes", False),
            (None, False),
            ([], False),
        ],
    )
    def test_is_valid(self, value, expected):
        assert BooleanRule().is_valid(value) is expected


class TestHugeIntegers:
    """Integers beyond float range fail instead of raising."""

    def test_numeric(self):
        assert NumericRule().is_valid(10**400) is False

    def test_bounds(self, make_context):
        assert RangeRule().is_valid(10**400, make_context(["1", "10"])) is False
        assert GreaterThanRule().is_valid(10**400, make_context(["1"])) is False
        assert LessThanRule().is_valid(10**400, make_context(["1"])) is False

    def test_run(self, make_validator):
        validator = make_validator({"n": 10**400})
        validator.set_rule("n", "N", "numeric|range[1,10]")
        assert validator.run() is False
        assert validator.get_field_error_context("n")["rule_name"] == "numeric"
