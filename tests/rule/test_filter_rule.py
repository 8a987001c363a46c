# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for FilterRule."""

import hashlib

import pytest

from cagecheck import InvalidRuleError, RuleRequirementError
from cagecheck.rule import FILTER_FUNCTIONS, FilterRule


def _sha1(value):
    return hashlib.sha1(value.encode("utf-8")).hexdigest()


def _md5(value):
    return hashlib.md5(value.encode("utf-8")).hexdigest()


class TestApplyFilter:
    """Tests for the value rewriting path."""

    @pytest.mark.parametrize(
        "value, functions, expected",
        [
            (" hello ", ["trim"], "hello"),
            (" hello ", ["rtrim"], " hello"),
            (" hello ", ["ltrim"], "hello "),
            ("Hello", ["upper"], "HELLO"),
            ("Hello", ["lower"], "hello"),
            ("<b>bold</b>", ["strip_tags"], "bold"),
            (" hello ", ["trim", "sha1"], _sha1("hello")),
            (" hello ", ["trim", "sha1", "md5"], _md5(_sha1("hello"))),
        ],
    )
    def test_transforms(self, make_context, value, functions, expected):
        rule = FilterRule()
        assert rule.apply_filter(value, make_context(functions)) == (
            expected,
            True,
        )

    def test_spaces_around_names_ignored(self, make_context):
        result = FilterRule().apply_filter(" x ", make_context([" trim"]))
        assert result == ("x", True)

    @pytest.mark.parametrize("value", [object(), lambda: None, 12, None])
    def test_non_string_untouched(self, make_context, value):
        assert FilterRule().apply_filter(value, make_context(["trim"])) == (
            value,
            False,
        )

    def test_conversion_ends_chain(self, make_context):
        rule = FilterRule()
        assert rule.apply_filter(" 42 ", make_context(["trim", "int"])) == (
            42,
            True,
        )
        assert rule.apply_filter("42", make_context(["int", "trim"])) == (
            "42",
            False,
        )

    def test_rejected_conversion(self, make_context):
        assert FilterRule().apply_filter("4x", make_context(["int"])) == (
            "4x",
            False,
        )

    def test_is_valid_reports_pass_flag(self, make_context):
        rule = FilterRule()
        assert rule.is_valid(" a ", make_context(["trim"])) is True
        assert rule.is_valid(3, make_context(["trim"])) is False

    def test_closure_is_apply_filter(self):
        rule = FilterRule()
        assert rule.get_closure() == rule.apply_filter


class TestFilterRequirements:
    """Tests for parameter handling."""

    def test_parameters_required(self, make_context):
        with pytest.raises(RuleRequirementError):
            FilterRule().apply_filter("abc", make_context())

    def test_unknown_function(self, make_context):
        with pytest.raises(InvalidRuleError, match="not-a-function"):
            FilterRule().apply_filter("abc", make_context(["not-a-function"]))

    def test_unknown_function_checked_before_value(self, make_context):
        with pytest.raises(InvalidRuleError):
            FilterRule().apply_filter(12, make_context(["nope"]))

    def test_custom_functions_extend_builtins(self, make_context):
        rule = FilterRule(functions={"reverse": lambda s: s[::-1]})
        assert rule.apply_filter(" ab ", make_context(["trim", "reverse"])) == (
            "ba",
            True,
        )
        assert "reverse" not in FILTER_FUNCTIONS
