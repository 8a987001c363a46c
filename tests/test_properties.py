# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Property tests for the per-field outcome of a run."""

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from cagecheck import RuleBook, Validator

FIELDS = {
    "a": "required|alpha",
    "b": "nullable|numeric|range[1,10]",
    "c": "filter[trim]|alphaNumeric",
    "d": "integer",
}

values = st.one_of(
    st.none(),
    st.text(max_size=12),
    st.integers(min_value=-20, max_value=20),
    st.booleans(),
    st.floats(allow_nan=False, allow_infinity=False),
)

cage_data = st.dictionaries(st.sampled_from(sorted(FIELDS)), values)


def _validator(data):
    validator = Validator(RuleBook.default(), data)
    for key, rules in FIELDS.items():
        validator.set_rule(key, key.upper(), rules)
    return validator


@settings(suppress_health_check=[HealthCheck.too_slow], deadline=None)
@given(cage_data)
def test_fields_pass_or_fail_exclusively(data):
    validator = _validator(data)
    validator.run()

    validated = set(validator.get_validated_fields())
    failed = set(validator.get_failed_fields())
    assert not validated & failed

    for key in FIELDS:
        if key in data or validator.is_field_required(key):
            assert (key in validated) != (key in failed)
        else:
            assert key not in validated
            assert key not in failed


@settings(suppress_health_check=[HealthCheck.too_slow], deadline=None)
@given(cage_data)
def test_run_is_repeatable(data):
    validator = _validator(data)
    first = validator.run()
    messages = validator.get_all_field_error_messages()
    validated = validator.get_validated_data()

    assert validator.run() == first
    assert validator.get_all_field_error_messages() == messages
    assert validator.get_validated_data() == validated
    assert validator.get_cage_data() == data


@settings(suppress_health_check=[HealthCheck.too_slow], deadline=None)
@given(cage_data.filter(lambda d: "a" not in d))
def test_missing_required_field_reports_once(data):
    validator = _validator(data)
    assert validator.run() is False
    assert validator.get_field_error_message("a") == "A is required"
    assert validator.get_failed_fields().count("a") == 1
