# tests/conftest.py
import pytest

from cagecheck import RuleBook, ValidationContext, Validator


@pytest.fixture
def rulebook():
    """Fresh default rulebook per test, callable registrations do not leak."""
    return RuleBook.default()


@pytest.fixture
def make_validator(rulebook):
    def _make(cage_data=None):
        return Validator(rulebook, cage_data)

    return _make


@pytest.fixture
def make_context():
    def _make(parameters=(), validator=None, field="field"):
        return ValidationContext(
            field=field,
            validator=validator,
            field_name="Field",
            rule_name="test",
            parameters=list(parameters),
        )

    return _make
