# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from .validator import Validator

__all__ = (
    "CageError",
    "RuleRequirementError",
    "InvalidRuleError",
    "NotRunError",
    "FailureError",
)


class CageError(Exception):
    default_message: ClassVar[str] = "cagecheck error"
    status_code: ClassVar[int] = 500
    __slots__ = ("message", "details")

    def __init__(
        self,
        message: str | None = None,
        *,
        details: dict[str, Any] | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message or self.default_message)
        if cause:
            self.__cause__ = cause  # preserves traceback
        self.message = message or self.default_message
        self.details = details or {}
        self.status_code = status_code or self.status_code

    def to_dict(self, *, include_cause: bool = False) -> dict[str, Any]:
        data = {
            "error": self.__class__.__name__,
            "message": self.message,
            "status_code": self.status_code,
            **({"details": self.details} if self.details else {}),
        }
        if include_cause and (cause := self.get_cause()):
            data["cause"] = repr(cause)
        return data

    def get_cause(self) -> Exception | None:
        """Get the cause of this error, if any."""
        return self.__cause__ if hasattr(self, "__cause__") else None


class RuleRequirementError(CageError):
    """Rule configuration is malformed (empty chain, unterminated parameters)."""

    default_message = "Rule requirements not met"
    __slots__ = ()


class InvalidRuleError(CageError):
    """Unknown field or rule, or structurally wrong registration input."""

    default_message = "Invalid rule"
    status_code = 400
    __slots__ = ()


class NotRunError(CageError):
    default_message = "Validator has not been run"
    __slots__ = ()


class FailureError(CageError):
    """Raised by a strict run when at least one field failed validation."""

    default_message = "Validation failed"
    status_code = 422  # Unprocessable Entity
    __slots__ = ("validator",)

    def __init__(
        self,
        message: str | None = None,
        *,
        validator: "Validator | None" = None,
        **kw: Any,
    ):
        super().__init__(message, **kw)
        self.validator = validator

    @classmethod
    def from_validator(cls, validator: "Validator") -> "FailureError":
        """Build the aggregate failure from a validator that has been run."""
        failed = validator.get_failed_fields()
        return cls(
            validator.get_all_field_error_messages_string(),
            validator=validator,
            details={"failed_fields": failed},
        )
