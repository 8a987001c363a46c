from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .rule.base import Rule


@runtime_checkable
class RulesProvider(Protocol):

    def get_rule(self, name: str) -> "Rule":
        """Resolve a rule by name, raising InvalidRuleError when unknown."""

    def set_callback_rule(self, name: str, func: Callable[..., bool]) -> None:
        """Register an ad-hoc callable under ``name``."""
