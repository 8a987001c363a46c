# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

from typing import Any, Final, Literal

__all__ = ("Undefined", "UndefinedType", "is_undefined")


class _SingletonMeta(type):
    """Metaclass that guarantees exactly one instance per subclass."""

    _cache: dict[type, Any] = {}

    def __call__(cls, *a, **kw):
        if cls not in cls._cache:
            cls._cache[cls] = super().__call__(*a, **kw)
        return cls._cache[cls]


class UndefinedType(metaclass=_SingletonMeta):
    """Sentinel for a key entirely missing from the cage data.

    Distinguishes an absent key from one present with a falsy value:

        >>> {"a": None}.get("b", Undefined) is Undefined
        True
    """

    __slots__ = ()

    def __deepcopy__(self, memo):
        return self

    def __copy__(self):
        return self

    def __bool__(self) -> Literal[False]:
        return False

    def __repr__(self) -> Literal["Undefined"]:
        return "Undefined"

    def __reduce__(self):
        return "Undefined"


Undefined: Final = UndefinedType()


def is_undefined(value: Any) -> bool:
    return isinstance(value, UndefinedType)
