import copy
import pickle

from cagecheck._sentinel import Undefined, UndefinedType, is_undefined


def test_singleton():
    assert UndefinedType() is Undefined
    assert copy.copy(Undefined) is Undefined
    assert copy.deepcopy(Undefined) is Undefined
    assert pickle.loads(pickle.dumps(Undefined)) is Undefined


def test_falsy_and_distinct_from_none():
    assert not Undefined
    assert repr(Undefined) == "Undefined"
    assert is_undefined({"a": None}.get("b", Undefined))
    assert not is_undefined({"a": None}.get("a", Undefined))
