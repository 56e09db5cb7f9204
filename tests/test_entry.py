# tests/test_entry.py
import copy
import pickle

import pytest

from consecvecmap import EMPTY, Empty, Full


def test_empty_is_singleton():
    assert Empty() is EMPTY
    assert copy.copy(EMPTY) is EMPTY
    assert copy.deepcopy(EMPTY) is EMPTY


@pytest.mark.parametrize("protocol", range(pickle.HIGHEST_PROTOCOL + 1))
def test_empty_pickle_keeps_identity(protocol):
    assert pickle.loads(pickle.dumps(EMPTY, protocol=protocol)) is EMPTY


@pytest.mark.parametrize(
    "entry, is_empty, truthy, option",
    [(EMPTY, True, False, None), (Full(3), False, True, 3), (Full(None), False, True, None), (Full(0), False, True, 0)],
    ids=["empty", "full", "full_none", "full_zero"],
)
def test_entry_queries(entry, is_empty, truthy, option):
    assert entry.is_empty() is is_empty
    assert entry.is_full() is not is_empty
    assert bool(entry) is truthy
    assert entry.to_option() == option


def test_full_is_mutable_cell():
    cell = Full([1])
    cell.value.append(2)
    cell.value = "replaced"
    assert cell.to_option() == "replaced"


@pytest.mark.parametrize(
    "left, right, expected",
    [(Full(1), Full(1), True), (Full(1), Full(2), False), (Full(1), EMPTY, False), (Full(1), 1, False)],
)
def test_full_equality(left, right, expected):
    assert (left == right) is expected


def test_full_unhashable():
    with pytest.raises(TypeError):
        hash(Full(1))


def test_repr():
    assert repr(EMPTY) == "EMPTY"
    assert repr(Full("a")) == "Full('a')"


@pytest.mark.parametrize("protocol", range(2, pickle.HIGHEST_PROTOCOL + 1))
def test_full_pickle(protocol):
    restored = pickle.loads(pickle.dumps(Full({"a": 1}), protocol=protocol))
    assert isinstance(restored, Full)
    assert restored.value == {"a": 1}
