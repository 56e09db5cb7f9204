# tests/test_slotdeque.py
import pytest

from consecvecmap.slotdeque import SlotDeque


# ---------------------
# Helper functions
# ---------------------
def _filled(*items, capacity=0):
    d = SlotDeque(capacity)
    for item in items:
        d.push_back(item)
    return d


# ---------------------
# Capacity tests
# ---------------------
@pytest.mark.parametrize(
    "requested, expected",
    [(0, 0), (1, 8), (7, 8), (8, 8), (9, 16), (16, 16), (17, 32)],
)
def test_capacity_rounding(requested, expected):
    assert SlotDeque(requested).capacity == expected


@pytest.mark.parametrize(
    "bad_capacity, expected_exception",
    [(-1, ValueError), (2.0, TypeError), ("4", TypeError)],
    ids=["negative", "float", "str"],
)
def test_capacity_invalid(bad_capacity, expected_exception):
    with pytest.raises(expected_exception):
        SlotDeque(bad_capacity)


def test_reserve():
    d = SlotDeque()
    d.reserve(10)
    assert d.capacity == 16
    assert len(d) == 0

    d.fill_back("x", 16)
    d.reserve(0)
    assert d.capacity == 16
    d.reserve(1)
    assert d.capacity == 32
    assert list(d) == ["x"] * 16


def test_first_push_allocates_minimum():
    d = SlotDeque()
    assert d.capacity == 0
    d.push_front("a")
    assert d.capacity == 8
    assert list(d) == ["a"]


# ---------------------
# Push / pop tests
# ---------------------
def test_push_both_ends():
    d = SlotDeque()
    for i in range(5):
        d.push_back(i)
        d.push_front(-i - 1)
    assert list(d) == [-5, -4, -3, -2, -1, 0, 1, 2, 3, 4]
    assert len(d) == 10
    assert d.front() == -5
    assert d.back() == 4


def test_pop_both_ends():
    d = _filled(1, 2, 3, 4)
    assert d.pop_front() == 1
    assert d.pop_back() == 4
    assert list(d) == [2, 3]
    assert d.pop_back() == 3
    assert d.pop_front() == 2
    assert len(d) == 0


@pytest.mark.parametrize("method", ["pop_front", "pop_back", "front", "back"])
def test_empty_access_raises(method):
    with pytest.raises(IndexError):
        getattr(SlotDeque(8), method)()


def test_wrap_around_keeps_order():
    d = _filled(*range(6), capacity=8)
    for _ in range(4):
        d.pop_front()
    for i in range(6, 12):
        d.push_back(i)
    assert d.capacity == 8
    assert list(d) == [4, 5, 6, 7, 8, 9, 10, 11]
    assert [d[i] for i in range(len(d))] == list(range(4, 12))


def test_growth_while_wrapped():
    d = _filled(*range(8), capacity=8)
    d.pop_front()
    d.push_back(8)
    d.push_front("head")
    assert d.capacity == 16
    assert list(d) == ["head", *range(1, 9)]


def test_pop_releases_reference():
    d = _filled(object(), object())
    d.pop_back()
    d.pop_front()
    assert d._buf.count(None) == d.capacity


@pytest.mark.parametrize("count", [0, -3], ids=["zero", "negative"])
def test_fill_nothing(count):
    d = _filled("a")
    d.fill_back("x", count)
    d.fill_front("x", count)
    assert list(d) == ["a"]


def test_fill_both_ends():
    d = _filled("mid")
    d.fill_front("f", 3)
    d.fill_back("b", 2)
    assert list(d) == ["f", "f", "f", "mid", "b", "b"]


# ---------------------
# Indexing tests
# ---------------------
@pytest.mark.parametrize("index, expected", [(0, "a"), (2, "c"), (-1, "c"), (-3, "a")])
def test_getitem(index, expected):
    d = _filled("a", "b", "c")
    assert d[index] == expected


@pytest.mark.parametrize("index", [3, -4, 100])
def test_getitem_out_of_range(index):
    d = _filled("a", "b", "c")
    with pytest.raises(IndexError):
        _ = d[index]
    with pytest.raises(IndexError):
        d[index] = "z"


def test_setitem():
    d = _filled("a", "b", "c")
    d[1] = "B"
    d[-1] = "C"
    assert list(d) == ["a", "B", "C"]


def test_repr():
    assert repr(_filled(1, "a")) == "SlotDeque([1, 'a'])"
    assert repr(SlotDeque()) == "SlotDeque([])"
