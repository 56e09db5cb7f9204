from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, MutableMapping
from operator import index as op_index
from typing import TYPE_CHECKING, Generic, TypeVar

from consecvecmap.entry import EMPTY, Full
from consecvecmap.slotdeque import SlotDeque

if TYPE_CHECKING:
    import sys
    from collections.abc import Iterator
    from typing import Any, SupportsIndex

    from consecvecmap.entry import Entry

    if sys.version_info < (3, 11):
        from typing_extensions import Self
    else:
        from typing import Self

logger = logging.getLogger(__name__)

V = TypeVar("V")
D = TypeVar("D")


def _as_key(key: object) -> int | None:
    """Convert a lookup key to int, or None if it can never be stored."""
    try:
        return op_index(key)  # type: ignore[arg-type]
    except TypeError:
        return None


class ConsecVecMap(MutableMapping[int, V]):
    """A mapping from integer keys to values backed by a contiguous window of slots.

    Storage covers every key from the smallest to the largest stored key,
    so lookups are plain index arithmetic. Keys that fall inside the window
    but were never set (or were removed) occupy an empty placeholder slot.
    The window is trimmed at both ends after every removal.
    """

    _head: int | None
    _slots: SlotDeque[Entry[V]]
    _len: int
    _capacity_hint: int
    _mutations: int

    def __init__(
        self,
        data: Mapping[int, V] | Iterable[tuple[int, V]] | None = None,
        capacity: SupportsIndex = 0,
    ) -> None:
        """Initialize a ConsecVecMap.

        Args:
            data: Initial contents (optional)
                  - Mapping: integer keys to values
                  - iterable: (key, value) pairs, later pairs overwrite earlier ones
            capacity: Number of slots to reserve up front. This is a hint, not a
                limit: the window grows past it as needed.

        Raises:
            TypeError: If capacity doesn't support __index__ or a key is not an integer
            ValueError: If capacity is negative
        """
        self._slots = SlotDeque(capacity)
        self._capacity_hint = op_index(capacity)
        self._head = None
        self._len = 0
        self._mutations = 0

        if self._capacity_hint:
            logger.debug("created ConsecVecMap with capacity hint %d", self._capacity_hint)

        if data is not None:
            self.update(data)

    @classmethod
    def with_capacity(cls, capacity: SupportsIndex) -> Self:
        """Construct an empty map with room for ``capacity`` slots preallocated."""
        return cls(capacity=capacity)

    @property
    def head(self) -> int | None:
        """Smallest stored key, or None if the map is empty."""
        return self._head

    @property
    def tail(self) -> int | None:
        """Largest stored key, or None if the map is empty."""
        if self._head is None:
            return None
        return self._head + len(self._slots) - 1

    @property
    def span(self) -> int:
        """Number of keys covered by the window, gaps included."""
        return len(self._slots)

    @property
    def capacity(self) -> int:
        """Number of slots currently allocated for the window."""
        return self._slots.capacity

    def __len__(self) -> int:
        """Return the number of stored keys."""
        return self._len

    def is_empty(self) -> bool:
        """Check whether the map holds no keys."""
        return self._len == 0

    def _index_of(self, key: object) -> int | None:
        """Translate a key to its slot index, or None if it lies outside the window."""
        if self._head is None:
            return None
        k = _as_key(key)
        if k is None:
            return None
        idx = k - self._head
        if 0 <= idx < len(self._slots):
            return idx
        return None

    def get(self, key: object, default: V | D | None = None) -> V | D | None:  # type: ignore[override]
        """Return the value stored at key, or default if there is none.

        Args:
            key: Integer key to look up
            default: Value returned when key is absent (default: None)
        """
        idx = self._index_of(key)
        if idx is None:
            return default
        slot = self._slots[idx]
        if slot is EMPTY:
            return default
        return slot.value  # type: ignore[union-attr]

    def get_mut(self, key: object) -> Full[V] | None:
        """Return the cell holding the value at key, or None if there is none.

        Assigning to the returned cell's ``value`` attribute updates the map in
        place::

            cell = m.get_mut(3)
            if cell is not None:
                cell.value += 1
        """
        idx = self._index_of(key)
        if idx is None:
            return None
        slot = self._slots[idx]
        if slot is EMPTY:
            return None
        return slot  # type: ignore[return-value]

    def contains_key(self, key: object) -> bool:
        """Check whether a value is stored at key."""
        idx = self._index_of(key)
        return idx is not None and self._slots[idx] is not EMPTY

    __contains__ = contains_key

    def insert(self, key: SupportsIndex, value: V) -> V | None:
        """Store value at key.

        Inserting outside the current window extends it, filling any keys in
        between with empty slots. Inserting next to either end of the window
        costs O(1) amortized.

        Args:
            key: Integer key
            value: Value to store

        Returns:
            The value previously stored at key, or None if there was none

        Raises:
            TypeError: If key doesn't support __index__
        """
        try:
            k = op_index(key)
        except TypeError:
            raise TypeError("keys must support __index__") from None

        head = self._head
        if head is None:
            self._slots.push_back(Full(value))
            self._head = k
            self._len = 1
            self._mutations += 1
            return None

        end = head + len(self._slots)
        if k < head:
            gap = head - k
            self._slots.reserve(gap)
            self._slots.fill_front(EMPTY, gap - 1)
            self._slots.push_front(Full(value))
            self._head = k
        elif k < end:
            idx = k - head
            previous = self._slots[idx]
            if previous is not EMPTY:
                # Overwrite in place so cells handed out by get_mut stay live
                old_value = previous.value  # type: ignore[union-attr]
                previous.value = value  # type: ignore[union-attr]
                return old_value  # type: ignore[no-any-return]
            self._slots[idx] = Full(value)
        else:
            gap = k - end
            self._slots.reserve(gap + 1)
            self._slots.fill_back(EMPTY, gap)
            self._slots.push_back(Full(value))

        self._len += 1
        self._mutations += 1
        return None

    def remove(self, key: object) -> V | None:
        """Remove the value stored at key.

        Returns:
            The removed value, or None if key was not present
        """
        idx = self._index_of(key)
        if idx is None:
            return None

        slot = self._slots[idx]
        self._slots[idx] = EMPTY
        if slot is EMPTY:
            return None

        self._len -= 1
        self._mutations += 1
        self._maintain()
        return slot.value  # type: ignore[union-attr]

    def _maintain(self) -> None:
        """Trim empty slots from both ends of the window."""
        slots = self._slots
        while slots and slots.front() is EMPTY:
            slots.pop_front()
            self._head += 1  # type: ignore[operator]
        while slots and slots.back() is EMPTY:
            slots.pop_back()

        if not slots:
            logger.debug("window emptied, resetting head")
            self._head = None

    def clear(self) -> None:
        """Remove all items, returning to the freshly constructed state."""
        logger.debug("clearing ConsecVecMap with %d items over %d slots", self._len, len(self._slots))
        self._slots = SlotDeque(self._capacity_hint)
        self._head = None
        self._len = 0
        self._mutations += 1

    def iter_items(self) -> Iter[V]:
        """Return an iterator over (key, value) pairs in ascending key order."""
        return Iter(self)

    def iter_mut(self) -> IterMut[V]:
        """Return an iterator over (key, cell) pairs in ascending key order.

        Assigning to a cell's ``value`` attribute updates the map in place.
        """
        return IterMut(self)

    def __getitem__(self, key: int) -> V:
        """Get the value stored at key.

        Args:
            key: Integer key

        Returns:
            The stored value

        Raises:
            KeyError: If no value is stored at key
        """
        idx = self._index_of(key)
        if idx is not None:
            slot = self._slots[idx]
            if slot is not EMPTY:
                return slot.value  # type: ignore[union-attr]
        raise KeyError(key)

    def __setitem__(self, key: int, value: V) -> None:
        """Store value at key. See :meth:`insert`.

        Raises:
            TypeError: If key doesn't support __index__
        """
        self.insert(key, value)

    def __delitem__(self, key: int) -> None:
        """Remove the value stored at key, trimming the window. See :meth:`remove`.

        Raises:
            KeyError: If no value is stored at key
        """
        if key not in self:
            raise KeyError(key)
        self.remove(key)

    def __iter__(self) -> Iterator[int]:
        """Return an iterator over the stored keys in ascending order."""
        for key, _ in Iter(self):
            yield key

    def __reversed__(self) -> Iterator[int]:
        """Return an iterator over the stored keys in descending order."""
        if self._head is None:
            return
        slots = self._slots
        stamp = self._mutations
        for idx in range(len(slots) - 1, -1, -1):
            if self._mutations != stamp:
                raise RuntimeError("ConsecVecMap changed size during iteration")
            if slots[idx] is not EMPTY:
                yield self._head + idx

    def __eq__(self, other: object) -> bool:
        """Check equality with another ConsecVecMap or mapping.

        Two maps are equal when they store the same key/value pairs; the
        allocated capacity is not compared.
        """
        if self is other:
            return True
        if isinstance(other, ConsecVecMap):
            if self._len != other._len or self._head != other._head or len(self._slots) != len(other._slots):
                return False
            for mine, theirs in zip(self._slots, other._slots):
                if mine is EMPTY or theirs is EMPTY:
                    if mine is not theirs:
                        return False
                elif mine.value is not theirs.value and mine.value != theirs.value:  # type: ignore[union-attr]
                    return False
            return True
        if isinstance(other, Mapping):
            return dict(self.items()) == dict(other.items())
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __copy__(self) -> ConsecVecMap[V]:
        """Return a shallow copy of the map."""
        return self.copy()

    def copy(self) -> ConsecVecMap[V]:
        """Return a shallow copy with the same keys, values and capacity hint."""
        new = self.__class__(capacity=max(self._capacity_hint, len(self._slots)))
        new._capacity_hint = self._capacity_hint
        for slot in self._slots:
            new._slots.push_back(slot if slot is EMPTY else Full(slot.value))  # type: ignore[union-attr]
        new._head = self._head
        new._len = self._len
        return new

    def __repr__(self) -> str:
        """Return a string representation in ascending key order."""
        return f"{self.__class__.__name__}({{{', '.join(f'{k!r}: {v!r}' for k, v in Iter(self))}}})"

    def __getstate__(self) -> dict[str, Any]:
        """Return state for pickling."""
        return {
            "items": list(Iter(self)),
            "capacity": self._capacity_hint,
        }

    def __setstate__(self, state: dict[str, Any]) -> None:
        """Restore state from pickling."""
        self._slots = SlotDeque(state["capacity"])
        self._capacity_hint = state["capacity"]
        self._head = None
        self._len = 0
        self._mutations = 0
        for key, value in state["items"]:
            self.insert(key, value)


class _BaseIter(Generic[V]):
    """Cursor over the slots of a ConsecVecMap that skips gaps."""

    __slots__ = ("_map", "_slots", "_pos", "_end", "_key", "_stamp")

    def __init__(self, owner: ConsecVecMap[V]) -> None:
        self._map = owner
        self._slots = owner._slots
        self._pos = 0
        self._end = len(owner._slots)
        self._key = owner._head if owner._head is not None else 0
        self._stamp = owner._mutations

    def __iter__(self) -> Self:
        return self

    def _next_full(self) -> tuple[int, Full[V]]:
        """Advance to the next full slot.

        An exhausted view keeps raising StopIteration even if the map changes
        afterwards; a live one raises RuntimeError once the map changes size.
        """
        if self._pos >= self._end:
            raise StopIteration
        if self._map._mutations != self._stamp:
            raise RuntimeError("ConsecVecMap changed size during iteration")
        slots = self._slots
        while self._pos < self._end:
            slot = slots[self._pos]
            key = self._key
            self._pos += 1
            self._key += 1
            if slot is not EMPTY:
                return key, slot  # type: ignore[return-value]
        raise StopIteration

    def __length_hint__(self) -> int:
        return self._end - self._pos


class Iter(_BaseIter[V]):
    """Read-only iterator over (key, value) pairs of a ConsecVecMap."""

    __slots__ = ()

    def __next__(self) -> tuple[int, V]:
        key, cell = self._next_full()
        return key, cell.value


class IterMut(_BaseIter[V]):
    """Iterator over (key, cell) pairs of a ConsecVecMap.

    Each cell is the live storage slot; assigning to ``cell.value`` updates
    the map. Inserting into or removing from the map while iterating raises
    RuntimeError on the next step.
    """

    __slots__ = ()

    def __next__(self) -> tuple[int, Full[V]]:
        return self._next_full()
