"""Growable ring buffer with O(1) indexing and O(1) amortized pushes at both ends."""

from __future__ import annotations

import logging
from operator import index as op_index
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Iterator
    from typing import SupportsIndex

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Smallest allocation once the buffer holds anything; capacities stay powers of two
_MIN_CAPACITY = 8


def _round_capacity(capacity: int) -> int:
    """Round a requested capacity up to the next power of two (0 stays 0)."""
    if capacity <= 0:
        return 0
    return max(_MIN_CAPACITY, 1 << (capacity - 1).bit_length())


class SlotDeque(Generic[T]):
    """Double-ended sequence stored in a power-of-two ring buffer.

    Unlike :class:`collections.deque`, positional access is O(1) anywhere in
    the sequence, and :meth:`reserve` actually preallocates storage.
    """

    __slots__ = ("_buf", "_start", "_len")

    _buf: list[T | None]
    _start: int
    _len: int

    def __init__(self, capacity: SupportsIndex = 0) -> None:
        """Create an empty sequence.

        Args:
            capacity: Number of slots to preallocate (a hint, rounded up to a
                power of two). ``0`` allocates nothing until the first push.

        Raises:
            TypeError: If capacity doesn't support __index__
            ValueError: If capacity is negative
        """
        try:
            capacity = op_index(capacity)
        except TypeError:
            raise TypeError("capacity must support __index__") from None
        if capacity < 0:
            raise ValueError("capacity must be non-negative")

        self._buf = [None] * _round_capacity(capacity)
        self._start = 0
        self._len = 0

    @property
    def capacity(self) -> int:
        """Number of slots allocated."""
        return len(self._buf)

    def __len__(self) -> int:
        """Return the number of items stored."""
        return self._len

    def _physical(self, index: SupportsIndex) -> int:
        idx = op_index(index)
        if idx < 0:
            idx += self._len
        if not 0 <= idx < self._len:
            raise IndexError("SlotDeque index out of range")
        return (self._start + idx) & (len(self._buf) - 1)

    def __getitem__(self, index: SupportsIndex) -> T:
        """Get the item at a position, counting from the front.

        Args:
            index: Position (negative values count from the back)

        Raises:
            IndexError: If index is out of range
        """
        return self._buf[self._physical(index)]  # type: ignore[return-value]

    def __setitem__(self, index: SupportsIndex, value: T) -> None:
        """Replace the item at a position.

        Args:
            index: Position (negative values count from the back)
            value: New item

        Raises:
            IndexError: If index is out of range
        """
        self._buf[self._physical(index)] = value

    def __iter__(self) -> Iterator[T]:
        buf = self._buf
        start = self._start
        mask = len(buf) - 1
        for i in range(self._len):
            yield buf[(start + i) & mask]  # type: ignore[misc]

    def __repr__(self) -> str:
        return f"SlotDeque([{', '.join(repr(item) for item in self)}])"

    def reserve(self, additional: int) -> None:
        """Ensure room for at least ``additional`` more items without reallocating."""
        needed = self._len + additional
        if needed > len(self._buf):
            self._resize(_round_capacity(needed))

    def _resize(self, new_capacity: int) -> None:
        """Move the contents to a fresh buffer of ``new_capacity``, unwrapped at index 0."""
        logger.debug("growing slot buffer from %d to %d slots", len(self._buf), new_capacity)
        new_buf: list[T | None] = list(self)
        new_buf.extend([None] * (new_capacity - self._len))
        self._buf = new_buf
        self._start = 0

    def push_back(self, item: T) -> None:
        """Append item, doubling the buffer when it is full.

        Args:
            item: Item to append
        """
        if self._len == len(self._buf):
            self._resize(_round_capacity(self._len + 1) if self._len else _MIN_CAPACITY)
        self._buf[(self._start + self._len) & (len(self._buf) - 1)] = item
        self._len += 1

    def push_front(self, item: T) -> None:
        """Prepend item, doubling the buffer when it is full.

        Args:
            item: Item to prepend
        """
        if self._len == len(self._buf):
            self._resize(_round_capacity(self._len + 1) if self._len else _MIN_CAPACITY)
        self._start = (self._start - 1) & (len(self._buf) - 1)
        self._buf[self._start] = item
        self._len += 1

    def fill_back(self, item: T, count: int) -> None:
        """Append ``count`` references to ``item``."""
        if count <= 0:
            return
        self.reserve(count)
        for _ in range(count):
            self.push_back(item)

    def fill_front(self, item: T, count: int) -> None:
        """Prepend ``count`` references to ``item``."""
        if count <= 0:
            return
        self.reserve(count)
        for _ in range(count):
            self.push_front(item)

    def pop_back(self) -> T:
        """Remove and return the last item.

        Raises:
            IndexError: If the sequence is empty
        """
        if not self._len:
            raise IndexError("pop from an empty SlotDeque")
        self._len -= 1
        pos = (self._start + self._len) & (len(self._buf) - 1)
        item = self._buf[pos]
        self._buf[pos] = None
        return item  # type: ignore[return-value]

    def pop_front(self) -> T:
        """Remove and return the first item.

        Raises:
            IndexError: If the sequence is empty
        """
        if not self._len:
            raise IndexError("pop from an empty SlotDeque")
        pos = self._start
        item = self._buf[pos]
        self._buf[pos] = None
        self._start = (pos + 1) & (len(self._buf) - 1)
        self._len -= 1
        return item  # type: ignore[return-value]

    def front(self) -> T:
        """Return the first item without removing it."""
        if not self._len:
            raise IndexError("front of an empty SlotDeque")
        return self._buf[self._start]  # type: ignore[return-value]

    def back(self) -> T:
        """Return the last item without removing it."""
        if not self._len:
            raise IndexError("back of an empty SlotDeque")
        return self._buf[(self._start + self._len - 1) & (len(self._buf) - 1)]  # type: ignore[return-value]
