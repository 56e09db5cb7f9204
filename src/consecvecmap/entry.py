"""Slot type backing a ConsecVecMap window.

Every position inside the window is either :data:`EMPTY` (a gap) or a
:class:`Full` cell holding exactly one value.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final, Generic, TypeVar, Union

if TYPE_CHECKING:
    from typing import Any

V = TypeVar("V")


class Empty:
    """A slot that holds no value.

    There is a single instance, :data:`EMPTY`; compare with ``is``.
    """

    __slots__ = ()
    _instance: Empty | None = None

    def __new__(cls) -> Empty:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __reduce__(self) -> tuple[type[Empty], tuple[()]]:
        return (Empty, ())

    def __repr__(self) -> str:
        return "EMPTY"

    def __bool__(self) -> bool:
        return False

    def is_empty(self) -> bool:
        return True

    def is_full(self) -> bool:
        return False

    def to_option(self) -> None:
        return None


EMPTY: Final = Empty()


class Full(Generic[V]):
    """A slot holding one value.

    The cell is handed out by the mutable access paths of the map
    (``get_mut`` and ``iter_mut``); assigning to :attr:`value` updates the
    stored value in place.
    """

    __slots__ = ("value",)

    def __init__(self, value: V) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"Full({self.value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Full):
            return bool(self.value == other.value)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __bool__(self) -> bool:
        return True

    def __getstate__(self) -> dict[str, Any]:
        return {"value": self.value}

    def __setstate__(self, state: dict[str, Any]) -> None:
        self.value = state["value"]

    def is_empty(self) -> bool:
        return False

    def is_full(self) -> bool:
        return True

    def to_option(self) -> V:
        """Return the stored value."""
        return self.value


Entry = Union[Empty, Full[V]]
