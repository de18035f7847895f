import numbers
from enum import IntEnum
from typing import Callable, Iterable, List

from .errors import InvalidValue


class Role(IntEnum):
    NORMAL    = 0
    ACTIVE    = 1   # under comparison
    CANDIDATE = 2   # current minimum / element being inserted
    PIVOT     = 3
    DONE      = 4   # finalized, terminal for the run


class Element:
    __slots__ = ('value', 'role')

    def __init__(self, value: int, role: Role = Role.NORMAL):
        self.value = value
        self.role  = role

    def __repr__(self):
        return f"Element({self.value}, {self.role.name})"


Listener = Callable[[int, Element], None]


def _as_int(v) -> int:
    """Integral numbers only; 3.0 becomes 3, 2.5 is rejected rather than truncated."""
    if isinstance(v, bool) or not isinstance(v, numbers.Number):
        raise InvalidValue(v)
    try:
        iv = int(v)
    except (TypeError, ValueError, OverflowError):
        raise InvalidValue(v) from None
    if iv != v:
        raise InvalidValue(v)
    return iv


class WorkingSequence:
    """
    The (value, role) slots one sort run operates on.

    A slot is identified by its index only; a swap moves values between
    slots and leaves roles where they are. Listeners are called after
    every value or role change with the index and the slot.
    """

    def __init__(self, elements: List[Element]):
        self._elements  = elements
        self._listeners: List[Listener] = []

    @classmethod
    def capture(cls, values: Iterable[int]) -> "WorkingSequence":
        return cls([Element(_as_int(v)) for v in values])

    def __len__(self):
        return len(self._elements)

    def __getitem__(self, i) -> Element:
        return self._elements[i]

    def __iter__(self):
        return iter(self._elements)

    def in_range(self, i: int) -> bool:
        return 0 <= i < len(self._elements)

    def values(self) -> List[int]:
        return [e.value for e in self._elements]

    def roles(self) -> List[Role]:
        return [e.role for e in self._elements]

    def all_done(self) -> bool:
        return all(e.role is Role.DONE for e in self._elements)

    # -- listeners --
    def subscribe(self, listener: Listener):
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener):
        self._listeners.remove(listener)

    def _changed(self, i: int):
        for listener in self._listeners:
            listener(i, self._elements[i])

    # -- raw mutation, StepController is the only caller --
    def set_role(self, i: int, role: Role):
        e = self._elements[i]
        if e.role is Role.DONE or e.role is role:
            return
        e.role = role
        self._changed(i)

    def set_value(self, i: int, value: int):
        self._elements[i].value = value
        self._changed(i)

    def exchange(self, i: int, j: int):
        a, b = self._elements[i], self._elements[j]
        a.value, b.value = b.value, a.value
        self._changed(i)
        if j != i:
            self._changed(j)

    def __repr__(self):
        return f"WorkingSequence({self._elements!r})"
