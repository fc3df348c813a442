"""Bridge for opaque host objects.

A host class opts in by inheriting ForeignType. Each such class gets a small
integer id from a module-level registry the first time it is seen; a Foreign
wrapper stores a reference to the host object together with that id. The only
way to get a typed object back out is `Foreign.downcast`, which compares ids.

The wrapper never copies the object: host code and the interpreter share it,
and Python's reference counting keeps it alive while either side holds it.
"""

from __future__ import annotations

from itertools import count
from typing import Any, TypeVar

from minilisp.types.errors import ForeignTypeMismatch, InvalidType

T = TypeVar("T")

_type_ids: dict[type, int] = {}
_next_id = count(1)


def foreign_type_id(cls: type) -> int:
    """Return the registry id for `cls`, assigning one on first use."""
    type_id = _type_ids.get(cls)
    if type_id is None:
        type_id = _type_ids[cls] = next(_next_id)
    return type_id


class ForeignType:
    """Mixin for host classes that may be passed into the language."""

    __slots__ = ()

    @classmethod
    def foreign_type_id(cls) -> int:
        return foreign_type_id(cls)


class Foreign:
    __slots__ = ("_obj", "type_id")

    def __init__(self, obj: ForeignType, type_id: int):
        self._obj = obj
        self.type_id = type_id

    @classmethod
    def wrap(cls, obj: Any) -> Foreign:
        if not isinstance(obj, ForeignType):
            from minilisp.types.value_type import FOREIGN

            raise InvalidType([FOREIGN], obj)
        return cls(obj, foreign_type_id(type(obj)))

    @property
    def value(self) -> Any:
        return self._obj

    @property
    def type_name(self) -> str:
        return type(self._obj).__name__

    def downcast(self, cls: type[T]) -> T:
        requested = foreign_type_id(cls)
        if requested != self.type_id:
            raise ForeignTypeMismatch(requested, cls.__name__, self)
        return self._obj

    def __copy__(self) -> Foreign:
        return self

    def __deepcopy__(self, memo) -> Foreign:
        return self

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Foreign) and self._obj is other._obj

    def __hash__(self) -> int:
        return id(self._obj)

    def __repr__(self) -> str:
        return f"Foreign({self._obj!r}, type_id={self.type_id})"

    def __str__(self) -> str:
        return f"<foreign {self.type_name}>"
