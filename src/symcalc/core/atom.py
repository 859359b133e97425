"""Leaf values of expression trees.

An :class:`Atom` pairs an :class:`AtomType` (what kind of leaf it is, e.g. a
numeric constant or the name of a symbol) with a hashable value. Atoms are
interned so that equal atoms are always the same object.
"""
from __future__ import annotations

import math
from typing import Any
from typing import Generic as _Generic
from typing import Hashable as _Hashable
from typing import TYPE_CHECKING as _TYPE_CHECKING
from typing import TypeVar as _TypeVar
from weakref import WeakValueDictionary as _WeakDict

__all__ = [
    "Atom",
    "AtomType",
]


_V = _TypeVar("_V", bound=_Hashable)

#
# Every Atom ever created that is still referenced somewhere. Keys are
# produced by _intern_key.
#
_atom_store: _WeakDict[Any, Any] = _WeakDict()


def _intern_key(atom_type: AtomType[Any], value: Any) -> tuple[Any, ...]:
    """Key under which an atom is interned.

    ``0.0 == -0.0`` so the sign of a float is part of the key. Otherwise
    ``-0.0`` would be replaced by whichever zero was created first.
    """
    if isinstance(value, float):
        return (atom_type, value, math.copysign(1.0, value))
    return (atom_type, value)


class AtomType(_Generic[_V]):
    """A kind of leaf such as ``Constant`` or ``Symbol``.

    >>> from symcalc.core.atom import AtomType
    >>> Constant = AtomType('Constant', float)
    >>> Constant
    Constant
    >>> Constant(2.5)
    Constant(2.5)

    Calling an :class:`AtomType` converts the value to ``typ`` first so that
    ``Constant(2)`` and ``Constant(2.0)`` are the same atom:

    >>> Constant(2) is Constant(2.0)
    True
    """

    __slots__ = ("name", "typ")

    name: str
    typ: type[_V]

    def __init__(self, name: str, typ: type[_V]):
        self.name = name
        self.typ = typ

    def __repr__(self) -> str:
        return self.name

    def __call__(self, value: Any) -> Atom[_V]:
        """Make (or look up) the atom of this type with ``value``."""
        return Atom(self, self.typ(value))  # type: ignore[call-arg]


class Atom(_Generic[_V]):
    """An interned leaf value.

    :ivar atom_type: The :class:`AtomType` of the atom.
    :ivar value: The value, e.g. a ``float`` for a constant.

    >>> from symcalc.core.atom import AtomType
    >>> Constant = AtomType('Constant', float)
    >>> zero, negzero = Constant(0.0), Constant(-0.0)
    >>> print(zero, negzero)
    0.0 -0.0
    >>> zero is negzero
    False
    """

    __slots__ = ("__weakref__", "atom_type", "value")

    atom_type: AtomType[_V]
    value: _V

    def __new__(cls, atom_type: AtomType[_V], value: _V) -> Atom[_V]:
        key = _intern_key(atom_type, value)
        existing = _atom_store.get(key)
        if existing is not None:
            return existing  # type: ignore[no-any-return]

        atom = object.__new__(cls)
        atom.atom_type = atom_type
        atom.value = value
        # setdefault so that racing threads agree on a single object.
        return _atom_store.setdefault(key, atom)  # type: ignore[no-any-return]

    def __repr__(self) -> str:
        return f"{self.atom_type}({self.value!r})"

    def __str__(self) -> str:
        return str(self.value)


if _TYPE_CHECKING:
    AnyAtom = Atom[_Hashable]
