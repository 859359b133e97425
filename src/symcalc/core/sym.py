"""User-facing wrappers around :class:`Tree`.

:class:`Sym` is the base for classes like :class:`symcalc.calculus.Expr` that
users handle directly. It holds a :class:`Tree` in ``rep`` and is interned in
the same way, so each tree has exactly one wrapper per subclass. The
evaluator and differentiator here accept and return those wrappers and
delegate to :mod:`symcalc.core.evaluate` and
:mod:`symcalc.core.differentiate`.
"""
from __future__ import annotations

from typing import Any
from typing import Callable
from typing import Generic
from typing import Optional
from typing import Sequence
from typing import Type
from typing import TypeVar
from weakref import WeakValueDictionary as _WeakDict

from symcalc.core.atom import AtomType
from symcalc.core.differentiate import diff_forward
from symcalc.core.differentiate import DiffProperties
from symcalc.core.evaluate import Evaluator
from symcalc.core.tree import Tr
from symcalc.core.tree import Tree


__all__ = ["Sym", "SymAtomType", "SymEvaluator", "SymDifferentiator"]


T_sym = TypeVar("T_sym", bound="Sym")
T_val = TypeVar("T_val")


class Sym:
    """Base class for interned wrappers of :class:`Tree`.

    >>> from symcalc.core.sym import Sym
    >>> class E(Sym):
    ...     def __call__(self, *args):
    ...         return E(self.rep(*[a.rep for a in args]))
    >>> Constant = E.new_atom('Constant', float)
    >>> Operator = E.new_atom('Operator', str)
    >>> Sum = Operator('Sum')
    >>> expr = Sum(Constant(1), Constant(2))
    >>> print(expr)
    Sum(1.0, 2.0)
    >>> expr.head is Sum
    True
    >>> E(expr.rep) is expr
    True
    """

    _instances: _WeakDict[Any, Any] = _WeakDict()

    rep: Tree

    def __new__(cls, rep: Tree) -> Sym:
        if not isinstance(rep, Tree):
            raise TypeError(f"{cls.__name__} should wrap a Tree")

        key = (cls, rep)
        existing = cls._instances.get(key)
        if existing is not None:
            return existing  # type: ignore[no-any-return]

        obj = super().__new__(cls)
        obj.rep = rep
        return cls._instances.setdefault(key, obj)  # type: ignore[no-any-return]

    @property
    def head(self: T_sym) -> T_sym:
        """Head of a compound expression."""
        return type(self)(self.rep.head)

    @property
    def args(self: T_sym) -> tuple[T_sym, ...]:
        """Arguments of a compound expression (empty for a leaf)."""
        cls = type(self)
        return tuple(cls(arg) for arg in self.rep.args)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.rep!r})"

    def __str__(self) -> str:
        return str(self.rep)

    @classmethod
    def new_atom(
        cls: Type[T_sym], name: str, typ: Type[T_val]
    ) -> SymAtomType[T_sym, T_val]:
        """A new kind of leaf whose instances are of this class."""
        return SymAtomType(name, cls, typ)


class SymAtomType(Generic[T_sym, T_val]):
    """An :class:`AtomType` that makes leaves wrapped as ``sym``."""

    def __init__(self, name: str, sym: Type[T_sym], typ: Type[T_val]) -> None:
        self.sym = sym
        self.atom_type = AtomType(name, typ)

    def __repr__(self) -> str:
        return self.atom_type.name

    def __call__(self, value: Any) -> T_sym:
        return self.sym(Tr(self.atom_type(value)))

    def is_type_of(self, expr: Sym) -> bool:
        """Whether ``expr`` is a leaf of this type."""
        rep = expr.rep
        return not rep.children and rep.value.atom_type is self.atom_type


class SymEvaluator(Generic[T_val]):
    """An :class:`Evaluator` with rules keyed by :class:`Sym` heads.

    >>> from symcalc.calculus import Variable, Sum, Constant
    >>> from symcalc.core.sym import SymEvaluator
    >>> depth = SymEvaluator[float]('depth')
    >>> depth.add_atom(Constant, lambda v: 0)
    >>> depth.add_leaf_fallback(lambda leaf: 0)
    >>> depth.add_op(Sum, lambda a, b: 1 + max(a, b))
    >>> depth(Sum(Sum(Variable(), 1), 2))
    2
    """

    def __init__(self, name: str):
        self.name = name
        self.evaluator = Evaluator[T_val]()

    def __repr__(self) -> str:
        return self.name

    def add_atom(
        self, atom_type: SymAtomType[Any, Any], func: Callable[[Any], T_val]
    ) -> None:
        """Leaves of ``atom_type`` evaluate to ``func(value)``."""
        self.evaluator.add_atom(atom_type.atom_type, func)

    def add_op(self, head: Sym, func: Callable[..., T_val]) -> None:
        """Nodes with ``head`` evaluate to ``func(*argvals)``."""
        self.evaluator.add_op(head.rep, func)

    def add_leaf_fallback(self, func: Callable[[Tree], T_val]) -> None:
        """Leaves with no rule evaluate to ``func(leaf)``."""
        self.evaluator.add_atom_fallback(func)

    def add_op_fallback(self, func: Callable[[Tree, list[T_val]], T_val]) -> None:
        """Nodes with no rule evaluate to ``func(head, argvals)``."""
        self.evaluator.add_op_fallback(func)

    def __call__(self, expr: Sym, values: Optional[dict[Any, T_val]] = None) -> T_val:
        values_rep = {}
        if values is not None:
            values_rep = {e.rep: v for e, v in values.items()}
        return self.evaluator(expr.rep, values_rep)


class SymDifferentiator(Generic[T_sym]):
    """Differentiation of :class:`Sym` expressions.

    Rules are plain functions of the arguments of a node and their
    derivatives, both given as ``new_sym`` instances.
    """

    def __init__(self, new_sym: Type[T_sym], *, zero: T_sym, one: T_sym):
        self.new_sym = new_sym
        self.prop = DiffProperties(zero=zero.rep, one=one.rep)

    def add_rule(
        self,
        head: T_sym,
        rule: Callable[[Sequence[T_sym], Sequence[T_sym]], T_sym],
    ) -> None:
        """Set ``rule(args, diff_args) -> derivative`` for ``head``."""
        new_sym = self.new_sym

        def rule_rep(args: Sequence[Tree], dargs: Sequence[Tree]) -> Tree:
            args_sym = [new_sym(a) for a in args]
            dargs_sym = [new_sym(da) for da in dargs]
            return rule(args_sym, dargs_sym).rep

        self.prop.add_rule(head.rep, rule_rep)

    def __call__(self, expr: T_sym, var: T_sym) -> T_sym:
        """Derivative of ``expr`` with respect to ``var``."""
        return self.new_sym(diff_forward(expr.rep, var.rep, self.prop))
