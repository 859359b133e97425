"""Turning trees into values with a table of rules."""
from __future__ import annotations

from typing import Any
from typing import Callable
from typing import Generic
from typing import Optional
from typing import TypeVar

from symcalc.core.atom import AtomType
from symcalc.core.exceptions import NoEvaluationRuleError
from symcalc.core.tree import Tree
from symcalc.core.tree import forward_graph


__all__ = ["Evaluator"]


_T = TypeVar("_T")


def _no_atom_rule(leaf: Tree) -> Any:
    raise NoEvaluationRuleError(f"No rule for atom: {leaf!r}")


def _no_head_rule(head: Tree, argvals: list[Any]) -> Any:
    raise NoEvaluationRuleError(f"No rule for head: {head!r}")


class Evaluator(Generic[_T]):
    """Evaluate trees to values of type ``_T``.

    Rules are looked up by the :class:`AtomType` of a leaf and by the head of
    a node. Values for particular leaves (usually the free variable) are
    passed at call time.

    >>> import math
    >>> from symcalc.core.atom import AtomType
    >>> from symcalc.core.tree import Tr
    >>> from symcalc.core.evaluate import Evaluator
    >>> Constant = AtomType('Constant', float)
    >>> Operator, Symbol = AtomType('Operator', str), AtomType('Symbol', str)
    >>> Sum, Cos, x = Tr(Operator('Sum')), Tr(Operator('cos')), Tr(Symbol('x'))
    >>> evalf = Evaluator[float]()
    >>> evalf.add_atom(Constant, float)
    >>> evalf.add_op(Sum, lambda a, b: a + b)
    >>> evalf.add_op(Cos, math.cos)
    >>> evalf(Sum(Cos(x), Tr(Constant(1))), {x: 0.0})
    2.0

    Evaluation runs forwards over :func:`forward_graph` so every distinct
    subexpression is computed once, without recursion.
    """

    atom_rules: dict[AtomType[Any], Callable[[Any], _T]]
    op_rules: dict[Tree, Callable[..., _T]]
    atom_fallback: Callable[[Tree], _T]
    op_fallback: Callable[[Tree, list[_T]], _T]

    def __init__(self) -> None:
        self.atom_rules = {}
        self.op_rules = {}
        self.atom_fallback = _no_atom_rule
        self.op_fallback = _no_head_rule

    def add_atom(self, atom_type: AtomType[Any], func: Callable[[Any], _T]) -> None:
        """Leaves of ``atom_type`` evaluate to ``func(value)``."""
        self.atom_rules[atom_type] = func

    def add_op(self, head: Tree, func: Callable[..., _T]) -> None:
        """Nodes with ``head`` evaluate to ``func(*argvals)``."""
        self.op_rules[head] = func

    def add_atom_fallback(self, func: Callable[[Tree], _T]) -> None:
        """Leaves with no rule evaluate to ``func(leaf)``."""
        self.atom_fallback = func

    def add_op_fallback(self, func: Callable[[Tree, list[_T]], _T]) -> None:
        """Nodes with no rule evaluate to ``func(head, argvals)``."""
        self.op_fallback = func

    def __call__(self, expr: Tree, values: Optional[dict[Tree, _T]] = None) -> _T:
        """Value of ``expr`` with ``values`` given for some leaves."""
        if values is None:
            values = {}

        graph = forward_graph(expr)
        stack: list[_T] = []

        for leaf in graph.atoms:
            if leaf in values:
                stack.append(values[leaf])
                continue
            rule = self.atom_rules.get(leaf.value.atom_type)
            if rule is None:
                stack.append(self.atom_fallback(leaf))
            else:
                stack.append(rule(leaf.value.value))

        for head, indices in graph.operations:
            argvals = [stack[i] for i in indices]
            op = self.op_rules.get(head)
            if op is None:
                stack.append(self.op_fallback(head, argvals))
            else:
                stack.append(op(*argvals))

        return stack[-1]
