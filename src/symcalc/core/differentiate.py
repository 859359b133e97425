"""Forward accumulation differentiation of trees.

Every head has a rule that is given the arguments of a node and the
derivatives of those arguments and returns the derivative of the node. The
rules decide the exact shape of the result and nothing is simplified
afterwards.
"""
from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from typing import Callable
from typing import Sequence

from symcalc.core.exceptions import NoDiffRuleError
from symcalc.core.tree import Tree
from symcalc.core.tree import forward_graph


__all__ = [
    "DiffRule",
    "DiffProperties",
    "diff_forward",
]


DiffRule = Callable[[Sequence[Tree], Sequence[Tree]], Tree]


@dataclass(frozen=True)
class DiffProperties:
    """What :func:`diff_forward` needs to know about an expression language.

    :ivar zero: Derivative of any leaf other than the variable.
    :ivar one: Derivative of the variable.
    :ivar rules: Rule ``rule(args, diff_args) -> derivative`` for each head.
    """

    zero: Tree
    one: Tree
    rules: dict[Tree, DiffRule] = field(default_factory=dict)

    def add_rule(self, head: Tree, rule: DiffRule) -> None:
        """Set the rule for nodes with ``head``."""
        self.rules[head] = rule


def diff_forward(expression: Tree, var: Tree, prop: DiffProperties) -> Tree:
    """Derivative of ``expression`` with respect to the leaf ``var``.

    >>> from symcalc.core.atom import AtomType
    >>> from symcalc.core.tree import Tr
    >>> Constant = AtomType('Constant', float)
    >>> Operator, Symbol = AtomType('Operator', str), AtomType('Symbol', str)
    >>> Sum, x = Tr(Operator('Sum')), Tr(Symbol('x'))
    >>> prop = DiffProperties(zero=Tr(Constant(0)), one=Tr(Constant(1)))
    >>> prop.add_rule(Sum, lambda args, dargs: Sum(*dargs))
    >>> print(diff_forward(Sum(x, Tr(Constant(3))), x, prop))
    Sum(1.0, 0.0)

    The derivative of each distinct subexpression is built once, in the
    order of :func:`forward_graph`, and then reused wherever that
    subexpression occurs.
    """
    graph = forward_graph(expression)

    values = list(graph.atoms)
    derivatives = [prop.one if leaf == var else prop.zero for leaf in values]

    for head, indices in graph.operations:
        rule = prop.rules.get(head)
        if rule is None:
            raise NoDiffRuleError(f"No differentiation rule for head: {head!r}")

        args = [values[i] for i in indices]
        dargs = [derivatives[i] for i in indices]
        values.append(head(*args))
        derivatives.append(rule(args, dargs))

    return derivatives[-1]
