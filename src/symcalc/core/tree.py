"""Interned expression trees and their forward graphs.

A :class:`Tree` is either a leaf wrapping an :class:`Atom` or a node whose
children are a head followed by the arguments, e.g. ``Sum(x, 1)`` is the node
with children ``(Sum, x, 1)``. Trees are immutable and interned, so a
subexpression that occurs many times in a large expression (as happens
constantly in derivatives) is stored once.

Nothing in this module recurses over a tree. Everything that walks an
expression goes through :func:`topological_sort` which keeps an explicit
stack, so the depth of an expression is limited only by memory.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from typing import TYPE_CHECKING as _TYPE_CHECKING
from weakref import WeakValueDictionary as _WeakDict

from symcalc.core.atom import Atom

if _TYPE_CHECKING:
    from symcalc.core.atom import AnyAtom


__all__ = [
    "Tree",
    "Tr",
    "topological_sort",
    "forward_graph",
    "ForwardGraph",
    "rebuild",
]


#
# Leaves are stored under their Atom and nodes under their children tuple.
#
_tree_store: _WeakDict[Any, Any] = _WeakDict()


class Tree:
    """An interned expression tree.

    >>> from symcalc.core.atom import AtomType
    >>> from symcalc.core.tree import Tr
    >>> Operator = AtomType('Operator', str)
    >>> Constant = AtomType('Constant', float)
    >>> Sin = Tr(Operator('sin'))
    >>> half = Tr(Constant(0.5))
    >>> expr = Sin(half)
    >>> expr
    Tree(Tr(Operator('sin')), Tr(Constant(0.5)))
    >>> print(expr)
    sin(0.5)
    >>> expr.head is Sin, expr.args == (half,)
    (True, True)

    Building the same tree twice gives the same object:

    >>> Sin(half) is expr
    True
    """

    __slots__ = ("__weakref__", "value", "children")

    value: AnyAtom
    children: tuple[Tree, ...]

    def __new__(cls, *children: Tree) -> Tree:
        """Make the node with the given head and arguments."""
        existing = _tree_store.get(children)
        if existing is not None:
            return existing  # type: ignore[no-any-return]

        if not children or not all(isinstance(c, Tree) for c in children):
            raise TypeError("A node needs a head and arguments that are Trees.")

        node = object.__new__(cls)
        node.children = children
        return _tree_store.setdefault(children, node)  # type: ignore[no-any-return]

    @classmethod
    def atom(cls, value: AnyAtom) -> Tree:
        """Make the leaf for ``value``."""
        if not isinstance(value, Atom):
            raise TypeError("A leaf should wrap an Atom.")

        existing = _tree_store.get(value)
        if existing is not None:
            return existing  # type: ignore[no-any-return]

        leaf = object.__new__(cls)
        leaf.value = value
        leaf.children = ()
        return _tree_store.setdefault(value, leaf)  # type: ignore[no-any-return]

    def __call__(self, *args: Tree) -> Tree:
        """Apply this tree as a head to ``args``."""
        return Tree(self, *args)

    @property
    def head(self) -> Tree:
        """The head of a node."""
        return self.children[0]

    @property
    def args(self) -> tuple[Tree, ...]:
        """The arguments of a node (empty for a leaf)."""
        return self.children[1:]

    def __repr__(self) -> str:
        if not self.children:
            return f"Tr({self.value!r})"
        return "Tree({})".format(", ".join(map(repr, self.children)))

    def __str__(self) -> str:
        if not self.children:
            return str(self.value)
        return "{}({})".format(self.head, ", ".join(map(str, self.args)))


Tr = Tree.atom


def topological_sort(expression: Tree) -> list[Tree]:
    """Distinct subexpressions of ``expression``, children before parents.

    Heads are not included. The last item is ``expression`` itself.

    >>> from symcalc.core.atom import AtomType
    >>> from symcalc.core.tree import Tr, topological_sort
    >>> Operator, Symbol = AtomType('Operator', str), AtomType('Symbol', str)
    >>> Sum, x = Tr(Operator('Sum')), Tr(Symbol('x'))
    >>> for e in topological_sort(Sum(Sum(x, x), x)):
    ...     print(e)
    x
    Sum(x, x)
    Sum(Sum(x, x), x)
    """
    seen = {expression}
    order = []
    # Each stack entry is a node and the arguments not yet visited (reversed).
    stack = [(expression, list(expression.args[::-1]))]

    while stack:
        node, pending = stack[-1]
        while pending:
            child = pending.pop()
            if child not in seen:
                seen.add(child)
                stack.append((child, list(child.args[::-1])))
                break
        else:
            stack.pop()
            order.append(node)

    return order


@dataclass
class ForwardGraph:
    """An expression as leaves plus a list of operations.

    Operation ``i`` is ``(head, indices)`` and computes the value numbered
    ``len(atoms) + i`` from the values with the given indices. The last
    value is the value of the whole expression.
    """

    atoms: list[Tree]
    operations: list[tuple[Tree, list[int]]]


def forward_graph(expression: Tree) -> ForwardGraph:
    """Build the :class:`ForwardGraph` of ``expression``.

    >>> from symcalc.core.atom import AtomType
    >>> from symcalc.core.tree import Tr, forward_graph
    >>> Operator, Symbol = AtomType('Operator', str), AtomType('Symbol', str)
    >>> Sum, Sin, x = Tr(Operator('Sum')), Tr(Operator('sin')), Tr(Symbol('x'))
    >>> graph = forward_graph(Sum(Sin(x), x))
    >>> graph.atoms == [x]
    True
    >>> graph.operations == [(Sin, [0]), (Sum, [1, 0])]
    True
    """
    subexpressions = topological_sort(expression)
    atoms = [e for e in subexpressions if not e.children]
    nodes = [e for e in subexpressions if e.children]

    index = {atom: i for i, atom in enumerate(atoms)}
    operations = []
    for i, node in enumerate(nodes, len(atoms)):
        operations.append((node.head, [index[arg] for arg in node.args]))
        index[node] = i

    return ForwardGraph(atoms, operations)


def rebuild(expression: Tree) -> Tree:
    """Construct ``expression`` again from its leaves upwards.

    Trees are interned so the result is ``expression`` itself:

    >>> from symcalc.core.atom import AtomType
    >>> from symcalc.core.tree import Tr, rebuild
    >>> Operator, Symbol = AtomType('Operator', str), AtomType('Symbol', str)
    >>> expr = Tr(Operator('cos'))(Tr(Symbol('x')))
    >>> rebuild(expr) is expr
    True
    """
    graph = forward_graph(expression)
    stack = list(graph.atoms)
    for head, indices in graph.operations:
        stack.append(head(*[stack[i] for i in indices]))
    return stack[-1]
