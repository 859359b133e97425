from symcalc.core.atom import Atom, AtomType
from symcalc.core.tree import (
    ForwardGraph,
    Tr,
    Tree,
    forward_graph,
    rebuild,
    topological_sort,
)
from pytest import raises


Constant = AtomType("Constant", float)
Operator = AtomType("Operator", str)
Symbol = AtomType("Symbol", str)

Sum = Tr(Operator("Sum"))
Sin = Tr(Operator("sin"))
x = Tr(Symbol("x"))
one = Tr(Constant(1))


def test_Tree_leaf_and_node() -> None:
    """Leaves wrap atoms and nodes hold a head and arguments."""
    assert one.value is Constant(1)
    assert one.children == ()
    assert one.args == ()
    assert not isinstance(one, Atom)

    node = Sum(x, one)
    assert node.children == (Sum, x, one)
    assert node.head is Sum
    assert node.args == (x, one)

    assert str(node) == "Sum(x, 1.0)"
    assert repr(Sin(x)) == "Tree(Tr(Operator('sin')), Tr(Symbol('x')))"


def test_Tree_interned() -> None:
    """Building the same tree twice gives the same object."""
    assert Tr(Symbol("x")) is x
    assert Sum(x, one) is Sum(x, one)
    assert Tree(Sum, x, one) is Sum(x, one)
    assert Sum(x, one) != Sum(one, x)
    assert Tr(Constant(0.0)) is not Tr(Constant(-0.0))


def test_Tree_bad_children() -> None:
    """Only trees can be children and a leaf must hold an atom."""
    raises(TypeError, lambda: Tree())
    raises(TypeError, lambda: Tree(1))  # type: ignore
    raises(TypeError, lambda: Sum(x, 1))  # type: ignore
    raises(TypeError, lambda: Tr(1))  # type: ignore


def test_topological_sort() -> None:
    """Subexpressions come once each and before their parents."""
    inner = Sum(x, one)
    expr = Sum(Sin(inner), inner)
    assert topological_sort(expr) == [x, one, inner, Sin(inner), expr]
    assert topological_sort(x) == [x]


def test_forward_graph() -> None:
    """Leaves are numbered first and operations refer back to them."""
    inner = Sum(x, one)
    graph = forward_graph(Sum(Sin(inner), inner))
    assert graph == ForwardGraph(
        atoms=[x, one],
        operations=[(Sum, [0, 1]), (Sin, [2]), (Sum, [3, 2])],
    )

    assert forward_graph(one) == ForwardGraph(atoms=[one], operations=[])


def test_deep_tree() -> None:
    """Walking a very deep tree does not hit the recursion limit."""
    expr = x
    for _ in range(20000):
        expr = Sin(expr)

    subexpressions = topological_sort(expr)
    assert len(subexpressions) == 20001
    assert subexpressions[-1] is expr
    assert rebuild(expr) is expr


def test_rebuild() -> None:
    """Rebuilding an interned tree gives the same tree."""
    expr = Sum(Sin(x), Sin(Sum(x, one)))
    assert rebuild(expr) is expr
    assert rebuild(one) is one
