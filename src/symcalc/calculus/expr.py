"""The Expr class."""
from __future__ import annotations

import math
from functools import wraps
from typing import TYPE_CHECKING as _TYPE_CHECKING
from typing import Any, Callable, Sequence, Union

from symcalc.core.sym import Sym, SymDifferentiator, SymEvaluator
from symcalc.core.tree import rebuild, topological_sort
from symcalc.calculus.exceptions import ExpressifyError


if _TYPE_CHECKING:
    Expressifiable = Union["Expr", int, float]
    ExprBinOp = Callable[["Expr", "Expr"], "Expr"]
    ExpressifyBinOp = Callable[["Expr", Expressifiable], "Expr"]


def expressify(obj: Any) -> Expr:
    """Convert a native Python number to an ``Expr``.

    >>> from symcalc.calculus import expressify
    >>> two = expressify(2)
    >>> two
    2
    >>> two.rep
    Tr(Constant(2.0))

    It is harmless to call :func:`expressify` more than once because it will
    just return the same object.

    >>> expressify(two) is two
    True
    """
    if isinstance(obj, Expr):
        return obj
    elif isinstance(obj, (int, float)):
        return Constant(obj)
    else:
        raise ExpressifyError(f"Cannot convert {type(obj).__name__} to Expr")


def expressify_other(method: ExprBinOp) -> ExpressifyBinOp:
    """Call ``expressify`` on operands in ``__add__`` etc."""

    @wraps(method)
    def expressify_method(self: Expr, other: Expressifiable) -> Expr:
        if not isinstance(other, Expr):
            try:
                other = expressify(other)
            except ExpressifyError:
                return NotImplemented
        return method(self, other)

    return expressify_method


class Expr(Sym):
    """User-facing class for representing expressions in one variable.

    Expressions are built bottom-up from the constructors exported by
    :mod:`symcalc.calculus`:

    >>> from symcalc.calculus import Constant, Variable, Sum, Product, Power, Sin
    >>> x = Variable()
    >>> expr = Sum(Power(x, 2), Product(Constant(3), Sin(x)))
    >>> expr
    ((x)^2 + (3 * sin(x)))
    >>> expr.evaluate(0.0)
    0.0

    Expressions are inert: nothing is ever simplified. This is most visible in
    derivatives:

    >>> Power(x, 2).derivative()
    ((2 * (x)^1) * 1)
    >>> Sin(x).derivative()
    (cos(x) * 1)

    Python's arithmetic operators can also be used to build expressions. They
    map directly onto the constructors:

    >>> x**2 + 3*x
    ((x)^2 + (3 * x))
    >>> x - 1
    (x + (-1 * 1))

    Expressions are immutable and interned so that equal expressions are the
    same object. Subexpressions can therefore be shared freely:

    >>> Sin(x) is Sin(x)
    True

    See Also
    --------
    symcalc.calculus.Function: named functions of an :class:`Expr`.
    """

    def __repr__(self) -> str:
        """Pretty string representation of the expression."""
        return self.eval_repr()

    def __str__(self) -> str:
        """Pretty string representation of the expression."""
        return self.eval_repr()

    def _sympy_(self) -> Any:
        """Support SymPy's ``sympify`` function."""
        return self.to_sympy()

    def __call__(self, *args: Expressifiable) -> Expr:
        """Call this Expr as a function e.g. ``Sin(x)``."""
        args_expr = [expressify(arg) for arg in args]
        _check_args(self, args_expr)
        args_rep = [arg.rep for arg in args_expr]
        return Expr(self.rep(*args_rep))

    def __pos__(self) -> Expr:
        """+Expr -> Expr."""
        return self

    def __neg__(self) -> Expr:
        """-Expr -> Expr."""
        return Product(negone, self)

    @expressify_other
    def __add__(self, other: Expr) -> Expr:
        """Expr + Expr -> Expr."""
        return Sum(self, other)

    @expressify_other
    def __radd__(self, other: Expr) -> Expr:
        """Expr + Expr -> Expr."""
        return Sum(other, self)

    @expressify_other
    def __sub__(self, other: Expr) -> Expr:
        """Expr - Expr -> Expr."""
        return Sum(self, Product(negone, other))

    @expressify_other
    def __rsub__(self, other: Expr) -> Expr:
        """Expr - Expr -> Expr."""
        return Sum(other, Product(negone, self))

    @expressify_other
    def __mul__(self, other: Expr) -> Expr:
        """Expr * Expr -> Expr."""
        return Product(self, other)

    @expressify_other
    def __rmul__(self, other: Expr) -> Expr:
        """Expr * Expr -> Expr."""
        return Product(other, self)

    @expressify_other
    def __truediv__(self, other: Expr) -> Expr:
        """Expr / Expr -> Expr."""
        return Product(self, Power(other, negone))

    @expressify_other
    def __rtruediv__(self, other: Expr) -> Expr:
        """Expr / Expr -> Expr."""
        return Product(other, Power(self, negone))

    @expressify_other
    def __pow__(self, other: Expr) -> Expr:
        """Expr ** constant -> Expr."""
        return Power(self, other)

    def evaluate(self, x: float) -> float:
        """Evaluate the expression as a 64-bit ``float`` at ``x``.

        >>> from symcalc.calculus import Variable, Ln, Power
        >>> Ln(Variable()).evaluate(1.0)
        0.0

        Domain errors are not raised. As in IEEE 754 arithmetic they give
        ``nan`` or ``inf``:

        >>> Ln(Variable()).evaluate(-1.0)
        nan
        >>> Power(Variable(), -1).evaluate(0.0)
        inf

        Integers too large for a ``float`` are taken as ``inf`` or ``-inf``:

        >>> Variable().evaluate(10**400)
        inf
        """
        try:
            xval = float(x)
        except OverflowError:
            xval = math.inf if x > 0 else -math.inf
        return eval_f64(self, {_x: xval})

    def eval_repr(self) -> str:
        """Pretty string e.g. "(sin(x) + 1)"."""
        return eval_repr(self)

    def to_string(self) -> str:
        """Fully parenthesised infix form of the expression.

        >>> from symcalc.calculus import Variable, Sum, Power, Exp
        >>> Exp(Sum(Power(Variable(), 0.5), 1)).to_string()
        'exp(((x)^0.5 + 1))'
        """
        return self.eval_repr()

    def derivative(self) -> Expr:
        """Differentiate with respect to the variable ``x``.

        >>> from symcalc.calculus import Variable, Product, Constant, Ln
        >>> x = Variable()
        >>> Product(Constant(2), x).derivative()
        ((0 * x) + (2 * 1))
        >>> Ln(x).derivative()
        (1 * (x)^-1)

        No simplification is done so repeated differentiation gives rapidly
        growing expressions. See :meth:`count_ops_tree`.

        Notes
        -----
        The algorithm is *forward accumulation* as used in the automatic
        differentiation literature. Every distinct subexpression is
        differentiated once and no recursion is used.

        See Also
        --------
        symcalc.core.differentiate.diff_forward
        """
        return diff(self, _x)

    def clone(self) -> Expr:
        """Duplicate the expression.

        The expression is rebuilt from its leaves. Expressions are immutable
        and interned so the duplicate is the same object as the original:

        >>> from symcalc.calculus import Variable, Sin
        >>> e = Sin(Variable())
        >>> e.clone() == e
        True
        """
        return Expr(rebuild(self.rep))

    def to_sympy(self) -> Any:
        """Convert to a SymPy expression.

        >>> # xdoctest: +REQUIRES(module:sympy)
        >>> from symcalc.calculus import Variable, Sin
        >>> Sin(Variable()).to_sympy()
        sin(x)

        See Also
        --------
        from_sympy
        """
        from symcalc.calculus.sympy_conversions import to_sympy

        return to_sympy(self)

    @classmethod
    def from_sympy(cls, expr: Any) -> Expr:
        """Create an ``Expr`` from a SymPy expression.

        >>> # xdoctest: +REQUIRES(module:sympy)
        >>> import sympy
        >>> from symcalc.calculus import Expr
        >>> Expr.from_sympy(sympy.sin(sympy.Symbol('x')))
        sin(x)

        See Also
        --------
        to_sympy
        """
        from symcalc.calculus.sympy_conversions import from_sympy

        return from_sympy(expr)

    def count_ops_tree(self) -> int:
        """Count operations in ``Expr`` following tree representation.

        See :meth:`count_ops_graph` for an explanation.
        """
        return count_ops_tree(self)

    def count_ops_graph(self) -> int:
        """Count operations in ``Expr`` following graph representation.

        The number of operations in the *graph* representation of an expression
        is equal to the number of distinct subexpressions it has. By contrast
        the number of operations in the *tree* representation is equal to the
        number of subexpressions **counted with their multiplicity**.

        Derivatives repeat subexpressions of the original expression many
        times. Since subexpressions are shared the memory needed grows with
        the size of the graph rather than the tree:

        >>> from symcalc.calculus import Variable, Sin
        >>> expr = Sin(Sin(Sin(Variable())))
        >>> d3 = expr.derivative().derivative().derivative()
        >>> d3.count_ops_graph() < d3.count_ops_tree()
        True

        See Also
        --------
        count_ops_tree
        """
        return len(topological_sort(self.rep))


def _check_args(head: Expr, args: Sequence[Expr]) -> None:
    """Check the arguments of a call to one of the known heads."""
    nargs = _nargs.get(head.rep)
    if nargs is None:
        raise TypeError(f"{head} cannot be called")
    if len(args) != nargs:
        raise TypeError(f"{head} takes {nargs} argument(s) but {len(args)} given")
    if head is Power and not Constant.is_type_of(args[1]):
        raise TypeError("The exponent of Power should be a constant.")


eval_f64 = SymEvaluator[float]("eval_f64")
eval_repr = SymEvaluator[str]("eval_repr")

Constant = Expr.new_atom("Constant", float)
Symbol = Expr.new_atom("Symbol", str)
Operator = Expr.new_atom("Operator", str)

zero = Constant(0)
one = Constant(1)
negone = Constant(-1)

_x = Symbol("x")


def Variable() -> Expr:
    """The free variable ``x``.

    >>> from symcalc.calculus import Variable
    >>> Variable()
    x
    >>> Variable().evaluate(3.0)
    3.0
    """
    return _x


Sum = Operator("Sum")
Product = Operator("Product")
Power = Operator("Power")
Sin = Operator("sin")
Cos = Operator("cos")
Exp = Operator("exp")
Ln = Operator("ln")

# Only these heads can be called.
_nargs = {
    Sum.rep: 2,
    Product.rep: 2,
    Power.rep: 2,
    Sin.rep: 1,
    Cos.rep: 1,
    Exp.rep: 1,
    Ln.rep: 1,
}

#
# Every leaf counts as one and every node as one plus its arguments.
#
count_ops_tree = SymEvaluator[int]("count_ops_tree")
count_ops_tree.add_leaf_fallback(lambda leaf: 1)
count_ops_tree.add_op_fallback(lambda head, counts: 1 + sum(counts))

#
# Differentiation.
#

diff = SymDifferentiator(Expr, zero=zero, one=one)


def _diff_sum(args: Sequence[Expr], diff_args: Sequence[Expr]) -> Expr:
    dleft, dright = diff_args
    return Sum(dleft, dright)


def _diff_product(args: Sequence[Expr], diff_args: Sequence[Expr]) -> Expr:
    left, right = args
    dleft, dright = diff_args
    return Sum(Product(dleft, right), Product(left, dright))


def _diff_power(args: Sequence[Expr], diff_args: Sequence[Expr]) -> Expr:
    # The exponent is a constant so its derivative is never used.
    base, exponent = args
    dbase = diff_args[0]
    e = exponent.rep.value.value
    return Product(Product(Constant(e), Power(base, e - 1)), dbase)


def _diff_sin(args: Sequence[Expr], diff_args: Sequence[Expr]) -> Expr:
    return Product(Cos(args[0]), diff_args[0])


def _diff_cos(args: Sequence[Expr], diff_args: Sequence[Expr]) -> Expr:
    return Product(Product(negone, Sin(args[0])), diff_args[0])


def _diff_exp(args: Sequence[Expr], diff_args: Sequence[Expr]) -> Expr:
    return Product(Exp(args[0]), diff_args[0])


def _diff_ln(args: Sequence[Expr], diff_args: Sequence[Expr]) -> Expr:
    [arg] = args
    [darg] = diff_args
    return Product(darg, Power(arg, negone))


diff.add_rule(Sum, _diff_sum)
diff.add_rule(Product, _diff_product)
diff.add_rule(Power, _diff_power)
diff.add_rule(Sin, _diff_sin)
diff.add_rule(Cos, _diff_cos)
diff.add_rule(Exp, _diff_exp)
diff.add_rule(Ln, _diff_ln)
