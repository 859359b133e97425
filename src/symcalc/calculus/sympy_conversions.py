"""Conversions to and from SymPy expressions.

These are defined in their own module so that SymPy will not imported if it is
not needed.
"""
from __future__ import annotations

from functools import reduce
from typing import Any

import sympy

from symcalc.core.sym import SymEvaluator
from symcalc.calculus.expr import (
    Constant,
    Cos,
    Exp,
    Expr,
    Ln,
    Power,
    Product,
    Sin,
    Sum,
    Symbol,
    Variable,
)


def _sympy_number(value: float) -> Any:
    """Integral values become SymPy Integers so that ``x**2`` is not ``x**2.0``."""
    if value.is_integer():
        return sympy.Integer(int(value))
    return sympy.Float(value)


eval_to_sympy = SymEvaluator[Any]("to_sympy")

eval_to_sympy.add_atom(Constant, _sympy_number)
eval_to_sympy.add_atom(Symbol, sympy.Symbol)
eval_to_sympy.add_op(Sum, sympy.Add)
eval_to_sympy.add_op(Product, sympy.Mul)
eval_to_sympy.add_op(Power, sympy.Pow)
eval_to_sympy.add_op(Sin, sympy.sin)
eval_to_sympy.add_op(Cos, sympy.cos)
eval_to_sympy.add_op(Exp, sympy.exp)
eval_to_sympy.add_op(Ln, sympy.log)


def to_sympy(expr: Expr) -> Any:
    """Convert ``Expr`` to a SymPy expression."""
    return eval_to_sympy(expr)


def from_sympy(expr: sympy.Basic) -> Expr:
    """Convert a SymPy expression to ``Expr``.

    SymPy's n-ary ``Add`` and ``Mul`` are folded from the left into nested
    binary :data:`Sum` and :data:`Product`. The only symbol that can be
    converted is ``x``.
    """
    return _from_sympy_cache(expr, {})


def _from_sympy_cache(expr: sympy.Basic, cache: dict[sympy.Basic, Expr]) -> Expr:
    ret = cache.get(expr)
    if ret is not None:
        return ret
    elif expr.is_Number or expr.is_NumberSymbol:
        ret = Constant(float(expr))  # pyright: ignore
    elif isinstance(expr, sympy.Symbol):
        if expr.name != "x":
            raise NotImplementedError("Cannot convert symbol " + expr.name)
        ret = Variable()
    elif expr.args:
        ret = _from_sympy_cache_args(expr, cache)
    else:
        raise NotImplementedError("Cannot convert " + type(expr).__name__)
    cache[expr] = ret
    return ret


def _from_sympy_cache_args(expr: Any, cache: dict[Any, Expr]) -> Expr:
    args = [_from_sympy_cache(arg, cache) for arg in expr.args]
    if expr.is_Add:
        return reduce(Sum, args)
    elif expr.is_Mul:
        return reduce(Product, args)
    elif isinstance(expr, sympy.exp):
        return Exp(*args)
    elif isinstance(expr, sympy.sin):
        return Sin(*args)
    elif isinstance(expr, sympy.cos):
        return Cos(*args)
    elif expr.is_Pow:
        if not expr.exp.is_Number:
            raise NotImplementedError("Cannot convert non-constant exponent")
        return Power(*args)
    elif isinstance(expr, sympy.log):
        return Ln(*args)
    else:
        raise NotImplementedError("Cannot convert " + type(expr).__name__)
