"""Evaluation and printing rules for the expression heads."""
from symcalc.core.f64 import (
    f64_add,
    f64_cos,
    f64_exp,
    f64_log,
    f64_mul,
    f64_pow,
    f64_sin,
)
from symcalc.calculus.expr import (
    Constant,
    Cos,
    Exp,
    Ln,
    Operator,
    Power,
    Product,
    Sin,
    Sum,
    Symbol,
    eval_f64,
    eval_repr,
)


# ------------------------------------------------------------------------- #
#                                                                           #
#     eval_f64: 64 bit floating point evaluation.                           #
#                                                                           #
# ------------------------------------------------------------------------- #

eval_f64.add_atom(Constant, float)
eval_f64.add_op(Sum, f64_add)
eval_f64.add_op(Product, f64_mul)
eval_f64.add_op(Power, f64_pow)
eval_f64.add_op(Sin, f64_sin)
eval_f64.add_op(Cos, f64_cos)
eval_f64.add_op(Exp, f64_exp)
eval_f64.add_op(Ln, f64_log)

# ------------------------------------------------------------------------- #
#                                                                           #
#     eval_repr: Pretty string representation                               #
#                                                                           #
# ------------------------------------------------------------------------- #

#
# Numbers are printed like C's "%g" (6 significant digits) and the binary
# operators are always parenthesised. Files written by symcalc.calculus.persist
# depend on this exact form.
#
eval_repr.add_atom(Constant, lambda v: f"{v:g}")
eval_repr.add_atom(Symbol, str)
eval_repr.add_atom(Operator, str)
eval_repr.add_op(Sum, lambda left, right: f"({left} + {right})")
eval_repr.add_op(Product, lambda left, right: f"({left} * {right})")
eval_repr.add_op(Power, lambda b, e: f"({b})^{e}")
eval_repr.add_op_fallback(lambda head, args: f'{head}({", ".join(args)})')
