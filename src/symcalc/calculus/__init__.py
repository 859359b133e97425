"""Expressions in one variable and numerical calculus with them."""
from __future__ import annotations

import symcalc.calculus.rules  # noqa

from .exceptions import (
    CalculusError,
    DerivativeTooSmallError,
    DidNotConvergeError,
    ExpressifyError,
    FormatError,
    InvalidArgumentError,
    RootFindingError,
)
from .expr import (
    Constant,
    Cos,
    Exp,
    Expr,
    Ln,
    Power,
    Product,
    Sin,
    Sum,
    Variable,
    diff,
    expressify,
    negone,
    one,
    zero,
)
from .function import Function
from .persist import (
    export_tabulated_data,
    read_function_header,
    read_tabulated_data,
    save_function,
)

__all__ = [
    "expressify",
    "diff",
    "Expr",
    "Function",
    "Constant",
    "Variable",
    "Sum",
    "Product",
    "Power",
    "Sin",
    "Cos",
    "Exp",
    "Ln",
    "one",
    "zero",
    "negone",
    "save_function",
    "read_function_header",
    "export_tabulated_data",
    "read_tabulated_data",
    "CalculusError",
    "ExpressifyError",
    "InvalidArgumentError",
    "RootFindingError",
    "DerivativeTooSmallError",
    "DidNotConvergeError",
    "FormatError",
]
