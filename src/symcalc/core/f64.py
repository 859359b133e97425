"""Elementary functions for 64-bit floating point.

These follow IEEE 754 semantics rather than raising like the functions in the
:mod:`math` module: a domain error gives ``nan`` and an overflow or pole gives
``inf``.

>>> from symcalc.core.f64 import f64_log, f64_pow
>>> f64_log(-1.0)
nan
>>> f64_log(0.0)
-inf
>>> f64_pow(0.0, -1.0)
inf
"""
from __future__ import annotations

import numpy as np


__all__ = [
    "f64_add",
    "f64_mul",
    "f64_pow",
    "f64_sin",
    "f64_cos",
    "f64_exp",
    "f64_log",
]


def f64_add(a: float, b: float) -> float:
    """IEEE 754 addition."""
    with np.errstate(all="ignore"):
        return float(np.add(a, b))


def f64_mul(a: float, b: float) -> float:
    """IEEE 754 multiplication e.g. ``0*inf -> nan``."""
    with np.errstate(all="ignore"):
        return float(np.multiply(a, b))


def f64_pow(base: float, exponent: float) -> float:
    """C ``pow`` e.g. ``(-8)**(1/3) -> nan`` and ``0**-1 -> inf``."""
    with np.errstate(all="ignore"):
        return float(np.power(np.float64(base), np.float64(exponent)))


def f64_sin(a: float) -> float:
    """Sine, ``nan`` for infinite arguments."""
    with np.errstate(all="ignore"):
        return float(np.sin(a))


def f64_cos(a: float) -> float:
    """Cosine, ``nan`` for infinite arguments."""
    with np.errstate(all="ignore"):
        return float(np.cos(a))


def f64_exp(a: float) -> float:
    """Exponential, ``inf`` on overflow."""
    with np.errstate(all="ignore"):
        return float(np.exp(a))


def f64_log(a: float) -> float:
    """Natural logarithm, ``-inf`` at zero and ``nan`` for negative values."""
    with np.errstate(all="ignore"):
        return float(np.log(a))
