import math

from pytest import approx

from symcalc.core.f64 import (
    f64_add,
    f64_cos,
    f64_exp,
    f64_log,
    f64_mul,
    f64_pow,
    f64_sin,
)


def test_f64() -> None:
    """Basic test for the f64 functions."""
    assert f64_add(1.0, 2.0) == 3.0
    assert f64_mul(2.0, 3.0) == 6.0
    assert f64_pow(2.0, 3.0) == 8.0
    assert f64_pow(4.0, 0.5) == 2.0
    assert f64_sin(0.0) == 0.0
    assert f64_cos(1.0) == approx(0.5403023058681398)
    assert f64_exp(1.0) == approx(math.e)
    assert f64_log(math.e) == approx(1.0)
    assert all(
        type(r) is float
        for r in [f64_add(1, 2), f64_mul(1, 2), f64_pow(1, 2), f64_log(1)]
    )


def test_f64_ieee() -> None:
    """Test that domain errors give nan or inf rather than raising."""
    inf = float("inf")
    assert math.isnan(f64_log(-1.0))
    assert f64_log(0.0) == -inf
    assert f64_pow(0.0, -1.0) == inf
    assert math.isnan(f64_pow(-8.0, 1 / 3))
    assert f64_exp(1000.0) == inf
    assert f64_exp(-inf) == 0.0
    assert math.isnan(f64_sin(inf))
    assert math.isnan(f64_cos(inf))
    assert math.isnan(f64_mul(0.0, inf))
    assert math.isnan(f64_add(inf, -inf))
