import math

from symcalc.core.atom import Atom, AtomType


def test_AtomType() -> None:
    """An AtomType converts values and prints as its name."""
    Constant = AtomType("Constant", float)

    assert repr(Constant) == "Constant"
    assert Constant.typ is float
    assert Constant(3).value == 3.0
    assert type(Constant(3).value) is float
    assert Constant(3).atom_type is Constant


def test_Atom() -> None:
    """Atoms print their value and are interned per AtomType."""
    Constant = AtomType("Constant", float)
    Symbol = AtomType("Symbol", str)
    Name = AtomType("Name", str)

    half = Constant(0.5)
    x = Symbol("x")

    assert type(half) is Atom
    assert str(half) == "0.5"
    assert str(x) == "x"
    assert repr(half) == "Constant(0.5)"
    assert repr(x) == "Symbol('x')"

    assert Constant(0.5) is half
    assert Constant(2) is Constant(2.0)
    assert Constant(2.5) is not half
    assert Name("x") is not x
    assert Name("x") != x


def test_Atom_signed_zero() -> None:
    """0.0 and -0.0 compare equal but are different atoms."""
    Constant = AtomType("Constant", float)

    zero, negzero = Constant(0.0), Constant(-0.0)
    assert zero is not negzero
    assert Constant(-0.0) is negzero
    assert math.copysign(1.0, negzero.value) == -1.0
    assert math.copysign(1.0, zero.value) == 1.0


def test_Atom_nan() -> None:
    """A nan constant can be made and keeps its value."""
    Constant = AtomType("Constant", float)
    assert math.isnan(Constant(math.nan).value)
