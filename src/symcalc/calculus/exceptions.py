"""Exception types raised in symcalc.calculus."""
from __future__ import annotations

from symcalc.core.exceptions import SymCalcError


class CalculusError(SymCalcError):
    """Base class for all exceptions in symcalc.calculus."""

    pass


class ExpressifyError(CalculusError, TypeError):
    """Raised when an object cannot be expressified."""

    pass


class InvalidArgumentError(CalculusError, ValueError):
    """Raised when a parameter is structurally invalid.

    Examples are a negative derivative order, a non-positive number of
    integration steps or fewer than two tabulation points.
    """

    pass


class RootFindingError(CalculusError, ArithmeticError):
    """Base for exceptions indicating failure of Newton iteration.

    :ivar x: The last iterate when the iteration was stopped.
    """

    def __init__(self, msg: str, x: float):
        super().__init__(msg)
        self.x = x


class DerivativeTooSmallError(RootFindingError):
    """Raised when the derivative at an iterate is smaller than the tolerance.

    Retrying with a different initial guess may help.

    :ivar derivative: The value of the derivative at :attr:`x`.
    """

    def __init__(self, msg: str, x: float, derivative: float):
        super().__init__(msg, x)
        self.derivative = derivative


class DidNotConvergeError(RootFindingError):
    """Raised when the iteration limit is reached without convergence.

    Increasing the number of iterations or the tolerance may help.

    :ivar iterations: The number of iterations that were performed.
    """

    def __init__(self, msg: str, x: float, iterations: int):
        super().__init__(msg, x)
        self.iterations = iterations


class FormatError(CalculusError, ValueError):
    """Raised when a saved function or data file cannot be read."""

    pass
