"""Named functions of one variable and numerical analysis of them."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

from symcalc.calculus.exceptions import (
    DerivativeTooSmallError,
    DidNotConvergeError,
    InvalidArgumentError,
)
from symcalc.calculus.expr import Expr


__all__ = ["Function"]


DEFAULT_NAME = "f"
DERIVATIVE_MARKER = "'"
DEFAULT_STEPS = 1000
DEFAULT_TOLERANCE = 1e-6
DEFAULT_MAX_ITERATIONS = 100
DEFAULT_EPSILON = 1e-6


@dataclass(frozen=True)
class Function:
    """A named :class:`Expr` with numerical methods.

    >>> from symcalc.calculus import Function, Variable, Power, Sum
    >>> x = Variable()
    >>> f = Function(Sum(Power(x, 2), -4))
    >>> f
    f(x) = ((x)^2 + -4)
    >>> f(3)
    5.0

    Every operation returns a new value and never modifies the
    :class:`Function` itself. Derivatives are named with a trailing tick:

    >>> f.derivative()
    f'(x) = (((2 * (x)^1) * 1) + 0)
    >>> f.nth_derivative(2).name
    "f''"

    Numerical methods use the exact symbolic derivative where they need one:

    >>> round(f.find_root(3.0), 6)
    2.0
    """

    expression: Expr
    name: str = DEFAULT_NAME

    def __repr__(self) -> str:
        """Show the function as e.g. ``f(x) = sin(x)``."""
        return self.to_string()

    def __str__(self) -> str:
        """Show the function as e.g. ``f(x) = sin(x)``."""
        return self.to_string()

    def __call__(self, x: float) -> float:
        """Short-hand for evaluate."""
        return self.evaluate(x)

    def to_string(self) -> str:
        """Name and expression as in ``f(x) = (x + 1)``."""
        return f"{self.name}(x) = {self.expression.to_string()}"

    def evaluate(self, x: float) -> float:
        """Value of the function at ``x`` (``nan`` or ``inf`` outside its domain)."""
        return self.expression.evaluate(x)

    def derivative(self) -> Function:
        """Symbolic derivative with a derivative marker added to the name."""
        return Function(self.expression.derivative(), self.name + DERIVATIVE_MARKER)

    def nth_derivative(self, n: int) -> Function:
        """Differentiate ``n`` times adding ``n`` derivative markers to the name.

        The zeroth derivative is a copy with the same name.
        """
        if n < 0:
            raise InvalidArgumentError("Derivative order must be non-negative")
        if n == 0:
            return Function(self.expression.clone(), self.name)

        result = self
        for _ in range(n):
            result = result.derivative()
        return result

    def integrate(self, a: float, b: float, steps: int = DEFAULT_STEPS) -> float:
        """Definite integral from ``a`` to ``b`` by the composite trapezoid rule.

        >>> from symcalc.calculus import Function, Variable
        >>> round(Function(Variable()).integrate(0, 2), 6)
        2.0

        There is no adaptive refinement. The accuracy is controlled by the
        number of ``steps``.
        """
        if steps <= 0:
            raise InvalidArgumentError("Steps must be positive")

        h = (b - a) / steps
        total = 0.5 * (self.evaluate(a) + self.evaluate(b))

        for i in range(1, steps):
            total += self.evaluate(a + i * h)

        return total * h

    def limit(self, point: float, epsilon: float = DEFAULT_EPSILON) -> float:
        """Naive one-sided estimate of the limit at ``point``.

        This is only ``evaluate(point + epsilon)``. No attempt is made to check
        that the limit exists.
        """
        return self.evaluate(point + epsilon)

    def taylor_series(self, point: float, terms: int) -> list[float]:
        """Coefficients of the Taylor series about ``point``.

        Coefficient ``i`` is the ``i``-th derivative at ``point`` divided by
        ``i!`` for ``i = 0 .. terms-1``:

        >>> from symcalc.calculus import Function, Exp, Variable
        >>> [round(c, 6) for c in Function(Exp(Variable())).taylor_series(0, 4)]
        [1.0, 1.0, 0.5, 0.166667]
        """
        if terms < 0:
            raise InvalidArgumentError("Number of terms must be non-negative")

        coefficients = []
        current = Function(self.expression.clone(), self.name)
        factorial = 1.0

        for i in range(terms):
            if i > 0:
                factorial *= i
            coefficients.append(current.evaluate(point) / factorial)

            if i < terms - 1:
                current = current.derivative()

        return coefficients

    def series_sum(self, start: int, end: int, term: Callable[[int], float]) -> float:
        """Sum of ``term(n)`` for ``n`` from ``start`` to ``end`` inclusive.

        >>> from symcalc.calculus import Function, Variable
        >>> Function(Variable()).series_sum(1, 4, lambda n: 1 / 2**n)
        0.9375
        """
        return math.fsum(term(n) for n in range(start, end + 1))

    def find_root(
        self,
        initial_guess: float,
        tolerance: float = DEFAULT_TOLERANCE,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
    ) -> float:
        """Find a root by Newton's method starting from ``initial_guess``.

        The derivative used for the Newton steps is the exact symbolic
        derivative. The iteration stops when a step is smaller than
        ``tolerance``.

        Raises
        ------
        DerivativeTooSmallError
            If the absolute value of the derivative at an iterate is less than
            ``tolerance``. A different ``initial_guess`` may help.
        DidNotConvergeError
            If there is no convergence after ``max_iterations`` steps.

        There is no bracketing so the iteration can diverge or converge to a
        root other than the nearest one when ``f`` is far from linear near
        ``initial_guess``.
        """
        deriv = self.derivative()
        x = initial_guess

        for _ in range(max_iterations):
            fx = self.evaluate(x)
            dfx = deriv.evaluate(x)

            if abs(dfx) < tolerance:
                raise DerivativeTooSmallError(
                    f"Derivative too small at x = {x}: {dfx}", x=x, derivative=dfx
                )

            x_new = x - fx / dfx

            if abs(x_new - x) < tolerance:
                return x_new

            x = x_new

        raise DidNotConvergeError(
            f"Root finding did not converge after {max_iterations} iterations",
            x=x,
            iterations=max_iterations,
        )

    def tabulate(self, start: float, end: float, points: int) -> list[tuple[float, float]]:
        """Evenly spaced samples ``(x, f(x))`` from ``start`` to ``end``.

        >>> from symcalc.calculus import Function, Power, Variable
        >>> Function(Power(Variable(), 2)).tabulate(0, 2, 3)
        [(0.0, 0.0), (1.0, 1.0), (2.0, 4.0)]

        At least two points are needed since both ends are always included.
        """
        if points < 2:
            raise InvalidArgumentError("At least two points are needed")

        step = (end - start) / (points - 1)

        result = []
        for i in range(points):
            x = start + i * step
            result.append((x, self.evaluate(x)))

        return result
