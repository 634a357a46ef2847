# Copyright (C) 2025 Gil Benezer
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Nonlinear Solver - Damped Newton with Line Search

Finds x such that n residual functions vanish simultaneously, using only
function evaluations:

1. Newton direction: solve J(x)·d = -F(x), with J assembled row by row
   from each residual's finite-difference gradient.
2. Line minimization: choose the step length k minimizing the
   discrepancy D(x + k·d) = Σ F_i(x + k·d)².
3. Update x ← x + k·d, stop once ||d||_∞ < eps.

The line minimization first doubles a trial length while the discrepancy
keeps improving, then refines around t = 1 with a one-dimensional
step-halving descent (``gradient_descent``).

Non-convergence is silent in ``solve``: the last iterate is returned.
``solve_detailed`` reports the same iterate together with a success flag.
"""

from typing import Sequence, Union

import numpy as np

from ..functions.scalar_function import (
    FINITE_DIFFERENCE_STEP,
    ScalarFunction,
    as_scalar_function,
)
from ..types.core import ArrayLike, JacobianMatrix, ScalarCallable, StateVector, UnaryFunction
from ..types.trajectories import RootFindingResult
from .linear_solver import solve_linear_system

DEFAULT_TOLERANCE = 1e-6
DEFAULT_MAX_ITERATIONS = 1000
LINE_SEARCH_PRECISION = 1e-6
LINE_SEARCH_INITIAL_STEP = 0.5
BRACKET_GROWTH = 2.0


def infinity_norm(x: ArrayLike) -> float:
    """Largest absolute component of ``x``."""
    return float(np.max(np.abs(np.asarray(x, dtype=float))))


def _unary_derivative(f: UnaryFunction, t: float) -> float:
    return (f(t + FINITE_DIFFERENCE_STEP) - f(t)) / FINITE_DIFFERENCE_STEP


def gradient_descent(
    f: Union[UnaryFunction, ScalarFunction],
    x0: float,
    initial_step: float,
    precision: float,
) -> float:
    """
    Find a rough minimum of a function of one real argument.

    Hill-climbing with step halving: from the best point found so far,
    try one step downhill (direction given by the forward-difference
    derivative at that point). If the trial improves on the best value it
    becomes the new best point and the derivative is recomputed there;
    otherwise the step is halved and the point stays put. Stops when the
    step drops below ``precision``.

    Parameters
    ----------
    f : callable or ScalarFunction
        f(t) -> float, or a ScalarFunction of a length-1 vector
    x0 : float
        Starting point
    initial_step : float
        First trial step length
    precision : float
        Smallest step length tried

    Returns
    -------
    float
        Best point found

    Examples
    --------
    >>> gradient_descent(lambda t: (t - 3.0) ** 2, 0.0, 1.0, 1e-6)  # ≈ 3.0
    """
    if isinstance(f, ScalarFunction):
        scalar_function = f
        f = lambda t: scalar_function.calculate(np.array([t]))  # noqa: E731

    x = float(x0)
    best = f(x)
    derivative = _unary_derivative(f, x)
    step = initial_step

    while step > precision:
        trial = x + step if derivative < 0 else x - step
        value = f(trial)
        if value < best:
            best = value
            x = trial
            derivative = _unary_derivative(f, x)
        else:
            step /= 2

    return x


class EquationSystem:
    """
    System of n nonlinear equations F_i(x) = 0 in n unknowns.

    Parameters
    ----------
    functions : Sequence[ScalarFunction or callable]
        Residuals; their number must equal the length of the unknown vector

    Examples
    --------
    >>> # x² + y² = 4, x = y
    >>> system = EquationSystem([
    ...     lambda v: v[0] ** 2 + v[1] ** 2 - 4.0,
    ...     lambda v: v[0] - v[1],
    ... ])
    >>> system.solve(np.array([1.0, 0.5]))  # ≈ [1.41421356, 1.41421356]
    """

    def __init__(self, functions: Sequence[Union[ScalarFunction, ScalarCallable]]):
        self.functions = tuple(as_scalar_function(f) for f in functions)
        self.n = len(self.functions)
        if self.n == 0:
            raise ValueError("EquationSystem requires at least one residual function")

    def residuals(self, x: ArrayLike) -> np.ndarray:
        """Vector of residual values F(x)."""
        x = np.asarray(x, dtype=float)
        return np.array([f.calculate(x) for f in self.functions])

    def discrepancy(self, x: ArrayLike) -> float:
        """Sum of squared residuals at ``x``; zero exactly at a root."""
        x = np.asarray(x, dtype=float)
        total = 0.0
        for f in self.functions:
            value = f.calculate(x)
            total += value * value
        return total

    def discrepancy_along(self, x0: ArrayLike, direction: ArrayLike, t: float) -> float:
        """Discrepancy at x0 + t·direction."""
        x0 = np.asarray(x0, dtype=float)[: self.n]
        direction = np.asarray(direction, dtype=float)[: self.n]
        return self.discrepancy(x0 + t * direction)

    def newton_direction(self, x: ArrayLike) -> StateVector:
        """
        Solve J(x)·d = -F(x) for the Newton direction d.

        The Jacobian rows are the residuals' finite-difference gradients.
        The result is a direction, not a step: its length is chosen by
        ``line_minimum``.
        """
        x = np.asarray(x, dtype=float)
        b = np.empty(self.n)
        jacobian: JacobianMatrix = np.empty((self.n, x.shape[0]))
        for i, f in enumerate(self.functions):
            b[i] = -f.calculate(x)
            jacobian[i] = f.gradient(x)
        return solve_linear_system(jacobian, b)

    def line_minimum(self, x: ArrayLike, direction: ArrayLike) -> float:
        """
        Step length t roughly minimizing the discrepancy along a ray.

        Bracketing: starting from t = 1, keep doubling t while the
        discrepancy at the new t is no worse than the best seen so far.
        Refinement: gradient_descent on t ↦ D(x + t·direction) starting at
        t = 1 with initial step 0.5.
        """
        x = np.asarray(x, dtype=float).copy()
        direction = np.asarray(direction, dtype=float).copy()

        # Every step length reaches the same point
        if not np.any(direction):
            return 1.0

        best = min(self.discrepancy(x), self.discrepancy_along(x, direction, 1.0))
        r = 1.0
        while True:
            r *= BRACKET_GROWTH
            dr = self.discrepancy_along(x, direction, r)
            best = min(best, dr)
            if not dr <= best:
                break

        return gradient_descent(
            lambda t: self.discrepancy_along(x, direction, t),
            1.0,
            LINE_SEARCH_INITIAL_STEP,
            LINE_SEARCH_PRECISION,
        )

    def solve_detailed(
        self,
        x0: ArrayLike,
        eps: float = DEFAULT_TOLERANCE,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
    ) -> RootFindingResult:
        """
        Damped Newton iteration with diagnostics.

        Parameters
        ----------
        x0 : ArrayLike
            Initial guess (n,)
        eps : float
            Stop once the Newton direction's infinity norm is below eps
        max_iterations : int
            Iteration cap

        Returns
        -------
        RootFindingResult
            TypedDict with the last iterate and convergence information
        """
        x = np.array(x0, dtype=float)
        success = False
        iterations = 0

        for iterations in range(1, max_iterations + 1):
            direction = self.newton_direction(x)
            k = self.line_minimum(x, direction)
            x = x + k * direction
            if infinity_norm(direction) < eps:
                success = True
                break

        if success:
            message = f"Converged in {iterations} iterations"
        else:
            message = f"Did not converge within {max_iterations} iterations"

        result: RootFindingResult = {
            "x": x,
            "success": success,
            "iterations": iterations,
            "discrepancy": self.discrepancy(x),
            "message": message,
        }
        return result

    def solve(
        self,
        x0: ArrayLike,
        eps: float = DEFAULT_TOLERANCE,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
    ) -> StateVector:
        """
        Find a root of the system starting from ``x0``.

        Returns the last iterate whether or not the iteration converged;
        use ``solve_detailed`` to tell the two cases apart.
        """
        return self.solve_detailed(x0, eps, max_iterations)["x"]

    def __repr__(self) -> str:
        return f"EquationSystem(n={self.n})"


__all__ = [
    "DEFAULT_TOLERANCE",
    "DEFAULT_MAX_ITERATIONS",
    "LINE_SEARCH_PRECISION",
    "LINE_SEARCH_INITIAL_STEP",
    "BRACKET_GROWTH",
    "infinity_norm",
    "gradient_descent",
    "EquationSystem",
]
