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
Differential Equation System - First-Order ODE Right-Hand Side

A DifferentialEquationSystem owns n scalar functions

    f_i(x_0, ..., x_{n-1}, t) = dx_i/dt,    i = 0..n-1

and integrates them with any IntegrationMethod. It is the kernel's entry
point for callers: build it from right-hand-side functions, then call
``solve`` (trajectory only) or ``integrate`` (trajectory plus diagnostics).

Each call creates its own integrator; no state is carried between calls.
"""

from typing import Dict, Optional, Sequence, Tuple, Union

import numpy as np
import sympy as sp

from ..functions.scalar_function import ScalarFunction, as_scalar_function
from ..functions.symbolic_function import SymbolicFunction
from ..integration.integration_method import IntegrationMethod
from ..integration.integrator_factory import create_integrator
from ..types.core import ArrayLike, DerivativeVector, ScalarCallable, ScalarLike, Trajectory
from ..types.trajectories import IntegrationResult


class DifferentialEquationSystem:
    """
    System of first-order ODEs dx/dt = f(x, t).

    Parameters
    ----------
    functions : Sequence[ScalarFunction or callable]
        Right-hand sides; functions[i] receives the augmented state
        [x_0, ..., x_{n-1}, t] and returns dx_i/dt

    Raises
    ------
    ValueError
        If no functions are given
    TypeError
        If an entry is neither a ScalarFunction nor callable

    Examples
    --------
    >>> # Linear oscillator: x0' = x1, x1' = -x0
    >>> system = DifferentialEquationSystem([lambda x: x[1], lambda x: -x[0]])
    >>> trajectory = system.solve(
    ...     IntegrationMethod.EXPLICIT_RUNGE_KUTTA,
    ...     x0=[0.0, 1.0, 0.0],  # x0, x1, t0
    ...     dt=0.001,
    ...     steps=3141,
    ... )
    >>> trajectory.shape
    (3141, 2)
    >>> trajectory[-1]  # ≈ [sin(3.141), cos(3.141)]
    """

    def __init__(self, functions: Sequence[Union[ScalarFunction, ScalarCallable]]):
        self._functions = tuple(as_scalar_function(f) for f in functions)
        if not self._functions:
            raise ValueError("DifferentialEquationSystem requires at least one function")

    @classmethod
    def from_symbolic(
        cls,
        expressions: Sequence[Union[sp.Expr, str]],
        state_symbols: Sequence[sp.Symbol],
        time_symbol: Optional[sp.Symbol] = None,
        parameters: Optional[Dict[sp.Symbol, float]] = None,
    ) -> "DifferentialEquationSystem":
        """
        Build a system from SymPy right-hand-side expressions.

        Parameters
        ----------
        expressions : Sequence[sp.Expr or str]
            dx_i/dt for each state symbol, in order
        state_symbols : Sequence[sp.Symbol]
            State variables; their order defines the state layout
        time_symbol : Optional[sp.Symbol]
            Symbol for time, for non-autonomous systems
        parameters : Optional[Dict[sp.Symbol, float]]
            Numeric parameter values

        Raises
        ------
        ValueError
            If the number of expressions and state symbols differ, or an
            expression has unbound symbols

        Examples
        --------
        >>> x, v, t = sp.symbols("x v t")
        >>> k = sp.Symbol("k", positive=True)
        >>> system = DifferentialEquationSystem.from_symbolic(
        ...     [v, -k * x + sp.cos(t)], [x, v], time_symbol=t, parameters={k: 4.0}
        ... )
        """
        if len(expressions) != len(state_symbols):
            raise ValueError(
                f"Got {len(expressions)} expressions for {len(state_symbols)} state symbols"
            )

        symbols = list(state_symbols)
        if time_symbol is not None:
            symbols.append(time_symbol)

        return cls([SymbolicFunction(expr, symbols, parameters) for expr in expressions])

    @property
    def nx(self) -> int:
        """Number of dynamical variables n."""
        return len(self._functions)

    @property
    def functions(self) -> Tuple[ScalarFunction, ...]:
        return self._functions

    def evaluate(self, x: ArrayLike) -> DerivativeVector:
        """
        Right-hand side dx/dt at an augmented state.

        Parameters
        ----------
        x : ArrayLike
            Augmented state (n + 1,)

        Returns
        -------
        np.ndarray
            Derivatives (n,)
        """
        x = np.asarray(x, dtype=float)
        return np.array([f.calculate(x) for f in self._functions])

    def __call__(self, x: ArrayLike) -> DerivativeVector:
        return self.evaluate(x)

    def integrate(
        self,
        method: Union[IntegrationMethod, str],
        x0: ArrayLike,
        dt: ScalarLike,
        steps: int,
        **options,
    ) -> IntegrationResult:
        """
        Integrate and return the trajectory with diagnostics.

        Parameters
        ----------
        method : IntegrationMethod or str
            Time-stepping method
        x0 : ArrayLike
            Initial augmented state: n values followed by the initial time
        dt : float
            Fixed time step (not validated)
        steps : int
            Number of steps
        **options
            Integrator options (eps, max_iterations for implicit Euler)

        Returns
        -------
        IntegrationResult
            t (steps,), x (steps, n) and solver diagnostics
        """
        integrator = create_integrator(method, self, dt, **options)
        return integrator.integrate(x0, steps)

    def solve(
        self,
        method: Union[IntegrationMethod, str],
        x0: ArrayLike,
        dt: ScalarLike,
        steps: int,
        **options,
    ) -> Trajectory:
        """
        Integrate and return the trajectory only.

        Returns
        -------
        np.ndarray
            (steps, n) array; row i is the state after step i + 1, without
            the time slot
        """
        return self.integrate(method, x0, dt, steps, **options)["x"]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(nx={self.nx})"


__all__ = ["DifferentialEquationSystem"]
