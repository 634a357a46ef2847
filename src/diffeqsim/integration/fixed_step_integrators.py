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
Fixed-Step Integrators

Implements the time-stepping methods of the kernel:
- Explicit Euler (1st order)
- Implicit Euler (1st order, A-stable, Newton solve per step)
- RK4 (4th order)
- Adams-Bashforth (4-step explicit multistep, RK4 bootstrap)

All methods work on the augmented state [x_0, ..., x_{n-1}, t] and never
modify the array they are given.
"""

import warnings
from collections import deque
from typing import TYPE_CHECKING, Optional, Tuple

import numpy as np

from ..functions.scalar_function import ScalarFunction
from ..solvers.nonlinear_solver import (
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_TOLERANCE,
    EquationSystem,
)
from ..types.core import AugmentedState, ScalarLike, StateVector, TimePoints, Trajectory
from .integrator_base import IntegratorBase

if TYPE_CHECKING:
    from ..systems.differential_equation_system import DifferentialEquationSystem


def _augment(state: StateVector, t: float) -> AugmentedState:
    return np.append(state, t)


class ExplicitEulerIntegrator(IntegratorBase):
    """
    Explicit Euler integrator (Forward Euler).

    First-order method: x_{k+1} = x_k + dt * f(x_k, t_k)

    Characteristics:
    - Order: 1 (error ∝ dt)
    - Stability: Conditionally stable (small dt required)
    - Function evaluations: 1 per step

    Examples
    --------
    >>> integrator = ExplicitEulerIntegrator(system, dt=0.01)
    >>> x_next = integrator.step(np.array([1.0, 0.0, 0.0]))
    """

    def step(self, x: AugmentedState, dt: Optional[ScalarLike] = None) -> AugmentedState:
        dt = self.dt if dt is None else float(dt)
        x = np.asarray(x, dtype=float)
        n = self.system.nx

        dx = self._evaluate_dynamics(x) * dt

        x_next = x.copy()
        x_next[:n] += dx
        x_next[n] += dt

        self._stats["total_steps"] += 1
        return x_next

    @property
    def name(self) -> str:
        return "Explicit Euler"


class ImplicitEulerResidual(ScalarFunction):
    """
    Residual j of one backward Euler step, as a function of the increment.

        g_j(Δ) = Δ_j - f_j(x + Δ, t) * dt

    The state is copied and frozen at construction, so every evaluation
    during the step's Newton iterations sees the same [x, t]. The
    right-hand side is evaluated at the step's start time t.

    ``evaluations`` counts calls to the wrapped right-hand side.
    """

    def __init__(self, rhs: ScalarFunction, index: int, state: AugmentedState, dt: float):
        self.rhs = rhs
        self.index = index
        self.dt = dt
        self.state = np.array(state, dtype=float)
        self.state.setflags(write=False)
        self.nx = self.state.shape[0] - 1
        self.evaluations = 0

    def calculate(self, dx: np.ndarray) -> float:
        n = self.nx
        arg = self.state.copy()
        arg[:n] = self.state[:n] + dx[:n]
        self.evaluations += 1
        return dx[self.index] - self.rhs.calculate(arg) * self.dt

    @property
    def name(self) -> str:
        return f"implicit_euler_residual[{self.index}]"


class ImplicitEulerIntegrator(IntegratorBase):
    """
    Implicit Euler integrator (Backward Euler).

    First-order method: x_{k+1} = x_k + Δ where Δ solves

        Δ - dt * f(x_k + Δ, t_k) = 0

    The nonlinear system is solved with the damped Newton EquationSystem,
    warm-started from the explicit Euler increment dt * f(x_k, t_k).

    Characteristics:
    - Order: 1
    - Stability: A-stable, stays bounded on stiff linear decay where
      explicit Euler diverges
    - Cost: one Newton solve (finite-difference Jacobian) per step

    Options
    -------
    eps : float
        Newton stopping tolerance (default 1e-6)
    max_iterations : int
        Newton iteration cap (default 1000)

    Notes
    -----
    Every right-hand-side call made by the Newton solve is counted: the
    residuals' scalar calls are converted to vector evaluations (divided
    by n) and added to ``nfev``/``total_fev`` on top of the warm start.

    A step whose Newton solve hits the iteration cap still uses the last
    iterate. Such steps are counted in ``get_stats()['nonconverged_steps']``
    and make ``integrate`` report success=False with a RuntimeWarning.
    """

    def __init__(self, system: "DifferentialEquationSystem", dt: ScalarLike, **options):
        super().__init__(system, dt, **options)
        self.eps = options.get("eps", DEFAULT_TOLERANCE)
        self.max_iterations = options.get("max_iterations", DEFAULT_MAX_ITERATIONS)

        self._stats["newton_iterations"] = 0
        self._stats["nonconverged_steps"] = 0
        self._call_failures = 0

    def step(self, x: AugmentedState, dt: Optional[ScalarLike] = None) -> AugmentedState:
        dt = self.dt if dt is None else float(dt)
        x = np.array(x, dtype=float)
        n = self.system.nx

        guess = self._evaluate_dynamics(x) * dt
        residuals = [
            ImplicitEulerResidual(f, j, x, dt) for j, f in enumerate(self.system.functions)
        ]
        root = EquationSystem(residuals).solve_detailed(guess, self.eps, self.max_iterations)

        # Every residual is evaluated equally often
        self._stats["total_fev"] += sum(r.evaluations for r in residuals) // n
        self._stats["newton_iterations"] += root["iterations"]
        if not root["success"]:
            self._stats["nonconverged_steps"] += 1
            self._call_failures += 1

        x_next = x.copy()
        x_next[:n] += root["x"]
        x_next[n] += dt

        self._stats["total_steps"] += 1
        return x_next

    def _integrate_steps(self, x0: AugmentedState, steps: int) -> Tuple[TimePoints, Trajectory]:
        self._call_failures = 0
        result = super()._integrate_steps(x0, steps)
        if self._call_failures:
            warnings.warn(self._failure_message(), RuntimeWarning)
        return result

    def _failure_message(self) -> str:
        return (
            f"{self.name}: Newton solve did not converge within "
            f"{self.max_iterations} iterations on {self._call_failures} step(s)"
        )

    def _status(self) -> Tuple[bool, str]:
        if self._call_failures:
            return False, self._failure_message()
        return super()._status()

    @property
    def name(self) -> str:
        return "Implicit Euler"


class RK4Integrator(IntegratorBase):
    """
    Classical 4th-order Runge-Kutta integrator.

    Algorithm:
        k0 = f(x_k, t_k)
        k1 = f(x_k + dt/2 * k0, t_k + dt/2)
        k2 = f(x_k + dt/2 * k1, t_k + dt/2)
        k3 = f(x_k + dt * k2, t_k + dt)
        x_{k+1} = x_k + dt * (k0 + 2*k1 + 2*k2 + k3) / 6

    Characteristics:
    - Order: 4 (error ∝ dt⁴)
    - Function evaluations: 4 per step

    Examples
    --------
    >>> integrator = RK4Integrator(system, dt=0.001)
    >>> result = integrator.integrate(np.array([0.0, 1.0, 0.0]), steps=3141)
    """

    def step(self, x: AugmentedState, dt: Optional[ScalarLike] = None) -> AugmentedState:
        dt = self.dt if dt is None else float(dt)
        x = np.asarray(x, dtype=float)
        n = self.system.nx
        state, t = x[:n], x[n]

        k0 = self._evaluate_dynamics(x)
        k1 = self._evaluate_dynamics(_augment(state + k0 * dt / 2, t + dt / 2))
        k2 = self._evaluate_dynamics(_augment(state + k1 * dt / 2, t + dt / 2))
        k3 = self._evaluate_dynamics(_augment(state + k2 * dt, t + dt))

        x_next = x.copy()
        x_next[:n] = state + dt * (k0 + 2 * k1 + 2 * k2 + k3) / 6
        x_next[n] += dt

        self._stats["total_steps"] += 1
        return x_next

    @property
    def name(self) -> str:
        return "RK4"


class AdamsBashforthIntegrator(RK4Integrator):
    """
    4-step explicit Adams-Bashforth-type multistep integrator.

    With f_{k-3}, ..., f_k the right-hand side at the four most recent
    states, each step computes

        x_{k+1} = x_k + (f_{k-3} - 5 f_{k-2} + 19 f_{k-1} + 9 f_k) * dt / 24

    These exact coefficients are part of the method's contract.

    Bootstrap
    ---------
    The formula needs four prior states, so the first three steps are RK4
    steps. Runs of three steps or fewer are pure RK4. The bootstrap states
    are stamped with times t0 + dt, t0 + 2dt, t0 + 3dt.

    ``step`` is inherited from RK4Integrator: a single step without
    history is a bootstrap step.
    """

    HISTORY_LENGTH = 4

    def _integrate_steps(self, x0: AugmentedState, steps: int) -> Tuple[TimePoints, Trajectory]:
        bootstrap_steps = self.HISTORY_LENGTH - 1
        if steps <= bootstrap_steps:
            return super()._integrate_steps(x0, steps)

        dt = self.dt
        n = self.system.nx
        t_points = np.empty(steps)
        x_traj = np.empty((steps, n))

        t_boot, x_boot = super()._integrate_steps(x0, bootstrap_steps)
        t_points[:bootstrap_steps] = t_boot
        x_traj[:bootstrap_steps] = x_boot

        t0 = x0[n]
        history = [x0] + [_augment(x_boot[i], t0 + (i + 1) * dt) for i in range(bootstrap_steps)]
        derivatives = deque(
            (self._evaluate_dynamics(s) for s in history), maxlen=self.HISTORY_LENGTH
        )

        x = history[-1].copy()
        for i in range(bootstrap_steps, steps):
            d0, d1, d2, d3 = derivatives
            x[:n] = x[:n] + (d0 - 5 * d1 + 19 * d2 + 9 * d3) * dt / 24
            x[n] += dt

            x_traj[i] = x[:n]
            t_points[i] = x[n]
            self._stats["total_steps"] += 1

            if i < steps - 1:
                derivatives.append(self._evaluate_dynamics(x))

        return t_points, x_traj

    @property
    def name(self) -> str:
        return "Adams-Bashforth 4"


__all__ = [
    "ExplicitEulerIntegrator",
    "ImplicitEulerResidual",
    "ImplicitEulerIntegrator",
    "RK4Integrator",
    "AdamsBashforthIntegrator",
]
