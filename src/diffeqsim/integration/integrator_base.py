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
Integrator Base - Abstract Interface for Fixed-Step Integration

Defines the abstract base class every time-stepping method implements.
Integrators work on the augmented state [x_0, ..., x_{n-1}, t]: ``step``
advances it by one time step, ``integrate`` runs a number of steps and
returns an IntegrationResult TypedDict whose trajectory has the time
column dropped.

There is no adaptive step-size control: dt is constant for a whole call.
"""

import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

import numpy as np

from ..types.core import (
    ArrayLike,
    AugmentedState,
    DerivativeVector,
    ScalarLike,
    TimePoints,
    Trajectory,
)
from ..types.trajectories import IntegrationResult

if TYPE_CHECKING:
    from ..systems.differential_equation_system import DifferentialEquationSystem


class IntegratorBase(ABC):
    """
    Abstract base class for fixed-step integrators.

    All integrators must implement:
    - step(): Single integration step on the augmented state
    - name: Integrator name for display

    Multistep methods additionally override ``_integrate_steps``.

    Result Types
    ------------
    ``integrate`` returns IntegrationResult TypedDict with:
    - t: Time after each step (steps,)
    - x: State after each step (steps, n)
    - success: False only if a step reported a numerical failure
    - message: Status message
    - nfev: Number of right-hand-side evaluations
    - nsteps: Number of steps taken
    - integration_time: Computation time
    - solver: Integrator name

    Examples
    --------
    >>> integrator = RK4Integrator(system, dt=0.01)
    >>>
    >>> # Single step: [x, v, t] -> [x', v', t + dt]
    >>> x_next = integrator.step(np.array([0.0, 1.0, 0.0]))
    >>>
    >>> # Multi-step integration
    >>> result = integrator.integrate(np.array([0.0, 1.0, 0.0]), steps=100)
    >>> t, x_traj = result["t"], result["x"]
    """

    def __init__(self, system: "DifferentialEquationSystem", dt: ScalarLike, **options):
        """
        Initialize integrator.

        Parameters
        ----------
        system : DifferentialEquationSystem
            System whose right-hand side is integrated
        dt : float
            Fixed time step. Not validated: zero gives a stationary
            trajectory, negative values integrate backwards in time.
        **options : dict
            Integrator-specific options (see subclasses)

        Raises
        ------
        ValueError
            If dt is None
        """
        if dt is None:
            raise ValueError("Time step dt is required for fixed-step integration.")

        self.system = system
        self.dt = float(dt)
        self.options = options

        # Statistics
        self._stats = {
            "total_steps": 0,
            "total_fev": 0,  # Right-hand-side vector evaluations
            "total_time": 0.0,
        }

    @abstractmethod
    def step(self, x: AugmentedState, dt: Optional[ScalarLike] = None) -> AugmentedState:
        """
        Take one integration step: [x(t), t] → [x(t + dt), t + dt].

        Parameters
        ----------
        x : np.ndarray
            Current augmented state (n + 1,); not modified
        dt : Optional[float]
            Step size (uses self.dt if None)

        Returns
        -------
        np.ndarray
            New augmented state (n + 1,)
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Integrator name for display."""
        pass

    def integrate(self, x0: ArrayLike, steps: int) -> IntegrationResult:
        """
        Integrate for a fixed number of steps.

        Parameters
        ----------
        x0 : ArrayLike
            Initial augmented state: n state values followed by the
            initial time
        steps : int
            Number of steps (0 gives an empty trajectory)

        Returns
        -------
        IntegrationResult
            TypedDict with the trajectory and diagnostics

        Raises
        ------
        ValueError
            If x0 does not have length n + 1 or steps is not a
            non-negative integer
        """
        x0 = self._validate_initial_state(x0)
        self._validate_steps(steps)

        start_time = time.time()
        fev_before = self._stats["total_fev"]

        t_points, x_traj = self._integrate_steps(x0, int(steps))

        elapsed = time.time() - start_time
        self._stats["total_time"] += elapsed

        success, message = self._status()

        result: IntegrationResult = {
            "t": t_points,
            "x": x_traj,
            "success": success,
            "message": message,
            "nfev": self._stats["total_fev"] - fev_before,
            "nsteps": int(steps),
            "integration_time": elapsed,
            "solver": self.name,
        }
        return result

    # ========================================================================
    # Hooks and Shared Utilities
    # ========================================================================

    def _integrate_steps(self, x0: AugmentedState, steps: int) -> Tuple[TimePoints, Trajectory]:
        """Run ``steps`` single steps from x0, recording each new state."""
        n = self.system.nx
        t_points = np.empty(steps)
        x_traj = np.empty((steps, n))

        x = x0
        for i in range(steps):
            x = self.step(x)
            x_traj[i] = x[:n]
            t_points[i] = x[n]

        return t_points, x_traj

    def _status(self) -> Tuple[bool, str]:
        return True, f"{self.name} integration completed"

    def _evaluate_dynamics(self, x: AugmentedState) -> DerivativeVector:
        """Evaluate dx/dt at an augmented state, counting evaluations."""
        self._stats["total_fev"] += 1
        return self.system.evaluate(x)

    def _validate_initial_state(self, x0: ArrayLike) -> AugmentedState:
        x0 = np.array(x0, dtype=float)
        expected = (self.system.nx + 1,)
        if x0.shape != expected:
            raise ValueError(
                f"Initial state must have shape {expected} "
                f"({self.system.nx} state values followed by time), got {x0.shape}"
            )
        return x0

    @staticmethod
    def _validate_steps(steps: int) -> None:
        if isinstance(steps, bool) or not isinstance(steps, (int, np.integer)):
            raise ValueError(f"steps must be an integer, got {type(steps).__name__}")
        if steps < 0:
            raise ValueError(f"steps must be non-negative, got {steps}")

    def get_stats(self) -> Dict[str, Any]:
        """
        Get integration statistics.

        Returns
        -------
        dict
            Statistics with keys:
            - 'total_steps': Total integration steps taken
            - 'total_fev': Total right-hand-side evaluations
            - 'total_time': Total integration time
            - 'avg_fev_per_step': Average evaluations per step
        """
        avg_fev = self._stats["total_fev"] / max(1, self._stats["total_steps"])

        return {
            **self._stats,
            "avg_fev_per_step": avg_fev,
        }

    def reset_stats(self):
        """Reset integration statistics to zero."""
        for key in self._stats:
            self._stats[key] = 0.0 if key == "total_time" else 0

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(dt={self.dt}, nx={self.system.nx})"

    def __str__(self) -> str:
        return f"{self.name} (dt={self.dt:.4g})"


__all__ = ["IntegratorBase"]
