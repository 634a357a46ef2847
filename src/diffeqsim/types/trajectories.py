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
Result Types - Integration and Root-Finding Results

Result types are TypedDict: plain dictionaries with documented keys, so
they print, serialize and compare like any other dict.
"""

from typing_extensions import TypedDict

from .core import StateVector, TimePoints, Trajectory


class IntegrationResult(TypedDict, total=False):
    """
    Result from fixed-step integration of a DifferentialEquationSystem.

    Shape Convention
    ----------------
    Time-major ordering, one row per completed step:
    - t: (steps,) - Time after each step
    - x: (steps, n) - State after each step (time column dropped)

    The initial state is *not* included.

    Attributes
    ----------
    t : np.ndarray
        Time points (steps,)
    x : np.ndarray
        State trajectory (steps, n)
    success : bool
        False when any implicit step's nonlinear solve did not converge
    message : str
        Status message
    nfev : int
        Number of right-hand-side vector evaluations
    nsteps : int
        Number of steps taken
    integration_time : float
        Wall-clock computation time in seconds
    solver : str
        Name of the integrator used

    Examples
    --------
    >>> result = system.integrate("rk4", x0=[0.0, 1.0, 0.0], dt=0.01, steps=100)
    >>> result["x"].shape
    (100, 2)
    >>> result["nsteps"]
    100
    """

    t: TimePoints
    x: Trajectory
    success: bool
    message: str
    nfev: int
    nsteps: int
    integration_time: float
    solver: str


class RootFindingResult(TypedDict, total=False):
    """
    Result from EquationSystem.solve_detailed().

    Attributes
    ----------
    x : np.ndarray
        Last iterate (returned whether or not the loop converged)
    success : bool
        True if the Newton direction's infinity norm dropped below eps
    iterations : int
        Number of Newton iterations performed
    discrepancy : float
        Sum of squared residuals at x
    message : str
        Status message
    """

    x: StateVector
    success: bool
    iterations: int
    discrepancy: float
    message: str


__all__ = [
    "IntegrationResult",
    "RootFindingResult",
]
