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
Harmonic oscillator - the linear test system dx/dt = ω v, dv/dt = -ω x.
"""

import numpy as np
import sympy as sp

from ..differential_equation_system import DifferentialEquationSystem
from ...functions.symbolic_function import SymbolicFunction


class HarmonicOscillator(DifferentialEquationSystem):
    """
    Linear oscillator in first-order form.

    State Space:
    -----------
    State: [x, v]
        - x: Position [dimensionless]
        - v: Scaled velocity [dimensionless]

    Dynamics:
    --------
        ẋ = ω v
        v̇ = -ω x

    With ω = 1 and initial state (0, 1) the exact solution is
    (sin t, cos t), which makes it the standard accuracy check for the
    integrators.

    Parameters:
    ----------
    omega : float, default=1.0
        Angular frequency [rad/time]

    Examples
    --------
    >>> oscillator = HarmonicOscillator()
    >>> trajectory = oscillator.solve("rk4", [0.0, 1.0, 0.0], dt=0.001, steps=3141)
    >>> np.allclose(trajectory[-1], oscillator.analytical_solution(0.0, 1.0, 3.141))
    True
    """

    def __init__(self, omega: float = 1.0):
        self.omega = float(omega)
        x, v = sp.symbols("x v", real=True)
        w = sp.Symbol("omega", positive=True)
        self.state_vars = [x, v]
        self.parameters = {w: self.omega}

        super().__init__(
            [
                SymbolicFunction(w * v, self.state_vars, self.parameters),
                SymbolicFunction(-w * x, self.state_vars, self.parameters),
            ]
        )

    def analytical_solution(self, x0: float, v0: float, t: float) -> np.ndarray:
        """Exact [x(t), v(t)] from x(0) = x0, v(0) = v0."""
        wt = self.omega * t
        return np.array(
            [
                x0 * np.cos(wt) + v0 * np.sin(wt),
                -x0 * np.sin(wt) + v0 * np.cos(wt),
            ]
        )

    def __repr__(self) -> str:
        return f"HarmonicOscillator(omega={self.omega})"
