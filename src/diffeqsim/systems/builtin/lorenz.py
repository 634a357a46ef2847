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

import numpy as np
import sympy as sp

from ..differential_equation_system import DifferentialEquationSystem
from ...functions.symbolic_function import SymbolicFunction


class Lorenz(DifferentialEquationSystem):
    """
    Lorenz system - chaotic model of atmospheric convection.

    State Space:
    -----------
    State: [x, y, z]
        - x: Rate of convective motion
        - y: Horizontal temperature variation
        - z: Vertical temperature variation

    Dynamics:
    --------
        ẋ = σ(y - x)
        ẏ = x(ρ - z) - y
        ż = xy - βz

    Parameters:
    ----------
    sigma : float, default=10.0
        Prandtl number
    rho : float, default=28.0
        Rayleigh number; chaos for ρ > 24.74
    beta : float, default=8/3
        Geometric factor of the convection cell

    Equilibria:
    ----------
    The origin, and for ρ > 1 the convective equilibria
        C± = [±√(β(ρ-1)), ±√(β(ρ-1)), ρ-1]

    Examples
    --------
    >>> lorenz = Lorenz(sigma=10.0, rho=10.0, beta=8.0 / 3.0)
    >>> trajectory = lorenz.solve("rk4", [0.1, 0.2, 0.3, 0.0], dt=1e-4, steps=10000)
    """

    def __init__(self, sigma: float = 10.0, rho: float = 28.0, beta: float = 8.0 / 3.0):
        self.sigma = float(sigma)
        self.rho = float(rho)
        self.beta = float(beta)

        x, y, z = sp.symbols("x y z", real=True)
        sigma_sym, rho_sym, beta_sym = sp.symbols("sigma rho beta", real=True)

        self.state_vars = [x, y, z]
        self.parameters = {sigma_sym: self.sigma, rho_sym: self.rho, beta_sym: self.beta}

        expressions = [
            sigma_sym * (y - x),
            x * (rho_sym - z) - y,
            x * y - beta_sym * z,
        ]
        super().__init__(
            [SymbolicFunction(expr, self.state_vars, self.parameters) for expr in expressions]
        )

    def equilibria(self) -> list:
        """
        Equilibrium points: the origin, plus C+ and C- when ρ > 1.
        """
        points = [np.zeros(3)]
        if self.rho > 1.0:
            c = np.sqrt(self.beta * (self.rho - 1.0))
            points.append(np.array([c, c, self.rho - 1.0]))
            points.append(np.array([-c, -c, self.rho - 1.0]))
        return points

    def __repr__(self) -> str:
        return f"Lorenz(sigma={self.sigma}, rho={self.rho}, beta={self.beta:.4f})"
