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
diffeqsim - Fixed-Step ODE Integration Kernel
=============================================

Integrates first-order ODE systems dx/dt = f(x, t) defined by scalar
functions with explicit Euler, implicit Euler, RK4 or 4-step
Adams-Bashforth. Implicit steps are solved by a damped Newton method with
finite-difference Jacobians, Gaussian elimination and a line search.

>>> from diffeqsim import DifferentialEquationSystem, IntegrationMethod
>>> system = DifferentialEquationSystem([lambda x: x[1], lambda x: -x[0]])
>>> trajectory = system.solve(
...     IntegrationMethod.IMPLICIT_EULER, [0.0, 1.0, 0.0], dt=0.001, steps=3141
... )

Authors
-------
Gil Benezer

License
-------
GNU Affero General Public License v3.0
"""

from .functions import CallableFunction, ScalarFunction, SymbolicFunction, as_scalar_function
from .integration import IntegrationMethod, create_integrator, describe_method
from .solvers import EquationSystem, SingularMatrixError, gradient_descent, solve_linear_system
from .systems import DifferentialEquationSystem, HarmonicOscillator, Lorenz
from .types import IntegrationResult, RootFindingResult

__version__ = "0.1.0"

__all__ = [
    "ScalarFunction",
    "CallableFunction",
    "SymbolicFunction",
    "as_scalar_function",
    "solve_linear_system",
    "SingularMatrixError",
    "EquationSystem",
    "gradient_descent",
    "IntegrationMethod",
    "describe_method",
    "create_integrator",
    "DifferentialEquationSystem",
    "HarmonicOscillator",
    "Lorenz",
    "IntegrationResult",
    "RootFindingResult",
]
