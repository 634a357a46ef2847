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
Numerical Integration
=====================

Fixed-step time integration of dx/dt = f(x, t) on the augmented state
[x_0, ..., x_{n-1}, t].

>>> from diffeqsim.integration import IntegrationMethod, create_integrator
>>> integrator = create_integrator(IntegrationMethod.EXPLICIT_RUNGE_KUTTA, system, dt=0.01)
>>> result = integrator.integrate(x0, steps=100)

Methods
-------
- explicit_euler: Forward Euler
- implicit_euler: Backward Euler with a damped Newton solve per step
- rk4: Classical Runge-Kutta
- adams_bashforth: 4-step explicit multistep, RK4 bootstrap
"""

from .fixed_step_integrators import (
    AdamsBashforthIntegrator,
    ExplicitEulerIntegrator,
    ImplicitEulerIntegrator,
    ImplicitEulerResidual,
    RK4Integrator,
)
from .integration_method import METHOD_DESCRIPTIONS, IntegrationMethod, describe_method
from .integrator_base import IntegratorBase
from .integrator_factory import INTEGRATOR_CLASSES, create_integrator

__all__ = [
    "IntegrationMethod",
    "METHOD_DESCRIPTIONS",
    "describe_method",
    "IntegratorBase",
    "ExplicitEulerIntegrator",
    "ImplicitEulerIntegrator",
    "ImplicitEulerResidual",
    "RK4Integrator",
    "AdamsBashforthIntegrator",
    "INTEGRATOR_CLASSES",
    "create_integrator",
]
