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
Integrator Factory - Method Selector to Integrator Class

Dispatch is a total mapping over IntegrationMethod, so every member has an
integrator and unknown selectors fail loudly in IntegrationMethod.parse.
"""

from typing import TYPE_CHECKING, Dict, Type, Union

from ..types.core import ScalarLike
from .fixed_step_integrators import (
    AdamsBashforthIntegrator,
    ExplicitEulerIntegrator,
    ImplicitEulerIntegrator,
    RK4Integrator,
)
from .integration_method import IntegrationMethod
from .integrator_base import IntegratorBase

if TYPE_CHECKING:
    from ..systems.differential_equation_system import DifferentialEquationSystem


INTEGRATOR_CLASSES: Dict[IntegrationMethod, Type[IntegratorBase]] = {
    IntegrationMethod.EXPLICIT_EULER: ExplicitEulerIntegrator,
    IntegrationMethod.IMPLICIT_EULER: ImplicitEulerIntegrator,
    IntegrationMethod.EXPLICIT_RUNGE_KUTTA: RK4Integrator,
    IntegrationMethod.EXPLICIT_ADAMS_BASHFORTH: AdamsBashforthIntegrator,
}


def create_integrator(
    method: Union[IntegrationMethod, str],
    system: "DifferentialEquationSystem",
    dt: ScalarLike,
    **options,
) -> IntegratorBase:
    """
    Create the integrator for a method selector.

    Parameters
    ----------
    method : IntegrationMethod or str
        Member, value ('explicit_euler', 'implicit_euler', 'rk4',
        'adams_bashforth') or member name
    system : DifferentialEquationSystem
        System to integrate
    dt : float
        Fixed time step
    **options
        Forwarded to the integrator (e.g. eps, max_iterations for
        implicit Euler)

    Returns
    -------
    IntegratorBase
        Configured integrator

    Raises
    ------
    ValueError
        If the method is unknown

    Examples
    --------
    >>> integrator = create_integrator("rk4", system, dt=0.01)
    >>> integrator = create_integrator(
    ...     IntegrationMethod.IMPLICIT_EULER, system, dt=0.1, eps=1e-9
    ... )
    """
    integrator_class = INTEGRATOR_CLASSES[IntegrationMethod.parse(method)]
    return integrator_class(system, dt, **options)


__all__ = [
    "INTEGRATOR_CLASSES",
    "create_integrator",
]
