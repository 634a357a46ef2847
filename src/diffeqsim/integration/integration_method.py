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
Integration Method - Closed Set of Time-Stepping Methods

The enum carries identity only; human-readable descriptions live in a
separate lookup table.
"""

from enum import Enum
from typing import Dict, Union


class IntegrationMethod(Enum):
    """
    Time-stepping method selector.

    Attributes
    ----------
    EXPLICIT_EULER : str
        Forward Euler, 1st order, 1 evaluation per step
    IMPLICIT_EULER : str
        Backward Euler solved by damped Newton at every step
    EXPLICIT_RUNGE_KUTTA : str
        Classical 4-stage Runge-Kutta
    EXPLICIT_ADAMS_BASHFORTH : str
        4-step explicit multistep method bootstrapped with RK4
    """

    EXPLICIT_EULER = "explicit_euler"
    IMPLICIT_EULER = "implicit_euler"
    EXPLICIT_RUNGE_KUTTA = "rk4"
    EXPLICIT_ADAMS_BASHFORTH = "adams_bashforth"

    @classmethod
    def parse(cls, method: Union["IntegrationMethod", str]) -> "IntegrationMethod":
        """
        Resolve a member, a member value or a member name.

        Raises
        ------
        ValueError
            If ``method`` names no member

        Examples
        --------
        >>> IntegrationMethod.parse("rk4")
        <IntegrationMethod.EXPLICIT_RUNGE_KUTTA: 'rk4'>
        >>> IntegrationMethod.parse("IMPLICIT_EULER")
        <IntegrationMethod.IMPLICIT_EULER: 'implicit_euler'>
        """
        if isinstance(method, cls):
            return method
        if isinstance(method, str):
            key = method.strip().lower()
            for member in cls:
                if key in (member.value, member.name.lower()):
                    return member
        valid = [m.value for m in cls]
        raise ValueError(f"Unknown integration method {method!r}. Choose from: {valid}")


METHOD_DESCRIPTIONS: Dict[IntegrationMethod, str] = {
    IntegrationMethod.EXPLICIT_EULER: "Explicit Euler method",
    IntegrationMethod.IMPLICIT_EULER: "Implicit Euler method",
    IntegrationMethod.EXPLICIT_RUNGE_KUTTA: "Explicit 4th-order Runge-Kutta method",
    IntegrationMethod.EXPLICIT_ADAMS_BASHFORTH: "Explicit 4th-order Adams-Bashforth method",
}


def describe_method(method: Union[IntegrationMethod, str]) -> str:
    """Display text for a method, e.g. for plot titles or console output."""
    return METHOD_DESCRIPTIONS[IntegrationMethod.parse(method)]


__all__ = [
    "IntegrationMethod",
    "METHOD_DESCRIPTIONS",
    "describe_method",
]
