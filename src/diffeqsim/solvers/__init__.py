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
Algebraic solvers: Gaussian elimination and damped Newton root finding.

>>> from diffeqsim.solvers import EquationSystem, solve_linear_system
>>> x = solve_linear_system([[2.0, 0.0], [0.0, 4.0]], [2.0, 2.0])
>>> root = EquationSystem([lambda v: v[0] - 1.0]).solve([0.0])
"""

from .linear_solver import SingularMatrixError, solve_linear_system
from .nonlinear_solver import (
    BRACKET_GROWTH,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_TOLERANCE,
    LINE_SEARCH_INITIAL_STEP,
    LINE_SEARCH_PRECISION,
    EquationSystem,
    gradient_descent,
    infinity_norm,
)

__all__ = [
    "SingularMatrixError",
    "solve_linear_system",
    "EquationSystem",
    "gradient_descent",
    "infinity_norm",
    "DEFAULT_TOLERANCE",
    "DEFAULT_MAX_ITERATIONS",
    "LINE_SEARCH_PRECISION",
    "LINE_SEARCH_INITIAL_STEP",
    "BRACKET_GROWTH",
]
