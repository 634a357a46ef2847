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
Types Module - Type Definitions for diffeqsim

Central import point for semantic array aliases and TypedDict results.

Module Organization
------------------
- core: Vectors, matrices, function signatures
- trajectories: IntegrationResult, RootFindingResult
"""

from .core import (
    ArrayLike,
    AugmentedState,
    DerivativeVector,
    GradientVector,
    JacobianMatrix,
    ScalarCallable,
    ScalarLike,
    StateVector,
    TimePoints,
    Trajectory,
    UnaryFunction,
)
from .trajectories import IntegrationResult, RootFindingResult

__all__ = [
    "ArrayLike",
    "AugmentedState",
    "DerivativeVector",
    "GradientVector",
    "JacobianMatrix",
    "ScalarCallable",
    "ScalarLike",
    "StateVector",
    "TimePoints",
    "Trajectory",
    "UnaryFunction",
    "IntegrationResult",
    "RootFindingResult",
]
