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
Core Types - Basic Building Blocks

Semantic aliases for the vectors and matrices that flow through the kernel.
All of them are NumPy float64 arrays at runtime; the aliases exist so that
signatures say what an array *means*.

State Layout
------------
A system with n right-hand-side functions works on an *augmented* state of
length n + 1:

    x = [x_0, x_1, ..., x_{n-1}, t]

Indices 0..n-1 are the dynamical variables, index n is time. Trajectories
returned to callers never include the time slot.
"""

from typing import Callable, Sequence, Union

import numpy as np

# ============================================================================
# Scalars
# ============================================================================

ScalarLike = Union[float, int, np.floating, np.integer]
"""
Scalar numeric value (time step, tolerance, residual value).

Examples
--------
>>> dt: ScalarLike = 0.001
>>> eps: ScalarLike = 1e-6
"""

# ============================================================================
# Vectors and Matrices
# ============================================================================

ArrayLike = Union[np.ndarray, Sequence[float]]
"""Anything np.asarray() turns into a float vector or matrix."""

StateVector = np.ndarray
"""
Dynamical variables only, shape (n,).

Examples
--------
>>> x = np.array([0.0, 1.0])  # oscillator position, velocity
"""

AugmentedState = np.ndarray
"""
Dynamical variables followed by time, shape (n + 1,).

Examples
--------
>>> x0 = np.array([0.0, 1.0, 0.0])  # x_0, x_1, t
"""

DerivativeVector = np.ndarray
"""Right-hand-side values dx/dt at one augmented state, shape (n,)."""

GradientVector = np.ndarray
"""One partial derivative per input coordinate, shape (len(x),)."""

JacobianMatrix = np.ndarray
"""Row i is the gradient of residual i, shape (n, n)."""

Trajectory = np.ndarray
"""
Time-major state history without the time column, shape (steps, n).

``trajectory[i]`` is the state after step i + 1.
"""

TimePoints = np.ndarray
"""Times matching the rows of a Trajectory, shape (steps,)."""

# ============================================================================
# Function Signatures
# ============================================================================

ScalarCallable = Callable[[np.ndarray], float]
"""Plain Python callable usable as a right-hand side or residual."""

UnaryFunction = Callable[[float], float]
"""Function of one real argument (line-search objective)."""


__all__ = [
    "ScalarLike",
    "ArrayLike",
    "StateVector",
    "AugmentedState",
    "DerivativeVector",
    "GradientVector",
    "JacobianMatrix",
    "Trajectory",
    "TimePoints",
    "ScalarCallable",
    "UnaryFunction",
]
