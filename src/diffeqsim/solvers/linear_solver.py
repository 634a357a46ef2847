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
Linear Solver - Gaussian Elimination with Partial Pivoting

Solves dense n×n systems A·x = b for the Newton step of the nonlinear
solver. Forward elimination picks, in each working column, the row with
the largest remaining magnitude as pivot; back substitution then recovers
x from the upper-triangular system.

Singular Matrices
-----------------
By default a singular or badly conditioned matrix is *not* reported: the
result simply contains inf/NaN (floating-point warnings are suppressed so
the values propagate silently). Pass ``check_singular=True`` to raise
SingularMatrixError on an exactly zero pivot instead.
"""

import numpy as np

from ..types.core import ArrayLike, StateVector


class SingularMatrixError(np.linalg.LinAlgError):
    """Raised by solve_linear_system(check_singular=True) on a zero pivot."""


def solve_linear_system(
    matrix: ArrayLike, rhs: ArrayLike, check_singular: bool = False
) -> StateVector:
    """
    Solve A·x = b by Gaussian elimination with partial pivoting.

    Parameters
    ----------
    matrix : ArrayLike
        Coefficient matrix (n, n); not modified
    rhs : ArrayLike
        Right-hand side (n,); not modified
    check_singular : bool
        If True, raise SingularMatrixError when a pivot is exactly zero

    Returns
    -------
    np.ndarray
        Solution x of shape (n,)

    Raises
    ------
    ValueError
        If the matrix is not square or rhs does not match its size
    SingularMatrixError
        If check_singular is True and the matrix is singular

    Examples
    --------
    >>> A = np.array([[2.0, 1.0], [1.0, 3.0]])
    >>> b = np.array([3.0, 5.0])
    >>> solve_linear_system(A, b)
    array([0.8, 1.4])
    """
    a = np.array(matrix, dtype=float)
    b = np.array(rhs, dtype=float)

    if a.ndim != 2 or a.shape[0] != a.shape[1]:
        raise ValueError(f"Coefficient matrix must be square, got shape {a.shape}")
    n = a.shape[0]
    if b.shape != (n,):
        raise ValueError(f"Right-hand side must have shape ({n},), got {b.shape}")

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        # Forward elimination
        for col in range(n):
            pivot_row = col + int(np.argmax(np.abs(a[col:, col])))
            if pivot_row != col:
                a[[col, pivot_row], :] = a[[pivot_row, col], :]
                b[[col, pivot_row]] = b[[pivot_row, col]]

            pivot = a[col, col]
            if pivot == 0.0 and check_singular:
                raise SingularMatrixError(
                    f"Matrix is singular: zero pivot in column {col}"
                )

            factors = a[col + 1 :, col] / pivot
            a[col + 1 :, col:] -= np.outer(factors, a[col, col:])
            b[col + 1 :] -= factors * b[col]

        # Back substitution
        x = np.zeros(n)
        for row in range(n - 1, -1, -1):
            x[row] = (b[row] - np.dot(a[row, row + 1 :], x[row + 1 :])) / a[row, row]

    return x


__all__ = [
    "SingularMatrixError",
    "solve_linear_system",
]
