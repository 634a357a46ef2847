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
Scalar Function - Abstract Interface for Scalar Multivariate Functions

Every right-hand side of an ODE system and every residual of a nonlinear
equation system is a ScalarFunction: it maps a state vector to one float.
The base class derives a numerical gradient from ``calculate`` alone, so
no analytic derivatives are ever required.

Numerical Gradient
------------------
One-sided forward differences with a fixed step:

    grad[i] = (f(x + eps * e_i) - f(x)) / eps,    eps = 1e-6

This costs len(x) + 1 evaluations, is first-order accurate and is
scale-sensitive: states must be expressed in units where eps is small.
"""

from abc import ABC, abstractmethod
from typing import Optional, Union

import numpy as np

from ..types.core import ArrayLike, GradientVector, ScalarCallable

FINITE_DIFFERENCE_STEP = 1e-6


class ScalarFunction(ABC):
    """
    Abstract scalar function of a state vector.

    Subclasses implement ``calculate``. Implementations must not mutate the
    vector they receive and must not keep references to it between calls.

    Examples
    --------
    >>> class Velocity(ScalarFunction):
    ...     def calculate(self, x):
    ...         return x[1]
    >>>
    >>> f = Velocity()
    >>> f(np.array([0.0, 1.0, 0.0]))
    1.0
    >>> f.gradient(np.array([0.0, 1.0, 0.0]))  # approximately [0, 1, 0]
    """

    @abstractmethod
    def calculate(self, x: np.ndarray) -> float:
        """
        Evaluate the function.

        Parameters
        ----------
        x : np.ndarray
            State vector (read-only from the function's point of view)

        Returns
        -------
        float
            Function value; NaN and inf are passed through unchanged
        """
        pass

    def __call__(self, x: np.ndarray) -> float:
        return self.calculate(x)

    def gradient(self, x: ArrayLike, eps: float = FINITE_DIFFERENCE_STEP) -> GradientVector:
        """
        Forward-difference gradient, one partial derivative per coordinate.

        Parameters
        ----------
        x : ArrayLike
            Point at which to differentiate
        eps : float
            Perturbation applied to one coordinate at a time

        Returns
        -------
        np.ndarray
            Gradient of shape (len(x),)

        Notes
        -----
        Each perturbed evaluation works on its own copy of ``x``, so a
        function that captures nothing mutable always sees a consistent
        state.
        """
        x = np.asarray(x, dtype=float)
        y = self.calculate(x)

        grad = np.empty(x.shape[0])
        for i in range(x.shape[0]):
            x_perturbed = x.copy()
            x_perturbed[i] += eps
            grad[i] = (self.calculate(x_perturbed) - y) / eps

        return grad

    @property
    def name(self) -> str:
        return self.__class__.__name__

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


class CallableFunction(ScalarFunction):
    """
    ScalarFunction backed by a plain Python callable.

    Examples
    --------
    >>> f = CallableFunction(lambda x: -x[0], name="spring")
    >>> f(np.array([2.0, 0.0, 0.0]))
    -2.0
    """

    def __init__(self, func: ScalarCallable, name: Optional[str] = None):
        if not callable(func):
            raise TypeError(f"Expected a callable, got {type(func).__name__}")
        self.func = func
        self._name = name or getattr(func, "__name__", "function")

    def calculate(self, x: np.ndarray) -> float:
        return float(self.func(x))

    @property
    def name(self) -> str:
        return self._name


def as_scalar_function(func: Union[ScalarFunction, ScalarCallable]) -> ScalarFunction:
    """
    Coerce a ScalarFunction or plain callable into a ScalarFunction.

    Raises
    ------
    TypeError
        If ``func`` is neither
    """
    if isinstance(func, ScalarFunction):
        return func
    if callable(func):
        return CallableFunction(func)
    raise TypeError(
        f"Expected a ScalarFunction or callable, got {type(func).__name__}"
    )


__all__ = [
    "FINITE_DIFFERENCE_STEP",
    "ScalarFunction",
    "CallableFunction",
    "as_scalar_function",
]
