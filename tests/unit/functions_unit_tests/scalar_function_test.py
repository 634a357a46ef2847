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
Unit tests for ScalarFunction, CallableFunction and as_scalar_function.

Tests cover:
1. Abstract interface
2. Forward-difference gradient
3. Callable wrapping and coercion
"""

import numpy as np
import pytest

from diffeqsim.functions.scalar_function import (
    FINITE_DIFFERENCE_STEP,
    CallableFunction,
    ScalarFunction,
    as_scalar_function,
)


class Quadratic(ScalarFunction):
    """f(x) = x0^2 + 3 x1"""

    def __init__(self):
        self.seen = []

    def calculate(self, x):
        self.seen.append(np.array(x, copy=True))
        return x[0] ** 2 + 3.0 * x[1]


# ============================================================================
# Test Class 1: Abstract Interface
# ============================================================================


class TestScalarFunctionInterface:
    """Test ScalarFunction abstract interface"""

    def test_cannot_instantiate_directly(self):
        """Test that ScalarFunction cannot be instantiated"""
        with pytest.raises(TypeError):
            ScalarFunction()

    def test_call_delegates_to_calculate(self):
        """Test that calling the function uses calculate()"""
        f = Quadratic()
        assert f(np.array([2.0, 1.0])) == 7.0

    def test_default_name_is_class_name(self):
        """Test default name and __repr__"""
        assert Quadratic().name == "Quadratic"
        assert "Quadratic" in repr(Quadratic())

    def test_nan_passed_through(self):
        """Test that NaN values are returned unchanged"""
        f = CallableFunction(lambda x: np.nan)
        assert np.isnan(f(np.zeros(1)))


# ============================================================================
# Test Class 2: Forward-Difference Gradient
# ============================================================================


class TestGradient:
    """Test forward-difference gradient"""

    def test_default_step(self):
        """Test default finite-difference step"""
        assert FINITE_DIFFERENCE_STEP == 1e-6

    def test_gradient_values(self):
        """Test gradient of a quadratic-plus-linear function"""
        f = Quadratic()

        grad = f.gradient(np.array([1.0, 2.0]))

        # Forward difference of x0^2 carries an O(eps) bias
        assert grad.shape == (2,)
        assert np.isclose(grad[0], 2.0 + 1e-6, atol=1e-6)
        assert np.isclose(grad[1], 3.0, atol=1e-6)

    def test_gradient_evaluation_count(self):
        """Test that the gradient costs len(x) + 1 evaluations"""
        f = Quadratic()

        f.gradient(np.array([1.0, 2.0, 5.0]))

        # One base evaluation plus one per coordinate
        assert len(f.seen) == 4

    def test_only_one_coordinate_perturbed(self):
        """Test that each evaluation perturbs exactly one coordinate"""
        f = Quadratic()
        x = np.array([1.0, 2.0])

        f.gradient(x, eps=0.5)

        assert np.array_equal(f.seen[0], [1.0, 2.0])
        assert np.array_equal(f.seen[1], [1.5, 2.0])
        assert np.array_equal(f.seen[2], [1.0, 2.5])

    def test_input_not_modified(self):
        """Test that gradient() leaves its input untouched"""
        x = np.array([1.0, 2.0])

        Quadratic().gradient(x)

        assert np.array_equal(x, [1.0, 2.0])

    def test_custom_step(self):
        """Test gradient with a custom step"""
        f = CallableFunction(lambda x: x[0] ** 2)

        grad = f.gradient([1.0], eps=0.1)

        assert np.isclose(grad[0], 2.1)

    def test_gradient_of_linear_function_is_exact_enough(self):
        """Test gradient of a linear function"""
        f = CallableFunction(lambda x: 2.0 * x[0] - 4.0 * x[1] + x[2])

        grad = f.gradient(np.array([0.3, -1.2, 7.0]))

        assert np.allclose(grad, [2.0, -4.0, 1.0], atol=1e-8)


# ============================================================================
# Test Class 3: Callable Wrapping
# ============================================================================


class TestCallableFunction:
    """Test CallableFunction and as_scalar_function"""

    def test_wraps_lambda(self):
        """Test wrapping a lambda with a name"""
        f = CallableFunction(lambda x: -x[0], name="spring")

        assert f(np.array([2.0, 0.0])) == -2.0
        assert f.name == "spring"

    def test_returns_python_float(self):
        """Test that results are converted to float"""
        f = CallableFunction(lambda x: np.float32(1.5))
        assert type(f(np.zeros(1))) is float

    def test_name_from_function(self):
        """Test name taken from the wrapped function"""
        def damping(x):
            return -0.1 * x[1]

        assert CallableFunction(damping).name == "damping"

    def test_not_callable_raises(self):
        """Test that non-callables are rejected"""
        with pytest.raises(TypeError, match="Expected a callable"):
            CallableFunction(3.0)

    def test_as_scalar_function_passthrough(self):
        """Test that ScalarFunction instances pass through"""
        f = Quadratic()
        assert as_scalar_function(f) is f

    def test_as_scalar_function_wraps_callable(self):
        """Test that plain callables are wrapped"""
        f = as_scalar_function(lambda x: x[0] + 1.0)

        assert isinstance(f, CallableFunction)
        assert f(np.array([1.0])) == 2.0

    def test_as_scalar_function_rejects_other(self):
        """Test that other objects are rejected"""
        with pytest.raises(TypeError, match="ScalarFunction or callable"):
            as_scalar_function("x + 1")
