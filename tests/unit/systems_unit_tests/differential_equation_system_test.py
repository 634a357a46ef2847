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
Unit tests for DifferentialEquationSystem.

Tests cover:
1. Construction and right-hand-side evaluation
2. Symbolic construction
3. Oscillator accuracy for every method
4. Method-specific behavior through the system entry point
5. Input validation and call isolation
"""

import numpy as np
import pytest
import sympy as sp

from diffeqsim import DifferentialEquationSystem, IntegrationMethod
from diffeqsim.functions.scalar_function import CallableFunction

ALL_METHODS = list(IntegrationMethod)


@pytest.fixture
def oscillator():
    """x0' = x1, x1' = -x0"""
    return DifferentialEquationSystem([lambda x: x[1], lambda x: -x[0]])


@pytest.fixture
def oscillator_x0():
    return np.array([0.0, 1.0, 0.0])


# ============================================================================
# Test Class 1: Construction and Evaluation
# ============================================================================


class TestConstruction:
    """Test construction and evaluation"""

    def test_nx(self, oscillator):
        """Test state dimension"""
        assert oscillator.nx == 2
        assert len(oscillator.functions) == 2

    def test_callables_wrapped(self, oscillator):
        """Test that callables are wrapped"""
        assert all(isinstance(f, CallableFunction) for f in oscillator.functions)

    def test_scalar_functions_kept(self):
        """Test that ScalarFunction instances are kept"""
        f = CallableFunction(lambda x: 1.0, name="source")
        system = DifferentialEquationSystem([f])

        assert system.functions[0] is f

    def test_empty_raises(self):
        """Test that an empty system is rejected"""
        with pytest.raises(ValueError, match="at least one"):
            DifferentialEquationSystem([])

    def test_non_callable_raises(self):
        """Test that non-callables are rejected"""
        with pytest.raises(TypeError):
            DifferentialEquationSystem([1.0])

    def test_evaluate(self, oscillator):
        """Test evaluate() and __call__"""
        dx = oscillator.evaluate([2.0, 3.0, 0.0])

        assert np.array_equal(dx, [3.0, -2.0])
        assert np.array_equal(oscillator([2.0, 3.0, 0.0]), dx)

    def test_evaluate_sees_time(self):
        """Test that the time slot reaches the functions"""
        system = DifferentialEquationSystem([lambda x: x[1] ** 2])

        assert system.evaluate([0.0, 3.0])[0] == 9.0

    def test_repr(self, oscillator):
        """Test __repr__ output"""
        assert repr(oscillator) == "DifferentialEquationSystem(nx=2)"


# ============================================================================
# Test Class 2: Symbolic Construction
# ============================================================================


class TestFromSymbolic:
    """Test symbolic construction"""

    def test_autonomous(self):
        """Test autonomous symbolic system"""
        x, v = sp.symbols("x v")
        system = DifferentialEquationSystem.from_symbolic([v, -x], [x, v])

        assert np.allclose(system.evaluate([2.0, 3.0, 10.0]), [3.0, -2.0])

    def test_time_and_parameters(self):
        """Test symbolic system with time and parameters"""
        x, v, t = sp.symbols("x v t")
        k = sp.Symbol("k", positive=True)
        system = DifferentialEquationSystem.from_symbolic(
            [v, -k * x + sp.cos(t)], [x, v], time_symbol=t, parameters={k: 4.0}
        )

        assert np.allclose(system.evaluate([1.0, 0.5, 0.0]), [0.5, -3.0])

    def test_count_mismatch_raises(self):
        """Test expression and symbol count mismatch"""
        x, v = sp.symbols("x v")
        with pytest.raises(ValueError, match="expressions"):
            DifferentialEquationSystem.from_symbolic([v], [x, v])

    def test_unbound_symbol_raises(self):
        """Test that unbound symbols are rejected"""
        x, v = sp.symbols("x v")
        c = sp.Symbol("c")
        with pytest.raises(ValueError, match="unbound"):
            DifferentialEquationSystem.from_symbolic([v, -c * x], [x, v])

    def test_symbolic_matches_callable(self, oscillator, oscillator_x0):
        """Test symbolic and callable systems agree"""
        x, v = sp.symbols("x v")
        symbolic = DifferentialEquationSystem.from_symbolic([v, -x], [x, v])

        expected = oscillator.solve("rk4", oscillator_x0, dt=0.01, steps=50)
        actual = symbolic.solve("rk4", oscillator_x0, dt=0.01, steps=50)

        assert np.allclose(actual, expected, rtol=1e-12, atol=1e-14)


# ============================================================================
# Test Class 3: Oscillator Accuracy
# ============================================================================


class TestOscillatorAccuracy:
    """Integrate to t = 3.141 from (0, 1); exact answer is (sin t, cos t)"""

    dt = 0.001
    steps = 3141

    @pytest.fixture
    def exact(self):
        t = self.dt * self.steps
        return np.array([np.sin(t), np.cos(t)])

    @pytest.mark.parametrize(
        "method, tolerance",
        [
            (IntegrationMethod.EXPLICIT_EULER, 1e-2),
            (IntegrationMethod.IMPLICIT_EULER, 1e-2),
            (IntegrationMethod.EXPLICIT_RUNGE_KUTTA, 1e-9),
            (IntegrationMethod.EXPLICIT_ADAMS_BASHFORTH, 5e-2),
        ],
    )
    def test_final_state(self, oscillator, oscillator_x0, exact, method, tolerance):
        """Test final state against sin and cos"""
        trajectory = oscillator.solve(method, oscillator_x0, self.dt, self.steps)

        assert trajectory.shape == (self.steps, 2)
        assert np.max(np.abs(trajectory[-1] - exact)) < tolerance

    def test_rk4_beats_euler(self, oscillator, oscillator_x0, exact):
        """Test RK4 error against explicit Euler"""
        euler = oscillator.solve("explicit_euler", oscillator_x0, self.dt, self.steps)
        rk4 = oscillator.solve("rk4", oscillator_x0, self.dt, self.steps)

        euler_error = np.max(np.abs(euler[-1] - exact))
        rk4_error = np.max(np.abs(rk4[-1] - exact))
        assert rk4_error < 1e-3 * euler_error

    def test_explicit_euler_gains_energy(self, oscillator, oscillator_x0):
        """Test that explicit Euler inflates the orbit"""
        trajectory = oscillator.solve("explicit_euler", oscillator_x0, self.dt, self.steps)

        assert np.sum(trajectory[-1] ** 2) > 1.0

    def test_implicit_euler_loses_energy(self, oscillator, oscillator_x0):
        """Test that implicit Euler shrinks the orbit"""
        trajectory = oscillator.solve("implicit_euler", oscillator_x0, self.dt, self.steps)

        assert np.sum(trajectory[-1] ** 2) < 1.0


# ============================================================================
# Test Class 4: Method-Specific Behavior
# ============================================================================


class TestMethods:
    """Test method-specific behavior"""

    def test_adams_bashforth_bootstrap_equals_rk4(self, oscillator, oscillator_x0):
        """Test Adams-Bashforth equals RK4 for three steps"""
        rk4 = oscillator.solve("rk4", oscillator_x0, dt=0.01, steps=3)
        ab = oscillator.solve("adams_bashforth", oscillator_x0, dt=0.01, steps=3)

        assert np.array_equal(ab, rk4)

    def test_adams_bashforth_diverges_from_rk4_after_bootstrap(
        self, oscillator, oscillator_x0
    ):
        """Test Adams-Bashforth leaves RK4 after the bootstrap"""
        rk4 = oscillator.solve("rk4", oscillator_x0, dt=0.01, steps=10)
        ab = oscillator.solve("adams_bashforth", oscillator_x0, dt=0.01, steps=10)

        assert np.array_equal(ab[:3], rk4[:3])
        assert not np.array_equal(ab[3:], rk4[3:])

    def test_stiff_decay(self):
        """Test stiff decay with explicit and implicit Euler"""
        system = DifferentialEquationSystem([lambda x: -50.0 * x[0]])
        x0 = [1.0, 0.0]

        explicit = system.solve("explicit_euler", x0, dt=0.1, steps=20)
        implicit = system.solve("implicit_euler", x0, dt=0.1, steps=20)

        assert np.abs(explicit[-1, 0]) > 1e6
        assert 0.0 < implicit[-1, 0] < 1e-10

    def test_non_autonomous_rhs(self):
        """Test time-dependent right-hand side"""
        system = DifferentialEquationSystem([lambda x: np.cos(x[1])])

        trajectory = system.solve("rk4", [0.0, 0.0], dt=0.01, steps=100)

        assert trajectory[-1, 0] == pytest.approx(np.sin(1.0), abs=1e-9)

    def test_integrate_reports_diagnostics(self, oscillator, oscillator_x0):
        """Test integrate() diagnostics"""
        result = oscillator.integrate("rk4", oscillator_x0, dt=0.01, steps=10)

        assert result["success"] is True
        assert result["nsteps"] == 10
        assert result["nfev"] == 40
        assert result["solver"] == "RK4"
        assert np.allclose(result["t"], 0.01 * np.arange(1, 11))

    def test_implicit_options_forwarded(self):
        """Test that implicit Euler options are forwarded"""
        system = DifferentialEquationSystem([lambda x: -x[0]])

        with pytest.warns(RuntimeWarning, match="did not converge"):
            result = system.integrate(
                "implicit_euler", [1.0, 0.0], dt=0.1, steps=2, eps=0.0, max_iterations=1
            )

        assert result["success"] is False
        assert result["x"].shape == (2, 1)

    @pytest.mark.parametrize("method", ALL_METHODS)
    def test_zero_dt_is_stationary(self, oscillator, oscillator_x0, method):
        """Test that dt = 0 repeats the initial state and time for every method"""
        result = oscillator.integrate(method, oscillator_x0, dt=0.0, steps=5)

        assert np.array_equal(result["x"], [[0.0, 1.0]] * 5)
        assert np.array_equal(result["t"], np.zeros(5))
        assert result["success"] is True

    @pytest.mark.parametrize("method", ALL_METHODS)
    def test_negative_dt_integrates_backwards(self, method):
        """Test that dt < 0 runs time backwards: dx/dt = -x grows towards exp(0.5)"""
        system = DifferentialEquationSystem([lambda x: -x[0]])

        result = system.integrate(method, [1.0, 0.0], dt=-0.1, steps=5)

        assert np.allclose(result["t"], -0.1 * np.arange(1, 6))
        assert np.all(np.diff(result["x"][:, 0]) > 0)
        assert result["x"][-1, 0] == pytest.approx(np.exp(0.5), abs=0.06)

    def test_rk4_backward_run_returns_to_start(self, oscillator, oscillator_x0):
        """Test that RK4 with -dt from the forward endpoint recovers the initial state"""
        forward = oscillator.integrate("rk4", oscillator_x0, dt=0.01, steps=200)
        endpoint = np.append(forward["x"][-1], forward["t"][-1])

        backward = oscillator.integrate("rk4", endpoint, dt=-0.01, steps=200)

        assert np.allclose(backward["x"][-1], oscillator_x0[:2], atol=1e-8)
        assert backward["t"][-1] == pytest.approx(0.0, abs=1e-12)


# ============================================================================
# Test Class 5: Validation and Call Isolation
# ============================================================================


class TestValidation:
    """Test argument checks and call isolation"""

    def test_unknown_method_raises(self, oscillator, oscillator_x0):
        """Test that unknown methods are rejected"""
        with pytest.raises(ValueError, match="Unknown integration method"):
            oscillator.solve("rk45", oscillator_x0, dt=0.01, steps=10)

    @pytest.mark.parametrize("method", ALL_METHODS)
    def test_initial_state_without_time_raises(self, oscillator, method):
        """Test that x0 without time slot is rejected"""
        with pytest.raises(ValueError, match="Initial state must have shape"):
            oscillator.solve(method, [0.0, 1.0], dt=0.01, steps=10)

    @pytest.mark.parametrize("method", ALL_METHODS)
    def test_negative_steps_raises(self, oscillator, oscillator_x0, method):
        """Test that negative step counts are rejected"""
        with pytest.raises(ValueError, match="non-negative"):
            oscillator.solve(method, oscillator_x0, dt=0.01, steps=-1)

    @pytest.mark.parametrize("method", ALL_METHODS)
    def test_zero_steps(self, oscillator, oscillator_x0, method):
        """Test that zero steps give an empty trajectory"""
        assert oscillator.solve(method, oscillator_x0, dt=0.01, steps=0).shape == (0, 2)

    @pytest.mark.parametrize("method", ALL_METHODS)
    def test_initial_state_not_modified(self, oscillator, oscillator_x0, method):
        """Test that x0 is untouched"""
        oscillator.solve(method, oscillator_x0, dt=0.01, steps=10)

        assert np.array_equal(oscillator_x0, [0.0, 1.0, 0.0])

    @pytest.mark.parametrize("method", ALL_METHODS)
    def test_repeated_calls_identical(self, oscillator, oscillator_x0, method):
        """Test that repeated calls give identical results"""
        first = oscillator.solve(method, oscillator_x0, dt=0.01, steps=20)
        second = oscillator.solve(method, oscillator_x0, dt=0.01, steps=20)

        assert np.array_equal(first, second)
