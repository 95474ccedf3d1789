"""
Unit tests for robot dynamics models.

Tests the forward-Euler step, the control-affine decomposition and the
display pose of every dynamics variant.
"""

import numpy as np
import pytest

from robot_chicken import (
    DimensionMismatch,
    PlanarDoubleIntegrator,
    TrivialDynamics,
    UnicycleDynamics,
    VerticalDoubleIntegrator,
)


ALL_MODELS = [
    (TrivialDynamics(), [0.7], []),
    (PlanarDoubleIntegrator(), [1.0, -0.5, 2.0, 0.25], [0.3, -0.2]),
    (VerticalDoubleIntegrator(), [1.5, -0.4], [0.9]),
    (UnicycleDynamics(speed=2.0), [1.0, -1.0, 0.5], [0.3]),
]


class TestDynamicsContract:
    """Properties shared by every dynamics variant"""

    @pytest.mark.parametrize("model, state, control", ALL_MODELS)
    def test_zero_duration_step_is_identity(self, model, state, control) -> None:
        """Test that a step with dt=0 leaves an in-range state unchanged"""
        new_state = model.step(state, control, 0.0)

        np.testing.assert_allclose(new_state, state)

    @pytest.mark.parametrize("model, state, control", ALL_MODELS)
    def test_step_is_drift_plus_control_term(self, model, state, control) -> None:
        """Test that step equals state + dt * (f(state) + B(state) @ u)"""
        dt = 0.01
        x = np.array(state)
        expected = x + dt * (model.drift(x) + model.control_coefficient(x) @ np.array(control))

        np.testing.assert_allclose(model.step(state, control, dt), expected)

    @pytest.mark.parametrize("model, state, control", ALL_MODELS)
    def test_coefficient_shape(self, model, state, control) -> None:
        """Test that B has shape (state_dim, control_dim)"""
        state_dim, control_dim = model.dimension()

        assert model.control_coefficient(np.array(state)).shape == (state_dim, control_dim)

    @pytest.mark.parametrize("model, state, control", ALL_MODELS)
    def test_step_does_not_mutate_input(self, model, state, control) -> None:
        """Test that step returns a new array and leaves its input alone"""
        x = np.array(state)
        before = x.copy()

        model.step(x, control, 0.1)

        np.testing.assert_array_equal(x, before)

    @pytest.mark.parametrize("model, state, control", ALL_MODELS[1:])
    def test_wrong_control_length_raises(self, model, state, control) -> None:
        """Test that a control vector of the wrong length is rejected"""
        with pytest.raises(DimensionMismatch):
            model.step(state, list(control) + [1.0], 0.1)

    @pytest.mark.parametrize("model, state, control", ALL_MODELS)
    def test_wrong_state_length_raises(self, model, state, control) -> None:
        """Test that a state vector of the wrong length is rejected"""
        with pytest.raises(DimensionMismatch):
            model.step(list(state) + [0.0], control, 0.1)

    def test_nested_control_reports_shape(self) -> None:
        """Test that a 2-D control is rejected with its actual shape in the message"""
        with pytest.raises(DimensionMismatch, match=r"control has shape \(1, 1\), expected \(1,\)"):
            UnicycleDynamics().step([0.0, 0.0, 0.0], [[1.0]], 0.1)

    def test_mismatch_records_shape(self) -> None:
        """Test that the error carries the offending shape"""
        with pytest.raises(DimensionMismatch) as excinfo:
            PlanarDoubleIntegrator().step(np.zeros((2, 2)), [0.0, 0.0], 0.1)

        assert excinfo.value.what == "state"
        assert excinfo.value.expected == 4
        assert excinfo.value.shape == (2, 2)


class TestPlanarDoubleIntegrator:
    """Test suite for the planar double integrator"""

    @pytest.fixture
    def model(self) -> PlanarDoubleIntegrator:
        return PlanarDoubleIntegrator()

    def test_dimension(self, model: PlanarDoubleIntegrator) -> None:
        """Test declared dimensions (4 states, 2 controls)"""
        assert model.dimension() == (4, 2)

    def test_two_euler_steps(self, model: PlanarDoubleIntegrator) -> None:
        """Test that position uses the pre-step velocity"""
        state = np.zeros(4)
        state = model.step(state, [1.0, 0.0], 1.0)  # x stays 0, vx -> 1
        state = model.step(state, [1.0, 0.0], 1.0)  # x -> 1, vx -> 2

        np.testing.assert_allclose(state, [1.0, 2.0, 0.0, 0.0])

    def test_coefficient_maps_controls_to_velocities(self, model: PlanarDoubleIntegrator) -> None:
        """Test that ax drives vx and ay drives vy"""
        B = model.control_coefficient(np.zeros(4))

        np.testing.assert_array_equal(B, [[0, 0], [1, 0], [0, 0], [0, 1]])

    def test_display_pose(self, model: PlanarDoubleIntegrator) -> None:
        """Test that the pose reads x and y from the state"""
        pose = model.display_pose(np.array([1.0, 5.0, -2.0, 7.0]))

        assert (pose.x, pose.y, pose.heading) == (1.0, -2.0, 0.0)

    def test_stop_zeroes_velocities(self, model: PlanarDoubleIntegrator) -> None:
        """Test that stop keeps position and removes velocity"""
        stopped = model.stop(np.array([1.0, 5.0, -2.0, 7.0]))

        np.testing.assert_array_equal(stopped, [1.0, 0.0, -2.0, 0.0])


class TestVerticalDoubleIntegrator:
    """Test suite for the vertical double integrator"""

    @pytest.fixture
    def model(self) -> VerticalDoubleIntegrator:
        return VerticalDoubleIntegrator()

    def test_dimension(self, model: VerticalDoubleIntegrator) -> None:
        """Test declared dimensions (2 states, 1 control)"""
        assert model.dimension() == (2, 1)

    def test_step(self, model: VerticalDoubleIntegrator) -> None:
        """Test y += vy * dt and vy += ay * dt"""
        new_state = model.step([1.0, 2.0], [-4.0], 0.5)

        np.testing.assert_allclose(new_state, [2.0, 0.0])

    def test_scalar_control_accepted(self, model: VerticalDoubleIntegrator) -> None:
        """Test that a bare float is accepted as a one-element control"""
        np.testing.assert_allclose(model.step([0.0, 0.0], 2.0, 1.0), [0.0, 2.0])

    def test_display_pose(self, model: VerticalDoubleIntegrator) -> None:
        """Test that the pose sits on the vertical axis"""
        pose = model.display_pose(np.array([3.0, 1.0]))

        assert (pose.x, pose.y) == (0.0, 3.0)


class TestUnicycleDynamics:
    """Test suite for the Dubins car"""

    @pytest.fixture
    def model(self) -> UnicycleDynamics:
        return UnicycleDynamics(speed=1.0)

    def test_dimension(self, model: UnicycleDynamics) -> None:
        """Test declared dimensions (3 states, 1 control)"""
        assert model.dimension() == (3, 1)

    def test_straight_line(self, model: UnicycleDynamics) -> None:
        """Test that zero turn rate moves the car along its heading"""
        new_state = model.step([0.0, 0.0, 0.0], [0.0], 1.0)

        np.testing.assert_allclose(new_state, [1.0, 0.0, 0.0], atol=1e-12)

    def test_heading_changes_with_turn_rate(self, model: UnicycleDynamics) -> None:
        """Test that position uses the pre-step heading"""
        new_state = model.step([0.0, 0.0, 0.0], [0.5], 1.0)

        np.testing.assert_allclose(new_state, [1.0, 0.0, 0.5], atol=1e-12)

    def test_single_wrap_above_pi(self, model: UnicycleDynamics) -> None:
        """Test that a heading just above pi is wrapped once"""
        new_state = model.step([0.0, 0.0, 3.2], [0.0], 0.0)

        assert new_state[2] == pytest.approx(3.2 - 2 * np.pi)
        assert new_state[2] == pytest.approx(-3.083, abs=1e-3)

    def test_single_wrap_below_minus_pi(self, model: UnicycleDynamics) -> None:
        """Test that a heading just below -pi is wrapped once"""
        new_state = model.step([0.0, 0.0, -3.2], [0.0], 0.0)

        assert new_state[2] == pytest.approx(-3.2 + 2 * np.pi)

    def test_wrap_applied_only_once(self, model: UnicycleDynamics) -> None:
        """Test the known limitation: far out-of-range headings are not fully normalized"""
        new_state = model.step([0.0, 0.0, 10.0], [0.0], 0.0)

        assert new_state[2] == pytest.approx(10.0 - 2 * np.pi)
        assert new_state[2] > np.pi

    def test_minus_pi_maps_to_pi(self, model: UnicycleDynamics) -> None:
        """Test that the wrapped range is (-pi, pi]"""
        new_state = model.step([0.0, 0.0, -np.pi], [0.0], 0.0)

        assert new_state[2] == pytest.approx(np.pi)

    def test_speed_scales_motion(self) -> None:
        """Test that forward speed multiplies the displacement"""
        model = UnicycleDynamics(speed=3.0)

        new_state = model.step([0.0, 0.0, np.pi / 2], [0.0], 0.5)

        np.testing.assert_allclose(new_state, [0.0, 1.5, np.pi / 2], atol=1e-12)

    def test_coefficient_is_state_independent(self, model: UnicycleDynamics) -> None:
        """Test that B maps omega to the heading rate for any state"""
        for state in ([0.0, 0.0, 0.0], [5.0, -3.0, 2.0]):
            np.testing.assert_array_equal(model.control_coefficient(np.array(state)), [[0], [0], [1]])

    def test_stop_and_reset_speed(self, model: UnicycleDynamics) -> None:
        """Test that stop zeroes the speed and reset restores it"""
        model.stop(np.zeros(3))
        assert model.speed == 0.0
        assert np.allclose(model.step([0.0, 0.0, 0.0], [0.0], 1.0), [0.0, 0.0, 0.0])

        model.reset(speed=3.0)
        assert model.speed == 3.0

    def test_reset_without_speed_keeps_speed(self, model: UnicycleDynamics) -> None:
        """Test that reset(None) leaves the speed as it was"""
        model.reset()

        assert model.speed == 1.0


class TestTrivialDynamics:
    """Test suite for the no-op model"""

    def test_state_never_changes(self) -> None:
        """Test that the trivial model has no drift"""
        model = TrivialDynamics(state_dim=3)

        np.testing.assert_array_equal(model.step([1.0, 2.0, 3.0], [], 10.0), [1.0, 2.0, 3.0])

    def test_dimension(self) -> None:
        """Test default dimensions (1 state, 0 controls)"""
        assert TrivialDynamics().dimension() == (1, 0)

    def test_display_pose_pads_missing_components(self) -> None:
        """Test that a one-state pose is padded with zeros"""
        pose = TrivialDynamics().display_pose(np.array([4.0]))

        assert (pose.x, pose.y, pose.heading) == (4.0, 0.0, 0.0)
