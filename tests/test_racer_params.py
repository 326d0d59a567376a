"""
Unit tests for RacerParams class.

Tests the physical parameter defaults, bound validation and derived
parameter calculations.
"""

import dataclasses

import pytest

from racer import InvalidParameter, RacerParams


class TestRacerParams:
    """Test suite for RacerParams dataclass"""

    def test_default_initialization(self) -> None:
        """Test that RacerParams initializes with the reference vehicle"""
        params = RacerParams()

        assert params.mass == 25.0
        assert params.radius_of_gyration == 0.3
        assert params.wheel_base == 1.3
        assert params.cg_distance == 0.6
        assert params.caster_length == 0.3
        assert params.rear_wheel_radius == 0.375
        assert params.steer_wheel_radius == 0.15
        assert params.kp_steer == 10.0
        assert params.kd_steer == 4.0
        assert params.max_brake == 225.0
        assert params.mu_static == 0.9
        assert params.slip_gain == 2.0

    def test_derived_parameters(self) -> None:
        """Test yaw inertia, half track and steer axis offset"""
        params = RacerParams()

        assert abs(params.yaw_inertia - 25.0 * 0.3**2) < 1e-12
        assert params.half_track == 0.5
        assert abs(params.steer_axis_offset - 0.7) < 1e-12
        assert abs(params.contact_base - 1.0) < 1e-12

    def test_yaw_inertia_scales_with_radius_squared(self) -> None:
        """Test that doubling the radius of gyration quadruples yaw inertia"""
        params1 = RacerParams(radius_of_gyration=0.2)
        params2 = RacerParams(radius_of_gyration=0.4)

        assert abs(params2.yaw_inertia - 4 * params1.yaw_inertia) < 1e-12

    @pytest.mark.parametrize(
        "overrides",
        [
            {"mass": 0.1},
            {"mass": -5.0},
            {"radius_of_gyration": 0.029},
            {"wheel_base": 0.005, "cg_distance": 0.001, "caster_length": 0.0},
            {"cg_distance": 0.0},
            {"caster_length": -0.1},
            {"track_width": 0.04},
            {"rear_wheel_radius": 0.04},
            {"steer_wheel_radius": 0.01},
            {"kp_steer": -1.0},
            {"kd_steer": -1.0},
            {"max_brake": -1.0},
            {"mu_static": 0.0},
            {"slip_gain": -0.5},
            {"mass": float("nan")},
        ],
    )
    def test_out_of_bounds_rejected(self, overrides: dict) -> None:
        """Test that every documented bound is enforced"""
        with pytest.raises(InvalidParameter):
            RacerParams(**overrides)

    def test_boundary_values_accepted(self) -> None:
        """Test the inclusive lower bounds"""
        params = RacerParams(
            radius_of_gyration=0.03,
            track_width=0.05,
            rear_wheel_radius=0.05,
            steer_wheel_radius=0.05,
            caster_length=0.0,
            kp_steer=0.0,
            kd_steer=0.0,
        )

        assert params.track_width == 0.05

    def test_center_of_mass_must_precede_contact(self) -> None:
        """Test rejection when the cg lies beyond the steered wheel contact"""
        with pytest.raises(InvalidParameter):
            RacerParams(wheel_base=1.0, cg_distance=0.9, caster_length=0.2)

    def test_center_of_mass_at_contact_accepted(self) -> None:
        """Test that cg exactly at the steered wheel contact is allowed"""
        params = RacerParams(wheel_base=1.0, cg_distance=0.75, caster_length=0.25)

        assert params.contact_base == params.cg_distance

    def test_parameters_are_immutable(self) -> None:
        """Test that a parameter set cannot be partially modified"""
        params = RacerParams()

        with pytest.raises(dataclasses.FrozenInstanceError):
            params.mass = 30.0

    def test_replace_revalidates(self) -> None:
        """Test that dataclasses.replace recomputes and revalidates"""
        params = dataclasses.replace(RacerParams(), mass=50.0)

        assert abs(params.yaw_inertia - 50.0 * 0.09) < 1e-12
        with pytest.raises(InvalidParameter):
            dataclasses.replace(params, mass=0.0)
