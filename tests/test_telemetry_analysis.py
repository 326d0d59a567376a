"""
Unit tests for telemetry analysis.

Tests the RollerRacerSimulator.analyze method which summarizes distance,
energy, slip and turning behaviour of a run.
"""

import math

import numpy as np
import pytest

from racer import ConstantBrake, RacerParams, RollerRacerSimulator

EXPECTED_KEYS = {
    "displacement",
    "path_length",
    "final_speed",
    "max_speed",
    "initial_kinetic_energy",
    "final_kinetic_energy",
    "energy_lost_fraction",
    "heading_change",
    "max_slip_front",
    "max_slip_rear",
    "max_friction_factor",
    "sliding_fraction",
    "median_turn_radius",
}


def run(steer: float = 0.0, brake: float = 0.0, duration: float = 4.0, params=None):
    simulator = RollerRacerSimulator(params, brake_provider=ConstantBrake(brake))
    simulator.set_initial_speed(2.0)
    simulator.steer_angle_signal = steer
    t, state, telemetry = simulator.simulate(duration=duration, dt=0.01)
    return simulator.analyze(t, state, telemetry)


class TestTelemetryAnalysis:
    """Test suite for telemetry analysis"""

    def test_analysis_returns_all_keys(self) -> None:
        assert set(run().keys()) == EXPECTED_KEYS

    def test_analysis_values_are_numeric(self) -> None:
        """Test that all values are finite numbers apart from an infinite straight-line radius"""
        analysis = run(steer=0.2)

        for key, value in analysis.items():
            assert isinstance(value, float), key
            assert math.isfinite(value), key

    def test_straight_run(self) -> None:
        """Test distance and energy for a straight coast at 2 m/s"""
        analysis = run(duration=4.0)

        assert abs(analysis["displacement"] - 8.0) < 1e-9
        assert abs(analysis["path_length"] - 8.0) < 1e-9
        assert abs(analysis["energy_lost_fraction"]) < 1e-12
        assert analysis["heading_change"] == 0.0
        assert analysis["median_turn_radius"] == float("inf")
        assert analysis["sliding_fraction"] == 0.0

    def test_turning_run(self) -> None:
        """Test that a turn has a finite radius and a path longer than its displacement"""
        analysis = run(steer=0.3, duration=6.0)

        assert 0.5 < analysis["median_turn_radius"] < 20.0
        assert analysis["path_length"] > analysis["displacement"]
        assert abs(analysis["heading_change"]) > 0.5
        assert analysis["max_slip_rear"] < 1e-3

    def test_braking_run_loses_energy(self) -> None:
        analysis = run(brake=1.0, duration=1.0)

        assert analysis["energy_lost_fraction"] > 0.9
        assert analysis["final_speed"] < 0.2
        assert analysis["max_speed"] == pytest.approx(2.0)

    def test_low_friction_reports_sliding(self) -> None:
        """Test that a tight turn needs more grip than a very low friction bound"""
        analysis = run(steer=0.4, duration=4.0, params=RacerParams(mu_static=1e-3))

        assert analysis["max_friction_factor"] > 1e-3
        assert analysis["sliding_fraction"] > 0.0

    def test_default_friction_holds(self) -> None:
        analysis = run(steer=0.2, duration=4.0)

        assert analysis["sliding_fraction"] == 0.0
        assert analysis["max_friction_factor"] < RacerParams().mu_static
