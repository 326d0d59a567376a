"""
Unit tests for the Dash host's input validation.

Tests update_results, which parses the form inputs before running the sweep.
"""

import pytest
from dash.exceptions import PreventUpdate

from app import update_results


def run(steer_str="0,10", initial_speed=2.0, duration=2.0, brake_command=0.0,
        brake_onset=0.0, method="rk4"):
    return update_results(
        1, steer_str, initial_speed, duration, brake_command, brake_onset, method
    )


class TestUpdateResults:
    """Test suite for the results callback"""

    def test_no_click_prevents_update(self) -> None:
        with pytest.raises(PreventUpdate):
            update_results(None, "0", 2.0, 2.0, 0.0, 0.0, "rk4")

    @pytest.mark.parametrize("steer_str", [None, ""])
    def test_missing_steer_angles(self, steer_str) -> None:
        """Test that an empty steer field gives an error message, not an exception"""
        results, status = run(steer_str=steer_str)

        assert results == []
        assert status.style["color"] == "red"

    def test_non_numeric_steer_angles(self) -> None:
        results, status = run(steer_str="5,abc")

        assert results == []
        assert "numbers" in status.children

    @pytest.mark.parametrize("duration", [None, 0.0, 0.5, 60.5])
    def test_duration_outside_range(self, duration) -> None:
        """Test that durations outside 1 to 60 seconds are refused"""
        results, status = run(duration=duration)

        assert results == []
        assert "between 1 and 60" in status.children

    def test_successful_run(self) -> None:
        """Test that valid inputs run every steer angle, braking included"""
        _, status = run(steer_str="10, 0", duration=1.0, brake_command=1.0, brake_onset=0.5)

        assert status.style["color"] == "green"
        assert "2 steer angles" in status.children
