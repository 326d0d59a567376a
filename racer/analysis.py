"""
Telemetry analysis functions
"""

from typing import Any, Dict
import numpy as np
from scipy.integrate import trapezoid

from racer.params import RacerParams
from racer.state import PSI, PSI_DOT, X, X_DOT, Z, Z_DOT


class TelemetryAnalyzer:
    """Summarizes a simulation run: distance, energy, slip and turning"""

    def __init__(self, params: RacerParams, min_yaw_rate: float = 1e-3) -> None:
        """
        Initialize telemetry analyzer

        Args:
            params: Vehicle parameters used for the run
            min_yaw_rate: Yaw rates below this (rad/s) count as driving straight
        """
        self.params = params
        self.min_yaw_rate = min_yaw_rate

    def analyze(
        self, t: np.ndarray, state: np.ndarray, telemetry: np.ndarray
    ) -> Dict[str, Any]:
        """
        Analyze simulation results

        Args:
            t: Time array
            state: State history [N x 11]
            telemetry: Telemetry history [N x 6] with [speed, kinetic_energy,
                slip_front, slip_rear, front_friction_factor, brake_command]

        Returns:
            Dictionary with analysis results
        """
        speed = telemetry[:, 0]
        energy = telemetry[:, 1]
        slip_front = telemetry[:, 2]
        slip_rear = telemetry[:, 3]
        friction_factor = telemetry[:, 4]

        displacement = float(np.hypot(state[-1, X] - state[0, X], state[-1, Z] - state[0, Z]))
        path_length = float(trapezoid(speed, t)) if len(t) > 1 else 0.0

        initial_energy = float(energy[0])
        final_energy = float(energy[-1])
        energy_lost_fraction = (
            (initial_energy - final_energy) / initial_energy if initial_energy > 0 else 0.0
        )

        # Turn radius from forward speed over yaw rate while turning
        psi = state[:, PSI]
        forward = state[:, X_DOT] * np.cos(psi) - state[:, Z_DOT] * np.sin(psi)
        yaw_rate = state[:, PSI_DOT]
        turning = np.abs(yaw_rate) > self.min_yaw_rate
        if np.any(turning):
            median_turn_radius = float(np.median(np.abs(forward[turning] / yaw_rate[turning])))
        else:
            median_turn_radius = float("inf")

        # Time spent needing more friction than the static lower bound provides
        sliding = friction_factor > self.params.mu_static
        duration = float(t[-1] - t[0])
        sliding_time = float(trapezoid(sliding.astype(float), t)) if len(t) > 1 else 0.0
        sliding_fraction = sliding_time / duration if duration > 0 else 0.0

        return {
            "displacement": displacement,
            "path_length": path_length,
            "final_speed": float(speed[-1]),
            "max_speed": float(np.max(speed)),
            "initial_kinetic_energy": initial_energy,
            "final_kinetic_energy": final_energy,
            "energy_lost_fraction": float(energy_lost_fraction),
            "heading_change": float(psi[-1] - psi[0]),
            "max_slip_front": float(np.max(np.abs(slip_front))),
            "max_slip_rear": float(np.max(np.abs(slip_rear))),
            "max_friction_factor": float(np.max(friction_factor)),
            "sliding_fraction": float(sliding_fraction),
            "median_turn_radius": median_turn_radius,
        }
