"""
Steer angle sweep
"""

import logging
from typing import Any, Dict, Optional
import numpy as np

from racer.brake import ScheduledBrake
from racer.params import RacerParams
from racer.simulator import RollerRacerSimulator

LOGGER = logging.getLogger(__name__)


def run_steer_sweep(
    steer_angles_deg: list[float],
    duration: float = 10.0,
    initial_speed: float = 2.0,
    dt: float = 0.01,
    method: str = "rk4",
    params: Optional[RacerParams] = None,
    brake_command: float = 0.0,
    brake_onset: float = 0.0,
) -> Dict[float, Dict[str, Any]]:
    """
    Run simulation for multiple desired steer angles

    Args:
        steer_angles_deg: Desired steer angles in degrees
        duration: Simulation duration in seconds
        initial_speed: Initial forward speed (m/s)
        dt: Time step (s)
        method: Integration scheme, one of "euler", "rk2", "rk4"
        params: Vehicle parameters (defaults to the reference vehicle)
        brake_command: Braking command applied from brake_onset onwards (0 = no braking)
        brake_onset: Time at which braking starts (s)

    Returns:
        Dictionary with results for each steer angle
    """
    results: Dict[float, Dict[str, Any]] = {}

    for angle_deg in steer_angles_deg:
        simulator = RollerRacerSimulator(params)
        if brake_command > 0:
            simulator.dynamics.brake_provider = ScheduledBrake(
                onset=brake_onset, command=brake_command, clock=lambda sim=simulator: sim.time
            )
        simulator.set_initial_speed(initial_speed)
        simulator.steer_angle_signal = np.radians(angle_deg)

        t, state, telemetry = simulator.simulate(duration=duration, dt=dt, method=method)
        analysis = simulator.analyze(t, state, telemetry)
        LOGGER.info(
            f"Steer {angle_deg} deg: turn radius {analysis['median_turn_radius']:.3f} m, "
            f"heading change {analysis['heading_change']:.3f} rad"
        )

        results[angle_deg] = {
            "time": t,
            "state": state,
            "telemetry": telemetry,
            "analysis": analysis,
            "simulator": simulator,
        }

    return results
