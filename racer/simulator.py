"""
Main roller racer simulator class
"""

import logging
from typing import Any, Callable, Dict, Optional, Tuple, TYPE_CHECKING
import numpy as np

from racer.analysis import TelemetryAnalyzer
from racer.dynamics import RollerRacerDynamics
from racer.errors import SimulationStarted
from racer.integrator import Integrator
from racer.params import RacerParams, require_finite
from racer.state import (
    DELTA,
    PSI,
    PSI_DOT,
    STATE_SIZE,
    WHEEL_FRONT,
    WHEEL_LEFT,
    WHEEL_RIGHT,
    X,
    X_DOT,
    Z,
    Z_DOT,
    RacerState,
)

if TYPE_CHECKING:
    from racer.brake import BrakeCommandProvider

LOGGER = logging.getLogger(__name__)

METHODS = ("euler", "rk2", "rk4")

# Columns of the telemetry array returned by simulate()
TELEMETRY_COLUMNS = (
    "speed",
    "kinetic_energy",
    "slip_rate_front",
    "slip_rate_rear",
    "front_friction_factor",
    "brake_command",
)


class RollerRacerSimulator:
    """Steps the roller racer through time and exposes its telemetry"""

    def __init__(
        self,
        params: Optional[RacerParams] = None,
        brake_provider: Optional["BrakeCommandProvider"] = None,
    ) -> None:
        """
        Initialize simulator

        Args:
            params: Vehicle parameters (defaults to the reference vehicle)
            brake_provider: Host-owned source of the braking command
        """
        self.dynamics = RollerRacerDynamics(params, brake_provider)
        self.integrator = Integrator(STATE_SIZE)
        self.integrator.set_derivative_function(self.dynamics.calculate_dynamics)
        self.time = 0.0

        self._steppers = {
            "euler": self.integrator.step_euler,
            "rk2": self.integrator.step_rk2,
            "rk4": self.integrator.step,
        }

    @property
    def params(self) -> RacerParams:
        return self.dynamics.params

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def set_inertia(self, mass: float, radius_of_gyration: float) -> RacerParams:
        return self.dynamics.set_inertia(mass, radius_of_gyration)

    def set_geometry(
        self,
        wheel_base: float,
        cg_distance: float,
        caster_length: float,
        track_width: float,
        rear_wheel_radius: float,
        steer_wheel_radius: float,
    ) -> RacerParams:
        return self.dynamics.set_geometry(
            wheel_base, cg_distance, caster_length, track_width, rear_wheel_radius, steer_wheel_radius
        )

    @property
    def steer_angle_signal(self) -> float:
        return self.dynamics.steer_angle_signal

    @steer_angle_signal.setter
    def steer_angle_signal(self, value: float) -> None:
        self.dynamics.steer_angle_signal = value

    def _check_not_started(self, what: str) -> None:
        if self.dynamics.has_started:
            raise SimulationStarted(f"cannot set {what} after the simulation has started")

    def set_initial_speed(self, value: float) -> None:
        """Set the velocity of the center of mass along the current heading (m/s)"""
        self._check_not_started("initial speed")
        value = require_finite("initial speed", value)
        psi = self.integrator[PSI]
        self.integrator[X_DOT] = value * np.cos(psi)
        self.integrator[Z_DOT] = -value * np.sin(psi)

    def set_initial_heading(self, value: float) -> None:
        """Set the heading, rotating any initial velocity with it (rad)"""
        self._check_not_started("initial heading")
        value = require_finite("initial heading", value)
        v = self.dynamics.forward_speed(self.integrator.state)
        self.integrator[PSI] = value
        self.integrator[X_DOT] = v * np.cos(value)
        self.integrator[Z_DOT] = -v * np.sin(value)

    def set_initial_steer_angle(self, value: float) -> None:
        self._check_not_started("initial steer angle")
        value = require_finite("initial steer angle", value)
        self.integrator[DELTA] = value

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------

    def step(self, dt: float, method: str = "rk4") -> None:
        """
        Advance the simulation by one tick

        Args:
            dt: Time step (s)
            method: Integration scheme, one of "euler", "rk2", "rk4"
        """
        if method not in self._steppers:
            raise ValueError(f"unknown integration method {method!r}, expected one of {METHODS}")
        if not dt > 0:
            raise ValueError(f"time step must be positive, got {dt}")

        self.dynamics.sample_brake()
        self._steppers[method](self.time, dt)
        self.time += dt

    def simulate(
        self,
        duration: float = 10.0,
        dt: float = 0.01,
        method: str = "rk4",
        on_tick: Optional[Callable[[float, "RollerRacerSimulator"], None]] = None,
    ) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Run simulation

        Args:
            duration: Simulated time to advance (s)
            dt: Time step (s)
            method: Integration scheme, one of "euler", "rk2", "rk4"
            on_tick: Called as on_tick(time, simulator) before every tick

        Returns:
            Tuple of (time_array, state_history, telemetry_history); the
            telemetry columns are listed in TELEMETRY_COLUMNS
        """
        if method not in self._steppers:
            raise ValueError(f"unknown integration method {method!r}, expected one of {METHODS}")
        if not dt > 0:
            raise ValueError(f"time step must be positive, got {dt}")

        n_steps = int(round(duration / dt))
        t = self.time + dt * np.arange(n_steps + 1)
        states = np.zeros((n_steps + 1, STATE_SIZE))
        telemetry = np.zeros((n_steps + 1, len(TELEMETRY_COLUMNS)))

        LOGGER.info(f"Simulating {duration}s with dt={dt} using {method}")

        self.dynamics.sample_brake()
        states[0] = self.integrator.state
        telemetry[0] = self._telemetry(states[0])
        for i in range(1, n_steps + 1):
            if on_tick is not None:
                on_tick(self.time, self)
            self.step(dt, method)
            states[i] = self.integrator.state
            telemetry[i] = self._telemetry(states[i])

        LOGGER.info(
            f"Finished at t={self.time:.3f}s: position=({self.x:.3f}, {self.z:.3f}), "
            f"speed={self.speed:.3f}"
        )
        return t, states, telemetry

    def _telemetry(self, state: np.ndarray) -> np.ndarray:
        d = self.dynamics
        return np.array([
            d.speed(state),
            d.kinetic_energy(state),
            d.slip_rate_front(state),
            d.slip_rate_rear(state),
            d.front_friction_factor(state),
            d.brake_command,
        ])

    def analyze(
        self, t: np.ndarray, states: np.ndarray, telemetry: np.ndarray
    ) -> Dict[str, Any]:
        """Summarize a run (see TelemetryAnalyzer.analyze)"""
        return TelemetryAnalyzer(self.params).analyze(t, states, telemetry)

    # ------------------------------------------------------------------
    # Telemetry
    # ------------------------------------------------------------------

    def snapshot(self) -> RacerState:
        return RacerState.from_array(self.integrator.state)

    @property
    def x(self) -> float:
        return self.integrator[X]

    @property
    def z(self) -> float:
        return self.integrator[Z]

    @property
    def position(self) -> Tuple[float, float]:
        return self.x, self.z

    @property
    def heading(self) -> float:
        return self.integrator[PSI]

    @property
    def yaw_rate(self) -> float:
        return self.integrator[PSI_DOT]

    @property
    def steer_angle(self) -> float:
        return self.integrator[DELTA]

    @property
    def wheel_angle_left(self) -> float:
        return self.integrator[WHEEL_LEFT]

    @property
    def wheel_angle_right(self) -> float:
        return self.integrator[WHEEL_RIGHT]

    @property
    def wheel_angle_front(self) -> float:
        return self.integrator[WHEEL_FRONT]

    @property
    def speed(self) -> float:
        return self.dynamics.speed(self.integrator.state)

    @property
    def kinetic_energy(self) -> float:
        return self.dynamics.kinetic_energy(self.integrator.state)

    @property
    def slip_rate_front(self) -> float:
        return self.dynamics.slip_rate_front(self.integrator.state)

    @property
    def slip_rate_rear(self) -> float:
        return self.dynamics.slip_rate_rear(self.integrator.state)

    @property
    def front_friction_factor(self) -> float:
        return self.dynamics.front_friction_factor(self.integrator.state)
