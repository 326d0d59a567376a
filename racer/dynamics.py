"""
Roller racer equations of motion

The vehicle is a rigid body moving in the x-z plane on two rear wheels and
a castered, steered front wheel. Rolling without lateral slip at the rear
axle and at the front contact is enforced as a soft constraint: at every
evaluation a 5x5 linear system is solved for the planar and yaw
accelerations together with the two lateral contact forces, with the slip
rate at each contact driven towards zero at rate ``slip_gain``.

Unknowns of the linear system, in order:
    [x_ddot, z_ddot, psi_ddot, rear lateral force, front lateral force]
"""

import logging
from dataclasses import replace
from enum import Enum
from typing import Optional, Tuple, TYPE_CHECKING
import numpy as np

from racer.errors import InvalidParameter
from racer.linalg import solve_gauss
from racer.params import RacerParams, require_finite
from racer.state import DELTA, DELTA_DOT, PSI, PSI_DOT, STATE_SIZE, X_DOT, Z_DOT

if TYPE_CHECKING:
    from racer.brake import BrakeCommandProvider

LOGGER = logging.getLogger(__name__)


class Lifecycle(Enum):
    """Whether the model has been evaluated yet"""

    NOT_STARTED = "not_started"
    RUNNING = "running"


class RollerRacerDynamics:
    """Derivative function, parameters and derived quantities of the vehicle"""

    def __init__(
        self,
        params: Optional[RacerParams] = None,
        brake_provider: Optional["BrakeCommandProvider"] = None,
    ) -> None:
        """
        Initialize dynamics model

        Args:
            params: Vehicle parameters (defaults to the reference vehicle)
            brake_provider: Source of the braking command; no braking if omitted
        """
        self.params = params if params is not None else RacerParams()
        self.brake_provider = brake_provider
        self.desired_steer_angle = 0.0
        self.brake_command = 0.0
        self.lifecycle = Lifecycle.NOT_STARTED

    # ------------------------------------------------------------------
    # Parameter configuration
    # ------------------------------------------------------------------

    def _update_params(self, **changes: float) -> RacerParams:
        try:
            params = replace(self.params, **changes)
        except InvalidParameter as e:
            LOGGER.warning(f"Rejected parameter update {changes}: {e}")
            raise
        self.params = params
        LOGGER.debug(f"Committed parameter update {changes}")
        return params

    def set_inertia(self, mass: float, radius_of_gyration: float) -> RacerParams:
        """
        Set mass and yaw inertia (mass * radius_of_gyration²)

        Raises:
            InvalidParameter: If mass <= 0.1 or radius_of_gyration < 0.03
        """
        return self._update_params(mass=mass, radius_of_gyration=radius_of_gyration)

    def set_geometry(
        self,
        wheel_base: float,
        cg_distance: float,
        caster_length: float,
        track_width: float,
        rear_wheel_radius: float,
        steer_wheel_radius: float,
    ) -> RacerParams:
        """
        Set vehicle geometry

        Args:
            wheel_base: Rear axle to steer axis (m)
            cg_distance: Rear axle to center of mass (m)
            caster_length: Steer axis to steered wheel contact (m)
            track_width: Distance between rear wheels (m)
            rear_wheel_radius: Radius of the rear wheels (m)
            steer_wheel_radius: Radius of the steered wheel (m)

        Raises:
            InvalidParameter: If any bound is violated or the center of mass
                is not between the rear axle and the steered wheel contact
        """
        return self._update_params(
            wheel_base=wheel_base,
            cg_distance=cg_distance,
            caster_length=caster_length,
            track_width=track_width,
            rear_wheel_radius=rear_wheel_radius,
            steer_wheel_radius=steer_wheel_radius,
        )

    def set_steer_gains(self, kp: float, kd: float) -> RacerParams:
        return self._update_params(kp_steer=kp, kd_steer=kd)

    def set_max_brake(self, value: float) -> RacerParams:
        return self._update_params(max_brake=value)

    def set_slip_gain(self, value: float) -> RacerParams:
        return self._update_params(slip_gain=value)

    @property
    def steer_angle_signal(self) -> float:
        """Desired steer angle tracked by the steering filter (rad)"""
        return self.desired_steer_angle

    @steer_angle_signal.setter
    def steer_angle_signal(self, value: float) -> None:
        self.desired_steer_angle = require_finite("steer angle signal", value)

    @property
    def has_started(self) -> bool:
        return self.lifecycle is Lifecycle.RUNNING

    # ------------------------------------------------------------------
    # Braking
    # ------------------------------------------------------------------

    def sample_brake(self) -> float:
        """
        Read the braking command once for the coming tick

        Every stage evaluation until the next call uses this value.

        Returns:
            Braking command clipped to [0, 1]
        """
        if self.brake_provider is None:
            command = 0.0
        else:
            command = float(self.brake_provider.brake())
            if not np.isfinite(command):
                raise ValueError(f"brake command must be finite, got {command}")
        self.brake_command = float(np.clip(command, 0.0, 1.0))
        return self.brake_command

    def brake_force(self, state: np.ndarray) -> float:
        """Braking force magnitude, signed to oppose forward motion (N)"""
        return self.brake_command * self.params.max_brake * float(np.sign(self.forward_speed(state)))

    # ------------------------------------------------------------------
    # Equations of motion
    # ------------------------------------------------------------------

    def steer_acceleration(self, state: np.ndarray) -> float:
        """PD steering filter: drives steer angle towards the desired angle"""
        p = self.params
        delta = state[DELTA]
        delta_dot = state[DELTA_DOT]
        return -p.kd_steer * delta_dot - p.kp_steer * (delta - self.desired_steer_angle)

    def assemble_system(self, state: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """
        Build the coefficient matrix and right-hand side for the current state

        Rows: x force balance, z force balance, yaw moment about the center of
        mass, rear slip-rate equation, front slip-rate equation.
        """
        p = self.params
        m = p.mass
        b = p.cg_distance
        d = p.caster_length
        h = p.steer_axis_offset
        kp_slip = p.slip_gain

        x_dot = state[X_DOT]
        z_dot = state[Z_DOT]
        psi = state[PSI]
        psi_dot = state[PSI_DOT]
        delta = state[DELTA]
        delta_dot = state[DELTA_DOT]

        cos_psi = np.cos(psi)
        sin_psi = np.sin(psi)
        cos_delta = np.cos(delta)
        sin_delta = np.sin(delta)
        cos_pd = np.cos(psi + delta)
        sin_pd = np.sin(psi + delta)

        brake = self.brake_force(state)
        delta_ddot = self.steer_acceleration(state)

        a = np.array([
            [m, 0.0, 0.0, -sin_psi, -sin_pd],
            [0.0, m, 0.0, -cos_psi, -cos_pd],
            [0.0, 0.0, p.yaw_inertia, -b, h * cos_delta - d],
            [sin_psi, cos_psi, b, 0.0, 0.0],
            [sin_pd, cos_pd, d - h * cos_delta, 0.0, 0.0],
        ])

        slip_rear = self.slip_rate_rear(state)
        slip_front = self.slip_rate_front(state)
        turn_rate = psi_dot + delta_dot

        rhs = np.array([
            -brake * cos_psi,
            brake * sin_psi,
            0.0,
            -kp_slip * slip_rear + z_dot * psi_dot * sin_psi - x_dot * psi_dot * cos_psi,
            -kp_slip * slip_front
            - delta_ddot * d
            - x_dot * turn_rate * cos_pd
            + z_dot * turn_rate * sin_pd
            - h * psi_dot * delta_dot * sin_delta,
        ])

        return a, rhs

    def solve_system(self, state: np.ndarray) -> np.ndarray:
        """Accelerations and lateral contact forces for the current state"""
        a, rhs = self.assemble_system(state)
        return solve_gauss(a, rhs)

    def wheel_rates(self, state: np.ndarray) -> Tuple[float, float, float]:
        """
        Rolling rates of the left rear, right rear and steered wheels (rad/s)

        Each wheel rolls without slip, so its rate is the velocity of its
        hub along the wheel plane divided by its radius.
        """
        p = self.params
        psi = state[PSI]
        psi_dot = state[PSI_DOT]
        delta = state[DELTA]
        v = self.forward_speed(state)
        c = p.half_track
        h = p.steer_axis_offset

        left = -(v - c * psi_dot) / p.rear_wheel_radius
        right = -(v + c * psi_dot) / p.rear_wheel_radius
        front = (
            -state[X_DOT] * np.cos(psi + delta)
            + state[Z_DOT] * np.sin(psi + delta)
            - h * psi_dot * np.sin(delta)
        ) / p.steer_wheel_radius
        return float(left), float(right), float(front)

    def calculate_dynamics(self, state: np.ndarray, t: float) -> np.ndarray:
        """
        System dynamics: d(state)/dt = f(state, t)

        Args:
            state: [x, x_dot, z, z_dot, psi, psi_dot, wheel_left, wheel_right,
                    wheel_front, delta, delta_dot]
            t: Time

        Returns:
            Derivative of state vector
        """
        if len(state) != STATE_SIZE:
            raise ValueError(f"expected {STATE_SIZE} state values, got {len(state)}")

        x_ddot, z_ddot, psi_ddot, _, _ = self.solve_system(state)
        left, right, front = self.wheel_rates(state)

        if self.lifecycle is Lifecycle.NOT_STARTED:
            self.lifecycle = Lifecycle.RUNNING
            LOGGER.debug(f"Simulation started at t={t}")

        return np.array([
            state[X_DOT],
            x_ddot,
            state[Z_DOT],
            z_ddot,
            state[PSI_DOT],
            psi_ddot,
            left,
            right,
            front,
            state[DELTA_DOT],
            self.steer_acceleration(state),
        ])

    # ------------------------------------------------------------------
    # Derived quantities
    # ------------------------------------------------------------------

    def forward_speed(self, state: np.ndarray) -> float:
        """Velocity of the center of mass along the heading (m/s)"""
        psi = state[PSI]
        return float(state[X_DOT] * np.cos(psi) - state[Z_DOT] * np.sin(psi))

    def speed(self, state: np.ndarray) -> float:
        return float(np.hypot(state[X_DOT], state[Z_DOT]))

    def kinetic_energy(self, state: np.ndarray) -> float:
        p = self.params
        v = self.speed(state)
        return 0.5 * p.mass * v**2 + 0.5 * p.yaw_inertia * state[PSI_DOT] ** 2

    def slip_rate_rear(self, state: np.ndarray) -> float:
        """Lateral velocity of the rear axle midpoint (m/s)"""
        psi = state[PSI]
        return float(
            state[X_DOT] * np.sin(psi)
            + state[Z_DOT] * np.cos(psi)
            + self.params.cg_distance * state[PSI_DOT]
        )

    def slip_rate_front(self, state: np.ndarray) -> float:
        """Lateral velocity of the steered wheel contact (m/s)"""
        p = self.params
        psi = state[PSI]
        delta = state[DELTA]
        return float(
            state[X_DOT] * np.sin(psi + delta)
            + state[Z_DOT] * np.cos(psi + delta)
            - p.steer_axis_offset * state[PSI_DOT] * np.cos(delta)
            + (state[PSI_DOT] + state[DELTA_DOT]) * p.caster_length
        )

    def constraint_forces(self, state: np.ndarray) -> Tuple[float, float]:
        """Lateral contact forces at the rear axle and the steered wheel (N)"""
        solution = self.solve_system(state)
        return float(solution[3]), float(solution[4])

    def front_normal_load(self) -> float:
        """Static share of the weight carried by the steered wheel (N)"""
        p = self.params
        return p.mass * p.gravity * p.cg_distance / p.contact_base

    def front_friction_factor(self, state: np.ndarray) -> float:
        """Friction coefficient needed at the steered wheel to hold the constraint"""
        _, front = self.constraint_forces(state)
        return abs(front) / self.front_normal_load()

    def is_front_sliding(self, state: np.ndarray) -> bool:
        return self.front_friction_factor(state) > self.params.mu_static
