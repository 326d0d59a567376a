"""
Roller racer physical parameters
"""

import math
from dataclasses import dataclass, field

from racer.errors import InvalidParameter


@dataclass(frozen=True)
class RacerParams:
    """Physical parameters of the vehicle"""

    mass: float = 25.0  # kg
    radius_of_gyration: float = 0.3  # m (about the vertical axis through the center of mass)
    # Geometry
    wheel_base: float = 1.3  # m (rear axle to steer axis)
    cg_distance: float = 0.6  # m (center of mass ahead of rear axle)
    caster_length: float = 0.3  # m (steer axis to steered wheel contact)
    track_width: float = 1.0  # m (distance between rear wheels)
    rear_wheel_radius: float = 0.375  # m
    steer_wheel_radius: float = 0.15  # m
    # Steering filter
    kp_steer: float = 10.0  # proportional gain (1/s²)
    kd_steer: float = 4.0  # derivative gain (1/s)
    # Braking and friction
    max_brake: float = 225.0  # N (force at full braking command)
    mu_static: float = 0.9  # static friction coefficient, lower bound
    gravity: float = 9.81  # m/s²
    # Constraint stabilization: rate at which slip velocity decays (1/s)
    slip_gain: float = 2.0
    # Derived
    yaw_inertia: float = field(init=False)  # kg·m²
    half_track: float = field(init=False)  # m
    steer_axis_offset: float = field(init=False)  # m (center of mass to steer axis)

    def __post_init__(self) -> None:
        """Validate bounds and calculate derived parameters"""
        checks = [
            (self.mass > 0.1, f"mass must be greater than 0.1, got {self.mass}"),
            (self.radius_of_gyration >= 0.03,
             f"radius of gyration must be at least 0.03, got {self.radius_of_gyration}"),
            (self.wheel_base >= 0.01, f"wheel base must be at least 0.01, got {self.wheel_base}"),
            (self.cg_distance > 0.0, f"cg distance must be positive, got {self.cg_distance}"),
            (self.caster_length >= 0.0,
             f"caster length must be non-negative, got {self.caster_length}"),
            (self.track_width >= 0.05, f"track width must be at least 0.05, got {self.track_width}"),
            (self.rear_wheel_radius >= 0.05,
             f"rear wheel radius must be at least 0.05, got {self.rear_wheel_radius}"),
            (self.steer_wheel_radius >= 0.05,
             f"steered wheel radius must be at least 0.05, got {self.steer_wheel_radius}"),
            # Center of mass must lie between the rear axle and the steer contact point
            (self.wheel_base - self.caster_length >= self.cg_distance,
             f"wheel base minus caster length ({self.wheel_base - self.caster_length:g}) "
             f"is less than cg distance ({self.cg_distance:g})"),
            (self.kp_steer >= 0.0, f"kp_steer must be non-negative, got {self.kp_steer}"),
            (self.kd_steer >= 0.0, f"kd_steer must be non-negative, got {self.kd_steer}"),
            (self.max_brake >= 0.0, f"max_brake must be non-negative, got {self.max_brake}"),
            (self.mu_static > 0.0, f"mu_static must be positive, got {self.mu_static}"),
            (self.gravity > 0.0, f"gravity must be positive, got {self.gravity}"),
            (self.slip_gain >= 0.0, f"slip_gain must be non-negative, got {self.slip_gain}"),
        ]
        for ok, message in checks:
            if not ok:
                raise InvalidParameter(message)

        # Frozen dataclass: derived fields are written through object.__setattr__
        object.__setattr__(self, "yaw_inertia", self.mass * self.radius_of_gyration**2)
        object.__setattr__(self, "half_track", 0.5 * self.track_width)
        object.__setattr__(self, "steer_axis_offset", self.wheel_base - self.cg_distance)

    @property
    def contact_base(self) -> float:
        """Distance from the rear axle to the steered wheel contact (m)"""
        return self.wheel_base - self.caster_length


def require_finite(name: str, value: float) -> float:
    """Return value as a float, rejecting NaN and infinity"""
    value = float(value)
    if not math.isfinite(value):
        raise InvalidParameter(f"{name} must be finite, got {value}")
    return value
