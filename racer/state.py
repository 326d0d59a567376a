"""
Simulation state representation
"""

from dataclasses import dataclass
import numpy as np

# State vector layout
X = 0  # x coordinate of center of mass (m)
X_DOT = 1  # dx/dt (m/s)
Z = 2  # z coordinate of center of mass (m)
Z_DOT = 3  # dz/dt (m/s)
PSI = 4  # heading angle (rad)
PSI_DOT = 5  # yaw rate (rad/s)
WHEEL_LEFT = 6  # rotation angle of left rear wheel (rad)
WHEEL_RIGHT = 7  # rotation angle of right rear wheel (rad)
WHEEL_FRONT = 8  # rotation angle of steered wheel (rad)
DELTA = 9  # steer angle (rad)
DELTA_DOT = 10  # steer rate (rad/s)

STATE_SIZE = 11


@dataclass
class RacerState:
    """Named view of one state vector"""

    x: float
    x_dot: float
    z: float
    z_dot: float
    heading: float
    yaw_rate: float
    wheel_angle_left: float
    wheel_angle_right: float
    wheel_angle_front: float
    steer_angle: float
    steer_rate: float

    @classmethod
    def from_array(cls, state: np.ndarray) -> "RacerState":
        if len(state) != STATE_SIZE:
            raise ValueError(f"expected {STATE_SIZE} state values, got {len(state)}")
        return cls(*(float(v) for v in state))

    def to_array(self) -> np.ndarray:
        return np.array([
            self.x,
            self.x_dot,
            self.z,
            self.z_dot,
            self.heading,
            self.yaw_rate,
            self.wheel_angle_left,
            self.wheel_angle_right,
            self.wheel_angle_front,
            self.steer_angle,
            self.steer_rate,
        ])
