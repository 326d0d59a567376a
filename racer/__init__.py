"""
Roller Racer Simulation

This package simulates a three-wheeled roller racer: a rigid body on two
rear wheels and a castered, steered front wheel, with rolling constraints
solved as a linear system at every step of a fixed-step integrator.
"""

from racer.brake import BrakeCommandProvider, ConstantBrake, ScheduledBrake
from racer.dynamics import Lifecycle, RollerRacerDynamics
from racer.errors import (
    InvalidParameter,
    InvalidSize,
    NonFiniteState,
    NotConfigured,
    RacerError,
    SimulationStarted,
    SingularSystem,
)
from racer.integrator import Integrator
from racer.linalg import solve_gauss
from racer.params import RacerParams
from racer.simulator import RollerRacerSimulator, TELEMETRY_COLUMNS
from racer.state import RacerState, STATE_SIZE
from racer.steer_sweep import run_steer_sweep

__all__ = [
    "BrakeCommandProvider",
    "ConstantBrake",
    "ScheduledBrake",
    "Lifecycle",
    "RollerRacerDynamics",
    "InvalidParameter",
    "InvalidSize",
    "NonFiniteState",
    "NotConfigured",
    "RacerError",
    "SimulationStarted",
    "SingularSystem",
    "Integrator",
    "solve_gauss",
    "RacerParams",
    "RollerRacerSimulator",
    "TELEMETRY_COLUMNS",
    "RacerState",
    "STATE_SIZE",
    "run_steer_sweep",
]
