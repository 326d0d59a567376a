"""
Brake command providers

The dynamics model polls a provider for the current braking command. The
host owns the provider and decides when the command changes.
"""

from typing import Callable, Protocol


class BrakeCommandProvider(Protocol):
    """Anything exposing the current braking command in [0, 1]"""

    def brake(self) -> float:
        ...


class ConstantBrake:
    """Brake command set directly by the host"""

    def __init__(self, command: float = 0.0) -> None:
        self.command = command

    def brake(self) -> float:
        return self.command


class ScheduledBrake:
    """Applies a fixed command from an onset time onwards"""

    def __init__(self, onset: float, command: float, clock: Callable[[], float]) -> None:
        """
        Initialize scheduled brake

        Args:
            onset: Time at which braking starts (s)
            command: Braking command applied after onset
            clock: Returns the host's current simulation time (s)
        """
        self.onset = onset
        self.command = command
        self.clock = clock

    def brake(self) -> float:
        return self.command if self.clock() >= self.onset else 0.0
