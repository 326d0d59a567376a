"""
Exception hierarchy for the roller racer simulation
"""


class RacerError(Exception):
    """Base class for all simulation errors"""


class InvalidSize(RacerError, ValueError):
    """Integrator constructed with a non-positive state size"""


class NotConfigured(RacerError):
    """Integrator stepped before a derivative function was installed"""


class SingularSystem(RacerError, ArithmeticError):
    """Linear system has no usable pivot in some column"""


class InvalidParameter(RacerError, ValueError):
    """Physical parameter outside its documented bounds"""


class SimulationStarted(RacerError):
    """Initial condition changed after the first derivative evaluation"""


class NonFiniteState(RacerError, ArithmeticError):
    """Derivative evaluation produced NaN or infinity"""
