"""
Fixed-step integrator for first-order ODE systems
"""

from typing import Callable, Optional, Sequence
import numpy as np

from racer.errors import InvalidSize, NonFiniteState, NotConfigured

DerivativeFunction = Callable[[np.ndarray, float], np.ndarray]


class Integrator:
    """Advances a state vector of fixed size with Euler, RK2 or RK4 steps"""

    def __init__(self, n: int) -> None:
        """
        Initialize integrator

        Args:
            n: Number of first-order equations (state vector length)
        """
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n <= 0:
            raise InvalidSize(f"state size must be a positive integer, got {n!r}")

        self.n = int(n)
        self._x = np.zeros(self.n)  # state
        self._xi = np.zeros(self.n)  # intermediate state
        self._f = np.zeros((4, self.n))  # stage derivatives

        # Read-only views handed to the derivative function
        self._x_view = self._x.view()
        self._x_view.flags.writeable = False
        self._xi_view = self._xi.view()
        self._xi_view.flags.writeable = False

        self._rhs: Optional[DerivativeFunction] = None

    @property
    def size(self) -> int:
        """Length of the state vector"""
        return self.n

    @property
    def state(self) -> np.ndarray:
        """Copy of the current state vector"""
        return self._x.copy()

    def set_state(self, values: Sequence[float]) -> None:
        """Replace the whole state vector"""
        values = np.asarray(values, dtype=float)
        if values.shape != (self.n,):
            raise ValueError(f"state must have shape ({self.n},), got {values.shape}")
        self._x[:] = values

    def __getitem__(self, index: int) -> float:
        return float(self._x[index])

    def __setitem__(self, index: int, value: float) -> None:
        self._x[index] = value

    @property
    def is_configured(self) -> bool:
        return self._rhs is not None

    def set_derivative_function(self, rhs: DerivativeFunction) -> None:
        """
        Install the right-hand side of the ODE system

        Args:
            rhs: Callable f(state, t) returning the derivative of state
        """
        self._rhs = rhs

    def _evaluate(self, stage: int, state: np.ndarray, t: float) -> np.ndarray:
        if self._rhs is None:
            raise NotConfigured("no derivative function installed")

        derivative = np.asarray(self._rhs(state, t), dtype=float)
        if derivative.shape != (self.n,):
            raise ValueError(
                f"derivative function returned shape {derivative.shape}, expected ({self.n},)"
            )
        if not np.isfinite(derivative).all():
            raise NonFiniteState(
                f"derivative function returned non-finite values at t={t}: {derivative}"
            )
        self._f[stage] = derivative
        return self._f[stage]

    def step_euler(self, time: float, dt: float) -> None:
        """One explicit Euler step: x <- x + f(x, t)·dt"""
        f0 = self._evaluate(0, self._x_view, time)
        self._x += f0 * dt

    def step_rk2(self, time: float, dt: float) -> None:
        """One predictor/corrector (Heun) step"""
        f0 = self._evaluate(0, self._x_view, time)
        np.add(self._x, f0 * dt, out=self._xi)

        f1 = self._evaluate(1, self._xi_view, time + dt)
        self._x += 0.5 * (f0 + f1) * dt

    def step(self, time: float, dt: float) -> None:
        """One classical fourth-order Runge-Kutta step"""
        half = 0.5 * dt

        f0 = self._evaluate(0, self._x_view, time)
        np.add(self._x, f0 * half, out=self._xi)

        f1 = self._evaluate(1, self._xi_view, time + half)
        np.add(self._x, f1 * half, out=self._xi)

        f2 = self._evaluate(2, self._xi_view, time + half)
        np.add(self._x, f2 * dt, out=self._xi)

        f3 = self._evaluate(3, self._xi_view, time + dt)
        self._x += (f0 + 2.0 * f1 + 2.0 * f2 + f3) * (dt / 6.0)

    # Alias so callers can pick a scheme by name
    step_rk4 = step
