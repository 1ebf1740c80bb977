"""
Fixed-step RK4 integration for chaotic systems.

Each system supplies a derivative kernel ``f(state, params, out)`` that writes
d(state)/dt into ``out``. The integrator wraps it in a Numba-compiled classical
Runge-Kutta step that works entirely in preallocated scratch rows, so stepping
never allocates.

Numerical divergence (NaN/inf for extreme parameters) is not guarded against;
it propagates into the trails as degenerate geometry.
"""

import math
import numpy as np
from numba import njit


# Softening length for the three-body force (bounds |F| as separation -> 0)
SOFTENING = 0.01


# ============================================================================
# DERIVATIVE KERNELS
# ============================================================================

@njit(cache=True)
def lorenz_derivative(state: np.ndarray, params: np.ndarray, out: np.ndarray):
    """Lorenz flow. params = [sigma, beta, rho]."""
    sigma = params[0]
    beta = params[1]
    rho = params[2]
    x = state[0]
    y = state[1]
    z = state[2]
    out[0] = sigma * (y - x)
    out[1] = x * (rho - z) - y
    out[2] = x * y - beta * z


@njit(cache=True)
def three_body_derivative(state: np.ndarray, params: np.ndarray, out: np.ndarray):
    """
    Softened Newtonian gravity for three bodies.

    State layout per body: x, y, z, vx, vy, vz (body i starts at 6 * i).
    params = [G, m0, m1, m2].
    """
    eps_sq = SOFTENING * SOFTENING
    G = params[0]

    for i in range(3):
        bi = i * 6

        # Position derivative is the velocity
        out[bi + 0] = state[bi + 3]
        out[bi + 1] = state[bi + 4]
        out[bi + 2] = state[bi + 5]

        ax, ay, az = 0.0, 0.0, 0.0
        for j in range(3):
            if i == j:
                continue
            bj = j * 6
            dx = state[bj + 0] - state[bi + 0]
            dy = state[bj + 1] - state[bi + 1]
            dz = state[bj + 2] - state[bi + 2]
            r2 = dx * dx + dy * dy + dz * dz + eps_sq
            inv_r3 = 1.0 / (r2 * math.sqrt(r2))
            f = G * params[1 + j] * inv_r3
            ax += f * dx
            ay += f * dy
            az += f * dz

        out[bi + 3] = ax
        out[bi + 4] = ay
        out[bi + 5] = az


# ============================================================================
# RK4 KERNELS
# ============================================================================

_KERNELS = {}


def _build_kernels(derivative):
    """Compile an RK4 step (and a batched variant) around one derivative kernel."""

    @njit
    def rk4_step(state, dt, params, scratch):
        k1 = scratch[0]
        k2 = scratch[1]
        k3 = scratch[2]
        k4 = scratch[3]
        probe = scratch[4]
        n = state.shape[0]
        half = dt * 0.5

        derivative(state, params, k1)
        for i in range(n):
            probe[i] = state[i] + k1[i] * half

        derivative(probe, params, k2)
        for i in range(n):
            probe[i] = state[i] + k2[i] * half

        derivative(probe, params, k3)
        for i in range(n):
            probe[i] = state[i] + k3[i] * dt

        derivative(probe, params, k4)
        for i in range(n):
            state[i] = state[i] + (k1[i] + 2.0 * k2[i] + 2.0 * k3[i] + k4[i]) * dt / 6.0

    @njit
    def rk4_step_all(states, count, dt, params, scratch):
        for t in range(count):
            rk4_step(states[t], dt, params, scratch)

    return rk4_step, rk4_step_all


def _kernels_for(derivative):
    kernels = _KERNELS.get(derivative)
    if kernels is None:
        kernels = _build_kernels(derivative)
        _KERNELS[derivative] = kernels
    return kernels


class Integrator:
    """
    Classical RK4 stepper for one system variant.

    Args:
        derivative: Numba kernel ``f(state, params, out)``
        arity: Length of the state vector
    """

    def __init__(self, derivative, arity: int):
        self.derivative = derivative
        self.arity = arity
        # k1..k4 plus the probe state
        self._scratch = np.zeros((5, arity), dtype=np.float64)
        self._step, self._step_all = _kernels_for(derivative)

    def step(self, state: np.ndarray, dt: float, params: np.ndarray) -> np.ndarray:
        """Advance ``state`` in place by ``dt`` and return it."""
        self._step(state, float(dt), params, self._scratch)
        return state

    def step_all(self, states: np.ndarray, count: int, dt: float, params: np.ndarray):
        """Advance the first ``count`` rows of ``states`` in place."""
        if count > 0:
            self._step_all(states, int(count), float(dt), params, self._scratch)

    def warmup(self, params: np.ndarray):
        """Pre-compile the kernels with a throwaway state."""
        states = np.ones((2, self.arity), dtype=np.float64)
        self.step(states[0], 0.001, params)
        self.step_all(states, 2, 0.001, params)
