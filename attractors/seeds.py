"""
Initial conditions for new trajectories.

Lorenz seeds are uniform in a cube around the attractor. Three-body seeds
are drawn from a library of known periodic or long-lived configurations
(unit masses, G = 1), each component perturbed so that no two systems
trace the same orbit.
"""

import numpy as np


LORENZ_SPREAD = 25.0
PERTURBATION = 0.05


# Body positions and velocities, one row per body
THREE_BODY_CONFIGURATIONS = {
    # Chenciner-Montgomery figure-eight, period ~6.32591398
    "figure_eight": {
        "positions": [
            [-0.97000436, 0.24308753, 0.0],
            [0.97000436, -0.24308753, 0.0],
            [0.0, 0.0, 0.0],
        ],
        "velocities": [
            [0.4662036850, 0.4323657300, 0.0],
            [0.4662036850, 0.4323657300, 0.0],
            [-0.93240737, -0.86473146, 0.0],
        ],
    },
    # Lagrange equilateral triangle, rigidly rotating
    "lagrange_triangle": {
        "positions": [
            [0.0, 1.0, 0.0],
            [-0.866025, -0.5, 0.0],
            [0.866025, -0.5, 0.0],
        ],
        "velocities": [
            [-0.866025, 0.0, 0.0],
            [0.433013, 0.75, 0.0],
            [0.433013, -0.75, 0.0],
        ],
    },
    # Broucke-Hadjidemetriou-Henon family: one near-circular orbit, two rose curves
    "broucke_henon": {
        "positions": [
            [-1.3760104789, 0.0, 0.0],
            [0.8390195211, 0.0, 0.0],
            [-0.1609804789, 0.0, 0.0],
        ],
        "velocities": [
            [0.0, -1.00328, 0.0],
            [0.0, -0.53749, 0.0],
            [0.0, 0.84120, 0.0],
        ],
    },
    "figure_eight_variant": {
        "positions": [
            [-0.9700, 0.2431, 0.0],
            [0.9700, -0.2431, 0.0],
            [0.0, 0.0, 0.0],
        ],
        "velocities": [
            [0.4700, 0.4350, 0.0],
            [0.4700, 0.4350, 0.0],
            [-0.9400, -0.8700, 0.0],
        ],
    },
    # Collinear start with perpendicular velocities; crossing patterns
    "linear": {
        "positions": [
            [-2.5, 0.0, 0.0],
            [0.0, 0.0, 0.0],
            [2.5, 0.0, 0.0],
        ],
        "velocities": [
            [0.0, 1.1, 0.0],
            [0.0, -1.6, 0.0],
            [0.0, 1.1, 0.0],
        ],
    },
    "triangle_rotating": {
        "positions": [
            [-1.5, 0.866, 0.0],
            [1.5, 0.866, 0.0],
            [0.0, -1.732, 0.0],
        ],
        "velocities": [
            [0.6, -0.3, 0.0],
            [-0.6, -0.3, 0.0],
            [0.0, 0.6, 0.0],
        ],
    },
}


def generate_lorenz() -> np.ndarray:
    """Random point in [-25, 25]^3."""
    return np.random.uniform(-LORENZ_SPREAD, LORENZ_SPREAD, 3)


def three_body_state(name: str) -> np.ndarray:
    """Unperturbed 18-vector for a named configuration (x, y, z, vx, vy, vz per body)."""
    config = THREE_BODY_CONFIGURATIONS[name]
    positions = np.asarray(config["positions"], dtype=np.float64)
    velocities = np.asarray(config["velocities"], dtype=np.float64)
    return np.hstack([positions, velocities]).reshape(18)


def generate_three_body(name: str = None, perturbation: float = PERTURBATION) -> np.ndarray:
    """
    Pick a configuration (random unless ``name`` is given) and scale every
    position and velocity component by an independent factor in
    [1 - perturbation, 1 + perturbation].
    """
    if name is None:
        names = list(THREE_BODY_CONFIGURATIONS)
        name = names[np.random.randint(len(names))]

    state = three_body_state(name)
    factors = 1.0 + np.random.uniform(-perturbation, perturbation, state.shape)
    return state * factors
