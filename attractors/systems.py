"""System variants: everything that differs between Lorenz and three-body."""

from dataclasses import dataclass
from enum import Enum
from types import ModuleType
from typing import Callable, Tuple

import numpy as np

from config import lorenz as lorenz_config
from config import threebody as threebody_config

from .integrator import lorenz_derivative, three_body_derivative
from .seeds import generate_lorenz, generate_three_body


class SystemKind(Enum):
    LORENZ = "lorenz"
    THREE_BODY = "three_body"


@dataclass(frozen=True)
class System:
    """
    Description of one dynamical system.

    Attributes:
        kind: Variant tag
        name: Log/HUD label
        arity: State vector length per trajectory
        bodies: Trail slots per trajectory (each body's x, y, z leads its block)
        derivative: Numba kernel f(state, params, out)
        layout: (parameter name, size) pairs in kernel order
        generate: Seed generator returning a fresh state vector
        settings: Config module with WINDOW/TRAILS/PARAMS/OSCILLATION/DISPLAY/COLORS
    """
    kind: SystemKind
    name: str
    arity: int
    bodies: int
    derivative: Callable
    layout: Tuple[Tuple[str, int], ...]
    generate: Callable[[], np.ndarray]
    settings: ModuleType

    @property
    def stride(self) -> int:
        return self.arity // self.bodies

    def positions(self, states: np.ndarray, count: int) -> np.ndarray:
        """Current (x, y, z) of every slot for the first ``count`` trajectories."""
        blocks = states[:count].reshape(count, self.bodies, self.stride)
        return blocks[:, :, :3].reshape(count * self.bodies, 3)


LORENZ = System(
    kind=SystemKind.LORENZ,
    name="Lorenz",
    arity=3,
    bodies=1,
    derivative=lorenz_derivative,
    layout=(("sigma", 1), ("beta", 1), ("rho", 1)),
    generate=generate_lorenz,
    settings=lorenz_config,
)

THREE_BODY = System(
    kind=SystemKind.THREE_BODY,
    name="ThreeBody",
    arity=18,
    bodies=3,
    derivative=three_body_derivative,
    layout=(("G", 1), ("masses", 3)),
    generate=generate_three_body,
    settings=threebody_config,
)

SYSTEMS = {
    SystemKind.LORENZ: LORENZ,
    SystemKind.THREE_BODY: THREE_BODY,
}


def get_system(name: str) -> System:
    """Look up a system by tag ("lorenz", "three_body"; "threebody" also accepted)."""
    key = name.lower().replace("-", "_")
    if key == "threebody":
        key = "three_body"
    return SYSTEMS[SystemKind(key)]
