"""Trajectory integration and streaming trail buffers for chaotic attractors."""

from .capacity import CapacityManager, next_power_of_two
from .colors import ColorAssigner, DEFAULT_PALETTE
from .engine import AttractorEngine, DisplayParams, FrameUpdate
from .errors import AllocationError, AttractorError, ContextUnavailableError, ShaderBuildError
from .integrator import Integrator
from .oscillator import Oscillation, ParameterOscillator, Parameters
from .systems import LORENZ, THREE_BODY, System, SystemKind, get_system
from .timing import StepRateCounter
from .trails import DirtyRange, TrailStore

__all__ = [
    "AttractorEngine", "DisplayParams", "FrameUpdate",
    "CapacityManager", "next_power_of_two",
    "ColorAssigner", "DEFAULT_PALETTE",
    "AllocationError", "AttractorError", "ContextUnavailableError", "ShaderBuildError",
    "Integrator",
    "Oscillation", "ParameterOscillator", "Parameters",
    "LORENZ", "THREE_BODY", "System", "SystemKind", "get_system",
    "StepRateCounter",
    "DirtyRange", "TrailStore",
]
