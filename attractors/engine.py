"""
Trail engine for chaotic attractors.

One ``step()`` per displayed frame:

    oscillator -> RK4 sub-steps, each recorded into the rings
               -> dirty ranges -> distance colors -> FrameUpdate

The engine never touches the GPU. It hands the renderer a FrameUpdate saying
which ring positions changed (or that buffers must be re-specified after a
capacity change), so the renderer can upload incrementally.
"""

import time
from dataclasses import dataclass, field
from typing import List

import numpy as np

from .capacity import CapacityManager
from .colors import ColorAssigner
from .integrator import Integrator
from .oscillator import ParameterOscillator, Parameters
from .systems import LORENZ, System
from .timing import StepRateCounter
from .trails import DirtyRange, TrailStore


@dataclass
class DisplayParams:
    """View parameters forwarded to the trail shader as uniforms."""
    scale: float
    rotation: np.ndarray
    rotation_speed: np.ndarray
    translation: np.ndarray
    center_offset: float = 0.0

    @classmethod
    def from_config(cls, entry: dict) -> "DisplayParams":
        return cls(
            scale=float(entry["scale"]),
            rotation=np.array(entry["rotation"], dtype=np.float32),
            rotation_speed=np.array(entry["rotation_speed"], dtype=np.float32),
            translation=np.array(entry["translation"], dtype=np.float32),
            center_offset=float(entry.get("center_offset", 0.0)),
        )

    def advance(self):
        self.rotation += self.rotation_speed


@dataclass
class FrameUpdate:
    """
    What the renderer must sync after a step.

    Attributes:
        dirty: Ring ranges written since the previous update (empty on full upload)
        full_upload: Upload every slot in use
        reallocated: Storage geometry changed; re-specify GPU buffers and
            rebuild the length-dependent index arrays
        colors_dirty: Color array changed
        generation: Capacity generation this update belongs to
    """
    dirty: List[DirtyRange] = field(default_factory=list)
    full_upload: bool = False
    reallocated: bool = False
    colors_dirty: bool = False
    generation: int = 0


class AttractorEngine:
    """
    Integrates a growing set of trajectories and keeps their trails.

    Args:
        system: System variant (LORENZ or THREE_BODY)
        trail_length: Ring length L (defaults to the system config)
        steps_per_frame: RK4 sub-steps per ``step()`` call
        step_size: RK4 time step
        palette: Static palette override
        oscillation: Force parameter oscillation on/off
        clock: Wall clock in seconds (injectable for tests)
        allocator: Array factory used by capacity operations
    """

    def __init__(self, system: System = LORENZ, trail_length: int = None,
                 steps_per_frame: int = None, step_size: float = None,
                 palette=None, oscillation: bool = None, clock=time.time,
                 allocator=np.zeros):
        settings = system.settings
        self.system = system

        # Physics
        self.params = Parameters(system.layout, settings.PARAMS)
        self.step_size = float(step_size if step_size is not None else settings.PARAMS["step_size"])
        self.steps_per_frame = int(steps_per_frame if steps_per_frame is not None
                                   else settings.PARAMS["steps_per_frame"])
        self.oscillator = ParameterOscillator.from_config(settings.OSCILLATION, clock=clock)
        if oscillation is not None:
            self.oscillator.enabled = oscillation
        self.integrator = Integrator(system.derivative, system.arity)

        # Trails and colors
        colors_cfg = settings.COLORS
        self.trails = TrailStore(trail_length if trail_length is not None else settings.TRAILS["length"])
        self.colors = ColorAssigner(
            palette=palette if palette is not None else colors_cfg["palette"],
            color_a=colors_cfg["distance_a"],
            color_b=colors_cfg["distance_b"],
            centers=colors_cfg["centers"],
        )
        if colors_cfg["distance_coloring"]:
            self.colors.enable_distance(colors_cfg["distance_a"], colors_cfg["distance_b"])
        self.capacity = CapacityManager(self.trails, self.colors, system.arity,
                                        system.bodies, allocator=allocator)

        # View and instrumentation
        self.display = DisplayParams.from_config(settings.DISPLAY)
        self.rate = StepRateCounter(clock)
        self.count = 0
        self.frame = 0
        self._flushed_generation = -1

        self.integrator.warmup(self.params.packed)
        print(f"[{system.name}] Engine ready: trail length {self.trails.length}, "
              f"{self.steps_per_frame} steps/frame @ dt={self.step_size}")

    # ------------------------------------------------------------------
    # Per-frame outputs
    # ------------------------------------------------------------------

    @property
    def states(self) -> np.ndarray:
        return self.capacity.states

    @property
    def trajectory_count(self) -> int:
        return self.count

    @property
    def slot_count(self) -> int:
        return self.trails.count

    @property
    def steps_per_second(self) -> int:
        return self.rate.rate

    def positions(self) -> np.ndarray:
        """Current head position of every slot."""
        return self.system.positions(self.states, self.count)

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------

    def step(self) -> FrameUpdate:
        """Advance every trajectory by ``steps_per_frame`` sub-steps."""
        self.oscillator.apply(self.params)

        if self.count:
            for _ in range(self.steps_per_frame):
                self.integrator.step_all(self.states, self.count, self.step_size, self.params.packed)
                self.trails.record_all(self.positions())
                self.trails.advance()
            self.colors.update(self.positions())

        self.display.advance()
        self.frame += 1
        self.rate.tick()
        return self.flush()

    def flush(self) -> FrameUpdate:
        """Collect pending changes without stepping (e.g. while paused)."""
        generation = self.capacity.generation
        reallocated = generation != self._flushed_generation
        self._flushed_generation = generation

        dirty = self.trails.flush_dirty()
        full = reallocated or self.trails.is_full_range(dirty)
        colors_dirty = self.colors.take_dirty() or reallocated
        return FrameUpdate(
            dirty=[] if full else dirty,
            full_upload=full,
            reallocated=reallocated,
            colors_dirty=colors_dirty,
            generation=generation,
        )

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def add(self, state=None) -> int:
        """Add a trajectory (generated if ``state`` is None). Returns its index."""
        if state is None:
            state = self.system.generate()
        state = np.asarray(state, dtype=np.float64)
        if state.shape != (self.system.arity,):
            raise ValueError(f"{self.system.name} state must have {self.system.arity} "
                             f"components, got shape {state.shape}")

        self.capacity.grow_to_accommodate(self.count + 1)
        self.states[self.count] = state
        self.count += 1
        self.trails.count = self.count * self.system.bodies
        # New slots must reach the renderer's color snapshot even without a reallocation
        self.colors.dirty = True
        return self.count - 1

    def populate(self, count: int) -> None:
        """Add ``count`` generated trajectories."""
        for _ in range(count):
            self.add()
        print(f"[{self.system.name}] {self.count} trajectories, "
              f"{self.capacity.slot_capacity} slots allocated")

    @property
    def trail_length(self) -> int:
        return self.trails.length

    @trail_length.setter
    def trail_length(self, length: int):
        self.capacity.resize_ring_length(length)

    def set_parameter(self, name: str, value) -> None:
        self.params[name] = value

    def set_oscillation(self, enabled: bool) -> None:
        self.oscillator.enabled = enabled

    def set_palette(self, palette) -> None:
        self.colors.set_palette(palette)

    def clear_palette(self) -> None:
        self.colors.clear_palette()

    def set_body_colors(self, colors) -> None:
        """Color body ``b`` of every trajectory with ``colors[b]``."""
        colors = np.asarray(colors, dtype=np.float32)
        if len(colors) < self.system.bodies:
            raise ValueError(f"Need {self.system.bodies} body colors, got {len(colors)}")
        self.colors.set_palette(colors[:self.system.bodies])

    def enable_distance_coloring(self, color_a=None, color_b=None, centers=None) -> None:
        colors_cfg = self.system.settings.COLORS
        self.colors.enable_distance(
            colors_cfg["distance_a"] if color_a is None else color_a,
            colors_cfg["distance_b"] if color_b is None else color_b,
            centers,
        )
        self.colors.update(self.positions())

    def disable_distance_coloring(self) -> None:
        self.colors.disable_distance()

    def set_centers(self, centers) -> None:
        self.colors.set_centers(centers)
