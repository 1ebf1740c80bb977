"""
Capacity management for trail, state and color storage.

Two operations change storage geometry, and nothing else may:

- grow_to_accommodate: extends the slot axis to the next power of two,
  copying every ring verbatim at its original flat offset. The ring axis and
  the shared cursor are untouched.
- resize_ring_length: rebuilds every ring at a new length, keeping the most
  recent points in chronological order.

Both allocate all replacement arrays before touching live state, so a failed
allocation raises AllocationError and leaves trails, cursor, states and
colors exactly as they were.
"""

import numpy as np

from .colors import ColorAssigner
from .errors import AllocationError
from .trails import TrailStore


def next_power_of_two(n: int) -> int:
    """Smallest power of two >= n (1 for n <= 1)."""
    if n <= 1:
        return 1
    return 1 << (int(n) - 1).bit_length()


class CapacityManager:
    """
    Owns the trajectory state array and resizes it together with the trail
    rings and colors.

    Args:
        trails: Ring storage to manage
        colors: Color storage kept at the same slot capacity
        arity: State vector length per trajectory
        bodies: Trail slots per trajectory
        allocator: ``np.zeros``-compatible factory (swappable for tests)

    Attributes:
        allocations: Number of reallocations performed
        generation: Bumped whenever GPU-side buffers must be re-specified
    """

    def __init__(self, trails: TrailStore, colors: ColorAssigner, arity: int,
                 bodies: int = 1, allocator=np.zeros):
        self.trails = trails
        self.colors = colors
        self.arity = arity
        self.bodies = bodies
        self.states = np.zeros((0, arity), dtype=np.float64)
        self.allocations = 0
        self.generation = 0
        self._allocator = allocator

    @property
    def state_capacity(self) -> int:
        return len(self.states)

    @property
    def slot_capacity(self) -> int:
        return self.trails.capacity

    def _allocate(self, shape, dtype) -> np.ndarray:
        try:
            return self._allocator(shape, dtype=dtype)
        except MemoryError as e:
            raise AllocationError(
                f"Could not allocate {shape} {np.dtype(dtype).name} array"
            ) from e

    def grow_to_accommodate(self, trajectory_count: int) -> bool:
        """
        Make room for ``trajectory_count`` trajectories.

        Returns True if storage was reallocated, False if it already fit.
        """
        slot_count = trajectory_count * self.bodies
        need_states = self.state_capacity < trajectory_count
        need_slots = self.slot_capacity < slot_count
        if not (need_states or need_slots):
            return False

        # Allocate everything first
        new_states = None
        if need_states:
            new_states = self._allocate((next_power_of_two(trajectory_count), self.arity), np.float64)

        if need_slots:
            slot_capacity = next_power_of_two(slot_count)
            length = self.trails.length
            new_trail = self._allocate((slot_capacity, length, 3), np.float32)
            new_populated = self._allocate((slot_capacity,), np.int32)
            new_colors = self._allocate((slot_capacity, 3), np.float32)

        # Commit
        if new_states is not None:
            new_states[:self.state_capacity] = self.states
            self.states = new_states

        if need_slots:
            old_capacity = self.slot_capacity
            new_trail[:old_capacity] = self.trails.trail
            new_populated[:old_capacity] = self.trails.populated
            new_colors[:old_capacity] = self.colors.colors
            self.colors.fill_static(new_colors[old_capacity:], start=old_capacity)

            self.trails.adopt_storage(new_trail, new_populated, self.trails.cursor)
            self.colors.adopt_storage(new_colors)
            self.generation += 1
            print(f"[Trails] Capacity grown to {slot_capacity} slots "
                  f"({new_trail.nbytes / 1024:.0f} KB)")

        self.allocations += 1
        return True

    def resize_ring_length(self, new_length: int) -> bool:
        """
        Rebuild every ring at ``new_length``.

        Keeps the most recent min(new_length, old_length) positions in
        chronological order, clamps populated counts to that, and restarts the
        cursor just past the retained points. Returns False if the length is
        unchanged.
        """
        new_length = int(new_length)
        if new_length < 1:
            raise ValueError(f"Trail length must be positive, got {new_length}")

        trails = self.trails
        old_length = trails.length
        if new_length == old_length:
            return False

        retained = min(new_length, old_length)
        count = trails.count

        try:
            new_trail = self._allocate((trails.capacity, new_length, 3), np.float32)
            new_populated = self._allocate((trails.capacity,), np.int32)
            # Oldest retained position first
            source = (trails.cursor - retained + np.arange(retained)) % old_length
            new_trail[:count, :retained] = trails.trail[:count, source]
        except MemoryError as e:
            if isinstance(e, AllocationError):
                raise
            raise AllocationError(f"Could not reindex trails to length {new_length}") from e

        np.minimum(trails.populated, retained, out=new_populated)
        trails.adopt_storage(new_trail, new_populated, retained % new_length)
        self.generation += 1
        self.allocations += 1
        print(f"[Trails] Ring length {old_length} -> {new_length}")
        return True
