"""
Ring-buffer trail storage with incremental dirty tracking.

Every trail slot (a Lorenz trajectory, or one body of a three-body system)
owns a ring of ``length`` points inside one flat float32 array shaped
``(capacity, length, 3)``, which is exactly the layout of the GPU vertex
buffer. All slots share one write cursor, so ring position ``i`` holds the
same instant for every slot and a batch of writes maps to the same byte
window in each slot.

Ring invariants:
- ``cursor`` in [0, length) is the next position to write
- ``populated[slot]`` in [0, length] counts valid points in that ring
- the newest point is at ``(cursor - 1) % length``
- the oldest valid point is at ``(cursor - populated[slot]) % length``
"""

from typing import List, NamedTuple, Tuple

import numpy as np


class DirtyRange(NamedTuple):
    """Inclusive span [first, last] of ring positions awaiting upload."""
    first: int
    last: int

    @property
    def count(self) -> int:
        return self.last - self.first + 1


def dirty_ranges(first: int, last: int, length: int) -> List[DirtyRange]:
    """
    Split the written span first..last (inclusive, modulo length) into
    contiguous ranges: one if it does not wrap, two if it does.
    """
    if last >= first:
        return [DirtyRange(first, last)]
    return [DirtyRange(first, length - 1), DirtyRange(0, last)]


def build_index_arrays(length: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Build the length-dependent arrays used to draw a ring newest-first.

    Both hold ``(2L - i - 1) % L`` for i in [0, 2L): a descending run of ring
    positions laid out twice. Drawing L elements starting at
    ``element_offset(cursor, L)`` walks the ring backwards from the newest
    point, and the float copy read at the same offset yields each vertex's
    age (0 = newest) for fading.

    Returns:
        (ages as float32, elements as uint32)
    """
    order = (2 * length - np.arange(2 * length) - 1) % length
    return order.astype(np.float32), order.astype(np.uint32)


def element_offset(cursor: int, length: int) -> int:
    """First element to draw so that the strip starts at the newest point."""
    newest = (cursor - 1) % length
    return length - newest - 1


class TrailStore:
    """
    Fixed-length ring buffers for every trail slot.

    Capacity (number of allocated slots) only changes through
    ``CapacityManager``; this class never reallocates on its own.

    Args:
        length: Ring length L (points per trail)
        capacity: Initially allocated slot count
    """

    def __init__(self, length: int, capacity: int = 0):
        if length < 1:
            raise ValueError(f"Trail length must be positive, got {length}")

        self.length = int(length)
        self.capacity = int(capacity)
        self.count = 0          # Slots in use
        self.cursor = 0         # Shared write position

        self.trail = np.zeros((self.capacity, self.length, 3), dtype=np.float32)
        self.populated = np.zeros(self.capacity, dtype=np.int32)

        # Writes since the last flush
        self._batch_start = 0
        self._batch_writes = 0

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def record(self, slot: int, point) -> None:
        """Write ``point`` at the cursor of ``slot``'s ring (once per sub-step)."""
        if not 0 <= slot < self.count:
            raise IndexError(f"Slot {slot} out of range (count={self.count})")

        self.trail[slot, self.cursor] = point
        if self.populated[slot] < self.length:
            self.populated[slot] += 1

    def record_all(self, points: np.ndarray) -> None:
        """Write one point per slot for slots 0..len(points)-1."""
        n = len(points)
        if n == 0:
            return
        self.trail[:n, self.cursor] = points
        np.minimum(self.populated[:n] + 1, self.length, out=self.populated[:n])

    def advance(self) -> int:
        """Move the shared cursor one position. Returns the position just written."""
        written = self.cursor
        self.cursor = (self.cursor + 1) % self.length
        self._batch_writes += 1
        return written

    # ------------------------------------------------------------------
    # Dirty tracking
    # ------------------------------------------------------------------

    def flush_dirty(self) -> List[DirtyRange]:
        """
        Ranges covering exactly the positions written since the last flush.

        Empty when nothing was written; the whole ring when at least
        ``length`` sub-steps were recorded. Starts a new batch.
        """
        first = self._batch_start
        writes = self._batch_writes
        self.reset_batch()

        if writes == 0:
            return []
        if writes >= self.length:
            return [DirtyRange(0, self.length - 1)]
        return dirty_ranges(first, (first + writes - 1) % self.length, self.length)

    def reset_batch(self) -> None:
        self._batch_start = self.cursor
        self._batch_writes = 0

    def is_full_range(self, ranges: List[DirtyRange]) -> bool:
        return len(ranges) == 1 and ranges[0] == (0, self.length - 1)

    def byte_ranges(self, ranges: List[DirtyRange]) -> List[Tuple[int, np.ndarray]]:
        """
        Translate ring ranges into (byte offset, contiguous view) pairs.

        One pair per slot in use per range, addressed in the flat
        ``(capacity, length, 3)`` float32 buffer.
        """
        point_bytes = 3 * self.trail.itemsize
        spans = []
        for slot in range(self.count):
            for r in ranges:
                offset = (slot * self.length + r.first) * point_bytes
                spans.append((offset, self.trail[slot, r.first:r.last + 1]))
        return spans

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def latest(self, slot: int) -> np.ndarray:
        return self.trail[slot, (self.cursor - 1) % self.length]

    def oldest_index(self, slot: int) -> int:
        return (self.cursor - int(self.populated[slot])) % self.length

    def history(self, slot: int) -> np.ndarray:
        """Valid points of ``slot`` in chronological order (oldest first)."""
        n = int(self.populated[slot])
        positions = (self.cursor - n + np.arange(n)) % self.length
        return self.trail[slot, positions]

    def nbytes_in_use(self) -> int:
        return self.count * self.length * 3 * self.trail.itemsize

    # ------------------------------------------------------------------
    # Storage swap (CapacityManager only)
    # ------------------------------------------------------------------

    def adopt_storage(self, trail: np.ndarray, populated: np.ndarray, cursor: int) -> None:
        """Install freshly built storage. Geometry is taken from ``trail``'s shape."""
        self.trail = trail
        self.populated = populated
        self.capacity = trail.shape[0]
        self.length = trail.shape[1]
        self.cursor = cursor
        self.reset_batch()
