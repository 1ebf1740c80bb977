"""Per-slot trail colors: static palettes or live distance-based interpolation."""

import numpy as np


# Built-in palette (ColorBrewer Set3 plus white), cycled by slot index
DEFAULT_PALETTE = np.array([
    (0x8d, 0xd3, 0xc7),
    (0xff, 0xff, 0xb3),
    (0xbe, 0xba, 0xda),
    (0xfb, 0x80, 0x72),
    (0x80, 0xb1, 0xd3),
    (0xfd, 0xb4, 0x62),
    (0xb3, 0xde, 0x69),
    (0xfc, 0xcd, 0xe5),
    (0xd9, 0xd9, 0xd9),
    (0xbc, 0x80, 0xbd),
    (0xcc, 0xeb, 0xc5),
    (0xff, 0xed, 0x6f),
    (0xff, 0xff, 0xff),
], dtype=np.float32) / 255.0


def _as_triples(values, what: str, dtype=np.float32) -> np.ndarray:
    arr = np.asarray(values, dtype=dtype)
    if arr.ndim != 2 or arr.shape[1] != 3 or len(arr) == 0:
        raise ValueError(f"{what} must be a non-empty sequence of 3-tuples")
    return arr


def interpolate(color_a, color_b, t):
    """Linear blend a -> b with t clamped to [0, 1]. Works for scalar or array t."""
    a = np.asarray(color_a, dtype=np.float64)
    b = np.asarray(color_b, dtype=np.float64)
    t = np.clip(np.asarray(t, dtype=np.float64), 0.0, 1.0)
    return a + (b - a) * t[..., None]


def nearest_center_distances(positions: np.ndarray, centers: np.ndarray) -> np.ndarray:
    """Euclidean distance from each position to its closest center."""
    diff = positions[:, None, :] - centers[None, :, :]
    return np.sqrt((diff * diff).sum(axis=2)).min(axis=1)


def normalize_distances(distances: np.ndarray) -> np.ndarray:
    """Min-max normalise across the frame; all-equal distances map to 0."""
    lo = distances.min()
    spread = distances.max() - lo
    if spread > 0:
        return (distances - lo) / spread
    return np.zeros_like(distances)


class ColorAssigner:
    """
    Owns the (capacity, 3) float32 color array uploaded alongside the trails.

    Modes:
    - palette: built-in palette cycled by slot index
    - custom: user palette cycled by slot index
    - distance: per-frame blend of color_a -> color_b by normalised distance
      of each slot's head to the nearest reference center

    Distance mode and a custom palette are mutually exclusive.
    """

    def __init__(self, capacity: int = 0, palette=None,
                 color_a=(0.658, 0.376, 0.718), color_b=(0.110, 0.420, 0.627),
                 centers=((-8.0, -8.0, 27.0), (8.0, 8.0, 27.0))):
        self.colors = np.zeros((capacity, 3), dtype=np.float32)
        self.custom_palette = None if palette is None else _as_triples(palette, "Palette")
        self.distance_enabled = False
        self.color_a = np.array(color_a, dtype=np.float64)
        self.color_b = np.array(color_b, dtype=np.float64)
        self.centers = _as_triples(centers, "Centers", np.float64)
        self.dirty = True
        self.fill_static(self.colors)

    @property
    def capacity(self) -> int:
        return len(self.colors)

    @property
    def mode(self) -> str:
        if self.distance_enabled:
            return "distance"
        return "custom" if self.custom_palette is not None else "palette"

    @property
    def palette(self) -> np.ndarray:
        return DEFAULT_PALETTE if self.custom_palette is None else self.custom_palette

    def fill_static(self, target: np.ndarray, start: int = 0) -> None:
        """Fill ``target`` rows with the active palette, row k taking slot start + k."""
        palette = self.palette
        slots = np.arange(start, start + len(target))
        target[:] = palette[slots % len(palette)]
        self.dirty = True

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def set_palette(self, palette) -> None:
        """Switch to a user palette (leaves distance mode)."""
        self.custom_palette = _as_triples(palette, "Palette")
        self.distance_enabled = False
        self.fill_static(self.colors)

    def clear_palette(self) -> None:
        self.custom_palette = None
        if not self.distance_enabled:
            self.fill_static(self.colors)

    def enable_distance(self, color_a, color_b, centers=None) -> None:
        self.distance_enabled = True
        self.custom_palette = None
        self.color_a = np.array(color_a, dtype=np.float64)
        self.color_b = np.array(color_b, dtype=np.float64)
        if centers is not None:
            self.set_centers(centers)

    def disable_distance(self) -> None:
        """Leave distance mode and revert to the built-in palette."""
        self.distance_enabled = False
        self.custom_palette = None
        self.fill_static(self.colors)

    def set_centers(self, centers) -> None:
        self.centers = _as_triples(centers, "Centers", np.float64)

    # ------------------------------------------------------------------
    # Per-frame update
    # ------------------------------------------------------------------

    def update(self, positions: np.ndarray) -> bool:
        """Recompute distance colors for the slot heads. Returns True if colors changed."""
        if not self.distance_enabled or len(positions) == 0:
            return False

        distances = nearest_center_distances(np.asarray(positions, dtype=np.float64), self.centers)
        t = normalize_distances(distances)
        self.colors[:len(positions)] = interpolate(self.color_a, self.color_b, t)
        self.dirty = True
        return True

    def take_dirty(self) -> bool:
        dirty = self.dirty
        self.dirty = False
        return dirty

    def adopt_storage(self, colors: np.ndarray) -> None:
        """Install a resized color array (CapacityManager only)."""
        self.colors = colors
        self.dirty = True
