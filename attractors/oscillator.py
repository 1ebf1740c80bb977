"""Live physical parameters and their sinusoidal drift over time."""

import time
from dataclasses import dataclass
from typing import Dict, Iterable, Tuple

import numpy as np


class Parameters:
    """
    Named physical constants packed into one float64 array.

    The integrator kernels read ``packed`` directly, so writes through
    ``params[name] = value`` are visible on the very next step.

    Args:
        layout: (name, size) pairs in kernel order
        values: Initial values by name (missing names stay 0)
    """

    def __init__(self, layout: Iterable[Tuple[str, int]], values: Dict[str, object]):
        self._slices = {}
        offset = 0
        for name, size in layout:
            self._slices[name] = (offset, size)
            offset += size
        self.packed = np.zeros(offset, dtype=np.float64)

        for name in self._slices:
            if name in values:
                self[name] = values[name]

    def __getitem__(self, name: str):
        start, size = self._slices[name]
        if size == 1:
            return float(self.packed[start])
        return self.packed[start:start + size]

    def __setitem__(self, name: str, value):
        start, size = self._slices[name]
        self.packed[start:start + size] = value

    def __contains__(self, name: str) -> bool:
        return name in self._slices

    def names(self):
        return list(self._slices)

    def as_dict(self) -> dict:
        """Snapshot of every parameter (vectors copied to tuples)."""
        out = {}
        for name in self._slices:
            value = self[name]
            out[name] = tuple(value) if isinstance(value, np.ndarray) else value
        return out


@dataclass
class Oscillation:
    """base + amplitude * sin(frequency * t), elementwise for vector parameters."""
    base: object
    amplitude: object
    frequency: object

    @classmethod
    def from_config(cls, entry: dict) -> "Oscillation":
        return cls(entry["base"], entry["amplitude"], entry["frequency"])

    def value_at(self, t_ms: float):
        base = np.asarray(self.base, dtype=np.float64)
        amplitude = np.asarray(self.amplitude, dtype=np.float64)
        frequency = np.asarray(self.frequency, dtype=np.float64)
        return base + amplitude * np.sin(frequency * t_ms)


class ParameterOscillator:
    """
    Drives oscillating parameters from elapsed wall-clock time.

    Time is measured in milliseconds since construction. While disabled,
    ``apply`` leaves the parameter record untouched so every parameter keeps
    the last value written to it.
    """

    def __init__(self, oscillations: Dict[str, Oscillation], enabled: bool = True,
                 clock=time.time):
        self.oscillations = dict(oscillations)
        self.enabled = enabled
        self._clock = clock
        self.start_time = clock()

    @classmethod
    def from_config(cls, settings: dict, clock=time.time) -> "ParameterOscillator":
        oscillations = {
            name: Oscillation.from_config(entry)
            for name, entry in settings.items()
            if name != "enabled"
        }
        return cls(oscillations, enabled=bool(settings.get("enabled", False)), clock=clock)

    def elapsed_ms(self) -> float:
        return (self._clock() - self.start_time) * 1000.0

    def apply(self, params: Parameters, t_ms: float = None) -> bool:
        """Write instantaneous values into ``params``. Returns True if anything changed."""
        if not self.enabled or not self.oscillations:
            return False

        t = self.elapsed_ms() if t_ms is None else t_ms
        for name, oscillation in self.oscillations.items():
            params[name] = oscillation.value_at(t)
        return True
