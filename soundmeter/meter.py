"""Current/peak loudness tracking for the level meter."""

from __future__ import annotations

from dataclasses import dataclass
import threading


SCALE_MAX = 120


@dataclass(frozen=True)
class MeterReading:
    """Immutable view of the meter handed to renderers."""

    current_level: int
    max_level: int
    fill_ratio: float


class MeterState:
    """Track the latest loudness, the peak since the last reset, and the bar fill."""

    def __init__(self, scale_max: int = SCALE_MAX) -> None:
        # A non-positive ceiling would make the fill ratio undefined.
        self._scale_max = scale_max if scale_max > 0 else SCALE_MAX
        self._lock = threading.Lock()
        self._current_level = 0
        self._max_level = 0
        self._fill_ratio = 0.0

    @property
    def scale_max(self) -> int:
        return self._scale_max

    @property
    def current_level(self) -> int:
        return self._current_level

    @property
    def max_level(self) -> int:
        return self._max_level

    @property
    def fill_ratio(self) -> float:
        return self._fill_ratio

    def ingest(self, sample: int) -> MeterReading:
        """Record a new loudness sample and return the updated reading."""
        with self._lock:
            self._current_level = sample
            self._max_level = max(self._max_level, sample)
            self._fill_ratio = max(0.0, min(1.0, sample / self._scale_max))
            return self._reading()

    def reset(self) -> None:
        """Start a fresh peak-tracking session; the current level is kept."""
        with self._lock:
            self._max_level = 0

    def snapshot(self) -> MeterReading:
        with self._lock:
            return self._reading()

    def _reading(self) -> MeterReading:
        return MeterReading(
            current_level=self._current_level,
            max_level=self._max_level,
            fill_ratio=self._fill_ratio,
        )
