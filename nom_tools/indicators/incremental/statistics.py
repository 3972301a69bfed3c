"""
Rolling dispersion statistics.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from .base import IncrementalIndicator, validate_length


@dataclass
class IncrementalStdDev(IncrementalIndicator):
    """
    Population standard deviation over a sliding window, O(1) updates.

    Uses running sums (ddof=0):
        mean = running_sum / n
        variance = running_sq_sum / n - mean^2
        std = sqrt(max(variance, 0))
    """

    length: int = 20
    _buffer: deque = field(default_factory=deque, init=False)
    _running_sum: float = field(default=0.0, init=False)
    _running_sq_sum: float = field(default=0.0, init=False)
    _count: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        validate_length("IncrementalStdDev", self.length)

    def update(self, close: float, **kwargs: Any) -> float:
        """Update with new value."""
        self._count += 1

        if len(self._buffer) == self.length:
            oldest = self._buffer.popleft()
            self._running_sum -= oldest
            self._running_sq_sum -= oldest * oldest

        self._buffer.append(close)
        self._running_sum += close
        self._running_sq_sum += close * close
        return self.value

    def reset(self) -> None:
        self._buffer.clear()
        self._running_sum = 0.0
        self._running_sq_sum = 0.0
        self._count = 0

    @property
    def mean(self) -> float:
        if not self.is_ready:
            return np.nan
        return self._running_sum / self.length

    @property
    def variance(self) -> float:
        if not self.is_ready:
            return np.nan
        mean = self._running_sum / self.length
        variance = self._running_sq_sum / self.length - mean * mean
        # Floating point can push a flat window slightly below zero
        return max(variance, 0.0)

    @property
    def value(self) -> float:
        return float(np.sqrt(self.variance))

    @property
    def is_ready(self) -> bool:
        return len(self._buffer) >= self.length
