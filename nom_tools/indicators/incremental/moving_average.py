"""
Moving averages with O(1) per-bar updates.

Includes SMA, EMA, WMA and the Hull moving average, plus
create_moving_average() which picks the variant once at construction.
"""

from __future__ import annotations

import math
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from ..types import MovingAverageType
from .base import IncrementalIndicator, validate_length


@dataclass
class IncrementalSMA(IncrementalIndicator):
    """
    Simple Moving Average with O(1) updates using a ring buffer.

    Uses running sum technique:
        sma = (sum + new - oldest) / length
    """

    length: int = 20
    _buffer: deque = field(default_factory=deque, init=False)
    _running_sum: float = field(default=0.0, init=False)
    _count: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        validate_length("IncrementalSMA", self.length)

    def update(self, close: float, **kwargs: Any) -> float:
        """Update with new value."""
        self._count += 1

        if len(self._buffer) == self.length:
            oldest = self._buffer.popleft()
            self._running_sum -= oldest

        self._buffer.append(close)
        self._running_sum += close
        return self.value

    def reset(self) -> None:
        self._buffer.clear()
        self._running_sum = 0.0
        self._count = 0

    @property
    def value(self) -> float:
        if len(self._buffer) < self.length:
            return np.nan
        return self._running_sum / self.length

    @property
    def is_ready(self) -> bool:
        return len(self._buffer) >= self.length


@dataclass
class IncrementalEMA(IncrementalIndicator):
    """
    Exponential Moving Average with O(1) updates.

    Formula:
        alpha = 2 / (length + 1)
        ema = alpha * close + (1 - alpha) * ema_prev

    The first sample seeds the average. The value is reported once
    `length` samples have been seen; length=1 mirrors the input.
    """

    length: int = 20
    _alpha: float = field(init=False)
    _ema: float = field(default=np.nan, init=False)
    _count: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        validate_length("IncrementalEMA", self.length)
        self._alpha = 2.0 / (self.length + 1)

    def update(self, close: float, **kwargs: Any) -> float:
        """Update with new value."""
        self._count += 1

        if self._count == 1:
            self._ema = close
        else:
            self._ema = self._alpha * close + (1 - self._alpha) * self._ema
        return self.value

    def reset(self) -> None:
        self._ema = np.nan
        self._count = 0

    @property
    def value(self) -> float:
        if not self.is_ready:
            return np.nan
        return self._ema

    @property
    def is_ready(self) -> bool:
        return self._count >= self.length


@dataclass
class IncrementalWMA(IncrementalIndicator):
    """
    Weighted Moving Average with O(1) updates.

    Formula:
        wma = sum(weight[i] * close[i]) / sum(weights)
        where weight[i] = i + 1 (linear weights, most recent has highest weight)

    O(1) update technique:
        - New value enters with weight `length` (highest)
        - All existing values shift down, losing 1 from their weight
        - weighted_sum = weighted_sum - buffer_sum + new_value * length
        - When oldest leaves (had weight 1), subtract it from buffer_sum

    With partial=True the average is reported over the filled part of the
    window (weights 1..n for n < length) instead of NaN during warmup.
    """

    length: int = 20
    partial: bool = False
    _buffer: deque = field(default_factory=deque, init=False)
    _count: int = field(default=0, init=False)
    _weighted_sum: float = field(default=0.0, init=False)
    _buffer_sum: float = field(default=0.0, init=False)

    def __post_init__(self) -> None:
        validate_length("IncrementalWMA", self.length)

    def update(self, close: float, **kwargs: Any) -> float:
        """Update with new value - O(1) operation."""
        self._count += 1

        if len(self._buffer) < self.length:
            # Warmup: new value gets weight equal to current buffer length
            self._buffer.append(close)
            self._buffer_sum += close
            self._weighted_sum += close * len(self._buffer)
        else:
            oldest = self._buffer.popleft()
            self._buffer.append(close)
            # Subtract buffer_sum BEFORE removing oldest: every old weight drops by 1
            self._weighted_sum = self._weighted_sum - self._buffer_sum + close * self.length
            self._buffer_sum = self._buffer_sum - oldest + close
        return self.value

    def reset(self) -> None:
        self._buffer.clear()
        self._count = 0
        self._weighted_sum = 0.0
        self._buffer_sum = 0.0

    @property
    def value(self) -> float:
        n = len(self._buffer)
        if n == 0 or (n < self.length and not self.partial):
            return np.nan
        return self._weighted_sum / (n * (n + 1) / 2.0)

    @property
    def is_ready(self) -> bool:
        return len(self._buffer) >= self.length


@dataclass
class IncrementalHMA(IncrementalIndicator):
    """
    Hull Moving Average.

    Formula:
        raw = 2 * wma(close, length // 2) - wma(close, length)
        hma = wma(raw, ceil(sqrt(length)))

    The long and short WMAs see the raw stream in parallel. The smoothing
    WMA is fed once the long WMA is ready and averages over its filled
    window, so the Hull value is ready together with the long WMA.
    """

    length: int = 20
    _wma_long: IncrementalWMA = field(init=False)
    _wma_short: IncrementalWMA = field(init=False)
    _wma_smooth: IncrementalWMA = field(init=False)
    _count: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        validate_length("IncrementalHMA", self.length)
        self._wma_long = IncrementalWMA(length=self.length)
        self._wma_short = IncrementalWMA(length=max(1, self.length // 2))
        self._wma_smooth = IncrementalWMA(
            length=math.ceil(math.sqrt(self.length)), partial=True
        )

    def update(self, close: float, **kwargs: Any) -> float:
        """Update with new value."""
        self._count += 1
        long_value = self._wma_long.update(close)
        short_value = self._wma_short.update(close)

        if self._wma_long.is_ready:
            self._wma_smooth.update(2.0 * short_value - long_value)
        return self.value

    def reset(self) -> None:
        self._wma_long.reset()
        self._wma_short.reset()
        self._wma_smooth.reset()
        self._count = 0

    @property
    def value(self) -> float:
        if not self.is_ready:
            return np.nan
        return self._wma_smooth.value

    @property
    def is_ready(self) -> bool:
        return self._wma_long.is_ready


_MOVING_AVERAGES: dict[MovingAverageType, Callable[[int], IncrementalIndicator]] = {
    MovingAverageType.SIMPLE: lambda n: IncrementalSMA(length=n),
    MovingAverageType.EXPONENTIAL: lambda n: IncrementalEMA(length=n),
    MovingAverageType.WEIGHTED: lambda n: IncrementalWMA(length=n),
    MovingAverageType.HULL: lambda n: IncrementalHMA(length=n),
}


def create_moving_average(
    ma_type: MovingAverageType | str,
    length: int,
) -> IncrementalIndicator:
    """
    Create a moving average of the given variant.

    Raises ValueError for an unknown variant or a non-positive length.
    """
    return _MOVING_AVERAGES[MovingAverageType.parse(ma_type)](length)
