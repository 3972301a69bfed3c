"""
Least-squares linear regression over a sliding window.

The fit is recomputed from scratch on every evaluation; only the window
itself is maintained incrementally. A RegressionFit turns into a channel:
a center line plus parallel bands offset by multiples of the window's
standard deviation, each spanning only the window's first and last x.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from .base import IncrementalIndicator, validate_length
from .statistics import IncrementalStdDev


@dataclass(frozen=True)
class ChannelLine:
    """Straight segment from (x1, y1) to (x2, y2)."""
    name: str
    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True)
class RegressionFit:
    """
    Result of a least-squares fit.

    Attributes:
        slope: b1 = sum((x - x_mean) * (y - y_mean)) / sum((x - x_mean)^2)
        intercept: b0 = y_mean - b1 * x_mean
        x_mean: Mean of window x positions
        y_mean: Mean of window values
        std_dev: Population standard deviation of window values
        start_x: First x of the window
        end_x: Last x of the window
    """
    slope: float
    intercept: float
    x_mean: float
    y_mean: float
    std_dev: float
    start_x: float
    end_x: float

    def at(self, x: float) -> float:
        """Fitted value at x."""
        return self.slope * x + self.intercept

    def channel(self, multipliers: Sequence[float] = ()) -> list[ChannelLine]:
        """
        Center line followed by an upper/lower pair per multiplier.

        Band i is named upper_{i+1}/lower_{i+1} and offset by
        multipliers[i] * std_dev.
        """
        y1 = self.at(self.start_x)
        y2 = self.at(self.end_x)
        lines = [ChannelLine("center", self.start_x, y1, self.end_x, y2)]
        for i, k in enumerate(multipliers, start=1):
            offset = k * self.std_dev
            lines.append(ChannelLine(f"upper_{i}", self.start_x, y1 + offset, self.end_x, y2 + offset))
            lines.append(ChannelLine(f"lower_{i}", self.start_x, y1 - offset, self.end_x, y2 - offset))
        return lines


def fit_linear_regression(points: Sequence[tuple[float, float]]) -> RegressionFit | None:
    """
    Fit y = b1 * x + b0 to (x, y) points by least squares.

    Returns None for fewer than two points or when all x coincide.
    """
    n = len(points)
    if n < 2:
        return None

    std_tool = IncrementalStdDev(length=n)
    x_total = 0.0
    y_total = 0.0
    for x, y in points:
        x_total += x
        y_total += y
        std_tool.update(y)

    x_mean = x_total / n
    y_mean = y_total / n

    num = 0.0
    den = 0.0
    for x, y in points:
        num += (x - x_mean) * (y - y_mean)
        den += (x - x_mean) * (x - x_mean)

    if den == 0:
        return None

    slope = num / den
    return RegressionFit(
        slope=slope,
        intercept=y_mean - slope * x_mean,
        x_mean=x_mean,
        y_mean=y_mean,
        std_dev=std_tool.value,
        start_x=points[0][0],
        end_x=points[-1][0],
    )


@dataclass
class IncrementalLinearRegression(IncrementalIndicator):
    """
    Linear regression over the last `length` (index, value) pairs.

    update() appends a point (index defaults to the running sample count)
    and refits the whole window. value is the fitted value at the newest x.
    """

    length: int = 50
    _window: deque = field(default_factory=deque, init=False)
    _count: int = field(default=0, init=False)
    _fit: RegressionFit | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        validate_length("IncrementalLinearRegression", self.length)
        self._window = deque(maxlen=self.length)

    def update(self, close: float, index: int | None = None, **kwargs: Any) -> float:
        """Append (index, close) and refit the window."""
        x = self._count if index is None else index
        self._count += 1
        self._window.append((x, close))
        self._fit = fit_linear_regression(list(self._window)) if self.length >= 2 else None
        return self.value

    def reset(self) -> None:
        self._window.clear()
        self._count = 0
        self._fit = None

    @property
    def fit(self) -> RegressionFit | None:
        """Latest fit, or None while fewer than two points are held."""
        return self._fit

    @property
    def value(self) -> float:
        if self._fit is None:
            return np.nan
        return self._fit.at(self._fit.end_x)

    @property
    def slope(self) -> float:
        return np.nan if self._fit is None else self._fit.slope

    @property
    def is_ready(self) -> bool:
        return self._fit is not None
