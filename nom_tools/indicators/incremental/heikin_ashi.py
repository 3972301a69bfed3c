"""
Smoothed Heikin-Ashi candles.

Raw OHLC is smoothed through four moving averages of the same variant and
length, then blended into a synthetic candle:

    ha_open  = (prev_ha_open + avg(prev smoothed OHLC)) / 2
    ha_high  = max(high_ma, ha_open)
    ha_low   = min(low_ma, ha_open)
    ha_close = avg(smoothed OHLC)                                  (Valcu)
    ha_close = (avg(smoothed OHLC) + ha_open + ha_high + ha_low) / 4 (Vervoort)

The one-step history lives in an explicit HeikinAshiState that
heikin_ashi_step() takes and returns.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ..types import Bar, CandleSmoothing, MovingAverageType
from .base import IncrementalIndicator, validate_length
from .moving_average import create_moving_average


@dataclass(frozen=True)
class OHLC:
    """Four smoothed price channels for one bar."""
    open: float
    high: float
    low: float
    close: float

    @property
    def average(self) -> float:
        return (self.open + self.high + self.low + self.close) / 4.0

    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in (self.open, self.high, self.low, self.close))


@dataclass(frozen=True)
class SmoothedCandle:
    """Synthetic Heikin-Ashi candle."""
    open: float
    high: float
    low: float
    close: float

    @property
    def is_rising(self) -> bool:
        return self.close >= self.open

    def to_dict(self) -> dict[str, float]:
        return {
            "haOpen": self.open,
            "haHigh": self.high,
            "haLow": self.low,
            "haClose": self.close,
        }


@dataclass(frozen=True)
class HeikinAshiState:
    """
    One-step history carried between bars.

    prev_smoothed is None until the first step (uninitialized state).
    """
    prev_smoothed: OHLC | None = None
    prev_ha_open: float = math.nan

    @property
    def is_running(self) -> bool:
        return self.prev_smoothed is not None


def _valcu_close(smoothed: OHLC, ha_open: float) -> float:
    return smoothed.average


def _vervoort_close(smoothed: OHLC, ha_open: float) -> float:
    return (
        smoothed.average
        + ha_open
        + max(smoothed.high, ha_open)
        + min(smoothed.low, ha_open)
    ) / 4.0


_CLOSE_FORMULAS: dict[CandleSmoothing, Callable[[OHLC, float], float]] = {
    CandleSmoothing.VALCU: _valcu_close,
    CandleSmoothing.VERVOORT: _vervoort_close,
}


def _blend(
    state: HeikinAshiState,
    smoothed: OHLC,
    close_formula: Callable[[OHLC, float], float],
) -> tuple[HeikinAshiState, SmoothedCandle]:
    prev = state.prev_smoothed if state.is_running else smoothed
    prev_ha_open = state.prev_ha_open
    if math.isnan(prev_ha_open):
        # Self-seed from the previous smoothed candle
        prev_ha_open = prev.average

    ha_open = (prev_ha_open + prev.average) / 2.0
    candle = SmoothedCandle(
        open=ha_open,
        high=max(smoothed.high, ha_open),
        low=min(smoothed.low, ha_open),
        close=close_formula(smoothed, ha_open),
    )
    new_state = HeikinAshiState(
        prev_smoothed=smoothed,
        prev_ha_open=candle.open,
    )
    return new_state, candle


def heikin_ashi_step(
    state: HeikinAshiState,
    smoothed: OHLC,
    smoothing: CandleSmoothing | str = CandleSmoothing.VALCU,
) -> tuple[HeikinAshiState, SmoothedCandle]:
    """
    Advance the Heikin-Ashi state by one smoothed bar.

    Returns the new state and the candle for this bar.
    """
    return _blend(state, smoothed, _CLOSE_FORMULAS[CandleSmoothing.parse(smoothing)])


@dataclass
class HeikinAshiSmoother(IncrementalIndicator):
    """
    Heikin-Ashi candles over moving-average smoothed OHLC.

    Output is None for the first `length` samples while the moving
    averages warm up.
    """

    length: int = 35
    ma_type: MovingAverageType | str = MovingAverageType.WEIGHTED
    smoothing: CandleSmoothing | str = CandleSmoothing.VALCU
    _open_ma: IncrementalIndicator = field(init=False)
    _high_ma: IncrementalIndicator = field(init=False)
    _low_ma: IncrementalIndicator = field(init=False)
    _close_ma: IncrementalIndicator = field(init=False)
    _close_formula: Callable[[OHLC, float], float] = field(init=False)
    _state: HeikinAshiState = field(default_factory=HeikinAshiState, init=False)
    _candle: SmoothedCandle | None = field(default=None, init=False)
    _count: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        validate_length("HeikinAshiSmoother", self.length)
        self.ma_type = MovingAverageType.parse(self.ma_type)
        self.smoothing = CandleSmoothing.parse(self.smoothing)
        self._open_ma = create_moving_average(self.ma_type, self.length)
        self._high_ma = create_moving_average(self.ma_type, self.length)
        self._low_ma = create_moving_average(self.ma_type, self.length)
        self._close_ma = create_moving_average(self.ma_type, self.length)
        self._close_formula = _CLOSE_FORMULAS[self.smoothing]

    def update(
        self, open: float, high: float, low: float, close: float, **kwargs: Any
    ) -> SmoothedCandle | None:
        """Update with new OHLC data."""
        self._count += 1
        smoothed = OHLC(
            open=self._open_ma.update(open),
            high=self._high_ma.update(high),
            low=self._low_ma.update(low),
            close=self._close_ma.update(close),
        )

        if smoothed.is_finite():
            self._state, candle = _blend(self._state, smoothed, self._close_formula)
        else:
            candle = None

        self._candle = candle if self._count > self.length else None
        return self._candle

    def update_bar(self, bar: Bar) -> SmoothedCandle | None:
        return self.update(bar.open, bar.high, bar.low, bar.close)

    def reset(self) -> None:
        for ma in (self._open_ma, self._high_ma, self._low_ma, self._close_ma):
            ma.reset()
        self._state = HeikinAshiState()
        self._candle = None
        self._count = 0

    @property
    def state(self) -> HeikinAshiState:
        return self._state

    @property
    def value(self) -> SmoothedCandle | None:
        return self._candle

    @property
    def is_ready(self) -> bool:
        return self._candle is not None
