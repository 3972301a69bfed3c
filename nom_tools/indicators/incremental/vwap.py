"""
Session VWAP with standard-deviation bands.

Formula:
    tp = (high + low + close) / 3
    vwap = sum(tp * volume) / sum(volume)
    std_dev = sqrt(max(sum(tp^2 * volume) / sum(volume) - vwap^2, 0))
    band_k = vwap +/- k * std_dev

Sums restart at a period boundary, checked before the bar is accumulated.
A boundary only counts on a bar whose trade date differs from the
previous bar's. Bars without a trade date use the calendar day of their
timestamp read in tz, the same zone the rules below are read in:
    daily     every new trade date
    weekly    day of week (Sunday = 0) wrapped below the previous bar's
    twoWeeks  weekly wrap on an even ISO week
    monthly   last calendar day of the month; if the previous bar's month
              ended on a weekend, the first bar of a new month instead
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from typing import Any

import numpy as np

from ...utils.datetime_utils import (
    day_of_week,
    is_weekend,
    iso_week_number,
    last_date_of_month,
    localize,
)
from ..types import Bar, VWAPTimeframe
from .base import IncrementalIndicator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VWAPBandsValue:
    """
    VWAP output for one bar.

    Disabled bands are None. When no volume has been accumulated yet
    vwap and std_dev are NaN and every band is None.
    """
    vwap: float
    std_dev: float
    upper_band1: float | None = None
    lower_band1: float | None = None
    upper_band2: float | None = None
    lower_band2: float | None = None
    total_volume: float = 0.0

    @property
    def is_ready(self) -> bool:
        return not math.isnan(self.vwap)

    def to_dict(self) -> dict[str, float | None]:
        return {
            "vwap": self.vwap,
            "upperBand1": self.upper_band1,
            "lowerBand1": self.lower_band1,
            "upperBand2": self.upper_band2,
            "lowerBand2": self.lower_band2,
        }


NOT_READY = VWAPBandsValue(vwap=np.nan, std_dev=np.nan)


@dataclass
class IncrementalVWAPBands(IncrementalIndicator):
    """
    Volume Weighted Average Price with up to two std-dev band pairs.

    Args:
        timeframe: Reset period (daily, weekly, twoWeeks, monthly)
        band1_std_dev: Multiplier for band pair 1
        band1_enabled: Emit band pair 1
        band2_std_dev: Multiplier for band pair 2
        band2_enabled: Emit band pair 2
        tz: Zone that calendar fields are read in for aware timestamps
    """

    timeframe: VWAPTimeframe | str = VWAPTimeframe.DAILY
    band1_std_dev: float = 1.0
    band1_enabled: bool = True
    band2_std_dev: float = 2.0
    band2_enabled: bool = True
    tz: tzinfo | None = None
    _total_volume: float = field(default=0.0, init=False)
    _total_price_volume: float = field(default=0.0, init=False)
    _total_price_volume2: float = field(default=0.0, init=False)
    _prev_trade_date: date | None = field(default=None, init=False)
    _prev_day_of_week: int | None = field(default=None, init=False)
    _prev_month: int | None = field(default=None, init=False)
    _prev_month_ends_on_weekend: bool = field(default=False, init=False)
    _count: int = field(default=0, init=False)
    _value: VWAPBandsValue = field(default=NOT_READY, init=False)
    _period_rule: Callable[[datetime], bool] = field(init=False)

    def __post_init__(self) -> None:
        self.timeframe = VWAPTimeframe.parse(self.timeframe)
        self._period_rule = {
            VWAPTimeframe.DAILY: self._daily_rule,
            VWAPTimeframe.WEEKLY: self._weekly_rule,
            VWAPTimeframe.TWO_WEEKS: self._two_weeks_rule,
            VWAPTimeframe.MONTHLY: self._monthly_rule,
        }[self.timeframe]

    # ------------------------------------------------------------------
    # Period rules: each reads the bar's local time and records what the
    # next bar compares against.
    # ------------------------------------------------------------------

    def _daily_rule(self, local: datetime) -> bool:
        return True

    def _weekly_rule(self, local: datetime) -> bool:
        dow = day_of_week(local.date())
        wrapped = self._prev_day_of_week is not None and self._prev_day_of_week > dow
        self._prev_day_of_week = dow
        return wrapped

    def _two_weeks_rule(self, local: datetime) -> bool:
        return self._weekly_rule(local) and iso_week_number(local.date()) % 2 == 0

    def _monthly_rule(self, local: datetime) -> bool:
        d = local.date()
        month_end = last_date_of_month(d)
        if self._prev_month_ends_on_weekend:
            # Markets are shut on that last day; roll over with the month
            boundary = self._prev_month is not None and d.month != self._prev_month
        else:
            boundary = d.day == month_end.day
        self._prev_month = d.month
        self._prev_month_ends_on_weekend = is_weekend(month_end)
        return boundary

    # ------------------------------------------------------------------

    def update(self, bar: Bar, **kwargs: Any) -> VWAPBandsValue:
        """Update with a new bar."""
        self._count += 1

        trade_date = bar.session_date(self.tz)
        period_boundary = self._period_rule(localize(bar.timestamp, self.tz))
        if period_boundary and trade_date != self._prev_trade_date:
            if self._total_volume:
                logger.debug(
                    "VWAP %s reset at %s (trade_date=%s)",
                    self.timeframe.value, bar.timestamp.isoformat(), trade_date,
                )
            self._total_volume = 0.0
            self._total_price_volume = 0.0
            self._total_price_volume2 = 0.0
        self._prev_trade_date = trade_date

        # Skip NaN inputs so they cannot poison the cumulative sums
        if not any(np.isnan(v) for v in (bar.high, bar.low, bar.close, bar.volume)):
            tp = bar.typical_price
            self._total_volume += bar.volume
            self._total_price_volume += tp * bar.volume
            self._total_price_volume2 += tp * tp * bar.volume

        self._value = self._compute()
        return self._value

    def _compute(self) -> VWAPBandsValue:
        if self._total_volume == 0:
            return NOT_READY

        vwap = self._total_price_volume / self._total_volume
        variance = self._total_price_volume2 / self._total_volume - vwap * vwap
        std_dev = math.sqrt(max(variance, 0.0))

        upper1 = lower1 = upper2 = lower2 = None
        if self.band1_enabled:
            upper1 = vwap + std_dev * self.band1_std_dev
            lower1 = vwap - std_dev * self.band1_std_dev
        if self.band2_enabled:
            upper2 = vwap + std_dev * self.band2_std_dev
            lower2 = vwap - std_dev * self.band2_std_dev

        return VWAPBandsValue(
            vwap=vwap,
            std_dev=std_dev,
            upper_band1=upper1,
            lower_band1=lower1,
            upper_band2=upper2,
            lower_band2=lower2,
            total_volume=self._total_volume,
        )

    def reset(self) -> None:
        self._total_volume = 0.0
        self._total_price_volume = 0.0
        self._total_price_volume2 = 0.0
        self._prev_trade_date = None
        self._prev_day_of_week = None
        self._prev_month = None
        self._prev_month_ends_on_weekend = False
        self._count = 0
        self._value = NOT_READY

    @property
    def total_volume(self) -> float:
        return self._total_volume

    @property
    def value(self) -> float:
        return self._value.vwap

    @property
    def std_dev(self) -> float:
        return self._value.std_dev

    @property
    def is_ready(self) -> bool:
        return self._value.is_ready
