"""
Core types shared by the incremental indicators and the plugins.

Provides:
- Bar: single OHLCV sample with its trade date
- MovingAverageType: smoothing variant for moving-average based indicators
- CandleSmoothing: Heikin-Ashi close blending formula
- VWAPTimeframe: VWAP accumulation reset period

Option enums are resolved once at construction time; per-bar code never
switches on strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from enum import Enum
from typing import Any

from ..utils.datetime_utils import localize, ms_to_datetime


class _OptionEnum(str, Enum):
    """String enum that parses user/config values with a helpful error."""

    @classmethod
    def parse(cls, value: str | _OptionEnum) -> _OptionEnum:
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            choices = [m.value for m in cls]
            raise ValueError(
                f"Unknown {cls.__name__} '{value}'. Valid: {choices}\n"
                f"\n"
                f"Fix: use one of {choices}"
            ) from None


class MovingAverageType(_OptionEnum):
    """Moving-average variant used to smooth a series."""

    SIMPLE = "simple"
    EXPONENTIAL = "exponential"
    WEIGHTED = "weighted"
    HULL = "hull"


class CandleSmoothing(_OptionEnum):
    """Heikin-Ashi close formula."""

    VALCU = "valcu"        # ha_close = avg(OHLC)
    VERVOORT = "vervoort"  # ha_close also blends ha_open, ha_high, ha_low


class VWAPTimeframe(_OptionEnum):
    """Period after which VWAP accumulation restarts."""

    DAILY = "daily"
    WEEKLY = "weekly"
    TWO_WEEKS = "twoWeeks"
    MONTHLY = "monthly"


@dataclass(frozen=True)
class Bar:
    """
    Single OHLCV bar.

    Bars are owned by the caller and only read by indicators.

    Attributes:
        timestamp: Bar timestamp (naive or timezone-aware)
        open: Open price
        high: High price
        low: Low price
        close: Close price
        volume: Traded volume
        trade_date: Session (trade) date; None when not supplied (see session_date)
    """
    timestamp: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0
    trade_date: date | None = None

    def session_date(self, tz: tzinfo | None = None) -> date:
        """
        Trade date of the bar.

        Falls back to the calendar day of the timestamp read in tz when no
        trade date was supplied.
        """
        if self.trade_date is not None:
            return self.trade_date
        return localize(self.timestamp, tz).date()

    @property
    def value(self) -> float:
        """Scalar value of the bar (close)."""
        return self.close

    @property
    def typical_price(self) -> float:
        """(high + low + close) / 3."""
        return (self.high + self.low + self.close) / 3.0

    @property
    def ohlc4(self) -> float:
        return (self.open + self.high + self.low + self.close) / 4.0

    @classmethod
    def from_ts_ms(
        cls,
        ts_ms: int,
        open: float,
        high: float,
        low: float,
        close: float,
        volume: float = 0.0,
        trade_date: date | None = None,
    ) -> Bar:
        """Create a Bar from an epoch-milliseconds timestamp (UTC)."""
        return cls(
            timestamp=ms_to_datetime(ts_ms),
            open=open,
            high=high,
            low=low,
            close=close,
            volume=volume,
            trade_date=trade_date,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for serialization."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
            "volume": self.volume,
            "trade_date": self.trade_date.isoformat() if self.trade_date else None,
        }
