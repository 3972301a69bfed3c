"""
NOM Heikin Ashi Smoothed plugin.

Maps each bar to a smoothed Heikin-Ashi candle; the candlestick plotter
turns the history into candle bodies and wicks colored by direction.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ..indicators.incremental.heikin_ashi import HeikinAshiSmoother
from ..indicators.types import Bar
from .base import History, IndicatorPlugin, ParamSpec, PluginMetadata
from .registry import register_plugin


@dataclass(frozen=True)
class CandleShape:
    """Candle body (open..close) and wick (high..low) at one x position."""
    x: datetime
    open: float
    high: float
    low: float
    close: float
    color: str
    body_width: float = 0.9
    wick_width: float = 0.2


def candlestick_plotter(plugin: IndicatorPlugin, history: History) -> list[CandleShape]:
    """One CandleShape per bar that has a complete candle."""
    rising = plugin.props["risingColor"]
    falling = plugin.props["fallingColor"]
    shapes = []
    for i, item in enumerate(history.data):
        if item is None:
            continue
        shapes.append(CandleShape(
            x=history.bar(i).timestamp,
            open=item["haOpen"],
            high=item["haHigh"],
            low=item["haLow"],
            close=item["haClose"],
            color=falling if item["haOpen"] > item["haClose"] else rising,
        ))
    return shapes


@register_plugin("heikin_ashi_smoothed")
class HeikinAshiSmoothedPlugin(IndicatorPlugin):
    """Smoothed Heikin-Ashi candles (Valcu or Vervoort blending)."""

    metadata = PluginMetadata(
        name="NOMHeikinAshiSmoothed",
        description="NOM Heikin Ashi Smoothed",
        params=(
            ParamSpec.period("period", 35),
            ParamSpec.boolean("hideCandles", False),
            ParamSpec.enum("movingAverageType", {
                "simple": "Simple Moving Average",
                "exponential": "Exponential Moving Average",
                "hull": "Hull Moving Average",
                "weighted": "Weighted Moving Average",
            }, "weighted"),
            ParamSpec.enum("candleSmoothing", {
                "valcu": "Valcu",
                "vervoort": "Vervoort",
            }, "valcu"),
            ParamSpec.color("risingColor", "green"),
            ParamSpec.color("fallingColor", "red"),
        ),
        plots={"haOpen": "HA Open", "haHigh": "HA High", "haLow": "HA Low", "haClose": "HA Close"},
    )
    plotters = (candlestick_plotter,)

    def init(self) -> None:
        self.smoother = HeikinAshiSmoother(
            length=self.props["period"],
            ma_type=self.props["movingAverageType"],
            smoothing=self.props["candleSmoothing"],
        )

    def map(self, bar: Bar, index: int, history: History) -> dict[str, Any] | None:
        candle = self.smoother.update_bar(bar)
        if candle is None:
            return None
        output: dict[str, Any] = candle.to_dict()
        # Tells the host to draw its own price candles transparent
        output["hidePriceCandles"] = self.props["hideCandles"]
        return output

    def filter(self, output: Any, index: int) -> bool:
        return index > self.props["period"]
