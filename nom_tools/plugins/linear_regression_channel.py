"""
NOM Linear Regression Channel plugin.

map() only records (x, y) for each bar. The channel plotter fits the last
`period` points and returns the center line plus up to two band pairs,
each a straight segment between the window's first and last bar.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ..indicators.incremental.regression import fit_linear_regression
from ..indicators.types import Bar
from .base import History, IndicatorPlugin, ParamSpec, PluginMetadata
from .registry import register_plugin


@dataclass(frozen=True)
class ChannelSegment:
    """Channel line in chart coordinates."""
    name: str
    start: datetime
    start_value: float
    end: datetime
    end_value: float
    color: str
    width: float


def channel_plotter(plugin: IndicatorPlugin, history: History) -> list[ChannelSegment]:
    """Segments for the regression channel over the newest `period` bars."""
    props = plugin.props
    period = props["period"]
    end_index = len(history.data) - 1
    start_index = max(end_index + 1 - period, 0)

    if period < 2 or len(history.data) < 2:
        return []

    points = [
        (history.get(i)["x"], history.get(i)["y"])
        for i in range(start_index, end_index + 1)
    ]
    fit = fit_linear_regression(points)
    if fit is None:
        return []

    bands = [
        (props[f"band{n}StdDevs"], props[f"band{n}Color"])
        for n in (1, 2)
        if props[f"band{n}Enabled"]
    ]
    colors = {"center": props["linearRegression"]}
    for i, (_, color) in enumerate(bands, start=1):
        colors[f"upper_{i}"] = color
        colors[f"lower_{i}"] = color

    start = history.bar(start_index).timestamp
    end = history.bar(end_index).timestamp
    return [
        ChannelSegment(
            name=line.name,
            start=start,
            start_value=line.y1,
            end=end,
            end_value=line.y2,
            color=colors[line.name],
            width=props["lineWidths"],
        )
        for line in fit.channel([k for k, _ in bands])
    ]


@register_plugin("linear_regression_channel")
class LinearRegressionChannelPlugin(IndicatorPlugin):
    """Least-squares channel over the most recent bars."""

    metadata = PluginMetadata(
        name="NOMLinearRegressionChannel",
        description="NOM Linear Regression Channel",
        params=(
            ParamSpec.period("period", 50),
            ParamSpec.color("linearRegression", "yellow"),
            ParamSpec.number("band1StdDevs", 1, step=0.1),
            ParamSpec.color("band1Color", "yellow"),
            ParamSpec.boolean("band1Enabled", True),
            ParamSpec.number("band2StdDevs", 2, step=0.1),
            ParamSpec.color("band2Color", "yellow"),
            ParamSpec.boolean("band2Enabled", True),
            ParamSpec.number("lineWidths", 1),
        ),
    )
    plotters = (channel_plotter,)

    def map(self, bar: Bar, index: int, history: History) -> dict[str, Any]:
        return {"x": index, "y": bar.value}
