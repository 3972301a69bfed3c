"""
NOM Colored Price Line plugin.

Plots a single point at the latest bar's value so the host draws a
price line in the plugin's color.
"""

from __future__ import annotations

from ..indicators.types import Bar
from .base import History, IndicatorPlugin, PluginMetadata
from .registry import register_plugin


@register_plugin("colored_price_line")
class ColoredPriceLinePlugin(IndicatorPlugin):
    metadata = PluginMetadata(
        name="NOM Colored Price Line",
        description="NOM Colored Price Line",
        plots={"_": "Price"},
    )

    def map(self, bar: Bar, index: int, history: History) -> float | None:
        if index == len(history) - 1:
            return bar.value
        return None
