"""
NOM VWAP Bands plugin.
"""

from __future__ import annotations

from typing import Any

from ..config.config import get_config
from ..indicators.incremental.vwap import IncrementalVWAPBands
from ..indicators.types import Bar
from .base import History, IndicatorPlugin, ParamSpec, PluginMetadata
from .registry import register_plugin


@register_plugin("vwap_bands")
class VWAPBandsPlugin(IndicatorPlugin):
    """Session VWAP with two optional standard-deviation band pairs."""

    metadata = PluginMetadata(
        name="NOMVWAPBands",
        description="NOM VWAP Bands",
        params=(
            ParamSpec.number("band1StdDev", 1, step=0.1),
            ParamSpec.boolean("band1Enabled", True),
            ParamSpec.number("band2StdDev", 2, step=0.1),
            ParamSpec.boolean("band2Enabled", True),
            ParamSpec.enum("timeframe", {
                "daily": "Daily",
                "weekly": "Weekly",
                "twoWeeks": "2 Weeks",
                "monthly": "Monthly",
            }, "daily"),
        ),
        plots={
            "vwap": "VWAP",
            "upperBand1": "Upper Band 1",
            "lowerBand1": "Lower Band 1",
            "upperBand2": "Upper Band 2",
            "lowerBand2": "Lower Band 2",
        },
    )

    def init(self) -> None:
        self.vwap = IncrementalVWAPBands(
            timeframe=self.props["timeframe"],
            band1_std_dev=self.props["band1StdDev"],
            band1_enabled=self.props["band1Enabled"],
            band2_std_dev=self.props["band2StdDev"],
            band2_enabled=self.props["band2Enabled"],
            tz=get_config().indicators.tz,
        )

    def map(self, bar: Bar, index: int, history: History) -> dict[str, Any]:
        return self.vwap.update(bar).to_dict()

    def filter(self, output: Any, index: int) -> bool:
        return self.vwap.is_ready
