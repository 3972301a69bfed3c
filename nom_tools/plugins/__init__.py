"""
Indicator plugins.

Importing this package registers the built-in plugins:
- heikin_ashi_smoothed
- linear_regression_channel
- vwap_bands
- colored_price_line
"""

from .base import History, IndicatorPlugin, ParamSpec, PluginMetadata
from .registry import (
    PLUGIN_REGISTRY,
    create_plugin,
    get_plugin_class,
    get_plugin_info,
    list_plugins,
    register_plugin,
    unregister_plugin,
)

# Built-in plugins (registered on import)
from .heikin_ashi import CandleShape, HeikinAshiSmoothedPlugin, candlestick_plotter
from .linear_regression_channel import (
    ChannelSegment,
    LinearRegressionChannelPlugin,
    channel_plotter,
)
from .vwap_bands import VWAPBandsPlugin
from .colored_price_line import ColoredPriceLinePlugin

from .driver import process_bar, run_plugin
from .loader import (
    PluginConfig,
    PluginConfigNotFoundError,
    list_plugin_configs,
    load_plugin_config,
)

__all__ = [
    "History",
    "IndicatorPlugin",
    "ParamSpec",
    "PluginMetadata",
    "PLUGIN_REGISTRY",
    "create_plugin",
    "get_plugin_class",
    "get_plugin_info",
    "list_plugins",
    "register_plugin",
    "unregister_plugin",
    "CandleShape",
    "HeikinAshiSmoothedPlugin",
    "candlestick_plotter",
    "ChannelSegment",
    "LinearRegressionChannelPlugin",
    "channel_plotter",
    "VWAPBandsPlugin",
    "ColoredPriceLinePlugin",
    "process_bar",
    "run_plugin",
    "PluginConfig",
    "PluginConfigNotFoundError",
    "list_plugin_configs",
    "load_plugin_config",
]
