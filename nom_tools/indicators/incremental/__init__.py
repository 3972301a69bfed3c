"""
Incremental indicator computation.

Per-bar updates for the statistics behind the NOM indicators. Each update
returns the current value; NaN (or None for candle/band outputs) means
the indicator is still warming up.

Usage:
    from nom_tools.indicators.incremental import IncrementalHMA

    hma = IncrementalHMA(length=20)
    for price in closes:
        value = hma.update(price)
"""

from __future__ import annotations

# Base class
from .base import IncrementalIndicator

# Moving averages
from .moving_average import (
    IncrementalSMA,
    IncrementalEMA,
    IncrementalWMA,
    IncrementalHMA,
    create_moving_average,
)

# Dispersion and trend fitting
from .statistics import IncrementalStdDev
from .regression import (
    ChannelLine,
    RegressionFit,
    IncrementalLinearRegression,
    fit_linear_regression,
)

# Candle smoothing
from .heikin_ashi import (
    OHLC,
    SmoothedCandle,
    HeikinAshiState,
    HeikinAshiSmoother,
    heikin_ashi_step,
)

# Volume
from .vwap import IncrementalVWAPBands, VWAPBandsValue

# Factory and utilities
from .factory import (
    create_incremental_indicator,
    list_incremental_indicators,
    supports_incremental,
)

__all__ = [
    # Base
    "IncrementalIndicator",
    # Moving averages
    "IncrementalSMA",
    "IncrementalEMA",
    "IncrementalWMA",
    "IncrementalHMA",
    "create_moving_average",
    # Dispersion and trend fitting
    "IncrementalStdDev",
    "ChannelLine",
    "RegressionFit",
    "IncrementalLinearRegression",
    "fit_linear_regression",
    # Candle smoothing
    "OHLC",
    "SmoothedCandle",
    "HeikinAshiState",
    "HeikinAshiSmoother",
    "heikin_ashi_step",
    # Volume
    "IncrementalVWAPBands",
    "VWAPBandsValue",
    # Factory and utilities
    "create_incremental_indicator",
    "list_incremental_indicators",
    "supports_incremental",
]
