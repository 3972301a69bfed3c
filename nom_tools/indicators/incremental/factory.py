"""
Factory for incremental indicators.

Provides create_incremental_indicator() to instantiate any incremental
indicator from a type string and parameter dict.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .base import IncrementalIndicator
from .heikin_ashi import HeikinAshiSmoother
from .moving_average import (
    IncrementalEMA,
    IncrementalHMA,
    IncrementalSMA,
    IncrementalWMA,
)
from .regression import IncrementalLinearRegression
from .statistics import IncrementalStdDev
from .vwap import IncrementalVWAPBands


_VALID_PARAMS: dict[str, frozenset[str]] = {
    "sma": frozenset({"length"}),
    "ema": frozenset({"length"}),
    "wma": frozenset({"length"}),
    "hma": frozenset({"length"}),
    "stddev": frozenset({"length"}),
    "linreg": frozenset({"length"}),
    "heikin_ashi": frozenset({"length", "ma_type", "smoothing"}),
    "vwap_bands": frozenset({
        "timeframe", "band1_std_dev", "band1_enabled", "band2_std_dev", "band2_enabled", "tz",
    }),
}


def _validate_params(indicator_type: str, params: dict[str, Any]) -> None:
    """Raise ValueError if params contains unknown keys for this indicator."""
    valid = _VALID_PARAMS.get(indicator_type)
    if valid is None:
        return
    unknown = set(params.keys()) - valid
    if unknown:
        raise ValueError(
            f"Unknown params for '{indicator_type}': {sorted(unknown)}. "
            f"Valid: {sorted(valid)}"
        )


# Each entry maps indicator type string to a callable(params) -> IncrementalIndicator.
_FACTORY: dict[str, Callable[[dict[str, Any]], IncrementalIndicator]] = {
    "sma": lambda p: IncrementalSMA(length=p.get("length", 20)),
    "ema": lambda p: IncrementalEMA(length=p.get("length", 20)),
    "wma": lambda p: IncrementalWMA(length=p.get("length", 20)),
    "hma": lambda p: IncrementalHMA(length=p.get("length", 20)),
    "stddev": lambda p: IncrementalStdDev(length=p.get("length", 20)),
    "linreg": lambda p: IncrementalLinearRegression(length=p.get("length", 50)),
    "heikin_ashi": lambda p: HeikinAshiSmoother(
        length=p.get("length", 35),
        ma_type=p.get("ma_type", "weighted"),
        smoothing=p.get("smoothing", "valcu"),
    ),
    "vwap_bands": lambda p: IncrementalVWAPBands(
        timeframe=p.get("timeframe", "daily"),
        band1_std_dev=p.get("band1_std_dev", 1.0),
        band1_enabled=p.get("band1_enabled", True),
        band2_std_dev=p.get("band2_std_dev", 2.0),
        band2_enabled=p.get("band2_enabled", True),
        tz=p.get("tz"),
    ),
}


def create_incremental_indicator(
    indicator_type: str,
    params: dict[str, Any],
) -> IncrementalIndicator | None:
    """
    Create an incremental indicator from type and params.

    Returns None if the indicator type is not supported.
    Raises ValueError if params contains unknown keys.
    """
    indicator_type = indicator_type.lower()
    _validate_params(indicator_type, params)

    factory_fn = _FACTORY.get(indicator_type)
    if factory_fn is None:
        return None
    return factory_fn(params)


def list_incremental_indicators() -> list[str]:
    """Get sorted list of supported indicator types."""
    return sorted(_FACTORY)


def supports_incremental(indicator_type: str) -> bool:
    return indicator_type.lower() in _FACTORY
