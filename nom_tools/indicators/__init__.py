"""
Indicators module.

- types: Bar and option enums shared across indicators
- incremental: per-bar statistics (moving averages, std-dev, regression,
  Heikin-Ashi, VWAP bands)
"""

from .types import Bar, CandleSmoothing, MovingAverageType, VWAPTimeframe

__all__ = ["Bar", "CandleSmoothing", "MovingAverageType", "VWAPTimeframe"]
