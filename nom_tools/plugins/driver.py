"""
Bar driver: plays the host's role for a plugin.

Bars are delivered strictly in order, one per call; each call maps the
bar, applies the plugin's filter and records the output in the history.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from ..indicators.types import Bar
from .base import History, IndicatorPlugin


def process_bar(plugin: IndicatorPlugin, history: History, bar: Bar) -> Any:
    """
    Feed the next bar to a plugin.

    The bar is appended to history.bars unless the history was preloaded
    with it. Returns the kept output (None when filtered out).
    """
    index = len(history.data)
    if index >= len(history.bars):
        history.bars.append(bar)
    output = plugin.map(bar, index, history)
    kept = output if plugin.filter(output, index) else None
    history.append(kept)
    return kept


def run_plugin(plugin: IndicatorPlugin, bars: Iterable[Bar]) -> History:
    """
    Run a plugin over a complete, ordered set of bars.

    The history is preloaded with every bar so map() sees the full chart
    length, as a host does for a loaded chart.
    """
    history = History(list(bars))
    for bar in history.bars:
        process_bar(plugin, history, bar)
    return history
