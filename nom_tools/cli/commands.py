"""
CLI command handlers.

Each handler takes the parsed args and a rich Console and returns an
exit code. No indicator logic lives here.
"""

from __future__ import annotations

import argparse
import math
from typing import Any

import yaml
from rich.console import Console
from rich.table import Table

from ..config.config import get_config
from ..data.bars import load_bars_csv
from ..plugins import (
    ChannelSegment,
    CandleShape,
    create_plugin,
    get_plugin_info,
    list_plugin_configs,
    list_plugins,
    load_plugin_config,
    run_plugin,
)
from ..utils.logger import get_logger


def parse_param_overrides(pairs: list[str]) -> dict[str, Any]:
    """
    Parse KEY=VALUE strings; values are read as YAML scalars.

    "period=20" -> {"period": 20}, "band1Enabled=false" -> {"band1Enabled": False}
    """
    params: dict[str, Any] = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Invalid param '{pair}'. Use KEY=VALUE, e.g. period=20")
        try:
            params[key.strip()] = yaml.safe_load(raw) if raw.strip() else ""
        except yaml.YAMLError as e:
            raise ValueError(
                f"Invalid value in param '{pair}': {e}\n"
                f"\n"
                f"Fix: quote the value or use a plain scalar, e.g. {key.strip()}=1.5"
            ) from e
    return params


def _fmt(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, float):
        return "NaN" if math.isnan(value) else f"{value:.4f}"
    return str(value)


def cmd_list(args: argparse.Namespace, console: Console) -> int:
    table = Table(title="Registered indicators")
    table.add_column("Key", style="cyan")
    table.add_column("Name")
    table.add_column("Default params")
    for key in list_plugins():
        info = get_plugin_info(key)
        params = ", ".join(f"{k}={v}" for k, v in info["params"].items()) or "-"
        table.add_row(key, info["name"], params)
    console.print(table)
    return 0


def cmd_configs(args: argparse.Namespace, console: Console) -> int:
    configs_dir = args.configs_dir or get_config().indicators.configs_dir
    ids = list_plugin_configs(configs_dir)
    if not ids:
        console.print(f"[yellow]No indicator configs in {configs_dir}[/yellow]")
        return 0
    table = Table(title=f"Indicator configs ({configs_dir})")
    table.add_column("Id", style="cyan")
    table.add_column("Indicator")
    table.add_column("Params")
    for config_id in ids:
        cfg = load_plugin_config(config_id, configs_dir)
        table.add_row(cfg.id, cfg.indicator, _fmt(cfg.params or None))
    console.print(table)
    return 0


def _output_table(key: str, history, tail: int) -> Table:
    table = Table(title=f"{key} ({len(history)} bars)")
    table.add_column("Timestamp", style="dim")
    start = max(len(history.data) - tail, 0)

    columns: list[str] = []
    for item in history.data[start:]:
        if isinstance(item, dict):
            columns = list(item.keys())
            break
    for col in columns or ["value"]:
        table.add_column(col, justify="right")

    for i in range(start, len(history.data)):
        item = history.get(i)
        ts = history.bar(i).timestamp.isoformat()
        if columns:
            row = [_fmt(item.get(c)) if isinstance(item, dict) else "-" for c in columns]
        else:
            row = [_fmt(item)]
        table.add_row(ts, *row)
    return table


def _shapes_table(shapes: list[Any], tail: int) -> Table | None:
    if not shapes:
        return None
    if isinstance(shapes[0], ChannelSegment):
        table = Table(title="Regression channel")
        for col in ("Line", "Start", "Start value", "End", "End value"):
            table.add_column(col)
        for seg in shapes:
            table.add_row(
                seg.name, seg.start.isoformat(), _fmt(seg.start_value),
                seg.end.isoformat(), _fmt(seg.end_value),
            )
        return table
    if isinstance(shapes[0], CandleShape):
        table = Table(title="Smoothed candles")
        for col in ("Timestamp", "Open", "High", "Low", "Close", "Color"):
            table.add_column(col)
        for c in shapes[max(len(shapes) - tail, 0):]:
            table.add_row(
                c.x.isoformat(), _fmt(c.open), _fmt(c.high), _fmt(c.low), _fmt(c.close),
                f"[{c.color}]{c.color}[/{c.color}]",
            )
        return table
    return None


def cmd_run(args: argparse.Namespace, console: Console) -> int:
    logger = get_logger()
    overrides = parse_param_overrides(args.param)

    if args.config:
        configs_dir = args.configs_dir or get_config().indicators.configs_dir
        cfg = load_plugin_config(args.config, configs_dir)
        key = cfg.indicator
        params = {**cfg.params, **overrides}
    else:
        key = args.indicator
        params = overrides

    plugin = create_plugin(key, params)
    bars = load_bars_csv(args.csv)
    logger.indicator("RUN_STARTED", key, bars=len(bars), props=plugin.props)

    history = run_plugin(plugin, bars)
    shapes = plugin.plot(history)
    logger.indicator("RUN_FINISHED", key, outputs=sum(1 for o in history if o is not None), shapes=len(shapes))

    if plugin.metadata.plots:
        console.print(_output_table(key, history, args.tail))
    shape_table = _shapes_table(shapes, args.tail)
    if shape_table is not None:
        console.print(shape_table)
    return 0


COMMANDS = {
    "list": cmd_list,
    "configs": cmd_configs,
    "run": cmd_run,
}
