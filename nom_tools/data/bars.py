"""
Bar loading from CSV files and DataFrames.

Expected columns: timestamp, open, high, low, close, volume
Optional column:  trade_date

Timestamps may be ISO strings or epoch milliseconds (integers).
Rows are sorted by timestamp so bars reach indicators in time order.
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from ..indicators.types import Bar

REQUIRED_COLUMNS = ["timestamp", "open", "high", "low", "close", "volume"]


def _parse_timestamps(col: pd.Series) -> pd.Series:
    if pd.api.types.is_integer_dtype(col):
        return pd.to_datetime(col, unit="ms", utc=True)
    return pd.to_datetime(col)


def bars_from_frame(df: pd.DataFrame) -> list[Bar]:
    """
    Convert an OHLCV DataFrame into Bars.

    Raises:
        ValueError: If required columns are missing.
    """
    df = df.rename(columns=str.lower)
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(
            f"Bar data is missing columns: {missing}. "
            f"Required: {REQUIRED_COLUMNS}"
        )

    df = df.copy()
    df["timestamp"] = _parse_timestamps(df["timestamp"])
    df = df.sort_values("timestamp", kind="stable").reset_index(drop=True)
    has_trade_date = "trade_date" in df.columns
    if has_trade_date:
        df["trade_date"] = pd.to_datetime(df["trade_date"]).dt.date

    bars = []
    for row in df.itertuples(index=False):
        bars.append(Bar(
            timestamp=row.timestamp.to_pydatetime(),
            open=float(row.open),
            high=float(row.high),
            low=float(row.low),
            close=float(row.close),
            volume=float(row.volume),
            trade_date=row.trade_date if has_trade_date else None,
        ))
    return bars


def load_bars_csv(path: Path | str) -> list[Bar]:
    """Load Bars from a CSV file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Bar file not found: {path}")
    return bars_from_frame(pd.read_csv(path))
