"""
Shared pytest fixtures.
"""

from datetime import datetime, timedelta

import pytest

from nom_tools.config.config import Config
from nom_tools.indicators.types import Bar


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch, tmp_path):
    """Isolate each test from .env files and cached config."""
    monkeypatch.chdir(tmp_path)
    for var in ("LOG_LEVEL", "LOG_DIR", "NOM_TIMEZONE", "NOM_CONFIGS_DIR"):
        monkeypatch.delenv(var, raising=False)
    Config.reset()
    yield
    Config.reset()


@pytest.fixture
def make_bar():
    """Factory: make_bar(ts, o, h, l, c, v=100.0, trade_date=None)."""
    def _make(ts, o, h, l, c, v=100.0, trade_date=None):
        if isinstance(ts, str):
            ts = datetime.fromisoformat(ts)
        return Bar(timestamp=ts, open=o, high=h, low=l, close=c, volume=v, trade_date=trade_date)
    return _make


@pytest.fixture
def trending_bars(make_bar):
    """60 five-minute bars on one day, close rising 0.5 per bar."""
    start = datetime(2024, 3, 5, 9, 30)
    bars = []
    for i in range(60):
        c = 100.0 + 0.5 * i
        bars.append(make_bar(start + timedelta(minutes=5 * i), c - 0.2, c + 1.0, c - 1.0, c, 100.0 + i))
    return bars


@pytest.fixture
def constant_bars(make_bar):
    """40 identical bars OHLC=(10, 12, 8, 10), volume 100, same trade date."""
    start = datetime(2024, 3, 5, 9, 30)
    return [
        make_bar(start + timedelta(minutes=i), 10.0, 12.0, 8.0, 10.0, 100.0)
        for i in range(40)
    ]
