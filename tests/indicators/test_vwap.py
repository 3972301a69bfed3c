"""
Tests for session VWAP with standard-deviation bands.

Validates that:
1. Accumulation matches sum(tp * v) / sum(v) with population std-dev bands
2. Each timeframe restarts the sums on the right bar
3. Disabled bands and empty volume produce no band values
"""

import math
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from nom_tools.indicators.incremental import IncrementalVWAPBands
from nom_tools.indicators.types import VWAPTimeframe
from nom_tools.utils.datetime_utils import iso_week_number


def _feed(vwap, bars):
    return [vwap.update(b) for b in bars]


class TestAccumulation:
    def test_constant_bars(self, constant_bars):
        """40 bars of OHLC (10, 12, 8, 10): vwap 10, std 0, bands collapse."""
        vwap = IncrementalVWAPBands(timeframe="daily", band1_std_dev=1.0, band2_std_dev=2.0)
        out = _feed(vwap, constant_bars)[-1]
        assert out.vwap == pytest.approx(10.0)
        assert out.std_dev == pytest.approx(0.0)
        assert out.upper_band1 == pytest.approx(10.0)
        assert out.lower_band2 == pytest.approx(10.0)
        assert out.total_volume == pytest.approx(4000.0)

    def test_weighted_by_volume(self, make_bar):
        vwap = IncrementalVWAPBands(band1_std_dev=1.0, band2_std_dev=2.0)
        vwap.update(make_bar("2024-03-05T09:30:00", 10.0, 10.0, 10.0, 10.0, 100.0))
        out = vwap.update(make_bar("2024-03-05T09:31:00", 20.0, 20.0, 20.0, 20.0, 300.0))
        # (10*100 + 20*300) / 400
        assert out.vwap == pytest.approx(17.5)
        # E[tp^2] - vwap^2 = (100*100 + 400*300) / 400 - 306.25
        expected_std = math.sqrt(325.0 - 306.25)
        assert out.std_dev == pytest.approx(expected_std)
        assert out.upper_band1 == pytest.approx(17.5 + expected_std)
        assert out.lower_band1 == pytest.approx(17.5 - expected_std)
        assert out.upper_band2 == pytest.approx(17.5 + 2 * expected_std)
        assert out.lower_band2 == pytest.approx(17.5 - 2 * expected_std)

    def test_band_ordering(self, trending_bars):
        vwap = IncrementalVWAPBands()
        for out in _feed(vwap, trending_bars):
            assert out.lower_band2 <= out.lower_band1 <= out.vwap <= out.upper_band1 <= out.upper_band2

    def test_disabled_bands_are_none(self, trending_bars):
        vwap = IncrementalVWAPBands(band1_enabled=False, band2_enabled=True)
        out = _feed(vwap, trending_bars)[-1]
        assert out.upper_band1 is None
        assert out.lower_band1 is None
        assert out.upper_band2 is not None
        assert out.to_dict()["upperBand1"] is None

    def test_zero_volume_is_not_ready(self, make_bar):
        vwap = IncrementalVWAPBands()
        out = vwap.update(make_bar("2024-03-05T09:30:00", 10.0, 12.0, 8.0, 10.0, 0.0))
        assert math.isnan(out.vwap)
        assert out.upper_band1 is None
        assert vwap.is_ready is False

    def test_nan_bar_skipped(self, make_bar):
        vwap = IncrementalVWAPBands()
        vwap.update(make_bar("2024-03-05T09:30:00", 10.0, 12.0, 8.0, 10.0, 100.0))
        out = vwap.update(make_bar("2024-03-05T09:31:00", 10.0, float("nan"), 8.0, 10.0, 100.0))
        assert out.vwap == pytest.approx(10.0)
        assert vwap.total_volume == pytest.approx(100.0)


class TestDailyReset:
    def test_new_trade_date_restarts(self, make_bar):
        vwap = IncrementalVWAPBands(timeframe=VWAPTimeframe.DAILY)
        vwap.update(make_bar("2024-03-05T15:00:00", 50.0, 50.0, 50.0, 50.0, 100.0))
        vwap.update(make_bar("2024-03-05T15:01:00", 60.0, 60.0, 60.0, 60.0, 100.0))
        out = vwap.update(make_bar("2024-03-06T09:30:00", 20.0, 20.0, 20.0, 20.0, 100.0))
        assert out.vwap == pytest.approx(20.0)
        assert vwap.total_volume == pytest.approx(100.0)

    def test_trade_date_overrides_calendar_day(self, make_bar):
        """An evening session bar carrying the next trade date starts the new session."""
        vwap = IncrementalVWAPBands(timeframe="daily")
        vwap.update(make_bar("2024-03-05T15:00:00", 50.0, 50.0, 50.0, 50.0, 100.0, date(2024, 3, 5)))
        vwap.update(make_bar("2024-03-05T17:00:00", 20.0, 20.0, 20.0, 20.0, 100.0, date(2024, 3, 6)))
        out = vwap.update(make_bar("2024-03-06T01:00:00", 30.0, 30.0, 30.0, 30.0, 100.0, date(2024, 3, 6)))
        assert out.vwap == pytest.approx(25.0)


class TestWeeklyReset:
    def test_wrap_to_earlier_weekday_restarts(self, make_bar):
        """Friday 2026-03-06 then Monday 2026-03-09."""
        vwap = IncrementalVWAPBands(timeframe="weekly")
        vwap.update(make_bar("2026-03-05T10:00:00", 40.0, 40.0, 40.0, 40.0, 100.0))
        vwap.update(make_bar("2026-03-06T10:00:00", 40.0, 40.0, 40.0, 40.0, 100.0))
        out = vwap.update(make_bar("2026-03-09T10:00:00", 10.0, 10.0, 10.0, 10.0, 100.0))
        assert out.vwap == pytest.approx(10.0)

    def test_same_week_accumulates(self, make_bar):
        vwap = IncrementalVWAPBands(timeframe="weekly")
        vwap.update(make_bar("2026-03-09T10:00:00", 10.0, 10.0, 10.0, 10.0, 100.0))
        out = vwap.update(make_bar("2026-03-10T10:00:00", 20.0, 20.0, 20.0, 20.0, 100.0))
        assert out.vwap == pytest.approx(15.0)

    def test_sunday_evening_session_starts_week(self, make_bar):
        """Sunday counts as day 0, so Friday -> Sunday is a wrap."""
        vwap = IncrementalVWAPBands(timeframe="weekly")
        vwap.update(make_bar("2026-03-06T10:00:00", 40.0, 40.0, 40.0, 40.0, 100.0))
        vwap.update(make_bar("2026-03-08T18:00:00", 10.0, 10.0, 10.0, 10.0, 100.0))
        out = vwap.update(make_bar("2026-03-09T10:00:00", 20.0, 20.0, 20.0, 20.0, 100.0))
        assert out.vwap == pytest.approx(15.0)


class TestTwoWeeksReset:
    def test_only_even_weeks_restart(self, make_bar):
        assert iso_week_number(date(2026, 3, 9)) == 11
        assert iso_week_number(date(2026, 3, 16)) == 12

        vwap = IncrementalVWAPBands(timeframe="twoWeeks")
        vwap.update(make_bar("2026-03-06T10:00:00", 40.0, 40.0, 40.0, 40.0, 100.0))
        # Odd week: keeps accumulating
        out = vwap.update(make_bar("2026-03-09T10:00:00", 20.0, 20.0, 20.0, 20.0, 100.0))
        assert out.vwap == pytest.approx(30.0)
        vwap.update(make_bar("2026-03-13T10:00:00", 30.0, 30.0, 30.0, 30.0, 100.0))
        # Even week: restarts
        out = vwap.update(make_bar("2026-03-16T10:00:00", 12.0, 12.0, 12.0, 12.0, 100.0))
        assert out.vwap == pytest.approx(12.0)


class TestMonthlyReset:
    def test_restarts_on_last_day_of_month(self, make_bar):
        """March 2026 ends on a Tuesday."""
        vwap = IncrementalVWAPBands(timeframe="monthly")
        vwap.update(make_bar("2026-03-27T10:00:00", 40.0, 40.0, 40.0, 40.0, 100.0))
        vwap.update(make_bar("2026-03-30T10:00:00", 40.0, 40.0, 40.0, 40.0, 100.0))
        out = vwap.update(make_bar("2026-03-31T10:00:00", 10.0, 10.0, 10.0, 10.0, 100.0))
        assert out.vwap == pytest.approx(10.0)
        assert vwap.total_volume == pytest.approx(100.0)
        # Same trade date again: no second restart
        out = vwap.update(make_bar("2026-03-31T11:00:00", 20.0, 20.0, 20.0, 20.0, 100.0))
        assert out.vwap == pytest.approx(15.0)
        # Into April: keeps accumulating
        out = vwap.update(make_bar("2026-04-01T10:00:00", 30.0, 30.0, 30.0, 30.0, 100.0))
        assert out.vwap == pytest.approx(20.0)

    def test_weekend_month_end_restarts_with_new_month(self, make_bar):
        """January 2026 ends on a Saturday, so the restart waits for Monday 2026-02-02."""
        vwap = IncrementalVWAPBands(timeframe="monthly")
        vwap.update(make_bar("2026-01-29T10:00:00", 40.0, 40.0, 40.0, 40.0, 100.0))
        out = vwap.update(make_bar("2026-01-30T10:00:00", 20.0, 20.0, 20.0, 20.0, 100.0))
        assert out.vwap == pytest.approx(30.0)
        out = vwap.update(make_bar("2026-02-02T10:00:00", 10.0, 10.0, 10.0, 10.0, 100.0))
        assert out.vwap == pytest.approx(10.0)
        assert vwap.total_volume == pytest.approx(100.0)
        out = vwap.update(make_bar("2026-02-03T10:00:00", 20.0, 20.0, 20.0, 20.0, 100.0))
        assert out.vwap == pytest.approx(15.0)

    def test_sunday_month_end_restarts_with_new_month(self, make_bar):
        """May 2026 ends on a Sunday, so the restart waits for Monday 2026-06-01."""
        vwap = IncrementalVWAPBands(timeframe="monthly")
        vwap.update(make_bar("2026-05-28T10:00:00", 40.0, 40.0, 40.0, 40.0, 100.0))
        out = vwap.update(make_bar("2026-05-29T10:00:00", 20.0, 20.0, 20.0, 20.0, 300.0))
        assert out.vwap == pytest.approx(25.0)
        assert vwap.total_volume == pytest.approx(400.0)
        out = vwap.update(make_bar("2026-06-01T10:00:00", 10.0, 10.0, 10.0, 10.0, 250.0))
        assert out.vwap == pytest.approx(10.0)
        assert vwap.total_volume == pytest.approx(250.0)
        out = vwap.update(make_bar("2026-06-02T10:00:00", 20.0, 20.0, 20.0, 20.0, 250.0))
        assert out.vwap == pytest.approx(15.0)
        assert vwap.total_volume == pytest.approx(500.0)


class TestTimezone:
    """Calendar fields and default trade dates are read in the configured zone."""

    def _run(self, make_bar, tz):
        """03:00 UTC on Sunday 2026-03-08 is Saturday evening in Chicago."""
        utc = timezone.utc
        vwap = IncrementalVWAPBands(timeframe="weekly", tz=tz)
        vwap.update(make_bar(datetime(2026, 3, 6, 15, 0, tzinfo=utc), 40.0, 40.0, 40.0, 40.0, 100.0))
        return vwap.update(make_bar(datetime(2026, 3, 8, 3, 0, tzinfo=utc), 10.0, 10.0, 10.0, 10.0, 100.0))

    def test_calendar_read_in_configured_zone(self, make_bar):
        """Friday -> Saturday in Chicago: same week."""
        out = self._run(make_bar, ZoneInfo("America/Chicago"))
        assert out.vwap == pytest.approx(25.0)

    def test_without_zone_timestamp_is_used_as_given(self, make_bar):
        """Friday -> Sunday in UTC: week restarts."""
        out = self._run(make_bar, None)
        assert out.vwap == pytest.approx(10.0)

    def _run_daily(self, make_bar, tz):
        """17:00 and 19:00 Chicago time on 2026-03-05, either side of UTC midnight."""
        utc = timezone.utc
        vwap = IncrementalVWAPBands(timeframe="daily", tz=tz)
        vwap.update(make_bar(datetime(2026, 3, 5, 23, 0, tzinfo=utc), 40.0, 40.0, 40.0, 40.0, 100.0))
        out = vwap.update(make_bar(datetime(2026, 3, 6, 1, 0, tzinfo=utc), 10.0, 10.0, 10.0, 10.0, 100.0))
        return vwap, out

    def test_daily_session_follows_local_date(self, make_bar):
        """Both bars fall on the same Chicago day: no restart at UTC midnight."""
        vwap, out = self._run_daily(make_bar, ZoneInfo("America/Chicago"))
        assert out.vwap == pytest.approx(25.0)
        assert vwap.total_volume == pytest.approx(200.0)

    def test_daily_without_zone_uses_utc_date(self, make_bar):
        vwap, out = self._run_daily(make_bar, None)
        assert out.vwap == pytest.approx(10.0)
        assert vwap.total_volume == pytest.approx(100.0)

    def test_supplied_trade_date_wins_over_zone(self, make_bar):
        """An explicit trade date is used as given, whatever the zone."""
        utc = timezone.utc
        vwap = IncrementalVWAPBands(timeframe="daily", tz=ZoneInfo("America/Chicago"))
        vwap.update(make_bar(datetime(2026, 3, 5, 23, 0, tzinfo=utc), 40.0, 40.0, 40.0, 40.0, 100.0, date(2026, 3, 5)))
        out = vwap.update(make_bar(datetime(2026, 3, 6, 1, 0, tzinfo=utc), 10.0, 10.0, 10.0, 10.0, 100.0, date(2026, 3, 6)))
        assert out.vwap == pytest.approx(10.0)


class TestReset:
    def test_reset_clears_sums(self, trending_bars):
        vwap = IncrementalVWAPBands()
        _feed(vwap, trending_bars)
        vwap.reset()
        assert vwap.is_ready is False
        assert vwap.total_volume == 0.0
        assert math.isnan(vwap.value)

    def test_unknown_timeframe(self):
        with pytest.raises(ValueError, match="Unknown VWAPTimeframe"):
            IncrementalVWAPBands(timeframe="quarterly")
