"""Unit tests for the dashboard aggregation functions."""

from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace
from zoneinfo import ZoneInfo

import pytest

from app.utils import reservation_stats as stats

NOW = datetime(2024, 3, 15, 14, 30, tzinfo=timezone.utc)
TODAY = NOW.date()


def res(car_name="Dacia Logan", created_at=NOW, car_category="Economique", source=None, id=None):
    return SimpleNamespace(
        id=id or f"{car_name}-{created_at.isoformat()}",
        carName=car_name,
        carCategory=car_category,
        source=source,
        createdAt=created_at,
    )


class TestEmptyInput:

    @pytest.mark.parametrize("empty", [[], None])
    def test_every_aggregate_has_a_zero_value(self, empty):
        assert stats.total_count(empty) == 0
        assert stats.count_on_day(empty, TODAY) == 0
        assert stats.count_since(empty, NOW - timedelta(days=7)) == 0
        assert stats.most_frequent(empty) is None
        assert stats.top_n(empty) == []
        assert stats.recent(empty) == []
        assert stats.count_by_category(empty) == []
        assert stats.search(empty, "clio") == []

    def test_daily_series_still_has_every_day(self):
        series = stats.daily_series([], 7, TODAY)
        assert len(series) == 7
        assert all(d.count == 0 for d in series)

    def test_dashboard_of_nothing(self):
        data = stats.build_dashboard([], NOW)
        assert data["totals"] == {"total": 0, "today": 0, "thisWeek": 0}
        assert data["mostPopular"] is None
        assert data["topCars"] == []
        assert data["recent"] == []
        assert len(data["dailySeries"]) == 7


class TestCounts:

    def test_total_count_is_length(self):
        xs = [res() for _ in range(4)]
        assert stats.total_count(xs) == len(xs)

    def test_today_week_and_series_scenario(self):
        xs = [
            res(created_at=NOW),
            res(created_at=NOW - timedelta(days=1)),
            res(created_at=NOW - timedelta(days=10)),
        ]
        assert stats.count_on_day(xs, TODAY) == 1
        assert stats.count_since(xs, NOW - timedelta(days=7)) == 2
        assert sum(d.count for d in stats.daily_series(xs, 7, TODAY)) == 2

    def test_count_on_day_uses_calendar_day_not_24h_window(self):
        xs = [
            res(created_at=datetime(2024, 3, 15, 0, 0, tzinfo=timezone.utc)),
            res(created_at=datetime(2024, 3, 14, 23, 59, 59, tzinfo=timezone.utc)),
        ]
        assert stats.count_on_day(xs, date(2024, 3, 15)) == 1
        assert stats.count_on_day(xs, date(2024, 3, 14)) == 1

    def test_count_on_day_respects_reporting_timezone(self):
        # 23:30 UTC on the 14th is already the 15th in Paris (UTC+1 before the March DST switch)
        late = res(created_at=datetime(2024, 3, 14, 23, 30, tzinfo=timezone.utc))
        assert stats.count_on_day([late], date(2024, 3, 14)) == 1
        assert stats.count_on_day([late], date(2024, 3, 15), ZoneInfo("Europe/Paris")) == 1

    def test_count_since_is_strict(self):
        cutoff = NOW - timedelta(days=7)
        assert stats.count_since([res(created_at=cutoff)], cutoff) == 0
        assert stats.count_since([res(created_at=cutoff + timedelta(seconds=1))], cutoff) == 1

    def test_naive_and_iso_timestamps_are_utc(self):
        xs = [
            res(created_at=datetime(2024, 3, 15, 8, 0)),
            {"carName": "Peugeot 208", "createdAt": "2024-03-15T09:00:00Z"},
        ]
        assert stats.count_on_day(xs, TODAY) == 2


class TestRankings:

    def test_most_frequent(self):
        xs = [res("Clio"), res("Duster"), res("Duster")]
        assert stats.most_frequent(xs) == ("Duster", 2)

    def test_ties_go_to_first_encountered_name(self):
        xs = [res("A"), res("B"), res("A"), res("B")]
        assert stats.most_frequent(xs) == ("A", 2)
        assert stats.top_n(xs, 5) == [("A", 2), ("B", 2)]

    def test_grouping_is_case_sensitive(self):
        xs = [res("clio"), res("Clio"), res("Clio")]
        assert stats.top_n(xs) == [("Clio", 2), ("clio", 1)]

    def test_top_n_truncates_in_count_order(self):
        names = ["A", "B", "B", "C", "C", "C", "D", "E", "F", "G"]
        top = stats.top_n([res(n) for n in names], 5)
        assert [t.name for t in top] == ["C", "B", "A", "D", "E"]
        assert stats.top_n([res("A")], 0) == []

    def test_categories_default_to_uncategorized(self):
        xs = [res(car_category="SUV"), res(car_category=None), res(car_category="")]
        assert stats.count_by_category(xs) == [("SUV", 1), (stats.UNCATEGORIZED, 2)]


class TestDailySeries:

    def test_window_is_closed_and_ascending(self):
        xs = [res(created_at=NOW - timedelta(days=6)), res(created_at=NOW - timedelta(days=7))]
        series = stats.daily_series(xs, 7, TODAY)
        dates = [d.date for d in series]
        assert dates[0] == TODAY - timedelta(days=6)
        assert dates[-1] == TODAY
        assert dates == sorted(set(dates))
        assert series[0].count == 1
        assert sum(d.count for d in series) == 1

    def test_sum_equals_total_when_all_inside_window(self):
        xs = [res(created_at=NOW - timedelta(days=i)) for i in (0, 0, 2, 5)]
        series = stats.daily_series(xs, 7, TODAY)
        assert sum(d.count for d in series) == stats.total_count(xs)

    def test_labels(self):
        series = stats.daily_series([], 2, date(2024, 3, 15))
        assert [d.label for d in series] == ["Thu 14", "Fri 15"]

    def test_reference_day_may_be_an_instant(self):
        series = stats.daily_series([res()], 1, NOW)
        assert series == [stats.DailyCount("Fri 15", TODAY, 1)]

    def test_non_positive_days(self):
        assert stats.daily_series([res()], 0, TODAY) == []


class TestSelection:

    def test_recent_keeps_caller_order(self):
        xs = [res("Old", NOW - timedelta(days=3)), res("New", NOW)]
        assert [r.carName for r in stats.recent(xs, 5)] == ["Old", "New"]
        assert len(stats.recent([res()] * 8, 5)) == 5

    def test_recent_row_without_category(self):
        rows = [stats.display_row(r) for r in stats.recent([res(car_category=None)])]
        assert rows[0]["carCategory"] == stats.UNCATEGORIZED
        assert rows[0]["source"] == stats.DEFAULT_SOURCE

    def test_search_matches_name_or_category(self):
        xs = [res("Renault Clio", car_category="Economique"), res("Dacia Duster", car_category="SUV"),
              res("Peugeot 208", car_category=None)]
        assert [r.carName for r in stats.search(xs, "clio")] == ["Renault Clio"]
        assert [r.carName for r in stats.search(xs, "suv")] == ["Dacia Duster"]
        assert len(stats.search(xs, "  ")) == 3

    def test_created_between_is_inclusive(self):
        xs = [res(created_at=NOW - timedelta(days=i)) for i in range(5)]
        picked = stats.created_between(xs, TODAY - timedelta(days=3), TODAY - timedelta(days=1))
        assert len(picked) == 3
        assert len(stats.created_between(xs, end=TODAY - timedelta(days=4))) == 1

    def test_display_row_splits_date_and_time(self):
        row = stats.display_row(res(source="Site web"), ZoneInfo("Europe/Paris"))
        assert row["date"] == "2024-03-15"
        assert row["time"] == "15:30"
        assert row["source"] == "Site web"


class TestBuildDashboard:

    def test_payload(self):
        xs = [
            res("Dacia Duster", NOW, "SUV"),
            res("Renault Clio", NOW - timedelta(hours=30), None),
            res("Dacia Duster", NOW - timedelta(days=9), "SUV"),
        ]
        data = stats.build_dashboard(xs, NOW, days=7, top=5)

        assert data["today"] == "2024-03-15"
        assert data["timezone"] == "UTC"
        assert data["totals"] == {"total": 3, "today": 1, "thisWeek": 2}
        assert data["mostPopular"] == {"carName": "Dacia Duster", "count": 2}
        assert data["topCars"][0] == {"carName": "Dacia Duster", "count": 2}
        assert {"category": stats.UNCATEGORIZED, "count": 1} in data["byCategory"]
        assert data["dailySeries"][-1] == {"label": "Fri 15", "date": "2024-03-15", "count": 1}
        assert [r["carName"] for r in data["recent"]] == ["Dacia Duster", "Renault Clio", "Dacia Duster"]

    def test_input_is_not_mutated(self):
        xs = [res("B"), res("A")]
        snapshot = list(xs)
        stats.build_dashboard(xs, NOW)
        assert xs == snapshot

    def test_resolve_timezone(self):
        assert stats.resolve_timezone("UTC") is timezone.utc
        assert stats.resolve_timezone(None) is timezone.utc
        assert stats.resolve_timezone("Europe/Paris") == ZoneInfo("Europe/Paris")
