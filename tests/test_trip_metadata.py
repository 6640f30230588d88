from datetime import date

import pytest

from utils.trip_metadata import compute_trip_metadata, format_date_range


def test_same_month():
    meta = compute_trip_metadata(date(2025, 3, 3), date(2025, 3, 7))
    assert meta == {"days_total": 5, "date_range": "Mar 3–7", "season": "Spring"}


def test_across_months():
    meta = compute_trip_metadata(date(2025, 6, 30), date(2025, 7, 2))
    assert meta["days_total"] == 3
    assert meta["date_range"] == "Jun 30 – Jul 2"
    assert meta["season"] == "Summer"


def test_across_years():
    meta = compute_trip_metadata(date(2025, 12, 30), date(2026, 1, 2))
    assert meta["days_total"] == 4
    assert meta["date_range"] == "Dec 30, 2025 – Jan 2, 2026"
    assert meta["season"] == "Winter"


def test_single_day_trip():
    meta = compute_trip_metadata(date(2025, 10, 4), date(2025, 10, 4))
    assert meta["days_total"] == 1
    assert meta["date_range"] == "Oct 4–4"
    assert meta["season"] == "Fall"


@pytest.mark.parametrize(
    "month,season",
    [(1, "Winter"), (2, "Winter"), (3, "Spring"), (5, "Spring"), (6, "Summer"),
     (8, "Summer"), (9, "Fall"), (11, "Fall"), (12, "Winter")],
)
def test_season_by_start_month(month, season):
    start = date(2025, month, 1)
    assert compute_trip_metadata(start, start)["season"] == season


def test_end_before_start_is_rejected():
    with pytest.raises(ValueError):
        compute_trip_metadata(date(2025, 5, 10), date(2025, 5, 9))


def test_format_date_range_is_exported():
    assert format_date_range(date(2025, 4, 1), date(2025, 4, 3)) == "Apr 1–3"
