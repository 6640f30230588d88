"""
Derived trip fields (season, day count, human date range) computed from a
trip's start/end dates.
"""
from datetime import date
from typing import Dict, Union


def _season_for_month(month: int) -> str:
    if 3 <= month <= 5:
        return "Spring"
    if 6 <= month <= 8:
        return "Summer"
    if 9 <= month <= 11:
        return "Fall"
    return "Winter"


def format_date_range(start_date: date, end_date: date) -> str:
    """
    Format a date range compactly:
        same month:      "Mar 3–7"
        same year:       "Mar 30 – Apr 2"
        different years: "Dec 30, 2025 – Jan 2, 2026"
    """
    start_month = f"{start_date:%b}"
    end_month = f"{end_date:%b}"

    if start_date.year != end_date.year:
        return (
            f"{start_month} {start_date.day}, {start_date.year} – "
            f"{end_month} {end_date.day}, {end_date.year}"
        )
    if start_month != end_month:
        return f"{start_month} {start_date.day} – {end_month} {end_date.day}"
    return f"{start_month} {start_date.day}–{end_date.day}"


def compute_trip_metadata(start_date: date, end_date: date) -> Dict[str, Union[int, str]]:
    """
    Returns {"days_total", "date_range", "season"}.

    Raises ValueError when end_date falls before start_date.
    """
    if end_date < start_date:
        raise ValueError("end_date must be on or after start_date")

    return {
        "days_total": (end_date - start_date).days + 1,
        "date_range": format_date_range(start_date, end_date),
        "season": _season_for_month(start_date.month),
    }
