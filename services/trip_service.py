from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from models.Trip import Trip
from services.tripcrew_service import is_member, NOT_A_MEMBER
from utils.logger import get_logger
from utils.trip_metadata import compute_trip_metadata

logger = get_logger("services.trip")

TRIP_FIELDS = (
    "name", "destination", "purpose", "trip_type", "budget_level",
    "notes", "cover_image", "start_date", "end_date",
)
REQUIRED_FIELDS = ("name", "start_date", "end_date")


def _fail(error: str, reason: str) -> dict:
    return {"success": False, "error": error, "reason": reason}


def _apply_metadata(trip: Trip, start_date: date, end_date: date):
    metadata = compute_trip_metadata(start_date, end_date)
    trip.days_total = metadata["days_total"]
    trip.date_range = metadata["date_range"]
    trip.season = metadata["season"]


def _clean_name(value) -> str:
    return (value or "").strip()


def create_trip(db: Session, trip_crew_id: int, traveler_id: int, data: dict) -> dict:
    values = {k: data.get(k) for k in TRIP_FIELDS}
    values["name"] = _clean_name(values["name"])
    if not values["name"]:
        return _fail("Trip name is required", "validation")
    for field in ("start_date", "end_date"):
        if values[field] is None:
            return _fail(f"{field} is required", "validation")

    trip = Trip(trip_crew_id=trip_crew_id, **values)
    try:
        _apply_metadata(trip, values["start_date"], values["end_date"])
    except ValueError as e:
        return _fail(str(e), "validation")

    try:
        if not is_member(db, trip_crew_id, traveler_id):
            return _fail(NOT_A_MEMBER, "not_authorized")

        db.add(trip)
        db.commit()
        db.refresh(trip)
    except Exception:
        db.rollback()
        logger.exception("Create trip error")
        return _fail("Failed to create trip", "failed")

    return {"success": True, "trip": trip}


def get_trip(db: Session, trip_id: int) -> Optional[Trip]:
    return db.query(Trip).filter(Trip.id == trip_id).first()


def list_crew_trips(db: Session, trip_crew_id: int):
    return (
        db.query(Trip)
        .filter(Trip.trip_crew_id == trip_crew_id)
        .order_by(Trip.created_at.desc(), Trip.id.desc())
        .all()
    )


def update_trip(db: Session, trip_id: int, traveler_id: int, changes: dict) -> dict:
    changes = {k: v for k, v in changes.items() if k in TRIP_FIELDS}
    if changes.get("name") is not None:
        changes["name"] = _clean_name(changes["name"])
        if not changes["name"]:
            return _fail("Trip name is required", "validation")

    try:
        trip = get_trip(db, trip_id)
        if not trip:
            return _fail("Trip not found", "not_found")
        if not is_member(db, trip.trip_crew_id, traveler_id):
            return _fail(NOT_A_MEMBER, "not_authorized")

        for key, value in changes.items():
            if value is None and key in REQUIRED_FIELDS:
                continue
            setattr(trip, key, value)

        try:
            _apply_metadata(trip, trip.start_date, trip.end_date)
        except ValueError as e:
            db.rollback()
            return _fail(str(e), "validation")

        db.commit()
        db.refresh(trip)
    except Exception:
        db.rollback()
        logger.exception("Update trip error")
        return _fail("Failed to update trip", "failed")

    return {"success": True, "trip": trip}


def delete_trip(db: Session, trip_id: int, traveler_id: int) -> dict:
    try:
        trip = get_trip(db, trip_id)
        if not trip:
            return _fail("Trip not found", "not_found")
        if not is_member(db, trip.trip_crew_id, traveler_id):
            return _fail(NOT_A_MEMBER, "not_authorized")

        db.delete(trip)
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Delete trip error")
        return _fail("Failed to delete trip", "failed")

    return {"success": True}
