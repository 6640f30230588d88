"""
Join registry: resolves a handle or invite code typed/clicked by a user to
a TripCrew, and builds invite URLs.

Old crews only carry the denormalized TripCrew.join_code. The first time
such a code is looked up it is registered in join_codes, so links issued
before the registry existed keep working.
"""
from datetime import datetime, timezone
from typing import Optional
from urllib.parse import quote, urlencode

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from config import APP_BASE_URL
from models.JoinCode import JoinCode
from models.Traveler import Traveler
from models.Trip import Trip
from models.TripCrew import TripCrew
from models.TripCrewMember import TripCrewMember
from models.TripCrewRole import TripCrewRole, CrewRole
from services.invite_codes import looks_like_handle
from utils.logger import get_logger

logger = get_logger("services.join_registry")

# "never existed", "inactive" and "expired" all look the same to callers
INVALID_INVITE = "Invalid or expired invite code"


def normalize_code(value: str) -> str:
    return value.strip().upper()


def _register_legacy_code(db: Session, crew: TripCrew, code: str) -> JoinCode:
    entry = JoinCode(code=code, trip_crew_id=crew.id, is_active=True)
    db.add(entry)
    try:
        db.commit()
    except IntegrityError:
        # Registered concurrently by another request
        db.rollback()
        return db.query(JoinCode).filter(JoinCode.code == code).one()
    db.refresh(entry)
    logger.info("Registered legacy join code %s for trip crew %s", code, crew.id)
    return entry


def find_trip_crew(db: Session, code_or_slug: Optional[str]) -> Optional[TripCrew]:
    """Resolve a handle or join code to its TripCrew, or None."""
    value = (code_or_slug or "").strip()
    if not value:
        return None

    if looks_like_handle(value):
        crew = db.query(TripCrew).filter(TripCrew.handle == value).first()
        if crew:
            return crew

    code = normalize_code(value)
    entry = db.query(JoinCode).filter(JoinCode.code == code).first()
    if entry is None:
        # Legacy values were stored in whatever case they were typed
        legacy_crew = (
            db.query(TripCrew)
            .filter(func.upper(TripCrew.join_code) == code)
            .order_by(TripCrew.id.asc())
            .first()
        )
        if legacy_crew is None:
            return None
        entry = _register_legacy_code(db, legacy_crew, code)

    if not entry.is_valid():
        return None
    return entry.trip_crew


def build_trip_crew_preview(db: Session, crew: TripCrew) -> dict:
    """Public card data for the invite landing page (no auth required)."""
    member_count = db.query(func.count(TripCrewMember.id)).filter(
        TripCrewMember.trip_crew_id == crew.id
    ).scalar()
    trip_count = db.query(func.count(Trip.id)).filter(Trip.trip_crew_id == crew.id).scalar()

    admin_role = (
        db.query(TripCrewRole)
        .filter(TripCrewRole.trip_crew_id == crew.id, TripCrewRole.role == CrewRole.ADMIN.value)
        .order_by(TripCrewRole.created_at.asc(), TripCrewRole.id.asc())
        .first()
    )
    admin = None
    if admin_role:
        traveler = db.query(Traveler).filter(Traveler.id == admin_role.traveler_id).first()
        if traveler:
            admin = {
                "first_name": traveler.first_name,
                "last_name": traveler.last_name,
                "photo_url": traveler.photo_url,
            }

    return {
        "id": crew.id,
        "name": crew.name,
        "description": crew.description,
        "handle": crew.handle,
        "member_count": member_count,
        "trip_count": trip_count,
        "admin": admin,
    }


def lookup_trip_crew_by_code(db: Session, code_or_slug: Optional[str]) -> dict:
    crew = find_trip_crew(db, code_or_slug)
    if crew is None:
        return {"success": False, "error": INVALID_INVITE, "reason": "invalid_invite"}
    return {"success": True, "trip_crew": build_trip_crew_preview(db, crew)}


def get_active_join_code(db: Session, trip_crew_id: int) -> Optional[JoinCode]:
    """Most recently created code for the crew that is still active and unexpired."""
    entries = (
        db.query(JoinCode)
        .filter(JoinCode.trip_crew_id == trip_crew_id, JoinCode.is_active.is_(True))
        .order_by(JoinCode.created_at.desc(), JoinCode.id.desc())
        .all()
    )
    now = datetime.now(timezone.utc)
    for entry in entries:
        if entry.is_valid(now):
            return entry
    return None


def invite_path_segment(crew: TripCrew) -> Optional[str]:
    if crew.handle:
        return crew.handle
    if crew.join_code:
        return crew.join_code.upper()
    return None


def invite_url(crew: TripCrew, base_url: str = APP_BASE_URL) -> Optional[str]:
    """https://<base>/join/<handle>, or /join/<CODE> for crews without a handle."""
    segment = invite_path_segment(crew)
    if segment is None:
        return None
    return f"{base_url}/join/{quote(segment, safe='')}"


def invite_url_for(slug_or_code: str, base_url: str = APP_BASE_URL) -> str:
    value = slug_or_code.strip()
    segment = value if looks_like_handle(value) else value.upper()
    return f"{base_url}/join/{quote(segment, safe='')}"


def legacy_invite_url(code: str, base_url: str = APP_BASE_URL) -> str:
    return f"{base_url}/join?{urlencode({'code': normalize_code(code)})}"


def backfill_legacy_join_codes(db: Session) -> int:
    """
    Register every legacy TripCrew.join_code missing from the registry.

    Legacy codes that differ only by case map to the same registry code;
    the oldest crew keeps it and the rest are skipped.
    """
    crews = (
        db.query(TripCrew)
        .outerjoin(JoinCode, JoinCode.code == func.upper(TripCrew.join_code))
        .filter(TripCrew.join_code.isnot(None), JoinCode.id.is_(None))
        .order_by(TripCrew.id.asc())
        .all()
    )
    registered = set()
    for crew in crews:
        code = normalize_code(crew.join_code)
        if not code or code in registered:
            logger.warning("Skipping legacy join code %r of trip crew %s (duplicate after normalizing)",
                           crew.join_code, crew.id)
            continue
        registered.add(code)
        db.add(JoinCode(code=code, trip_crew_id=crew.id, is_active=True))
    db.commit()
    logger.info("Backfilled %s legacy join code(s)", len(registered))
    return len(registered)
