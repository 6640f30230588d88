"""
TripCrew operations.

Every function returns a result dict instead of raising:
    {"success": True, ...data}
    {"success": False, "error": <message>, "reason": <kind>}

reason is one of: validation, not_found, not_authorized, invalid_invite,
already_member, failed. Routes translate it into an HTTP status.
"""
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from config import BOOTSTRAP_MAX_ATTEMPTS
from models.JoinCode import JoinCode
from models.Traveler import Traveler
from models.Trip import Trip
from models.TripCrew import TripCrew
from models.TripCrewMember import TripCrewMember
from models.TripCrewRole import TripCrewRole, CrewRole
from services.invite_codes import generate_unique_handle, generate_unique_join_code
from services.join_registry import (
    INVALID_INVITE,
    find_trip_crew,
    get_active_join_code,
    invite_url,
    invite_url_for,
    normalize_code,
)
from utils.logger import get_logger

logger = get_logger("services.tripcrew")

ALREADY_MEMBER = "You are already a member of this TripCrew"
NOT_A_MEMBER = "Not a member of this TripCrew"
ADMIN_ONLY = "Only admins can perform this action"
TRAVELER_NOT_FOUND = "Traveler not found"
TRIP_CREW_NOT_FOUND = "TripCrew not found"


def _fail(error: str, reason: str) -> dict:
    return {"success": False, "error": error, "reason": reason}


def is_member(db: Session, trip_crew_id: int, traveler_id: int) -> bool:
    return db.query(TripCrewMember.id).filter(
        TripCrewMember.trip_crew_id == trip_crew_id,
        TripCrewMember.traveler_id == traveler_id,
    ).first() is not None


def is_admin(db: Session, trip_crew_id: int, traveler_id: int) -> bool:
    return db.query(TripCrewRole.id).filter(
        TripCrewRole.trip_crew_id == trip_crew_id,
        TripCrewRole.traveler_id == traveler_id,
        TripCrewRole.role == CrewRole.ADMIN.value,
    ).first() is not None


def _build_join_code(code: str, trip_crew_id: int) -> JoinCode:
    return JoinCode(code=code, trip_crew_id=trip_crew_id, is_active=True)


def _insert_trip_crew(db: Session, name: str, description: str | None, traveler_id: int):
    """Crew, founder membership, founder admin role and join code, in one transaction."""
    handle = generate_unique_handle(db, name)
    code = generate_unique_join_code(db)

    trip_crew = TripCrew(
        name=name,
        description=description,
        handle=handle,
        created_by_traveler_id=traveler_id,
    )
    db.add(trip_crew)
    db.flush()

    db.add(TripCrewMember(trip_crew_id=trip_crew.id, traveler_id=traveler_id))
    db.add(TripCrewRole(trip_crew_id=trip_crew.id, traveler_id=traveler_id, role=CrewRole.ADMIN.value))
    db.flush()

    join_code = _build_join_code(code, trip_crew.id)
    db.add(join_code)
    db.flush()

    db.commit()
    db.refresh(trip_crew)
    db.refresh(join_code)
    return trip_crew, join_code


def create_trip_crew(db: Session, name: str | None, traveler_id: int | None, description: str | None = None) -> dict:
    """
    Create a TripCrew with its founder as member and admin, plus an active
    join code. Either every row is written or none is.
    """
    name = (name or "").strip()
    if not name or not traveler_id:
        return _fail("Name and traveler_id are required", "validation")
    description = (description or "").strip() or None

    try:
        if not db.query(Traveler.id).filter(Traveler.id == traveler_id).first():
            return _fail(TRAVELER_NOT_FOUND, "not_found")

        for attempt in range(1, BOOTSTRAP_MAX_ATTEMPTS + 1):
            try:
                trip_crew, join_code = _insert_trip_crew(db, name, description, traveler_id)
            except IntegrityError:
                # Most likely a concurrent crew grabbed the same handle or code
                db.rollback()
                logger.warning("Create TripCrew uniqueness conflict (attempt %s/%s)",
                               attempt, BOOTSTRAP_MAX_ATTEMPTS)
                continue

            logger.info("TripCrew %s created by traveler %s (handle=%s, code=%s)",
                        trip_crew.id, traveler_id, trip_crew.handle, join_code.code)
            return {
                "success": True,
                "trip_crew": trip_crew,
                "join_code": join_code.code,
                "invite_url": invite_url(trip_crew),
            }
    except Exception:
        db.rollback()
        logger.exception("Create TripCrew error")
        return _fail("Failed to create TripCrew", "failed")

    logger.error("Create TripCrew gave up after %s attempts", BOOTSTRAP_MAX_ATTEMPTS)
    return _fail("Failed to create TripCrew", "failed")


def join_trip_crew(db: Session, code_or_slug: str | None, traveler_id: int | None) -> dict:
    """Add traveler_id to the crew the handle/code resolves to, exactly once."""
    if not (code_or_slug or "").strip() or not traveler_id:
        return _fail("Invite code and traveler_id are required", "validation")

    try:
        if not db.query(Traveler.id).filter(Traveler.id == traveler_id).first():
            return _fail(TRAVELER_NOT_FOUND, "not_found")

        trip_crew = find_trip_crew(db, code_or_slug)
        if trip_crew is None:
            return _fail(INVALID_INVITE, "invalid_invite")

        if is_member(db, trip_crew.id, traveler_id):
            return _fail(ALREADY_MEMBER, "already_member")

        crew_id = trip_crew.id
        db.add(TripCrewMember(trip_crew_id=crew_id, traveler_id=traveler_id))
        db.commit()
    except IntegrityError:
        # Lost the race against a concurrent join; the unique constraint wins
        db.rollback()
        return _fail(ALREADY_MEMBER, "already_member")
    except Exception:
        db.rollback()
        logger.exception("Join TripCrew error")
        return _fail("Failed to join TripCrew", "failed")

    logger.info("Traveler %s joined TripCrew %s", traveler_id, crew_id)
    return {"success": True, "trip_crew_id": crew_id}


def add_trip_crew_member(db: Session, trip_crew_id: int, requester_id: int, email: str | None) -> dict:
    """Admins add an existing traveler by email."""
    email = (email or "").strip()
    if not email:
        return _fail("Email is required", "validation")

    try:
        if not is_admin(db, trip_crew_id, requester_id):
            return _fail("Only admins can add members", "not_authorized")

        new_member = db.query(Traveler).filter(Traveler.email == email).first()
        if not new_member:
            return _fail("Traveler not found with that email", "not_found")

        if is_member(db, trip_crew_id, new_member.id):
            return _fail("Traveler is already a member", "already_member")

        new_member_id = new_member.id
        db.add(TripCrewMember(trip_crew_id=trip_crew_id, traveler_id=new_member_id))
        db.commit()
    except IntegrityError:
        db.rollback()
        return _fail("Traveler is already a member", "already_member")
    except Exception:
        db.rollback()
        logger.exception("Add TripCrew member error")
        return _fail("Failed to add member", "failed")

    return {"success": True, "traveler_id": new_member_id}


def generate_join_code(db: Session, trip_crew_id: int, requester_id: int) -> dict:
    """
    Admins mint a fresh active join code. Older active codes stay usable;
    deactivate them explicitly to revoke.
    """
    try:
        trip_crew = db.query(TripCrew).filter(TripCrew.id == trip_crew_id).first()
        if not trip_crew:
            return _fail(TRIP_CREW_NOT_FOUND, "not_found")
        if not is_admin(db, trip_crew_id, requester_id):
            return _fail("Only admins can generate invite links", "not_authorized")

        for attempt in range(1, BOOTSTRAP_MAX_ATTEMPTS + 1):
            try:
                join_code = _build_join_code(generate_unique_join_code(db), trip_crew_id)
                db.add(join_code)
                db.commit()
            except IntegrityError:
                db.rollback()
                logger.warning("Join code conflict for TripCrew %s (attempt %s)", trip_crew_id, attempt)
                continue

            db.refresh(join_code)
            return {
                "success": True,
                "join_code": join_code.code,
                "invite_url": invite_url(trip_crew) or invite_url_for(join_code.code),
            }
    except Exception:
        db.rollback()
        logger.exception("Generate join code error")
        return _fail("Failed to generate invite link", "failed")

    return _fail("Failed to generate invite link", "failed")


def deactivate_join_code(db: Session, trip_crew_id: int, requester_id: int, code: str | None) -> dict:
    if not (code or "").strip():
        return _fail("Code is required", "validation")

    try:
        if not is_admin(db, trip_crew_id, requester_id):
            return _fail(ADMIN_ONLY, "not_authorized")

        entry = db.query(JoinCode).filter(
            JoinCode.code == normalize_code(code),
            JoinCode.trip_crew_id == trip_crew_id,
        ).first()
        if not entry:
            return _fail("Join code not found", "not_found")

        deactivated = entry.code
        entry.is_active = False
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Deactivate join code error")
        return _fail("Failed to deactivate join code", "failed")

    logger.info("Join code %s deactivated for TripCrew %s", deactivated, trip_crew_id)
    return {"success": True, "join_code": deactivated}


def get_invite_link(db: Session, trip_crew_id: int, traveler_id: int) -> dict:
    try:
        trip_crew = db.query(TripCrew).filter(TripCrew.id == trip_crew_id).first()
        if not trip_crew:
            return _fail(TRIP_CREW_NOT_FOUND, "not_found")
        if not is_member(db, trip_crew_id, traveler_id):
            return _fail(NOT_A_MEMBER, "not_authorized")

        active = get_active_join_code(db, trip_crew_id)
    except Exception:
        db.rollback()
        logger.exception("Get invite link error")
        return _fail("Failed to load invite link", "failed")

    code = active.code if active else None
    url = invite_url(trip_crew)
    if url is None and code:
        url = invite_url_for(code)

    return {"success": True, "invite_url": url, "join_code": code, "handle": trip_crew.handle}


def get_trip_crew(db: Session, trip_crew_id: int, traveler_id: int) -> dict:
    """Full crew, visible to members only."""
    try:
        if not is_member(db, trip_crew_id, traveler_id):
            return _fail(NOT_A_MEMBER, "not_authorized")

        trip_crew = (
            db.query(TripCrew)
            .options(
                joinedload(TripCrew.memberships).joinedload(TripCrewMember.traveler),
                joinedload(TripCrew.roles).joinedload(TripCrewRole.traveler),
            )
            .filter(TripCrew.id == trip_crew_id)
            .first()
        )
        if not trip_crew:
            return _fail(TRIP_CREW_NOT_FOUND, "not_found")

        trips = (
            db.query(Trip)
            .filter(Trip.trip_crew_id == trip_crew_id)
            .order_by(Trip.created_at.desc(), Trip.id.desc())
            .all()
        )
    except Exception:
        db.rollback()
        logger.exception("Get TripCrew error")
        return _fail("Failed to load TripCrew", "failed")

    return {"success": True, "trip_crew": trip_crew, "trips": trips}


def get_traveler_trip_crews(db: Session, traveler_id: int) -> dict:
    try:
        member_counts = (
            db.query(TripCrewMember.trip_crew_id, func.count(TripCrewMember.id).label("n"))
            .group_by(TripCrewMember.trip_crew_id)
            .subquery()
        )
        trip_counts = (
            db.query(Trip.trip_crew_id, func.count(Trip.id).label("n"))
            .group_by(Trip.trip_crew_id)
            .subquery()
        )

        rows = (
            db.query(TripCrew, member_counts.c.n, trip_counts.c.n)
            .join(TripCrewMember, TripCrewMember.trip_crew_id == TripCrew.id)
            .outerjoin(member_counts, member_counts.c.trip_crew_id == TripCrew.id)
            .outerjoin(trip_counts, trip_counts.c.trip_crew_id == TripCrew.id)
            .filter(TripCrewMember.traveler_id == traveler_id)
            .order_by(TripCrewMember.created_at.desc(), TripCrewMember.id.desc())
            .all()
        )
    except Exception:
        db.rollback()
        logger.exception("List TripCrews error")
        return _fail("Failed to load TripCrews", "failed")

    return {
        "success": True,
        "trip_crews": [
            {
                "id": crew.id,
                "name": crew.name,
                "description": crew.description,
                "handle": crew.handle,
                "member_count": members or 0,
                "trip_count": trips or 0,
                "invite_url": invite_url(crew),
            }
            for crew, members, trips in rows
        ],
    }
