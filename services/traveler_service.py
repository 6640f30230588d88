"""
Traveler find-or-create, keyed by Firebase uid.

Travelers are linked to the single enterprise container configured by
ENTERPRISE_ID. A traveler pre-provisioned by email (no firebase_id yet) is
claimed on first sign-in with that email.
"""
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from config import ENTERPRISE_ID, ENTERPRISE_NAME
from models.Enterprise import Enterprise
from models.Traveler import Traveler
from utils.logger import get_logger

logger = get_logger("services.traveler")


def split_display_name(display_name: Optional[str]):
    parts = (display_name or "").split()
    if not parts:
        return None, None
    return parts[0], " ".join(parts[1:]) or None


def ensure_enterprise(db: Session) -> Enterprise:
    enterprise = db.query(Enterprise).filter(Enterprise.id == ENTERPRISE_ID).first()
    if enterprise is None:
        enterprise = Enterprise(
            id=ENTERPRISE_ID,
            name=ENTERPRISE_NAME,
            description=f"Master container for all {ENTERPRISE_NAME} travelers",
        )
        db.add(enterprise)
        db.flush()
    return enterprise


def _apply_firebase_profile(traveler: Traveler, email, display_name, picture):
    first_name, last_name = split_display_name(display_name)
    if email:
        traveler.email = email
    if display_name:
        traveler.first_name = first_name
        traveler.last_name = last_name
    if picture:
        traveler.photo_url = picture


def find_or_create_traveler(
    db: Session,
    firebase_id: Optional[str],
    email: Optional[str] = None,
    display_name: Optional[str] = None,
    picture: Optional[str] = None,
) -> dict:
    if not firebase_id:
        return {"success": False, "error": "firebase_id is required", "reason": "validation"}

    try:
        enterprise = ensure_enterprise(db)

        traveler = db.query(Traveler).filter(Traveler.firebase_id == firebase_id).first()
        created = False
        if traveler is None and email:
            traveler = db.query(Traveler).filter(
                Traveler.email == email,
                Traveler.firebase_id.is_(None),
            ).first()
            if traveler is not None:
                traveler.firebase_id = firebase_id
                logger.info("Claimed pre-provisioned traveler %s for firebase uid", traveler.id)

        if traveler is None:
            traveler = Traveler(firebase_id=firebase_id, enterprise_id=enterprise.id)
            db.add(traveler)
            created = True

        _apply_firebase_profile(traveler, email, display_name, picture)
        if traveler.enterprise_id is None:
            traveler.enterprise_id = enterprise.id

        db.commit()
        db.refresh(traveler)
    except IntegrityError:
        db.rollback()
        logger.warning("Traveler upsert conflict for firebase uid %s", firebase_id)
        return {"success": False, "error": "Email already belongs to another traveler", "reason": "validation"}
    except Exception:
        db.rollback()
        logger.exception("Traveler find-or-create error")
        return {"success": False, "error": "Failed to create or find traveler", "reason": "failed"}

    return {"success": True, "traveler": traveler, "created": created}


def get_traveler(db: Session, traveler_id: int) -> Optional[Traveler]:
    return db.query(Traveler).filter(Traveler.id == traveler_id).first()
