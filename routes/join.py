from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from database import get_db
from routes.errors import raise_for_result
from schemas import TripCrewPreview, JoinWrite, JoinRead
from services.join_registry import lookup_trip_crew_by_code
from services.tripcrew_service import join_trip_crew

router = APIRouter(prefix="/join", tags=["Join"])


@router.get("", response_model=TripCrewPreview)
def preview_by_query(code: Optional[str] = Query(None), db: Session = Depends(get_db)):
    """Legacy invite links: /join?code=ABC123"""
    if not code or not code.strip():
        raise HTTPException(status_code=400, detail="Please provide an invite code")
    return raise_for_result(lookup_trip_crew_by_code(db, code))["trip_crew"]


@router.get("/{slug_or_code}", response_model=TripCrewPreview)
def preview_by_slug(slug_or_code: str, db: Session = Depends(get_db)):
    """Invite landing preview for /join/<handle> or /join/<CODE>; no sign-in required"""
    return raise_for_result(lookup_trip_crew_by_code(db, slug_or_code))["trip_crew"]


@router.post("", response_model=JoinRead)
def join(payload: JoinWrite, db: Session = Depends(get_db)):
    result = raise_for_result(join_trip_crew(db, payload.code, payload.traveler_id))
    return {"trip_crew_id": result["trip_crew_id"]}
