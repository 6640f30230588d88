from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from database import get_db
from routes.errors import raise_for_result
from schemas import (
    TripCrewWrite,
    TripCrewCreated,
    TripCrewDetail,
    TripCrewSummary,
    TripRead,
    AddMemberWrite,
    RequesterWrite,
    InviteLinkRead,
)
from services import tripcrew_service
from services.trip_service import list_crew_trips

router = APIRouter(prefix="/tripcrews", tags=["TripCrews"])


@router.post("/", response_model=TripCrewCreated, status_code=status.HTTP_201_CREATED)
def create_trip_crew(payload: TripCrewWrite, db: Session = Depends(get_db)):
    """Create a TripCrew; the creator becomes its first member and admin"""
    result = raise_for_result(tripcrew_service.create_trip_crew(
        db, payload.name, payload.traveler_id, payload.description
    ))
    return {
        "trip_crew": result["trip_crew"],
        "join_code": result["join_code"],
        "invite_url": result["invite_url"],
    }


@router.get("/", response_model=List[TripCrewSummary])
def list_trip_crews(traveler_id: int = Query(...), db: Session = Depends(get_db)):
    return tripcrew_service.get_traveler_trip_crews(db, traveler_id)["trip_crews"]


@router.get("/{trip_crew_id}", response_model=TripCrewDetail)
def get_trip_crew(trip_crew_id: int, traveler_id: int = Query(...), db: Session = Depends(get_db)):
    result = raise_for_result(tripcrew_service.get_trip_crew(db, trip_crew_id, traveler_id))
    detail = TripCrewDetail.model_validate(result["trip_crew"])
    detail.trips = [TripRead.model_validate(t) for t in result["trips"]]
    return detail


@router.post("/{trip_crew_id}/members", status_code=status.HTTP_201_CREATED)
def add_member(trip_crew_id: int, payload: AddMemberWrite, db: Session = Depends(get_db)):
    """Add an existing traveler by email (admins only)"""
    result = raise_for_result(tripcrew_service.add_trip_crew_member(
        db, trip_crew_id, payload.traveler_id, payload.email
    ))
    return {"success": True, "traveler_id": result["traveler_id"]}


@router.get("/{trip_crew_id}/invite", response_model=InviteLinkRead)
def get_invite_link(trip_crew_id: int, traveler_id: int = Query(...), db: Session = Depends(get_db)):
    result = raise_for_result(tripcrew_service.get_invite_link(db, trip_crew_id, traveler_id))
    return {k: result[k] for k in ("invite_url", "join_code", "handle")}


@router.post("/{trip_crew_id}/invite", response_model=InviteLinkRead, status_code=status.HTTP_201_CREATED)
def generate_invite_link(trip_crew_id: int, payload: RequesterWrite, db: Session = Depends(get_db)):
    """Mint a new join code (admins only)"""
    result = raise_for_result(tripcrew_service.generate_join_code(db, trip_crew_id, payload.traveler_id))
    return {"invite_url": result["invite_url"], "join_code": result["join_code"]}


@router.post("/{trip_crew_id}/join-codes/{code}/deactivate")
def deactivate_join_code(trip_crew_id: int, code: str, payload: RequesterWrite, db: Session = Depends(get_db)):
    result = raise_for_result(tripcrew_service.deactivate_join_code(db, trip_crew_id, payload.traveler_id, code))
    return {"success": True, "join_code": result["join_code"]}


@router.get("/{trip_crew_id}/trips", response_model=List[TripRead])
def list_trips(trip_crew_id: int, traveler_id: int = Query(...), db: Session = Depends(get_db)):
    if not tripcrew_service.is_member(db, trip_crew_id, traveler_id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=tripcrew_service.NOT_A_MEMBER)
    return list_crew_trips(db, trip_crew_id)
