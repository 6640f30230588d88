from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from database import get_db
from routes.errors import raise_for_result
from schemas import TripWrite, TripRead, TripUpdate
from services import trip_service
from services.tripcrew_service import is_member, NOT_A_MEMBER

router = APIRouter(prefix="/trips", tags=["Trips"])


@router.post("/", response_model=TripRead, status_code=status.HTTP_201_CREATED)
def create_trip(payload: TripWrite, db: Session = Depends(get_db)):
    """Create a trip in a TripCrew (members only); season/day count/date range are computed"""
    data = payload.model_dump(exclude={"trip_crew_id", "traveler_id"})
    result = raise_for_result(trip_service.create_trip(db, payload.trip_crew_id, payload.traveler_id, data))
    return result["trip"]


@router.get("/{trip_id}", response_model=TripRead)
def get_trip(trip_id: int, traveler_id: int = Query(...), db: Session = Depends(get_db)):
    t = trip_service.get_trip(db, trip_id)
    if not t:
        raise HTTPException(status_code=404, detail="Trip not found")
    if not is_member(db, t.trip_crew_id, traveler_id):
        raise HTTPException(status_code=403, detail=NOT_A_MEMBER)
    return t


@router.put("/{trip_id}", response_model=TripRead)
def update_trip(trip_id: int, payload: TripUpdate, db: Session = Depends(get_db)):
    changes = payload.model_dump(exclude_unset=True, exclude={"traveler_id"})
    result = raise_for_result(trip_service.update_trip(db, trip_id, payload.traveler_id, changes))
    return result["trip"]


@router.delete("/{trip_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_trip(trip_id: int, traveler_id: int = Query(...), db: Session = Depends(get_db)):
    raise_for_result(trip_service.delete_trip(db, trip_id, traveler_id))
