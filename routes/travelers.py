from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from database import get_db
from routes.errors import raise_for_result
from schemas import TravelerWrite, TravelerRead, TravelerUpdate
from services.traveler_service import find_or_create_traveler, get_traveler

router = APIRouter(prefix="/travelers", tags=["Travelers"])


@router.post("/", response_model=TravelerRead)
def create_traveler(payload: TravelerWrite, db: Session = Depends(get_db)):
    result = raise_for_result(find_or_create_traveler(
        db,
        firebase_id=payload.firebase_id,
        email=payload.email,
        display_name=payload.display_name,
        picture=payload.picture,
    ))
    return result["traveler"]


@router.get("/{traveler_id}", response_model=TravelerRead)
def read_traveler(traveler_id: int, db: Session = Depends(get_db)):
    traveler = get_traveler(db, traveler_id)
    if not traveler:
        raise HTTPException(status_code=404, detail="Traveler not found")
    return traveler


@router.patch("/{traveler_id}", response_model=TravelerRead)
def update_traveler(traveler_id: int, payload: TravelerUpdate, db: Session = Depends(get_db)):
    """
    Update traveler profile.
    """
    traveler = get_traveler(db, traveler_id)
    if not traveler:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Traveler not found")

    for key, value in payload.model_dump(exclude_unset=True).items():
        setattr(traveler, key, value)

    db.commit()
    db.refresh(traveler)
    return traveler
