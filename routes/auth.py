from typing import Optional
from fastapi import APIRouter, Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from database import get_db
from routes.errors import raise_for_result
from schemas import TravelerRead
from services.firebase_auth import verify_id_token
from services.traveler_service import find_or_create_traveler

router = APIRouter(prefix="/auth", tags=["Auth"])


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


@router.post("/hydrate", response_model=TravelerRead)
def hydrate(authorization: Optional[str] = Header(None), db: Session = Depends(get_db)):
    """Find or create the Traveler for the signed-in Firebase user"""
    token = _bearer_token(authorization)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing bearer token")

    claims = verify_id_token(token)
    if not claims:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")

    result = raise_for_result(find_or_create_traveler(
        db,
        firebase_id=claims.get("uid"),
        email=claims.get("email"),
        display_name=claims.get("name"),
        picture=claims.get("picture"),
    ))
    return result["traveler"]
