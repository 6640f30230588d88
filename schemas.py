# schemas.py (Pydantic v2)
from pydantic import BaseModel, EmailStr
from typing import Optional, List
from datetime import date, datetime
import enum


# ---------- Travelers ----------
class TravelerBase(BaseModel):
    email: Optional[EmailStr] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    photo_url: Optional[str] = None

class TravelerWrite(BaseModel):
    """Find-or-create by Firebase uid"""
    firebase_id: str
    email: Optional[EmailStr] = None
    display_name: Optional[str] = None
    picture: Optional[str] = None

class TravelerUpdate(BaseModel):
    """Partial update for travelers"""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    photo_url: Optional[str] = None

class TravelerRead(TravelerBase):
    id: int
    firebase_id: Optional[str] = None
    enterprise_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class TravelerPublic(BaseModel):
    id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    photo_url: Optional[str] = None

    class Config:
        from_attributes = True


# ---------- TripCrews ----------
class TripCrewWrite(BaseModel):
    name: str
    description: Optional[str] = None
    traveler_id: int

class TripCrewRead(BaseModel):
    id: int
    name: Optional[str] = None
    description: Optional[str] = None
    handle: Optional[str] = None
    created_by_traveler_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class TripCrewCreated(BaseModel):
    trip_crew: TripCrewRead
    join_code: str
    invite_url: Optional[str] = None

class TripCrewMemberRead(BaseModel):
    id: int
    traveler_id: int
    created_at: datetime
    traveler: Optional[TravelerPublic] = None

    class Config:
        from_attributes = True

class TripCrewRoleRead(BaseModel):
    id: int
    traveler_id: int
    role: str

    class Config:
        from_attributes = True

class TripCrewSummary(BaseModel):
    id: int
    name: Optional[str] = None
    description: Optional[str] = None
    handle: Optional[str] = None
    member_count: int
    trip_count: int
    invite_url: Optional[str] = None

class AddMemberWrite(BaseModel):
    email: EmailStr
    traveler_id: int  # requester, must be admin

class RequesterWrite(BaseModel):
    traveler_id: int


# ---------- Invites ----------
class AdminPreview(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    photo_url: Optional[str] = None

class TripCrewPreview(BaseModel):
    id: int
    name: Optional[str] = None
    description: Optional[str] = None
    handle: Optional[str] = None
    member_count: int
    trip_count: int
    admin: Optional[AdminPreview] = None

class InviteLinkRead(BaseModel):
    invite_url: Optional[str] = None
    join_code: Optional[str] = None
    handle: Optional[str] = None

class JoinWrite(BaseModel):
    code: str  # handle or join code
    traveler_id: int

class JoinRead(BaseModel):
    trip_crew_id: int


# ---------- Trips ----------
class TripPurpose(str, enum.Enum):
    FAMILY = "FAMILY"
    ANNIVERSARY = "ANNIVERSARY"
    WORK = "WORK"
    RACE = "RACE"
    FRIENDS = "FRIENDS"
    COUPLES = "COUPLES"
    GENERAL = "GENERAL"

class TripType(str, enum.Enum):
    BEACH = "BEACH"
    CITY = "CITY"
    MOUNTAIN = "MOUNTAIN"
    ADVENTURE = "ADVENTURE"
    SKI = "SKI"
    CRUISE = "CRUISE"
    THEMEPARK = "THEMEPARK"
    GENERAL = "GENERAL"

class BudgetLevel(str, enum.Enum):
    BUDGET = "BUDGET"
    MODERATE = "MODERATE"
    LUXURY = "LUXURY"

class TripBase(BaseModel):
    name: str
    destination: Optional[str] = None
    purpose: Optional[TripPurpose] = None
    trip_type: Optional[TripType] = None
    budget_level: Optional[BudgetLevel] = None
    notes: Optional[str] = None
    cover_image: Optional[str] = None
    start_date: date
    end_date: date

    class Config:
        use_enum_values = True

class TripWrite(TripBase):
    trip_crew_id: int
    traveler_id: int

class TripUpdate(BaseModel):
    """Partial update - metadata is recomputed from the resulting dates"""
    traveler_id: int
    name: Optional[str] = None
    destination: Optional[str] = None
    purpose: Optional[TripPurpose] = None
    trip_type: Optional[TripType] = None
    budget_level: Optional[BudgetLevel] = None
    notes: Optional[str] = None
    cover_image: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    class Config:
        use_enum_values = True

class TripRead(BaseModel):
    id: int
    trip_crew_id: int
    name: str
    destination: Optional[str] = None
    purpose: Optional[str] = None
    trip_type: Optional[str] = None
    budget_level: Optional[str] = None
    notes: Optional[str] = None
    cover_image: Optional[str] = None
    start_date: date
    end_date: date
    season: Optional[str] = None
    days_total: Optional[int] = None
    date_range: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TripCrewDetail(TripCrewRead):
    memberships: List[TripCrewMemberRead] = []
    roles: List[TripCrewRoleRead] = []
    trips: List[TripRead] = []
