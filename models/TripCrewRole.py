from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import relationship
from database import Base
import enum

class CrewRole(enum.Enum):
    ADMIN = "admin"
    MEMBER = "member"

# Stored as plain strings so new roles don't need a schema migration
ROLE_VALUES = tuple(r.value for r in CrewRole)

class TripCrewRole(Base):
    __tablename__ = "trip_crew_roles"
    __table_args__ = (
        UniqueConstraint("trip_crew_id", "traveler_id", "role", name="uq_trip_crew_role"),
    )

    id = Column(Integer, primary_key=True, index=True)
    trip_crew_id = Column(Integer, ForeignKey("trip_crews.id", ondelete="CASCADE"), nullable=False, index=True)
    traveler_id = Column(Integer, ForeignKey("travelers.id", ondelete="CASCADE"), nullable=False, index=True)
    role = Column(String(50), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    trip_crew = relationship("TripCrew", back_populates="roles")
    traveler = relationship("Traveler")
