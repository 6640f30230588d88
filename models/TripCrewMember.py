from sqlalchemy import Column, Integer, DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import relationship
from database import Base

class TripCrewMember(Base):
    __tablename__ = "trip_crew_members"
    __table_args__ = (
        UniqueConstraint("trip_crew_id", "traveler_id", name="uq_trip_crew_member"),
    )

    id = Column(Integer, primary_key=True, index=True)
    trip_crew_id = Column(Integer, ForeignKey("trip_crews.id", ondelete="CASCADE"), nullable=False, index=True)
    traveler_id = Column(Integer, ForeignKey("travelers.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    trip_crew = relationship("TripCrew", back_populates="memberships")
    traveler = relationship("Traveler", back_populates="memberships")
