from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from database import Base

class TripCrew(Base):
    __tablename__ = "trip_crews"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(150), nullable=True)
    description = Column(Text, nullable=True)
    handle = Column(String(64), unique=True, index=True, nullable=True)  # preferred invite path
    join_code = Column(String(64), unique=True, index=True, nullable=True)  # legacy, read-only
    created_by_traveler_id = Column(Integer, ForeignKey("travelers.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    created_by = relationship("Traveler", foreign_keys=[created_by_traveler_id])
    memberships = relationship("TripCrewMember", back_populates="trip_crew", cascade="all, delete-orphan")
    roles = relationship("TripCrewRole", back_populates="trip_crew", cascade="all, delete-orphan")
    join_codes = relationship("JoinCode", back_populates="trip_crew", cascade="all, delete-orphan")
    trips = relationship("Trip", back_populates="trip_crew", cascade="all, delete-orphan")
