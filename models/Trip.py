from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from database import Base

class Trip(Base):
    __tablename__ = "trips"

    id = Column(Integer, primary_key=True, index=True)
    trip_crew_id = Column(Integer, ForeignKey("trip_crews.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(150), nullable=False)
    destination = Column(String(250), nullable=True)
    purpose = Column(String(40), nullable=True)
    trip_type = Column(String(40), nullable=True)
    budget_level = Column(String(40), nullable=True)
    notes = Column(Text, nullable=True)
    cover_image = Column(String(500), nullable=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    # Computed from the date range on create/update
    season = Column(String(20), nullable=True)
    days_total = Column(Integer, nullable=True)
    date_range = Column(String(60), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    trip_crew = relationship("TripCrew", back_populates="trips")
