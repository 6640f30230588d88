from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from database import Base

class Traveler(Base):
    __tablename__ = "travelers"

    id = Column(Integer, primary_key=True, index=True)
    firebase_id = Column(String(128), unique=True, index=True, nullable=True)  # NULL until first sign-in
    email = Column(String(255), unique=True, index=True, nullable=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    photo_url = Column(String(500), nullable=True)
    enterprise_id = Column(String(100), ForeignKey("enterprises.id"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    enterprise = relationship("Enterprise", back_populates="travelers")
    memberships = relationship("TripCrewMember", back_populates="traveler", cascade="all, delete-orphan")
