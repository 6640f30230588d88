from sqlalchemy import Column, String, Text, DateTime, func
from sqlalchemy.orm import relationship
from database import Base

class Enterprise(Base):
    __tablename__ = "enterprises"

    id = Column(String(100), primary_key=True)
    name = Column(String(150), nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    travelers = relationship("Traveler", back_populates="enterprise")
