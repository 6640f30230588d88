from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from database import Base

class JoinCode(Base):
    __tablename__ = "join_codes"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(64), unique=True, index=True, nullable=False)
    trip_crew_id = Column(Integer, ForeignKey("trip_crews.id", ondelete="CASCADE"), nullable=False, index=True)
    is_active = Column(Boolean, default=True, nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=True)  # NULL = never expires
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    trip_crew = relationship("TripCrew", back_populates="join_codes")

    def is_valid(self, now: datetime | None = None) -> bool:
        if not self.is_active:
            return False
        if self.expires_at is None:
            return True
        now = now or datetime.now(timezone.utc)
        expires_at = self.expires_at
        # SQLite hands back naive datetimes
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return expires_at > now
