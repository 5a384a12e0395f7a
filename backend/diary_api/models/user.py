import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String, Uuid
from sqlalchemy.orm import relationship

from diary_api.core.constants import TimerStatus, VALID_IDLE_THRESHOLDS
from diary_api.core.database import Base


class User(Base):
    """User account; password_hash is NULL for Google-only accounts."""

    __tablename__ = "users"

    user_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=True)
    nickname = Column(String(100), nullable=False)
    name = Column(String(255), nullable=True)
    timer_status = Column(String(16), nullable=False, default=TimerStatus.ACTIVE)
    timer_idle_threshold_sec = Column(Integer, nullable=False, default=VALID_IDLE_THRESHOLDS[0])
    last_active_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    diaries = relationship("Diary", back_populates="user", cascade="all, delete-orphan")
    contacts = relationship("Contact", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User {self.email}>"
