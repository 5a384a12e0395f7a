import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Index, Text, Uuid
from sqlalchemy.orm import relationship

from diary_api.core.database import Base


class Diary(Base):
    """A single diary entry owned by one user."""

    __tablename__ = "diaries"

    diary_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.user_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    user = relationship("User", back_populates="diaries")

    __table_args__ = (
        Index("ix_diaries_user_id_created_at", "user_id", "created_at"),
    )

    def __repr__(self):
        return f"<Diary {self.diary_id}>"
