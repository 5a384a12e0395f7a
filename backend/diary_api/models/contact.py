import uuid

from sqlalchemy import Column, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from diary_api.core.database import Base


class Contact(Base):
    """Emergency contact attached to a user account."""

    __tablename__ = "contacts"

    contact_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.user_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    email = Column(String(255), nullable=True)
    phone = Column(String(32), nullable=True)

    # Relationships
    user = relationship("User", back_populates="contacts")
