from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from app.models.model_base import Base
import uuid

class CalendarEvent(Base):
    __tablename__ = "calendar_event"

    event_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    member_id = Column(UUID(as_uuid=True), ForeignKey("member.member_id", ondelete="CASCADE"), nullable=False)
    event_type = Column(String(20), nullable=False)
    title = Column(String(255), nullable=False)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)

    member = relationship("Member", foreign_keys=[member_id], lazy="joined")
