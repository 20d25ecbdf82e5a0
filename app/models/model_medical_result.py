from sqlalchemy import Column, String, Date, DateTime, Boolean, Text, ForeignKey, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from app.models.model_base import Base
import uuid

class MedicalResult(Base):
    __tablename__ = "medical_result"

    medical_result_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    event_id = Column(UUID(as_uuid=True), ForeignKey("calendar_event.event_id", ondelete="CASCADE"), unique=True, nullable=False)
    member_id = Column(UUID(as_uuid=True), ForeignKey("member.member_id", ondelete="CASCADE"), nullable=False)
    hospital_name = Column(String(255), nullable=False)
    doctor_name = Column(String(255))
    diagnosis = Column(Text, nullable=False)
    treatment = Column(Text)
    memo = Column(Text)
    visit_date = Column(Date, nullable=False)
    is_public = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    calendar_event = relationship("CalendarEvent", foreign_keys=[event_id], lazy="joined")
    member = relationship("Member", foreign_keys=[member_id], lazy="joined")
