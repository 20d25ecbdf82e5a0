from sqlalchemy import Column, String, Date, DateTime, Boolean, Integer, Text, ForeignKey, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from app.models.model_base import Base
import uuid


class MedicationDrug(Base):
    __tablename__ = "medication_drug"

    drug_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    medication_id = Column(UUID(as_uuid=True), ForeignKey("medication_management.medication_id", ondelete="CASCADE"), nullable=False)
    sort_order = Column(Integer, nullable=False, default=0)
    drug_name = Column(String(255), nullable=False)
    dosage = Column(String(255), nullable=False)


class MedicationTiming(Base):
    __tablename__ = "medication_timing"

    timing_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    medication_id = Column(UUID(as_uuid=True), ForeignKey("medication_management.medication_id", ondelete="CASCADE"), nullable=False)
    sort_order = Column(Integer, nullable=False, default=0)
    timing_type = Column(String(20), nullable=False)
    precaution = Column(Text)


class MedicationManagement(Base):
    __tablename__ = "medication_management"

    medication_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    event_id = Column(UUID(as_uuid=True), ForeignKey("calendar_event.event_id", ondelete="CASCADE"), unique=True, nullable=False)
    member_id = Column(UUID(as_uuid=True), ForeignKey("member.member_id", ondelete="CASCADE"), nullable=False, index=True)
    disease_name = Column(String(255), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    is_public = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    calendar_event = relationship("CalendarEvent", foreign_keys=[event_id], lazy="joined")
    member = relationship("Member", foreign_keys=[member_id], lazy="joined")

    # Children keep only the parent id; the root owns the ordered lists.
    drugs = relationship(
        MedicationDrug,
        order_by=MedicationDrug.sort_order,
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    timings = relationship(
        MedicationTiming,
        order_by=MedicationTiming.sort_order,
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def add_drug(self, drug: MedicationDrug) -> None:
        drug.sort_order = len(self.drugs)
        self.drugs.append(drug)

    def add_timing(self, timing: MedicationTiming) -> None:
        timing.sort_order = len(self.timings)
        self.timings.append(timing)

    def clear_details(self) -> None:
        self.drugs.clear()
        self.timings.clear()
