from sqlalchemy import Column, String, DateTime, ForeignKey, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from app.models.model_base import Base
import uuid

class Member(Base):
    __tablename__ = "member"

    member_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    username = Column(String(255), nullable=False)
    verify_id = Column(String(100), unique=True, nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    family_id = Column(UUID(as_uuid=True), ForeignKey("family.family_id", ondelete="SET NULL"))
    created_at = Column(DateTime, default=func.now())

    family = relationship("Family", back_populates="members")
