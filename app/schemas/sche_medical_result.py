from typing import Optional
from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field


class MedicalResultRequest(BaseModel):
    hospital_name: str = Field(..., min_length=1)
    doctor_name: Optional[str] = None
    diagnosis: str = Field(..., min_length=1)
    treatment: Optional[str] = None
    memo: Optional[str] = None
    visit_date: date
    is_public: bool = False


class MedicalResultBase(BaseModel):
    medical_result_id: UUID
    event_id: UUID
    hospital_name: str
    doctor_name: Optional[str] = None
    diagnosis: str
    treatment: Optional[str] = None
    memo: Optional[str] = None
    visit_date: date
    title: str
    calendar_start_date: datetime
    calendar_end_date: datetime


class MedicalResultResponse(MedicalResultBase):
    verify_id: str
    is_public: bool


class FamilyMedicalResultResponse(MedicalResultBase):
    member_name: str
