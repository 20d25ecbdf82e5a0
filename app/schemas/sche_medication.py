from typing import List, Optional
from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field

from app.helpers.enums import MedicationTimingType


class MedicationDrugRequest(BaseModel):
    drug_name: str = Field(..., min_length=1, description="Drug name")
    dosage: str = Field(..., description="Dosage, e.g. 100mg")


class MedicationTimingRequest(BaseModel):
    timing_type: MedicationTimingType = Field(..., description="Dosing slot")
    precaution: Optional[str] = Field(None, description="Precaution for this slot")


class MedicationManagementRequest(BaseModel):
    """Create and full-update payload for a medication management record."""
    disease_name: str = Field(..., min_length=1)
    start_date: date
    end_date: date
    is_public: bool = False
    # Emptiness is reported by the service with its own error codes.
    drugs: Optional[List[MedicationDrugRequest]] = None
    timings: Optional[List[MedicationTimingRequest]] = None

    class Config:
        json_schema_extra = {
            "example": {
                "disease_name": "Headache",
                "start_date": "2024-01-01",
                "end_date": "2024-01-10",
                "is_public": True,
                "drugs": [{"drug_name": "Aspirin", "dosage": "100mg"}],
                "timings": [{"timing_type": "MORNING", "precaution": "after meal"}]
            }
        }

    def is_valid_date_range(self) -> bool:
        return self.start_date <= self.end_date


class MedicationDrugResponse(BaseModel):
    drug_id: UUID
    drug_name: str
    dosage: str


class MedicationTimingResponse(BaseModel):
    timing_id: UUID
    timing_type: MedicationTimingType
    timing_description: str
    precaution: Optional[str] = None


class MedicationManagementResponse(BaseModel):
    medication_id: UUID
    event_id: UUID
    verify_id: str
    disease_name: str
    start_date: date
    end_date: date
    is_public: bool
    title: str
    calendar_start_date: datetime
    calendar_end_date: datetime
    drugs: List[MedicationDrugResponse]
    timings: List[MedicationTimingResponse]


class FamilyMedicationResponse(BaseModel):
    """Family view: carries the owner's display name and hides the public flag."""
    medication_id: UUID
    event_id: UUID
    member_name: str
    disease_name: str
    start_date: date
    end_date: date
    title: str
    calendar_start_date: datetime
    calendar_end_date: datetime
    drugs: List[MedicationDrugResponse]
    timings: List[MedicationTimingResponse]
