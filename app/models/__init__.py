from app.models.model_base import Base
from app.models.model_family import Family
from app.models.model_member import Member
from app.models.model_calendar_event import CalendarEvent
from app.models.model_medication import MedicationManagement, MedicationDrug, MedicationTiming
from app.models.model_medical_result import MedicalResult
