"""
Medication Management Service.
Handles the medication aggregate (record, drugs, timings) tied to a
MEDICATION calendar event, and the family view of public records.
"""
import logging
from typing import List
from uuid import UUID
from fastapi import Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.helpers.enums import CalendarEventType, MedicationTimingType
from app.helpers.error_codes import MedicationErrorCode
from app.helpers.exception_handler import CustomException, BusinessException
from app.helpers.transaction import transaction
from app.models.model_medication import MedicationManagement, MedicationDrug, MedicationTiming
from app.models.model_member import Member
from app.repository.repo_medication import MedicationRepository
from app.repository.repo_member import MemberRepository
from app.schemas.sche_medication import (
    MedicationManagementRequest,
    MedicationManagementResponse,
    FamilyMedicationResponse,
    MedicationDrugResponse,
    MedicationTimingResponse
)
from app.services.srv_calendar_event import CalendarEventService

logger = logging.getLogger(__name__)


class MedicationService:
    """
    Service for medication management records.
    Every public method runs inside one transaction on the request session.
    """

    def __init__(
        self,
        db_session: Session = Depends(get_db),
        medication_repo: MedicationRepository = Depends(),
        member_repo: MemberRepository = Depends(),
        calendar_service: CalendarEventService = Depends()
    ):
        self.db = db_session
        self.medication_repo = medication_repo
        self.member_repo = member_repo
        self.calendar_service = calendar_service

    def create_medication(
        self,
        current_member: Member,
        event_id: UUID,
        request: MedicationManagementRequest
    ) -> MedicationManagementResponse:
        try:
            with transaction(self.db):
                calendar_event = self._load_medication_event(event_id, current_member)

                if self.medication_repo.get_by_event_id(calendar_event.event_id):
                    raise BusinessException(MedicationErrorCode.MEDICATION_ALREADY_EXISTS)

                self._validate_request(request)

                medication = MedicationManagement(
                    event_id=calendar_event.event_id,
                    member_id=current_member.member_id,
                    disease_name=request.disease_name,
                    start_date=request.start_date,
                    end_date=request.end_date,
                    is_public=request.is_public
                )
                medication.calendar_event = calendar_event
                medication.member = current_member
                self._append_details(medication, request)

                self.medication_repo.save(medication)
                return self._convert_to_response(medication)

        except CustomException:
            raise
        except IntegrityError as e:
            # A concurrent create for the same event lost the race on the unique event_id.
            logger.warning(f"Duplicate medication management for event {event_id}: {e}")
            raise BusinessException(MedicationErrorCode.MEDICATION_ALREADY_EXISTS)
        except Exception as e:
            logger.error(f"Failed to create medication management: {str(e)}", exc_info=True)
            raise BusinessException(MedicationErrorCode.DATABASE_ERROR)

    def get_medication(self, current_member: Member, event_id: UUID) -> MedicationManagementResponse:
        try:
            with transaction(self.db, read_only=True):
                calendar_event = self._load_medication_event(event_id, current_member)
                medication = self._get_existing_medication(calendar_event.event_id)
                return self._convert_to_response(medication)

        except CustomException:
            raise
        except Exception as e:
            logger.error(f"Failed to get medication management: {str(e)}", exc_info=True)
            raise BusinessException(MedicationErrorCode.DATABASE_ERROR)

    def update_medication(
        self,
        current_member: Member,
        event_id: UUID,
        request: MedicationManagementRequest
    ) -> MedicationManagementResponse:
        """Replace the record: scalar fields are overwritten and all drugs and timings rebuilt."""
        try:
            with transaction(self.db):
                calendar_event = self._load_medication_event(event_id, current_member)
                medication = self._get_existing_medication(calendar_event.event_id)

                self._validate_request(request)

                medication.disease_name = request.disease_name
                medication.start_date = request.start_date
                medication.end_date = request.end_date
                medication.is_public = request.is_public

                medication.clear_details()
                self._append_details(medication, request)

                self.medication_repo.save(medication)
                return self._convert_to_response(medication)

        except CustomException:
            raise
        except Exception as e:
            logger.error(f"Failed to update medication management: {str(e)}", exc_info=True)
            raise BusinessException(MedicationErrorCode.DATABASE_ERROR)

    def delete_medication(self, current_member: Member, event_id: UUID) -> None:
        try:
            with transaction(self.db):
                calendar_event = self._load_medication_event(event_id, current_member)
                medication = self._get_existing_medication(calendar_event.event_id)

                # Drugs and timings are removed with the record.
                self.medication_repo.delete(medication)

        except CustomException:
            raise
        except Exception as e:
            logger.error(f"Failed to delete medication management: {str(e)}", exc_info=True)
            raise BusinessException(MedicationErrorCode.DATABASE_ERROR)

    def get_my_medications(self, current_member: Member) -> List[MedicationManagementResponse]:
        try:
            with transaction(self.db, read_only=True):
                medications = self.medication_repo.get_by_member_id(current_member.member_id)
                return [self._convert_to_response(m) for m in medications]

        except CustomException:
            raise
        except Exception as e:
            logger.error(f"Failed to list medication management: {str(e)}", exc_info=True)
            raise BusinessException(MedicationErrorCode.DATABASE_ERROR)

    def get_family_medications(self, current_member: Member) -> List[FamilyMedicationResponse]:
        """Public medication records of the other members of the current member's family."""
        try:
            with transaction(self.db, read_only=True):
                if current_member.family_id is None:
                    raise BusinessException(MedicationErrorCode.FAMILY_NOT_FOUND)

                family_members = [
                    member for member in self.member_repo.get_family_members(current_member)
                    if member.member_id != current_member.member_id
                ]

                responses = []
                for member in family_members:
                    public_medications = self.medication_repo.get_by_member_id_and_public(member.member_id, True)
                    responses.extend(self._convert_to_family_response(m) for m in public_medications)
                return responses

        except CustomException:
            raise
        except Exception as e:
            logger.error(f"Failed to list family medication management: {str(e)}", exc_info=True)
            raise BusinessException(MedicationErrorCode.DATABASE_ERROR)

    # ---------- Private helpers ----------
    def _load_medication_event(self, event_id: UUID, current_member: Member):
        calendar_event = self.calendar_service.find_event_and_validate(event_id, current_member)
        self.calendar_service.validate_event_type(calendar_event, CalendarEventType.MEDICATION)
        return calendar_event

    def _get_existing_medication(self, event_id: UUID) -> MedicationManagement:
        medication = self.medication_repo.get_by_event_id(event_id)
        if not medication:
            raise BusinessException(MedicationErrorCode.MEDICATION_NOT_FOUND)
        return medication

    @staticmethod
    def _validate_request(request: MedicationManagementRequest) -> None:
        if not request.is_valid_date_range():
            raise BusinessException(MedicationErrorCode.INVALID_DATE_RANGE)
        if not request.drugs:
            raise BusinessException(MedicationErrorCode.DRUG_LIST_EMPTY)
        if not request.timings:
            raise BusinessException(MedicationErrorCode.TIMING_LIST_EMPTY)

    @staticmethod
    def _append_details(medication: MedicationManagement, request: MedicationManagementRequest) -> None:
        for drug_request in request.drugs:
            medication.add_drug(MedicationDrug(
                drug_name=drug_request.drug_name,
                dosage=drug_request.dosage
            ))
        for timing_request in request.timings:
            medication.add_timing(MedicationTiming(
                timing_type=timing_request.timing_type.value,
                precaution=timing_request.precaution
            ))

    @staticmethod
    def _convert_details(medication: MedicationManagement):
        drugs = [
            MedicationDrugResponse(
                drug_id=drug.drug_id,
                drug_name=drug.drug_name,
                dosage=drug.dosage
            )
            for drug in medication.drugs
        ]
        timings = []
        for timing in medication.timings:
            timing_type = MedicationTimingType(timing.timing_type)
            timings.append(MedicationTimingResponse(
                timing_id=timing.timing_id,
                timing_type=timing_type,
                timing_description=timing_type.description,
                precaution=timing.precaution
            ))
        return drugs, timings

    def _convert_to_response(self, medication: MedicationManagement) -> MedicationManagementResponse:
        calendar_event = medication.calendar_event
        drugs, timings = self._convert_details(medication)
        return MedicationManagementResponse(
            medication_id=medication.medication_id,
            event_id=calendar_event.event_id,
            verify_id=calendar_event.member.verify_id,
            disease_name=medication.disease_name,
            start_date=medication.start_date,
            end_date=medication.end_date,
            is_public=medication.is_public,
            title=calendar_event.title,
            calendar_start_date=calendar_event.start_date,
            calendar_end_date=calendar_event.end_date,
            drugs=drugs,
            timings=timings
        )

    def _convert_to_family_response(self, medication: MedicationManagement) -> FamilyMedicationResponse:
        calendar_event = medication.calendar_event
        drugs, timings = self._convert_details(medication)
        return FamilyMedicationResponse(
            medication_id=medication.medication_id,
            event_id=calendar_event.event_id,
            member_name=medication.member.username,
            disease_name=medication.disease_name,
            start_date=medication.start_date,
            end_date=medication.end_date,
            title=calendar_event.title,
            calendar_start_date=calendar_event.start_date,
            calendar_end_date=calendar_event.end_date,
            drugs=drugs,
            timings=timings
        )
