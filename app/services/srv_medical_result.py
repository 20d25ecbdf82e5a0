import logging
from typing import List
from uuid import UUID
from fastapi import Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.helpers.enums import CalendarEventType
from app.helpers.error_codes import MedicalResultErrorCode
from app.helpers.exception_handler import CustomException, BusinessException
from app.helpers.transaction import transaction
from app.models.model_medical_result import MedicalResult
from app.models.model_member import Member
from app.repository.repo_medical_result import MedicalResultRepository
from app.repository.repo_member import MemberRepository
from app.schemas.sche_medical_result import (
    MedicalResultRequest,
    MedicalResultResponse,
    FamilyMedicalResultResponse
)
from app.services.srv_calendar_event import CalendarEventService

logger = logging.getLogger(__name__)


class MedicalResultService:
    """Medical visit results tied to MEDICAL_RESULT calendar events."""

    def __init__(
        self,
        db_session: Session = Depends(get_db),
        medical_result_repo: MedicalResultRepository = Depends(),
        member_repo: MemberRepository = Depends(),
        calendar_service: CalendarEventService = Depends()
    ):
        self.db = db_session
        self.medical_result_repo = medical_result_repo
        self.member_repo = member_repo
        self.calendar_service = calendar_service

    def create_medical_result(
        self,
        current_member: Member,
        event_id: UUID,
        request: MedicalResultRequest
    ) -> MedicalResultResponse:
        try:
            with transaction(self.db):
                calendar_event = self._load_medical_result_event(event_id, current_member)

                if self.medical_result_repo.get_by_event_id(calendar_event.event_id):
                    raise BusinessException(MedicalResultErrorCode.MEDICAL_RESULT_ALREADY_EXISTS)

                medical_result = MedicalResult(
                    event_id=calendar_event.event_id,
                    member_id=current_member.member_id,
                    **request.model_dump()
                )
                medical_result.calendar_event = calendar_event
                medical_result.member = current_member

                self.medical_result_repo.save(medical_result)
                return self._convert_to_response(medical_result)

        except CustomException:
            raise
        except IntegrityError as e:
            logger.warning(f"Duplicate medical result for event {event_id}: {e}")
            raise BusinessException(MedicalResultErrorCode.MEDICAL_RESULT_ALREADY_EXISTS)
        except Exception as e:
            logger.error(f"Failed to create medical result: {str(e)}", exc_info=True)
            raise BusinessException(MedicalResultErrorCode.DATABASE_ERROR)

    def get_medical_result(self, current_member: Member, event_id: UUID) -> MedicalResultResponse:
        try:
            with transaction(self.db, read_only=True):
                calendar_event = self._load_medical_result_event(event_id, current_member)
                medical_result = self._get_existing_medical_result(calendar_event.event_id)
                return self._convert_to_response(medical_result)

        except CustomException:
            raise
        except Exception as e:
            logger.error(f"Failed to get medical result: {str(e)}", exc_info=True)
            raise BusinessException(MedicalResultErrorCode.DATABASE_ERROR)

    def update_medical_result(
        self,
        current_member: Member,
        event_id: UUID,
        request: MedicalResultRequest
    ) -> MedicalResultResponse:
        try:
            with transaction(self.db):
                calendar_event = self._load_medical_result_event(event_id, current_member)
                medical_result = self._get_existing_medical_result(calendar_event.event_id)

                for field, value in request.model_dump().items():
                    setattr(medical_result, field, value)

                self.medical_result_repo.save(medical_result)
                return self._convert_to_response(medical_result)

        except CustomException:
            raise
        except Exception as e:
            logger.error(f"Failed to update medical result: {str(e)}", exc_info=True)
            raise BusinessException(MedicalResultErrorCode.DATABASE_ERROR)

    def delete_medical_result(self, current_member: Member, event_id: UUID) -> None:
        try:
            with transaction(self.db):
                calendar_event = self._load_medical_result_event(event_id, current_member)
                medical_result = self._get_existing_medical_result(calendar_event.event_id)
                self.medical_result_repo.delete(medical_result)

        except CustomException:
            raise
        except Exception as e:
            logger.error(f"Failed to delete medical result: {str(e)}", exc_info=True)
            raise BusinessException(MedicalResultErrorCode.DATABASE_ERROR)

    def get_family_medical_results(self, current_member: Member) -> List[FamilyMedicalResultResponse]:
        try:
            with transaction(self.db, read_only=True):
                if current_member.family_id is None:
                    raise BusinessException(MedicalResultErrorCode.FAMILY_NOT_FOUND)

                responses = []
                for member in self.member_repo.get_family_members(current_member):
                    if member.member_id == current_member.member_id:
                        continue
                    public_results = self.medical_result_repo.get_by_member_id_and_public(member.member_id, True)
                    responses.extend(self._convert_to_family_response(r) for r in public_results)
                return responses

        except CustomException:
            raise
        except Exception as e:
            logger.error(f"Failed to list family medical results: {str(e)}", exc_info=True)
            raise BusinessException(MedicalResultErrorCode.DATABASE_ERROR)

    # ---------- Private helpers ----------
    def _load_medical_result_event(self, event_id: UUID, current_member: Member):
        calendar_event = self.calendar_service.find_event_and_validate(event_id, current_member)
        self.calendar_service.validate_event_type(calendar_event, CalendarEventType.MEDICAL_RESULT)
        return calendar_event

    def _get_existing_medical_result(self, event_id: UUID) -> MedicalResult:
        medical_result = self.medical_result_repo.get_by_event_id(event_id)
        if not medical_result:
            raise BusinessException(MedicalResultErrorCode.MEDICAL_RESULT_NOT_FOUND)
        return medical_result

    @staticmethod
    def _base_fields(medical_result: MedicalResult) -> dict:
        calendar_event = medical_result.calendar_event
        return {
            'medical_result_id': medical_result.medical_result_id,
            'event_id': calendar_event.event_id,
            'hospital_name': medical_result.hospital_name,
            'doctor_name': medical_result.doctor_name,
            'diagnosis': medical_result.diagnosis,
            'treatment': medical_result.treatment,
            'memo': medical_result.memo,
            'visit_date': medical_result.visit_date,
            'title': calendar_event.title,
            'calendar_start_date': calendar_event.start_date,
            'calendar_end_date': calendar_event.end_date,
        }

    def _convert_to_response(self, medical_result: MedicalResult) -> MedicalResultResponse:
        return MedicalResultResponse(
            verify_id=medical_result.calendar_event.member.verify_id,
            is_public=medical_result.is_public,
            **self._base_fields(medical_result)
        )

    def _convert_to_family_response(self, medical_result: MedicalResult) -> FamilyMedicalResultResponse:
        return FamilyMedicalResultResponse(
            member_name=medical_result.member.username,
            **self._base_fields(medical_result)
        )
