"""
Medication Management API endpoints.
Each record belongs to one MEDICATION calendar event of the current member.
"""
import logging
from typing import Any, List
from uuid import UUID
from fastapi import APIRouter, Depends

from app.helpers.exception_handler import CustomException
from app.helpers.login_manager import login_required
from app.models.model_member import Member
from app.schemas.sche_base import DataResponse
from app.schemas.sche_medication import (
    MedicationManagementRequest,
    MedicationManagementResponse,
    FamilyMedicationResponse
)
from app.services.srv_medication import MedicationService

logger = logging.getLogger(__name__)

router = APIRouter()


# Static paths are declared before /{event_id} so they are not parsed as event ids.
@router.get('/mine', response_model=DataResponse[List[MedicationManagementResponse]])
def get_my_medications(
    medication_service: MedicationService = Depends(),
    current_member: Member = Depends(login_required)
) -> Any:
    """
    List all medication records of the current member, latest start date first.

    **Authorization**: Authenticated member.
    """
    try:
        logger.info(f"get_my_medications request from member {current_member.member_id}")
        medications = medication_service.get_my_medications(current_member)
        logger.info(f"get_my_medications success: {len(medications)} records")
        return DataResponse().success_response(data=medications)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"get_my_medications error: {str(e)}", exc_info=True)
        raise CustomException(http_code=500, code='500', message=str(e))


@router.get('/family', response_model=DataResponse[List[FamilyMedicationResponse]])
def get_family_medications(
    medication_service: MedicationService = Depends(),
    current_member: Member = Depends(login_required)
) -> Any:
    """
    List the public medication records of the other members of the current member's family.

    **Authorization**: Authenticated member belonging to a family.

    **Response**: Records with the owner's name. Private records and the member's own records are excluded.
    """
    try:
        logger.info(f"get_family_medications request from member {current_member.member_id}")
        medications = medication_service.get_family_medications(current_member)
        logger.info(f"get_family_medications success: {len(medications)} records")
        return DataResponse().success_response(data=medications)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"get_family_medications error: {str(e)}", exc_info=True)
        raise CustomException(http_code=500, code='500', message=str(e))


@router.post('/{event_id}', response_model=DataResponse[MedicationManagementResponse])
def create_medication(
    event_id: UUID,
    request: MedicationManagementRequest,
    medication_service: MedicationService = Depends(),
    current_member: Member = Depends(login_required)
) -> Any:
    """
    Register medication management for a calendar event.

    **Authorization**: Owner of the calendar event.

    **Process**:
    1. Validates the event exists, belongs to the member and is a MEDICATION event
    2. Rejects a second record for the same event
    3. Validates date range, drugs and timings
    4. Stores the record with its drugs and timings
    """
    try:
        logger.info(f"create_medication request: event_id={event_id}")
        medication = medication_service.create_medication(current_member, event_id, request)
        logger.info(f"create_medication success: medication_id={medication.medication_id}")
        return DataResponse().success_response(data=medication)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"create_medication error: {str(e)}", exc_info=True)
        raise CustomException(http_code=500, code='500', message=str(e))


@router.get('/{event_id}', response_model=DataResponse[MedicationManagementResponse])
def get_medication(
    event_id: UUID,
    medication_service: MedicationService = Depends(),
    current_member: Member = Depends(login_required)
) -> Any:
    """
    Get the medication management record of a calendar event.

    **Authorization**: Owner of the calendar event.
    """
    try:
        logger.info(f"get_medication request: event_id={event_id}")
        medication = medication_service.get_medication(current_member, event_id)
        return DataResponse().success_response(data=medication)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"get_medication error: {str(e)}", exc_info=True)
        raise CustomException(http_code=500, code='500', message=str(e))


@router.put('/{event_id}', response_model=DataResponse[MedicationManagementResponse])
def update_medication(
    event_id: UUID,
    request: MedicationManagementRequest,
    medication_service: MedicationService = Depends(),
    current_member: Member = Depends(login_required)
) -> Any:
    """
    Replace the medication management record of a calendar event.

    **Authorization**: Owner of the calendar event.

    **Process**: Fields are overwritten and the existing drugs and timings are replaced by the request lists.
    """
    try:
        logger.info(f"update_medication request: event_id={event_id}")
        medication = medication_service.update_medication(current_member, event_id, request)
        logger.info(f"update_medication success: medication_id={medication.medication_id}")
        return DataResponse().success_response(data=medication)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"update_medication error: {str(e)}", exc_info=True)
        raise CustomException(http_code=500, code='500', message=str(e))


@router.delete('/{event_id}', response_model=DataResponse[None])
def delete_medication(
    event_id: UUID,
    medication_service: MedicationService = Depends(),
    current_member: Member = Depends(login_required)
) -> Any:
    """
    Delete the medication management record of a calendar event together with its drugs and timings.

    **Authorization**: Owner of the calendar event.
    """
    try:
        logger.info(f"delete_medication request: event_id={event_id}")
        medication_service.delete_medication(current_member, event_id)
        logger.info(f"delete_medication success: event_id={event_id}")
        return DataResponse().success_response()
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"delete_medication error: {str(e)}", exc_info=True)
        raise CustomException(http_code=500, code='500', message=str(e))
