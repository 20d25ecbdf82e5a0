import logging
from typing import Any, List
from uuid import UUID
from fastapi import APIRouter, Depends

from app.helpers.exception_handler import CustomException
from app.helpers.login_manager import login_required
from app.models.model_member import Member
from app.schemas.sche_base import DataResponse
from app.schemas.sche_medical_result import (
    MedicalResultRequest,
    MedicalResultResponse,
    FamilyMedicalResultResponse
)
from app.services.srv_medical_result import MedicalResultService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get('/family', response_model=DataResponse[List[FamilyMedicalResultResponse]])
def get_family_medical_results(
    medical_result_service: MedicalResultService = Depends(),
    current_member: Member = Depends(login_required)
) -> Any:
    """
    List the public medical results of the other members of the current member's family.
    """
    try:
        results = medical_result_service.get_family_medical_results(current_member)
        return DataResponse().success_response(data=results)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"get_family_medical_results error: {str(e)}", exc_info=True)
        raise CustomException(http_code=500, code='500', message=str(e))


@router.post('/{event_id}', response_model=DataResponse[MedicalResultResponse])
def create_medical_result(
    event_id: UUID,
    request: MedicalResultRequest,
    medical_result_service: MedicalResultService = Depends(),
    current_member: Member = Depends(login_required)
) -> Any:
    """
    Register the medical result of a MEDICAL_RESULT calendar event.
    """
    try:
        logger.info(f"create_medical_result request: event_id={event_id}")
        result = medical_result_service.create_medical_result(current_member, event_id, request)
        return DataResponse().success_response(data=result)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"create_medical_result error: {str(e)}", exc_info=True)
        raise CustomException(http_code=500, code='500', message=str(e))


@router.get('/{event_id}', response_model=DataResponse[MedicalResultResponse])
def get_medical_result(
    event_id: UUID,
    medical_result_service: MedicalResultService = Depends(),
    current_member: Member = Depends(login_required)
) -> Any:
    try:
        result = medical_result_service.get_medical_result(current_member, event_id)
        return DataResponse().success_response(data=result)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"get_medical_result error: {str(e)}", exc_info=True)
        raise CustomException(http_code=500, code='500', message=str(e))


@router.put('/{event_id}', response_model=DataResponse[MedicalResultResponse])
def update_medical_result(
    event_id: UUID,
    request: MedicalResultRequest,
    medical_result_service: MedicalResultService = Depends(),
    current_member: Member = Depends(login_required)
) -> Any:
    try:
        logger.info(f"update_medical_result request: event_id={event_id}")
        result = medical_result_service.update_medical_result(current_member, event_id, request)
        return DataResponse().success_response(data=result)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"update_medical_result error: {str(e)}", exc_info=True)
        raise CustomException(http_code=500, code='500', message=str(e))


@router.delete('/{event_id}', response_model=DataResponse[None])
def delete_medical_result(
    event_id: UUID,
    medical_result_service: MedicalResultService = Depends(),
    current_member: Member = Depends(login_required)
) -> Any:
    try:
        logger.info(f"delete_medical_result request: event_id={event_id}")
        medical_result_service.delete_medical_result(current_member, event_id)
        return DataResponse().success_response()
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"delete_medical_result error: {str(e)}", exc_info=True)
        raise CustomException(http_code=500, code='500', message=str(e))
