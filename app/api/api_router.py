from fastapi import APIRouter

from app.api import api_medication, api_medical_result

router = APIRouter()

router.include_router(api_medication.router, tags=["medication-management"], prefix="/medication-management")
router.include_router(api_medical_result.router, tags=["medical-result"], prefix="/medical-results")
