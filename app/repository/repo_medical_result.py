import logging
from typing import Optional, List
from uuid import UUID
from fastapi import Depends
from sqlalchemy.orm import Session
from app.db.base import get_db
from app.models.model_medical_result import MedicalResult

logger = logging.getLogger(__name__)


class MedicalResultRepository:
    def __init__(self, db_session: Session = Depends(get_db)):
        self.db = db_session

    def get_by_event_id(self, event_id: UUID) -> Optional[MedicalResult]:
        return self.db.query(MedicalResult).filter(MedicalResult.event_id == event_id).first()

    def get_by_member_id_and_public(self, member_id: UUID, is_public: bool) -> List[MedicalResult]:
        return self.db.query(MedicalResult).filter(
            MedicalResult.member_id == member_id,
            MedicalResult.is_public == is_public
        ).order_by(MedicalResult.visit_date.desc()).all()

    def save(self, medical_result: MedicalResult) -> MedicalResult:
        self.db.add(medical_result)
        self.db.flush()
        logger.info(f"Saved medical result: {medical_result.medical_result_id}")
        return medical_result

    def delete(self, medical_result: MedicalResult) -> None:
        self.db.delete(medical_result)
        self.db.flush()
        logger.info(f"Deleted medical result: {medical_result.medical_result_id}")
