"""
Repository for the medication management aggregate.
The root row owns its drug and timing rows; they are written and removed
through the root only.
"""
import logging
from typing import Optional, List
from uuid import UUID
from fastapi import Depends
from sqlalchemy.orm import Session
from app.db.base import get_db
from app.models.model_medication import MedicationManagement

logger = logging.getLogger(__name__)


class MedicationRepository:
    """Repository for MedicationManagement entity."""

    def __init__(self, db_session: Session = Depends(get_db)):
        self.db = db_session

    def get_by_event_id(self, event_id: UUID) -> Optional[MedicationManagement]:
        return self.db.query(MedicationManagement).filter(MedicationManagement.event_id == event_id).first()

    def get_by_member_id(self, member_id: UUID) -> List[MedicationManagement]:
        """
        Get all medication records of a member, latest treatment first.

        Args:
            member_id: Owning member UUID.

        Returns:
            MedicationManagement list ordered by start_date descending.
        """
        return self.db.query(MedicationManagement).filter(
            MedicationManagement.member_id == member_id
        ).order_by(MedicationManagement.start_date.desc()).all()

    def get_by_member_id_and_public(self, member_id: UUID, is_public: bool) -> List[MedicationManagement]:
        return self.db.query(MedicationManagement).filter(
            MedicationManagement.member_id == member_id,
            MedicationManagement.is_public == is_public
        ).order_by(MedicationManagement.start_date.desc()).all()

    def save(self, medication: MedicationManagement) -> MedicationManagement:
        """
        Stage the aggregate and flush it so generated ids are available.
        Commit is left to the caller's transaction.
        """
        self.db.add(medication)
        self.db.flush()
        logger.info(f"Saved medication management: {medication.medication_id}")
        return medication

    def delete(self, medication: MedicationManagement) -> None:
        self.db.delete(medication)
        self.db.flush()
        logger.info(f"Deleted medication management: {medication.medication_id}")
