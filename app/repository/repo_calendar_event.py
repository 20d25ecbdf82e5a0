from typing import Optional
from uuid import UUID
from fastapi import Depends
from sqlalchemy.orm import Session
from app.db.base import get_db
from app.models.model_calendar_event import CalendarEvent

class CalendarEventRepository:
    def __init__(self, db_session: Session = Depends(get_db)):
        self.db = db_session

    def get_by_id(self, event_id: UUID) -> Optional[CalendarEvent]:
        return self.db.query(CalendarEvent).filter(CalendarEvent.event_id == event_id).first()
