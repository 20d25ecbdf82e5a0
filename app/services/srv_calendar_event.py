import logging
from uuid import UUID
from fastapi import Depends

from app.helpers.enums import CalendarEventType
from app.helpers.error_codes import CalendarErrorCode
from app.helpers.exception_handler import BusinessException
from app.models.model_calendar_event import CalendarEvent
from app.models.model_member import Member
from app.repository.repo_calendar_event import CalendarEventRepository

logger = logging.getLogger(__name__)


class CalendarEventService:
    """Lookup of the calendar event that owns a health record."""

    def __init__(self, calendar_repo: CalendarEventRepository = Depends()):
        self.calendar_repo = calendar_repo

    def find_event_and_validate(self, event_id: UUID, current_member: Member) -> CalendarEvent:
        """
        Load a calendar event and check that it belongs to the current member.

        Args:
            event_id: Calendar event UUID.
            current_member: Authenticated member.

        Returns:
            The calendar event.
        """
        calendar_event = self.calendar_repo.get_by_id(event_id)
        if not calendar_event:
            raise BusinessException(CalendarErrorCode.CALENDAR_EVENT_NOT_FOUND)

        if calendar_event.member_id != current_member.member_id:
            logger.warning(f"Member {current_member.member_id} tried to access event {event_id}")
            raise BusinessException(CalendarErrorCode.ACCESS_DENIED)
        return calendar_event

    @staticmethod
    def validate_event_type(calendar_event: CalendarEvent, expected_type: CalendarEventType) -> None:
        if calendar_event.event_type != expected_type.value:
            raise BusinessException(CalendarErrorCode.EVENT_TYPE_INVALID)
