"""
Error codes surfaced to API clients.

Each member carries the HTTP status, the machine readable code and a
default message. Services raise them through BusinessException.
"""
import enum


class ErrorCode(enum.Enum):

    def __init__(self, http_code: int, code: str, message: str):
        self.http_code = http_code
        self.code = code
        self.message = message


class GeneralErrorCode(ErrorCode):
    INVALID_INPUT_VALUE = (400, 'INVALID_INPUT_VALUE', 'Invalid input value')
    MEMBER_NOT_FOUND = (404, 'MEMBER_NOT_FOUND', 'Member not found')


class CalendarErrorCode(ErrorCode):
    CALENDAR_EVENT_NOT_FOUND = (404, 'CALENDAR_EVENT_NOT_FOUND', 'Calendar event not found')
    ACCESS_DENIED = (403, 'ACCESS_DENIED', 'Access to this calendar event is denied')
    EVENT_TYPE_INVALID = (400, 'EVENT_TYPE_INVALID', 'Calendar event type does not match this record')


class MedicationErrorCode(ErrorCode):
    MEDICATION_NOT_FOUND = (404, 'MEDICATION_NOT_FOUND', 'Medication management not found')
    FAMILY_NOT_FOUND = (404, 'FAMILY_NOT_FOUND', 'Family not found')
    INVALID_DATE_RANGE = (400, 'INVALID_DATE_RANGE', 'Start date must not be after end date')
    DRUG_LIST_EMPTY = (400, 'DRUG_LIST_EMPTY', 'At least one drug is required')
    TIMING_LIST_EMPTY = (400, 'TIMING_LIST_EMPTY', 'At least one medication timing is required')
    MEDICATION_ALREADY_EXISTS = (409, 'MEDICATION_ALREADY_EXISTS', 'Medication management already exists for this event')
    DATABASE_ERROR = (500, 'DATABASE_ERROR', 'Database error occurred')


class MedicalResultErrorCode(ErrorCode):
    MEDICAL_RESULT_NOT_FOUND = (404, 'MEDICAL_RESULT_NOT_FOUND', 'Medical result not found')
    FAMILY_NOT_FOUND = (404, 'FAMILY_NOT_FOUND', 'Family not found')
    MEDICAL_RESULT_ALREADY_EXISTS = (409, 'MEDICAL_RESULT_ALREADY_EXISTS', 'Medical result already exists for this event')
    DATABASE_ERROR = (500, 'DATABASE_ERROR', 'Database error occurred')
