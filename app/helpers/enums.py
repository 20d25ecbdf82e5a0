import enum


class CalendarEventType(enum.Enum):
    MEDICATION = 'MEDICATION'
    MEDICAL_RESULT = 'MEDICAL_RESULT'
    GENERAL = 'GENERAL'


class MedicationTimingType(enum.Enum):
    MORNING = 'MORNING'
    LUNCH = 'LUNCH'
    EVENING = 'EVENING'
    BEDTIME = 'BEDTIME'
    AS_NEEDED = 'AS_NEEDED'

    @property
    def description(self) -> str:
        return _TIMING_DESCRIPTIONS[self]


_TIMING_DESCRIPTIONS = {
    MedicationTimingType.MORNING: 'Morning',
    MedicationTimingType.LUNCH: 'Lunch',
    MedicationTimingType.EVENING: 'Evening',
    MedicationTimingType.BEDTIME: 'Before bed',
    MedicationTimingType.AS_NEEDED: 'As needed',
}
