"""
Tests for MedicationService: aggregate lifecycle, ownership checks,
validation order and the family view.
"""
from datetime import date
from uuid import uuid4

import pytest

from app.helpers.enums import CalendarEventType, MedicationTimingType
from app.helpers.error_codes import CalendarErrorCode, MedicationErrorCode
from app.helpers.exception_handler import BusinessException
from app.models import MedicationManagement, MedicationDrug, MedicationTiming
from app.schemas.sche_medication import MedicationManagementRequest


def _request(payload: dict) -> MedicationManagementRequest:
    return MedicationManagementRequest(**payload)


def _count(db_session, model) -> int:
    return db_session.query(model).count()


class TestCreateMedication:

    def test_create_returns_projection(self, medication_service, member, make_event, medication_payload):
        calendar_event = make_event(member)

        response = medication_service.create_medication(member, calendar_event.event_id, _request(medication_payload()))

        assert response.event_id == calendar_event.event_id
        assert response.disease_name == 'Headache'
        assert response.verify_id == 'minji-verify'
        assert response.title == 'Cold medicine'
        assert response.is_public is True
        assert response.start_date == date(2024, 1, 1)
        assert response.end_date == date(2024, 1, 10)
        assert len(response.drugs) == 1
        assert response.drugs[0].drug_name == 'Aspirin'
        assert response.drugs[0].dosage == '100mg'
        assert len(response.timings) == 1
        assert response.timings[0].timing_type == MedicationTimingType.MORNING
        assert response.timings[0].timing_description == 'Morning'
        assert response.timings[0].precaution == 'after meal'

    def test_create_persists_children_in_input_order(self, db_session, medication_service, member, make_event,
                                                     medication_payload):
        calendar_event = make_event(member)
        payload = medication_payload(
            drugs=[
                {'drug_name': 'Aspirin', 'dosage': '100mg'},
                {'drug_name': 'Ibuprofen', 'dosage': '200mg'},
                {'drug_name': 'Vitamin C', 'dosage': '500mg'},
            ],
            timings=[
                {'timing_type': 'MORNING', 'precaution': None},
                {'timing_type': 'BEDTIME', 'precaution': 'with water'},
            ],
        )

        response = medication_service.create_medication(member, calendar_event.event_id, _request(payload))

        assert [d.drug_name for d in response.drugs] == ['Aspirin', 'Ibuprofen', 'Vitamin C']
        assert [t.timing_type for t in response.timings] == [MedicationTimingType.MORNING, MedicationTimingType.BEDTIME]
        assert _count(db_session, MedicationDrug) == 3
        assert _count(db_session, MedicationTiming) == 2
        stored = db_session.query(MedicationManagement).one()
        assert stored.end_date >= stored.start_date
        assert [d.drug_name for d in stored.drugs] == ['Aspirin', 'Ibuprofen', 'Vitamin C']

    def test_second_create_for_same_event_fails(self, db_session, medication_service, member, make_event,
                                                medication_payload):
        calendar_event = make_event(member)
        medication_service.create_medication(member, calendar_event.event_id, _request(medication_payload()))

        with pytest.raises(BusinessException) as exc_info:
            medication_service.create_medication(member, calendar_event.event_id, _request(medication_payload()))

        assert exc_info.value.error_code == MedicationErrorCode.MEDICATION_ALREADY_EXISTS
        assert exc_info.value.http_code == 409
        assert _count(db_session, MedicationManagement) == 1

    def test_concurrent_create_reported_as_already_exists(self, db_session, medication_service, member, make_event,
                                                          medication_payload, monkeypatch):
        calendar_event = make_event(member)
        medication_service.create_medication(member, calendar_event.event_id, _request(medication_payload()))
        # The existence check passes as if the other create had not committed yet.
        monkeypatch.setattr(medication_service.medication_repo, 'get_by_event_id', lambda event_id: None)

        with pytest.raises(BusinessException) as exc_info:
            medication_service.create_medication(member, calendar_event.event_id, _request(medication_payload()))

        assert exc_info.value.error_code == MedicationErrorCode.MEDICATION_ALREADY_EXISTS
        assert _count(db_session, MedicationManagement) == 1
        assert _count(db_session, MedicationDrug) == 1

    def test_invalid_date_range_persists_nothing(self, db_session, medication_service, member, make_event,
                                                 medication_payload):
        calendar_event = make_event(member)
        payload = medication_payload(start_date=date(2024, 5, 10), end_date=date(2024, 5, 1))

        with pytest.raises(BusinessException) as exc_info:
            medication_service.create_medication(member, calendar_event.event_id, _request(payload))

        assert exc_info.value.error_code == MedicationErrorCode.INVALID_DATE_RANGE
        assert _count(db_session, MedicationManagement) == 0

    def test_same_start_and_end_date_is_valid(self, medication_service, member, make_event, medication_payload):
        calendar_event = make_event(member)
        payload = medication_payload(start_date=date(2024, 3, 3), end_date=date(2024, 3, 3))

        response = medication_service.create_medication(member, calendar_event.event_id, _request(payload))

        assert response.start_date == response.end_date

    @pytest.mark.parametrize('drugs', [[], None])
    def test_empty_drug_list_persists_nothing(self, db_session, medication_service, member, make_event,
                                              medication_payload, drugs):
        calendar_event = make_event(member)

        with pytest.raises(BusinessException) as exc_info:
            medication_service.create_medication(member, calendar_event.event_id,
                                                 _request(medication_payload(drugs=drugs)))

        assert exc_info.value.error_code == MedicationErrorCode.DRUG_LIST_EMPTY
        assert _count(db_session, MedicationManagement) == 0
        assert _count(db_session, MedicationDrug) == 0

    def test_empty_timing_list_fails(self, db_session, medication_service, member, make_event, medication_payload):
        calendar_event = make_event(member)

        with pytest.raises(BusinessException) as exc_info:
            medication_service.create_medication(member, calendar_event.event_id,
                                                 _request(medication_payload(timings=[])))

        assert exc_info.value.error_code == MedicationErrorCode.TIMING_LIST_EMPTY
        assert _count(db_session, MedicationManagement) == 0

    def test_date_range_checked_before_drug_list(self, medication_service, member, make_event, medication_payload):
        calendar_event = make_event(member)
        payload = medication_payload(start_date=date(2024, 5, 10), end_date=date(2024, 5, 1), drugs=[])

        with pytest.raises(BusinessException) as exc_info:
            medication_service.create_medication(member, calendar_event.event_id, _request(payload))

        assert exc_info.value.error_code == MedicationErrorCode.INVALID_DATE_RANGE

    def test_unknown_event(self, medication_service, member, medication_payload):
        with pytest.raises(BusinessException) as exc_info:
            medication_service.create_medication(member, uuid4(), _request(medication_payload()))

        assert exc_info.value.error_code == CalendarErrorCode.CALENDAR_EVENT_NOT_FOUND
        assert exc_info.value.http_code == 404

    def test_event_of_another_member(self, db_session, medication_service, member, sibling, make_event,
                                     medication_payload):
        calendar_event = make_event(sibling)

        with pytest.raises(BusinessException) as exc_info:
            medication_service.create_medication(member, calendar_event.event_id, _request(medication_payload()))

        assert exc_info.value.error_code == CalendarErrorCode.ACCESS_DENIED
        assert _count(db_session, MedicationManagement) == 0

    def test_event_with_wrong_category(self, medication_service, member, make_event, medication_payload):
        calendar_event = make_event(member, event_type=CalendarEventType.MEDICAL_RESULT)

        with pytest.raises(BusinessException) as exc_info:
            medication_service.create_medication(member, calendar_event.event_id, _request(medication_payload()))

        assert exc_info.value.error_code == CalendarErrorCode.EVENT_TYPE_INVALID

    def test_unexpected_failure_reported_as_database_error(self, db_session, medication_service, member, make_event,
                                                           medication_payload, monkeypatch):
        calendar_event = make_event(member)

        def _broken_save(medication):
            raise RuntimeError('connection lost')

        monkeypatch.setattr(medication_service.medication_repo, 'save', _broken_save)

        with pytest.raises(BusinessException) as exc_info:
            medication_service.create_medication(member, calendar_event.event_id, _request(medication_payload()))

        assert exc_info.value.error_code == MedicationErrorCode.DATABASE_ERROR
        assert exc_info.value.http_code == 500
        assert 'connection lost' not in exc_info.value.message
        assert _count(db_session, MedicationManagement) == 0


class TestReadMedication:

    def test_get_existing(self, medication_service, member, make_event, medication_payload):
        calendar_event = make_event(member)
        created = medication_service.create_medication(member, calendar_event.event_id, _request(medication_payload()))

        response = medication_service.get_medication(member, calendar_event.event_id)

        assert response == created

    def test_get_missing(self, medication_service, member, make_event):
        calendar_event = make_event(member)

        with pytest.raises(BusinessException) as exc_info:
            medication_service.get_medication(member, calendar_event.event_id)

        assert exc_info.value.error_code == MedicationErrorCode.MEDICATION_NOT_FOUND

    def test_get_on_event_of_another_member(self, medication_service, member, sibling, make_event, medication_payload):
        calendar_event = make_event(sibling)
        medication_service.create_medication(sibling, calendar_event.event_id, _request(medication_payload()))

        with pytest.raises(BusinessException) as exc_info:
            medication_service.get_medication(member, calendar_event.event_id)

        assert exc_info.value.error_code == CalendarErrorCode.ACCESS_DENIED

    def test_get_my_medications_latest_first(self, medication_service, member, sibling, make_event,
                                             medication_payload):
        older = make_event(member, title='Older')
        newer = make_event(member, title='Newer')
        other = make_event(sibling, title='Not mine')
        medication_service.create_medication(member, older.event_id, _request(medication_payload(
            disease_name='Cold', start_date=date(2023, 11, 1), end_date=date(2023, 11, 5))))
        medication_service.create_medication(member, newer.event_id, _request(medication_payload(
            disease_name='Allergy', start_date=date(2024, 4, 1), end_date=date(2024, 4, 30))))
        medication_service.create_medication(sibling, other.event_id, _request(medication_payload()))

        responses = medication_service.get_my_medications(member)

        assert [r.disease_name for r in responses] == ['Allergy', 'Cold']
        assert all(r.verify_id == 'minji-verify' for r in responses)

    def test_get_my_medications_empty(self, medication_service, member):
        assert medication_service.get_my_medications(member) == []


class TestUpdateMedication:

    def test_update_replaces_fields_and_children(self, db_session, medication_service, member, make_event,
                                                 medication_payload):
        calendar_event = make_event(member)
        medication_service.create_medication(member, calendar_event.event_id, _request(medication_payload(
            drugs=[{'drug_name': 'Aspirin', 'dosage': '100mg'}, {'drug_name': 'Tylenol', 'dosage': '500mg'}])))

        update = medication_payload(
            disease_name='Migraine',
            end_date=date(2024, 1, 20),
            is_public=False,
            drugs=[{'drug_name': 'Sumatriptan', 'dosage': '50mg'}],
            timings=[{'timing_type': 'EVENING', 'precaution': None}, {'timing_type': 'AS_NEEDED', 'precaution': 'max 2'}],
        )
        response = medication_service.update_medication(member, calendar_event.event_id, _request(update))

        assert response.disease_name == 'Migraine'
        assert response.end_date == date(2024, 1, 20)
        assert response.is_public is False
        assert [d.drug_name for d in response.drugs] == ['Sumatriptan']
        assert [t.timing_description for t in response.timings] == ['Evening', 'As needed']
        assert _count(db_session, MedicationDrug) == 1
        assert _count(db_session, MedicationTiming) == 2

    def test_update_twice_yields_same_state(self, db_session, medication_service, member, make_event,
                                            medication_payload):
        calendar_event = make_event(member)
        medication_service.create_medication(member, calendar_event.event_id, _request(medication_payload()))
        update = _request(medication_payload(
            drugs=[{'drug_name': 'Aspirin', 'dosage': '100mg'}, {'drug_name': 'Zinc', 'dosage': '10mg'}]))

        first = medication_service.update_medication(member, calendar_event.event_id, update)
        second = medication_service.update_medication(member, calendar_event.event_id, update)

        def _visible(response):
            return (
                response.disease_name, response.start_date, response.end_date, response.is_public,
                [(d.drug_name, d.dosage) for d in response.drugs],
                [(t.timing_type, t.precaution) for t in response.timings],
            )

        assert _visible(first) == _visible(second)
        assert _count(db_session, MedicationDrug) == 2
        assert _count(db_session, MedicationTiming) == 1

    def test_update_validates_request(self, db_session, medication_service, member, make_event, medication_payload):
        calendar_event = make_event(member)
        medication_service.create_medication(member, calendar_event.event_id, _request(medication_payload()))

        with pytest.raises(BusinessException) as exc_info:
            medication_service.update_medication(member, calendar_event.event_id,
                                                 _request(medication_payload(disease_name='Changed', timings=[])))

        assert exc_info.value.error_code == MedicationErrorCode.TIMING_LIST_EMPTY
        stored = db_session.query(MedicationManagement).one()
        assert stored.disease_name == 'Headache'
        assert len(stored.timings) == 1

    def test_update_missing(self, medication_service, member, make_event, medication_payload):
        calendar_event = make_event(member)

        with pytest.raises(BusinessException) as exc_info:
            medication_service.update_medication(member, calendar_event.event_id, _request(medication_payload()))

        assert exc_info.value.error_code == MedicationErrorCode.MEDICATION_NOT_FOUND

    def test_update_on_event_of_another_member(self, medication_service, member, sibling, make_event,
                                               medication_payload):
        calendar_event = make_event(sibling)
        medication_service.create_medication(sibling, calendar_event.event_id, _request(medication_payload()))

        with pytest.raises(BusinessException) as exc_info:
            medication_service.update_medication(member, calendar_event.event_id, _request(medication_payload()))

        assert exc_info.value.error_code == CalendarErrorCode.ACCESS_DENIED


class TestDeleteMedication:

    def test_delete_removes_children(self, db_session, medication_service, member, make_event, medication_payload):
        calendar_event = make_event(member)
        created = medication_service.create_medication(member, calendar_event.event_id, _request(medication_payload(
            drugs=[{'drug_name': 'Aspirin', 'dosage': '100mg'}, {'drug_name': 'Zinc', 'dosage': '10mg'}])))

        medication_service.delete_medication(member, calendar_event.event_id)

        assert _count(db_session, MedicationManagement) == 0
        for drug in created.drugs:
            assert db_session.query(MedicationDrug).filter(MedicationDrug.drug_id == drug.drug_id).first() is None
        for timing in created.timings:
            assert db_session.query(MedicationTiming).filter(MedicationTiming.timing_id == timing.timing_id).first() is None
        with pytest.raises(BusinessException) as exc_info:
            medication_service.get_medication(member, calendar_event.event_id)
        assert exc_info.value.error_code == MedicationErrorCode.MEDICATION_NOT_FOUND

    def test_delete_on_event_of_another_member(self, db_session, medication_service, member, sibling, make_event,
                                               medication_payload):
        calendar_event = make_event(sibling)
        medication_service.create_medication(sibling, calendar_event.event_id, _request(medication_payload()))

        with pytest.raises(BusinessException) as exc_info:
            medication_service.delete_medication(member, calendar_event.event_id)

        assert exc_info.value.error_code == CalendarErrorCode.ACCESS_DENIED
        assert _count(db_session, MedicationManagement) == 1

    def test_delete_missing(self, medication_service, member, make_event):
        calendar_event = make_event(member)

        with pytest.raises(BusinessException) as exc_info:
            medication_service.delete_medication(member, calendar_event.event_id)

        assert exc_info.value.error_code == MedicationErrorCode.MEDICATION_NOT_FOUND


class TestFamilyMedications:

    def test_only_public_records_of_other_members(self, medication_service, member, sibling, outsider, make_event,
                                                  medication_payload):
        own_event = make_event(member)
        public_event = make_event(sibling, title='Public one')
        private_event = make_event(sibling, title='Private one')
        outsider_event = make_event(outsider)
        medication_service.create_medication(member, own_event.event_id, _request(medication_payload()))
        medication_service.create_medication(sibling, public_event.event_id, _request(medication_payload(
            disease_name='Asthma', is_public=True)))
        medication_service.create_medication(sibling, private_event.event_id, _request(medication_payload(
            disease_name='Secret', is_public=False)))
        medication_service.create_medication(outsider, outsider_event.event_id, _request(medication_payload()))

        responses = medication_service.get_family_medications(member)

        assert len(responses) == 1
        response = responses[0]
        assert response.disease_name == 'Asthma'
        assert response.member_name == 'Jisoo'
        assert response.title == 'Public one'
        assert response.event_id == public_event.event_id
        assert len(response.drugs) == 1
        assert not hasattr(response, 'is_public')
        assert not hasattr(response, 'verify_id')

    def test_family_without_shared_records(self, medication_service, member, sibling):
        assert medication_service.get_family_medications(member) == []

    def test_member_without_family(self, medication_service, outsider):
        with pytest.raises(BusinessException) as exc_info:
            medication_service.get_family_medications(outsider)

        assert exc_info.value.error_code == MedicationErrorCode.FAMILY_NOT_FOUND
        assert exc_info.value.http_code == 404
