"""
Shared fixtures.

Each test gets its own in-memory SQLite database. Services are wired with
an explicit session; the API client overrides get_db with the same session
and authenticates with real bearer tokens.
"""
import os

os.environ.setdefault('SECRET_KEY', 'test-secret-key-for-family-health-backend-0123456789')
os.environ.setdefault('SQL_DATABASE_URL', 'sqlite://')

from datetime import date, datetime  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy import create_engine, event  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.core.security import create_access_token  # noqa: E402
from app.helpers.enums import CalendarEventType  # noqa: E402
from app.models import Base, Family, Member, CalendarEvent  # noqa: E402
from app.repository.repo_calendar_event import CalendarEventRepository  # noqa: E402
from app.repository.repo_medical_result import MedicalResultRepository  # noqa: E402
from app.repository.repo_medication import MedicationRepository  # noqa: E402
from app.repository.repo_member import MemberRepository  # noqa: E402
from app.services.srv_calendar_event import CalendarEventService  # noqa: E402
from app.services.srv_medical_result import MedicalResultService  # noqa: E402
from app.services.srv_medication import MedicationService  # noqa: E402


@pytest.fixture
def engine():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, 'connect')
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute('PRAGMA foreign_keys=ON')
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    session = Session(bind=engine)
    yield session
    session.close()


# =============================================================================
# DOMAIN FIXTURES
# =============================================================================


@pytest.fixture
def family(db_session):
    family = Family(name='Kim family')
    db_session.add(family)
    db_session.commit()
    return family


@pytest.fixture
def make_member(db_session):
    def _make(username: str, family: Family = None) -> Member:
        member = Member(
            username=username,
            verify_id=f'{username.lower()}-verify',
            email=f'{username.lower()}@example.com',
            family_id=family.family_id if family else None,
        )
        db_session.add(member)
        db_session.commit()
        return member
    return _make


@pytest.fixture
def member(make_member, family):
    return make_member('Minji', family)


@pytest.fixture
def sibling(make_member, family):
    return make_member('Jisoo', family)


@pytest.fixture
def outsider(make_member):
    return make_member('Outsider')


@pytest.fixture
def make_event(db_session):
    def _make(owner: Member, event_type: CalendarEventType = CalendarEventType.MEDICATION,
              title: str = 'Cold medicine') -> CalendarEvent:
        calendar_event = CalendarEvent(
            member_id=owner.member_id,
            event_type=event_type.value,
            title=title,
            start_date=datetime(2024, 1, 1, 9, 0),
            end_date=datetime(2024, 1, 10, 9, 0),
        )
        db_session.add(calendar_event)
        db_session.commit()
        return calendar_event
    return _make


@pytest.fixture
def medication_payload():
    def _build(**overrides) -> dict:
        payload = {
            'disease_name': 'Headache',
            'start_date': date(2024, 1, 1),
            'end_date': date(2024, 1, 10),
            'is_public': True,
            'drugs': [{'drug_name': 'Aspirin', 'dosage': '100mg'}],
            'timings': [{'timing_type': 'MORNING', 'precaution': 'after meal'}],
        }
        payload.update(overrides)
        return payload
    return _build


@pytest.fixture
def medical_result_payload():
    def _build(**overrides) -> dict:
        payload = {
            'hospital_name': 'Seoul Clinic',
            'doctor_name': 'Dr. Park',
            'diagnosis': 'Seasonal flu',
            'treatment': 'Rest and fluids',
            'memo': 'Follow up in a week',
            'visit_date': date(2024, 2, 3),
            'is_public': True,
        }
        payload.update(overrides)
        return payload
    return _build


# =============================================================================
# SERVICES AND CLIENT
# =============================================================================


@pytest.fixture
def calendar_service(db_session):
    return CalendarEventService(calendar_repo=CalendarEventRepository(db_session))


@pytest.fixture
def medication_service(db_session, calendar_service):
    return MedicationService(
        db_session=db_session,
        medication_repo=MedicationRepository(db_session),
        member_repo=MemberRepository(db_session),
        calendar_service=calendar_service,
    )


@pytest.fixture
def medical_result_service(db_session, calendar_service):
    return MedicalResultService(
        db_session=db_session,
        medical_result_repo=MedicalResultRepository(db_session),
        member_repo=MemberRepository(db_session),
        calendar_service=calendar_service,
    )


@pytest.fixture
def client(db_session):
    from fastapi.testclient import TestClient

    from app.db.base import get_db
    from app.main import app

    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _headers(member: Member) -> dict:
        return {'Authorization': f'Bearer {create_access_token(member.member_id)}'}
    return _headers
