import itertools
import os
from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

os.environ.setdefault('DATABASE_URL', 'sqlite:///:memory:')

from clinic.database import Base  # noqa: E402
from clinic.models.admin import Admin  # noqa: E402
from clinic.models.appointment import Appointment  # noqa: E402
from clinic.models.appointment_status import AppointmentStatus  # noqa: E402
from clinic.models.doctor import Doctor  # noqa: E402
from clinic.models.patient import Patient  # noqa: E402

_ids = itertools.count(1)


@pytest.fixture
def db():
    engine = create_engine('sqlite:///:memory:')
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def make_doctor(db):
    def _make_doctor(
        name: str = 'Jane Smith',
        specialty: str = 'Cardiology',
        available_times: list[str] | None = None,
        password: str = 'secret-pass',
    ) -> Doctor:
        doctor = Doctor(
            name=name,
            email=f'doctor{next(_ids)}@clinic.com',
            specialty=specialty,
            phone='5550100',
            available_times=['09:00', '10:00', '14:00'] if available_times is None else available_times,
        )
        doctor.set_password(password)
        db.add(doctor)
        db.commit()
        db.refresh(doctor)
        return doctor

    return _make_doctor


@pytest.fixture
def make_patient(db):
    def _make_patient(name: str = 'Alex Doe', password: str = 'secret-pass') -> Patient:
        patient = Patient(
            name=name,
            email=f'patient{next(_ids)}@example.com',
            phone='5550199',
            address='1 Main Street',
        )
        patient.set_password(password)
        db.add(patient)
        db.commit()
        db.refresh(patient)
        return patient

    return _make_patient


@pytest.fixture
def make_admin(db):
    def _make_admin(username: str = 'admin', password: str = 'secret-pass') -> Admin:
        admin = Admin(username=username)
        admin.set_password(password)
        db.add(admin)
        db.commit()
        db.refresh(admin)
        return admin

    return _make_admin


@pytest.fixture
def make_appointment(db):
    def _make_appointment(
        doctor: Doctor,
        patient: Patient,
        appointment_time: datetime,
        status: AppointmentStatus = AppointmentStatus.FUTURE,
    ) -> Appointment:
        appointment = Appointment(
            doctor_id=doctor.id,
            patient_id=patient.id,
            appointment_time=appointment_time,
            status=status.value,
        )
        db.add(appointment)
        db.commit()
        db.refresh(appointment)
        return appointment

    return _make_appointment
