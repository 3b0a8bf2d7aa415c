from datetime import datetime

import pytest

from clinic.models.appointment import Appointment
from clinic.models.roles import Role
from clinic.repositories import doctors as doctor_store
from clinic.services import accounts
from clinic.services.exceptions import DoctorNotFoundError, DuplicateAccountError


def _create_doctor(db, email: str = 'house@clinic.com'):
    return accounts.create_doctor(
        db,
        name='Greg House',
        email=email,
        password='vicodin1',
        specialty='Diagnostics',
        phone='5550111',
        available_times=['10:00', '09:00'],
    )


def test_create_doctor_keeps_slot_order_and_hashes_password(db) -> None:
    doctor = _create_doctor(db)

    assert doctor.available_times == ['10:00', '09:00']
    assert doctor.hashed_password != 'vicodin1'
    assert doctor.check_password('vicodin1')


def test_create_doctor_rejects_duplicate_email(db) -> None:
    _create_doctor(db)

    with pytest.raises(DuplicateAccountError):
        _create_doctor(db)


def test_update_doctor_replaces_slots(db) -> None:
    doctor = _create_doctor(db)

    updated = accounts.update_doctor(
        db,
        doctor.id,
        name='Gregory House',
        email='house@clinic.com',
        specialty='Diagnostics',
        available_times=['15:00'],
    )

    assert updated.name == 'Gregory House'
    assert updated.available_times == ['15:00']
    assert updated.check_password('vicodin1')


def test_update_missing_doctor(db) -> None:
    with pytest.raises(DoctorNotFoundError):
        accounts.update_doctor(db, 77, name='x', email='x@clinic.com', specialty='x')


def test_update_doctor_rejects_email_of_another_doctor(db) -> None:
    doctor = _create_doctor(db)
    _create_doctor(db, email='wilson@clinic.com')

    with pytest.raises(DuplicateAccountError):
        accounts.update_doctor(db, doctor.id, name='x', email='wilson@clinic.com', specialty='x')


def test_delete_doctor_removes_their_appointments(db, make_patient, make_appointment) -> None:
    doctor = _create_doctor(db)
    make_appointment(doctor, make_patient(), datetime(2030, 1, 7, 9, 0))

    accounts.delete_doctor(db, doctor.id)

    assert doctor_store.find_by_id(db, doctor.id) is None
    assert db.query(Appointment).count() == 0


def test_register_patient_rejects_duplicate_email(db) -> None:
    accounts.register_patient(db, name='Alex Doe', email='alex@example.com', password='secret-pass')

    with pytest.raises(DuplicateAccountError):
        accounts.register_patient(db, name='Alex Two', email='alex@example.com', password='secret-pass')


def test_authenticate_each_role(db, make_admin, make_doctor, make_patient) -> None:
    admin = make_admin(username='root')
    doctor = make_doctor()
    patient = make_patient()

    assert accounts.authenticate(db, Role.ADMIN, 'root', 'secret-pass') == admin
    assert accounts.authenticate(db, Role.DOCTOR, doctor.email, 'secret-pass') == doctor
    assert accounts.authenticate(db, Role.PATIENT, patient.email, 'secret-pass') == patient


def test_authenticate_rejects_wrong_password_or_unknown_account(db, make_patient) -> None:
    patient = make_patient()

    assert accounts.authenticate(db, Role.PATIENT, patient.email, 'wrong') is None
    assert accounts.authenticate(db, Role.DOCTOR, patient.email, 'secret-pass') is None
