"""Doctor administration, patient sign-up and credential checks."""

import logging

from sqlalchemy.orm import Session

from clinic.models.admin import Admin
from clinic.models.doctor import Doctor
from clinic.models.patient import Patient
from clinic.models.roles import Role
from clinic.repositories import admins as admin_store
from clinic.repositories import appointments as appointment_store
from clinic.repositories import doctors as doctor_store
from clinic.repositories import patients as patient_store
from clinic.services.exceptions import DoctorNotFoundError, DuplicateAccountError

logger = logging.getLogger(__name__)


def create_doctor(
    db: Session,
    *,
    name: str,
    email: str,
    password: str,
    specialty: str,
    phone: str | None = None,
    available_times: list[str] | None = None,
) -> Doctor:
    if doctor_store.find_by_email(db, email) is not None:
        raise DuplicateAccountError(email)

    doctor = Doctor(
        name=name,
        email=email,
        specialty=specialty,
        phone=phone,
        available_times=available_times or [],
    )
    doctor.set_password(password)
    db.add(doctor)
    db.commit()
    db.refresh(doctor)

    logger.info('Created doctor %s (%s).', doctor.id, doctor.email)
    return doctor


def update_doctor(
    db: Session,
    doctor_id: int,
    *,
    name: str,
    email: str,
    specialty: str,
    phone: str | None = None,
    available_times: list[str] | None = None,
    password: str | None = None,
) -> Doctor:
    doctor = doctor_store.find_by_id(db, doctor_id)
    if doctor is None:
        raise DoctorNotFoundError(doctor_id)

    same_email = doctor_store.find_by_email(db, email)
    if same_email is not None and same_email.id != doctor.id:
        raise DuplicateAccountError(email)

    doctor.name = name
    doctor.email = email
    doctor.specialty = specialty
    doctor.phone = phone
    doctor.available_times = available_times or []
    if password:
        doctor.set_password(password)

    db.commit()
    db.refresh(doctor)

    logger.info('Updated doctor %s.', doctor.id)
    return doctor


def delete_doctor(db: Session, doctor_id: int) -> None:
    doctor = doctor_store.find_by_id(db, doctor_id)
    if doctor is None:
        raise DoctorNotFoundError(doctor_id)

    removed = appointment_store.delete_all_by_doctor_id(db, doctor_id)
    db.delete(doctor)
    db.commit()

    logger.info('Deleted doctor %s and %d of their appointments.', doctor_id, removed)


def register_patient(
    db: Session,
    *,
    name: str,
    email: str,
    password: str,
    phone: str | None = None,
    address: str | None = None,
) -> Patient:
    if patient_store.find_by_email(db, email) is not None:
        raise DuplicateAccountError(email)

    patient = Patient(name=name, email=email, phone=phone, address=address)
    patient.set_password(password)
    db.add(patient)
    db.commit()
    db.refresh(patient)

    logger.info('Registered patient %s.', patient.id)
    return patient


def authenticate(db: Session, role: Role, identifier: str, password: str) -> Admin | Doctor | Patient | None:
    if role is Role.ADMIN:
        account = admin_store.find_by_username(db, identifier)
    elif role is Role.DOCTOR:
        account = doctor_store.find_by_email(db, identifier)
    else:
        account = patient_store.find_by_email(db, identifier)

    if account is None or not account.check_password(password):
        logger.warning('Failed %s login for %s.', role.value, identifier)
        return None

    return account
