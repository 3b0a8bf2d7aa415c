"""Appointment store queries."""

from datetime import datetime

from sqlalchemy.orm import Session, joinedload

from clinic.models.appointment import Appointment
from clinic.models.appointment_status import AppointmentStatus
from clinic.models.doctor import Doctor
from clinic.models.patient import Patient


def _with_parties(db: Session):
    return db.query(Appointment).options(
        joinedload(Appointment.doctor),
        joinedload(Appointment.patient),
    )


def find_by_id(db: Session, appointment_id: int) -> Appointment | None:
    return db.get(Appointment, appointment_id)


def find_by_doctor_id_and_time_range(
    db: Session,
    doctor_id: int,
    start: datetime,
    end: datetime,
) -> list[Appointment]:
    return db.query(Appointment).filter(
        Appointment.doctor_id == doctor_id,
        Appointment.appointment_time >= start,
        Appointment.appointment_time <= end,
    ).order_by(Appointment.appointment_time.asc()).all()


def find_by_doctor_id_and_time(db: Session, doctor_id: int, appointment_time: datetime) -> Appointment | None:
    return db.query(Appointment).filter(
        Appointment.doctor_id == doctor_id,
        Appointment.appointment_time == appointment_time,
    ).first()


def find_by_doctor_id_and_time_range_and_patient_name(
    db: Session,
    doctor_id: int,
    start: datetime,
    end: datetime,
    patient_name: str,
) -> list[Appointment]:
    return _with_parties(db).join(Appointment.patient).filter(
        Appointment.doctor_id == doctor_id,
        Appointment.appointment_time >= start,
        Appointment.appointment_time <= end,
        Patient.name.icontains(patient_name.strip(), autoescape=True),
    ).order_by(Appointment.appointment_time.asc()).all()


def find_by_patient_id(db: Session, patient_id: int) -> list[Appointment]:
    return _with_parties(db).filter(
        Appointment.patient_id == patient_id,
    ).order_by(Appointment.appointment_time.asc()).all()


def find_by_doctor_name_substring_and_patient_id(db: Session, text: str, patient_id: int) -> list[Appointment]:
    return _with_parties(db).join(Appointment.doctor).filter(
        Appointment.patient_id == patient_id,
        Doctor.name.icontains(text.strip(), autoescape=True),
    ).order_by(Appointment.appointment_time.asc()).all()


def find_by_doctor_name_substring_and_patient_id_and_status(
    db: Session,
    text: str,
    patient_id: int,
    status: AppointmentStatus,
) -> list[Appointment]:
    return _with_parties(db).join(Appointment.doctor).filter(
        Appointment.patient_id == patient_id,
        Appointment.status == int(status),
        Doctor.name.icontains(text.strip(), autoescape=True),
    ).order_by(Appointment.appointment_time.asc()).all()


def find_due_for_past(db: Session, now: datetime) -> list[Appointment]:
    return db.query(Appointment).filter(
        Appointment.status == int(AppointmentStatus.FUTURE),
        Appointment.appointment_time < now,
    ).all()


def delete_all_by_doctor_id(db: Session, doctor_id: int) -> int:
    return db.query(Appointment).filter(Appointment.doctor_id == doctor_id).delete(synchronize_session=False)
