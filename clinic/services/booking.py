"""Appointment booking, rescheduling, cancellation and the past-status sweep."""

import logging
from datetime import date, datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from clinic.models.appointment import Appointment
from clinic.models.appointment_status import AppointmentStatus
from clinic.models.doctor import Doctor
from clinic.repositories import appointments as appointment_store
from clinic.repositories import doctors as doctor_store
from clinic.repositories import patients as patient_store
from clinic.services.availability import day_bounds, is_configured_slot
from clinic.services.exceptions import (
    AppointmentNotFoundError,
    DoctorNotFoundError,
    InvalidAppointmentTimeError,
    NotAppointmentOwnerError,
    PatientNotFoundError,
    SlotConflictError,
)
from clinic.services.patient_filters import AppointmentSummary, summarize

logger = logging.getLogger(__name__)


def normalize_appointment_time(value: datetime) -> datetime:
    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return value.replace(second=0, microsecond=0)


def validate_requested_slot(doctor: Doctor, appointment_time: datetime, now: datetime) -> None:
    if appointment_time <= now:
        raise InvalidAppointmentTimeError('Appointments must be scheduled in the future.')

    if not is_configured_slot(doctor.available_times, appointment_time):
        raise InvalidAppointmentTimeError("Requested time is not one of the doctor's available slots.")


def _get_doctor(db: Session, doctor_id: int) -> Doctor:
    doctor = doctor_store.find_by_id(db, doctor_id)
    if doctor is None:
        raise DoctorNotFoundError(doctor_id)
    return doctor


def _get_owned_appointment(db: Session, patient_id: int, appointment_id: int) -> Appointment:
    appointment = appointment_store.find_by_id(db, appointment_id)
    if appointment is None:
        raise AppointmentNotFoundError(appointment_id)
    if appointment.patient_id != patient_id:
        raise NotAppointmentOwnerError(appointment_id)
    return appointment


def _commit_slot(db: Session, appointment: Appointment) -> None:
    # The (doctor_id, appointment_time) unique constraint settles concurrent bookings.
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise SlotConflictError() from exc
    db.refresh(appointment)


def book_appointment(
    db: Session,
    patient_id: int,
    doctor_id: int,
    appointment_time: datetime,
    now: datetime | None = None,
) -> Appointment:
    if patient_store.find_by_id(db, patient_id) is None:
        raise PatientNotFoundError(patient_id)

    doctor = _get_doctor(db, doctor_id)
    start_time = normalize_appointment_time(appointment_time)
    validate_requested_slot(doctor, start_time, now or datetime.now())

    if appointment_store.find_by_doctor_id_and_time(db, doctor_id, start_time) is not None:
        raise SlotConflictError()

    appointment = Appointment(
        doctor_id=doctor_id,
        patient_id=patient_id,
        appointment_time=start_time,
        status=AppointmentStatus.FUTURE.value,
    )
    db.add(appointment)
    _commit_slot(db, appointment)

    logger.info('Booked appointment %s for patient %s with doctor %s at %s.', appointment.id, patient_id, doctor_id, start_time)
    return appointment


def reschedule_appointment(
    db: Session,
    patient_id: int,
    appointment_id: int,
    doctor_id: int,
    appointment_time: datetime,
    now: datetime | None = None,
) -> Appointment:
    appointment = _get_owned_appointment(db, patient_id, appointment_id)
    doctor = _get_doctor(db, doctor_id)
    start_time = normalize_appointment_time(appointment_time)
    validate_requested_slot(doctor, start_time, now or datetime.now())

    existing = appointment_store.find_by_doctor_id_and_time(db, doctor_id, start_time)
    if existing is not None and existing.id != appointment.id:
        raise SlotConflictError()

    appointment.doctor_id = doctor_id
    appointment.appointment_time = start_time
    appointment.status = AppointmentStatus.FUTURE.value
    _commit_slot(db, appointment)

    logger.info('Rescheduled appointment %s to doctor %s at %s.', appointment.id, doctor_id, start_time)
    return appointment


def cancel_appointment(db: Session, patient_id: int, appointment_id: int) -> None:
    appointment = _get_owned_appointment(db, patient_id, appointment_id)

    db.delete(appointment)
    db.commit()

    logger.info('Cancelled appointment %s for patient %s.', appointment_id, patient_id)


def list_doctor_appointments(
    db: Session,
    doctor_id: int,
    day: date,
    patient_name: str | None = None,
) -> list[AppointmentSummary]:
    start_of_day, end_of_day = day_bounds(day)

    if patient_name and patient_name.strip():
        appointments = appointment_store.find_by_doctor_id_and_time_range_and_patient_name(
            db,
            doctor_id,
            start_of_day,
            end_of_day,
            patient_name,
        )
    else:
        appointments = appointment_store.find_by_doctor_id_and_time_range(db, doctor_id, start_of_day, end_of_day)

    return summarize(appointments)


def mark_past_appointments(db: Session, now: datetime | None = None) -> int:
    due = appointment_store.find_due_for_past(db, now or datetime.now())
    for appointment in due:
        appointment.status = AppointmentStatus.PAST.value
    db.commit()

    logger.info('Marked %d appointments as past.', len(due))
    return len(due)
