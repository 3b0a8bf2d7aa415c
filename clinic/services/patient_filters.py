"""Patient appointment history, optionally narrowed by status and doctor name."""

import logging
from datetime import datetime

from pydantic import BaseModel
from sqlalchemy.orm import Session

from clinic.models.appointment import Appointment
from clinic.models.appointment_status import AppointmentStatus
from clinic.repositories import appointments as appointment_store
from clinic.services.exceptions import InvalidConditionError

logger = logging.getLogger(__name__)

CONDITION_STATUSES = {
    'past': AppointmentStatus.PAST,
    'future': AppointmentStatus.FUTURE,
}


class AppointmentSummary(BaseModel):
    """Appointment joined with the doctor and patient fields a client needs, nothing more."""

    id: int
    doctor_id: int
    doctor_name: str
    patient_id: int
    patient_name: str
    patient_email: str
    patient_phone: str | None = None
    patient_address: str | None = None
    appointment_time: datetime
    status: AppointmentStatus

    @classmethod
    def from_appointment(cls, appointment: Appointment) -> 'AppointmentSummary':
        return cls(
            id=appointment.id,
            doctor_id=appointment.doctor.id,
            doctor_name=appointment.doctor.name,
            patient_id=appointment.patient.id,
            patient_name=appointment.patient.name,
            patient_email=appointment.patient.email,
            patient_phone=appointment.patient.phone,
            patient_address=appointment.patient.address,
            appointment_time=appointment.appointment_time,
            status=AppointmentStatus(appointment.status),
        )


def resolve_status(condition: str | None) -> AppointmentStatus | None:
    if condition is None or not condition.strip():
        return None

    status = CONDITION_STATUSES.get(condition.strip().lower())
    if status is None:
        raise InvalidConditionError(condition)

    return status


def summarize(appointments: list[Appointment]) -> list[AppointmentSummary]:
    return [AppointmentSummary.from_appointment(appointment) for appointment in appointments]


def get_patient_appointments(db: Session, patient_id: int) -> list[AppointmentSummary]:
    return summarize(appointment_store.find_by_patient_id(db, patient_id))


def filter_patient_appointments(
    db: Session,
    patient_id: int,
    condition: str | None = None,
    doctor_name: str | None = None,
) -> list[AppointmentSummary]:
    status = resolve_status(condition)
    doctor_name = doctor_name.strip() if doctor_name else None

    if status is not None and doctor_name:
        appointments = appointment_store.find_by_doctor_name_substring_and_patient_id_and_status(
            db,
            doctor_name,
            patient_id,
            status,
        )
    elif status is not None:
        appointments = [
            appointment
            for appointment in appointment_store.find_by_patient_id(db, patient_id)
            if appointment.status == status
        ]
    elif doctor_name:
        appointments = appointment_store.find_by_doctor_name_substring_and_patient_id(db, doctor_name, patient_id)
    else:
        appointments = appointment_store.find_by_patient_id(db, patient_id)

    logger.debug(
        'Patient %s history filter (status=%s, doctor=%r) matched %d appointments.',
        patient_id,
        status,
        doctor_name,
        len(appointments),
    )
    return summarize(appointments)
