from datetime import date, datetime

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from clinic.auth.dependencies import Principal, require_roles
from clinic.database import get_db
from clinic.models.roles import Role
from clinic.routes.common import database_unavailable, ensure_database_ready, http_error
from clinic.services import booking
from clinic.services.exceptions import ClinicError
from clinic.services.patient_filters import AppointmentSummary

router = APIRouter(tags=['appointments'])


class AppointmentRequest(BaseModel):
    doctor_id: int
    # Naive times are clinic-local. Aware times are converted to clinic-local
    # wall time before they are matched against slots and stored.
    appointment_time: datetime


@router.get('', response_model=list[AppointmentSummary])
def list_doctor_appointments(
    date: date = Query(...),
    patient_name: str | None = Query(default=None),
    principal: Principal = Depends(require_roles(Role.DOCTOR)),
    db: Session = Depends(get_db),
):
    ensure_database_ready()

    try:
        return booking.list_doctor_appointments(db, principal.id, date, patient_name=patient_name)
    except SQLAlchemyError as exc:
        raise database_unavailable(exc) from exc


@router.post('', response_model=AppointmentSummary, status_code=status.HTTP_201_CREATED)
def book_appointment(
    data: AppointmentRequest,
    principal: Principal = Depends(require_roles(Role.PATIENT)),
    db: Session = Depends(get_db),
):
    ensure_database_ready()

    try:
        appointment = booking.book_appointment(db, principal.id, data.doctor_id, data.appointment_time)
        return AppointmentSummary.from_appointment(appointment)
    except ClinicError as exc:
        raise http_error(exc) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_unavailable(exc) from exc


@router.put('/{appointment_id}', response_model=AppointmentSummary)
def reschedule_appointment(
    appointment_id: int,
    data: AppointmentRequest,
    principal: Principal = Depends(require_roles(Role.PATIENT)),
    db: Session = Depends(get_db),
):
    ensure_database_ready()

    try:
        appointment = booking.reschedule_appointment(
            db,
            principal.id,
            appointment_id,
            data.doctor_id,
            data.appointment_time,
        )
        return AppointmentSummary.from_appointment(appointment)
    except ClinicError as exc:
        raise http_error(exc) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_unavailable(exc) from exc


@router.delete('/{appointment_id}', status_code=status.HTTP_204_NO_CONTENT)
def cancel_appointment(
    appointment_id: int,
    principal: Principal = Depends(require_roles(Role.PATIENT)),
    db: Session = Depends(get_db),
):
    ensure_database_ready()

    try:
        booking.cancel_appointment(db, principal.id, appointment_id)
    except ClinicError as exc:
        raise http_error(exc) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_unavailable(exc) from exc
