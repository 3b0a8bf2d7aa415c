import logging

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from clinic.database import ensure_appointment_schema
from clinic.services.exceptions import (
    AppointmentNotFoundError,
    ClinicError,
    DoctorNotFoundError,
    DuplicateAccountError,
    InvalidAppointmentTimeError,
    InvalidConditionError,
    InvalidTimePeriodError,
    NotAppointmentOwnerError,
    PatientNotFoundError,
    SlotConflictError,
)

logger = logging.getLogger(__name__)

DATABASE_UNAVAILABLE_DETAIL = 'Database unavailable. Verify DATABASE_URL and database credentials.'

ERROR_STATUS_CODES = {
    InvalidConditionError: status.HTTP_400_BAD_REQUEST,
    InvalidTimePeriodError: status.HTTP_400_BAD_REQUEST,
    InvalidAppointmentTimeError: status.HTTP_400_BAD_REQUEST,
    NotAppointmentOwnerError: status.HTTP_403_FORBIDDEN,
    DoctorNotFoundError: status.HTTP_404_NOT_FOUND,
    PatientNotFoundError: status.HTTP_404_NOT_FOUND,
    AppointmentNotFoundError: status.HTTP_404_NOT_FOUND,
    SlotConflictError: status.HTTP_409_CONFLICT,
    DuplicateAccountError: status.HTTP_409_CONFLICT,
}


def ensure_database_ready() -> None:
    try:
        ensure_appointment_schema()
    except SQLAlchemyError as exc:
        logger.exception('Appointment schema check failed.')
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=DATABASE_UNAVAILABLE_DETAIL,
        ) from exc


def http_error(exc: ClinicError) -> HTTPException:
    status_code = ERROR_STATUS_CODES.get(type(exc), status.HTTP_400_BAD_REQUEST)
    return HTTPException(status_code=status_code, detail=str(exc))


def database_unavailable(exc: SQLAlchemyError) -> HTTPException:
    logger.exception('Database query failed: %s', exc)
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=DATABASE_UNAVAILABLE_DETAIL,
    )
