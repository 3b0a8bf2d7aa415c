from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, field_validator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from clinic.auth.dependencies import Principal, require_roles
from clinic.database import get_db
from clinic.models.roles import Role
from clinic.routes.common import database_unavailable, http_error
from clinic.services import accounts
from clinic.services.exceptions import ClinicError
from clinic.services.patient_filters import AppointmentSummary, filter_patient_appointments, get_patient_appointments

router = APIRouter(tags=['patients'])

MIN_PASSWORD_LENGTH = 6


class CreatePatientRequest(BaseModel):
    name: str
    email: str
    password: str
    phone: str | None = None
    address: str | None = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Name is required.')
        return normalized

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        normalized = value.strip().lower()
        if '@' not in normalized:
            raise ValueError('A valid email is required.')
        return normalized

    @field_validator('password')
    @classmethod
    def validate_password(cls, value: str) -> str:
        if len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters.')
        return value

    @field_validator('phone', 'address')
    @classmethod
    def validate_optional_text(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


class PatientResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: str | None = None
    address: str | None = None

    class Config:
        from_attributes = True


@router.post('', response_model=PatientResponse, status_code=status.HTTP_201_CREATED)
def create_patient(data: CreatePatientRequest, db: Session = Depends(get_db)):
    try:
        return accounts.register_patient(db, **data.model_dump())
    except ClinicError as exc:
        raise http_error(exc) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_unavailable(exc) from exc


@router.get('/me', response_model=PatientResponse)
def get_my_details(principal: Principal = Depends(require_roles(Role.PATIENT))):
    return principal.account


@router.get('/appointments', response_model=list[AppointmentSummary])
def list_my_appointments(
    principal: Principal = Depends(require_roles(Role.PATIENT)),
    db: Session = Depends(get_db),
):
    try:
        return get_patient_appointments(db, principal.id)
    except SQLAlchemyError as exc:
        raise database_unavailable(exc) from exc


@router.get('/appointments/filter', response_model=list[AppointmentSummary])
def filter_my_appointments(
    condition: str | None = Query(default=None),
    name: str | None = Query(default=None),
    principal: Principal = Depends(require_roles(Role.PATIENT)),
    db: Session = Depends(get_db),
):
    try:
        return filter_patient_appointments(db, principal.id, condition=condition, doctor_name=name)
    except ClinicError as exc:
        raise http_error(exc) from exc
    except SQLAlchemyError as exc:
        raise database_unavailable(exc) from exc
