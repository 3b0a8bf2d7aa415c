from datetime import date

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, field_validator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from clinic.auth.dependencies import Principal, get_current_principal, require_roles
from clinic.database import get_db
from clinic.models.roles import Role
from clinic.routes.common import database_unavailable, ensure_database_ready, http_error
from clinic.services import accounts
from clinic.services.availability import compute_availability
from clinic.services.doctor_filters import filter_doctors
from clinic.services.exceptions import ClinicError
from clinic.services.slots import is_valid_slot_label

router = APIRouter(tags=['doctors'])

MIN_PASSWORD_LENGTH = 6


class DoctorRequest(BaseModel):
    name: str
    email: str
    specialty: str
    phone: str | None = None
    available_times: list[str] = []

    @field_validator('name', 'specialty')
    @classmethod
    def validate_required_text(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Field is required.')
        return normalized

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        normalized = value.strip().lower()
        if '@' not in normalized:
            raise ValueError('A valid email is required.')
        return normalized

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, value: str | None) -> str | None:
        if value is None:
            return None
        normalized = value.strip()
        if normalized and not normalized.isdigit():
            raise ValueError('Phone number must contain digits only.')
        return normalized or None

    @field_validator('available_times')
    @classmethod
    def validate_available_times(cls, value: list[str]) -> list[str]:
        normalized = [label.strip() for label in value]
        invalid = [label for label in normalized if not is_valid_slot_label(label)]
        if invalid:
            raise ValueError(f"Slot labels must use HH:MM format: {', '.join(invalid)}")
        return normalized


class CreateDoctorRequest(DoctorRequest):
    password: str

    @field_validator('password')
    @classmethod
    def validate_password(cls, value: str) -> str:
        if len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters.')
        return value


class UpdateDoctorRequest(DoctorRequest):
    password: str | None = None


class DoctorResponse(BaseModel):
    id: int
    name: str
    email: str
    specialty: str
    phone: str | None = None
    available_times: list[str]

    class Config:
        from_attributes = True


class AvailabilityResponse(BaseModel):
    doctor_id: int
    date: date
    available_times: list[str]


@router.get('', response_model=list[DoctorResponse])
def list_doctors(db: Session = Depends(get_db)):
    try:
        return filter_doctors(db)
    except SQLAlchemyError as exc:
        raise database_unavailable(exc) from exc


@router.get('/filter', response_model=list[DoctorResponse])
def filter_doctor_directory(
    name: str | None = Query(default=None),
    time: str | None = Query(default=None),
    specialty: str | None = Query(default=None),
    db: Session = Depends(get_db),
):
    try:
        return filter_doctors(db, name=name, specialty=specialty, time_period=time)
    except ClinicError as exc:
        raise http_error(exc) from exc
    except SQLAlchemyError as exc:
        raise database_unavailable(exc) from exc


@router.get('/{doctor_id}/availability', response_model=AvailabilityResponse)
def get_doctor_availability(
    doctor_id: int,
    date: date = Query(...),
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    del principal
    ensure_database_ready()

    try:
        return AvailabilityResponse(
            doctor_id=doctor_id,
            date=date,
            available_times=compute_availability(db, doctor_id, date),
        )
    except SQLAlchemyError as exc:
        raise database_unavailable(exc) from exc


@router.post('', response_model=DoctorResponse, status_code=status.HTTP_201_CREATED)
def create_doctor(
    data: CreateDoctorRequest,
    principal: Principal = Depends(require_roles(Role.ADMIN)),
    db: Session = Depends(get_db),
):
    del principal

    try:
        return accounts.create_doctor(db, **data.model_dump())
    except ClinicError as exc:
        raise http_error(exc) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_unavailable(exc) from exc


@router.put('/{doctor_id}', response_model=DoctorResponse)
def update_doctor(
    doctor_id: int,
    data: UpdateDoctorRequest,
    principal: Principal = Depends(require_roles(Role.ADMIN)),
    db: Session = Depends(get_db),
):
    del principal

    try:
        return accounts.update_doctor(db, doctor_id, **data.model_dump())
    except ClinicError as exc:
        raise http_error(exc) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_unavailable(exc) from exc


@router.delete('/{doctor_id}', status_code=status.HTTP_204_NO_CONTENT)
def delete_doctor(
    doctor_id: int,
    principal: Principal = Depends(require_roles(Role.ADMIN)),
    db: Session = Depends(get_db),
):
    del principal
    ensure_database_ready()

    try:
        accounts.delete_doctor(db, doctor_id)
    except ClinicError as exc:
        raise http_error(exc) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_unavailable(exc) from exc
