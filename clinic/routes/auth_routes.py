from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, field_validator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from clinic.auth import jwt_handler
from clinic.auth.dependencies import Principal, get_current_principal
from clinic.database import get_db
from clinic.models.roles import Role
from clinic.routes.common import database_unavailable
from clinic.services import accounts

router = APIRouter(tags=['auth'])


class LoginRequest(BaseModel):
    identifier: str
    password: str

    @field_validator('identifier')
    @classmethod
    def validate_identifier(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Identifier is required.')
        return normalized


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = 'bearer'
    role: Role


def login_as(role: Role, data: LoginRequest, db: Session) -> TokenResponse:
    identifier = data.identifier if role is Role.ADMIN else data.identifier.lower()

    try:
        account = accounts.authenticate(db, role, identifier, data.password)
    except SQLAlchemyError as exc:
        raise database_unavailable(exc) from exc

    if account is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail='Invalid credentials.',
        )

    token = jwt_handler.create_access_token(subject=str(account.id), role=role)
    return TokenResponse(access_token=token, role=role)


@router.post('/admin/login', response_model=TokenResponse)
def admin_login(data: LoginRequest, db: Session = Depends(get_db)):
    return login_as(Role.ADMIN, data, db)


@router.post('/doctor/login', response_model=TokenResponse)
def doctor_login(data: LoginRequest, db: Session = Depends(get_db)):
    return login_as(Role.DOCTOR, data, db)


@router.post('/patient/login', response_model=TokenResponse)
def patient_login(data: LoginRequest, db: Session = Depends(get_db)):
    return login_as(Role.PATIENT, data, db)


@router.get('/me')
def me(principal: Principal = Depends(get_current_principal)):
    return {'id': principal.id, 'role': principal.role.value}
