import pytest
from fastapi import HTTPException
from pydantic import ValidationError

from clinic.auth import jwt_handler
from clinic.models.roles import Role
from clinic.routes.auth_routes import LoginRequest, admin_login, doctor_login, patient_login


def test_login_request_requires_identifier() -> None:
    with pytest.raises(ValidationError):
        LoginRequest(identifier='   ', password='secret-pass')


def test_admin_login_returns_admin_token(db, make_admin) -> None:
    admin = make_admin(username='root')

    response = admin_login(LoginRequest(identifier='root', password='secret-pass'), db=db)
    payload = jwt_handler.decode_access_token(response.access_token)

    assert response.role is Role.ADMIN
    assert response.token_type == 'bearer'
    assert payload['sub'] == str(admin.id)


def test_doctor_login_normalizes_email(db, make_doctor) -> None:
    doctor = make_doctor()

    response = doctor_login(LoginRequest(identifier=f'  {doctor.email.upper()} ', password='secret-pass'), db=db)

    assert jwt_handler.decode_access_token(response.access_token)['role'] == 'doctor'


def test_patient_login_rejects_bad_password(db, make_patient) -> None:
    patient = make_patient()

    with pytest.raises(HTTPException) as exception_info:
        patient_login(LoginRequest(identifier=patient.email, password='nope'), db=db)

    assert exception_info.value.status_code == 401
    assert exception_info.value.detail == 'Invalid credentials.'
