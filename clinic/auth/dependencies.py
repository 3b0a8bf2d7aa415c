from typing import NamedTuple

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from clinic.auth import jwt_handler
from clinic.database import get_db
from clinic.models.admin import Admin
from clinic.models.doctor import Doctor
from clinic.models.patient import Patient
from clinic.models.roles import Role

security = HTTPBearer()

ACCOUNT_MODELS = {
    Role.ADMIN: Admin,
    Role.DOCTOR: Doctor,
    Role.PATIENT: Patient,
}


class Principal(NamedTuple):
    role: Role
    account: Admin | Doctor | Patient

    @property
    def id(self) -> int:
        return self.account.id


def get_current_principal(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> Principal:
    token = credentials.credentials
    try:
        payload = jwt_handler.decode_access_token(token)
    except jwt.PyJWTError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token") from exc

    try:
        role = Role(payload.get("role"))
        account_id = int(payload.get("sub"))
    except (TypeError, ValueError) as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token subject") from exc

    account = db.get(ACCOUNT_MODELS[role], account_id)
    if account is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    return Principal(role=role, account=account)


def require_roles(*roles: Role):
    def dependency(principal: Principal = Depends(get_current_principal)) -> Principal:
        if principal.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Only {' or '.join(role.value for role in roles)} accounts can do this.",
            )
        return principal

    return dependency
