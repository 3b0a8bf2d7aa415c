"""Admin store queries."""

from sqlalchemy.orm import Session

from clinic.models.admin import Admin


def find_by_username(db: Session, username: str) -> Admin | None:
    return db.query(Admin).filter(Admin.username == username).first()
