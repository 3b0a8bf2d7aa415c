"""Doctor store queries."""

from sqlalchemy import func
from sqlalchemy.orm import Session

from clinic.models.doctor import Doctor


def _name_contains(text: str):
    return Doctor.name.icontains(text.strip(), autoescape=True)


def _specialty_equals(specialty: str):
    return func.lower(Doctor.specialty) == specialty.strip().lower()


def find_by_id(db: Session, doctor_id: int) -> Doctor | None:
    return db.get(Doctor, doctor_id)


def find_by_email(db: Session, email: str) -> Doctor | None:
    return db.query(Doctor).filter(Doctor.email == email).first()


def find_all(db: Session) -> list[Doctor]:
    return db.query(Doctor).order_by(Doctor.id.asc()).all()


def find_by_name_substring(db: Session, text: str) -> list[Doctor]:
    return db.query(Doctor).filter(_name_contains(text)).order_by(Doctor.id.asc()).all()


def find_by_specialty(db: Session, specialty: str) -> list[Doctor]:
    return db.query(Doctor).filter(_specialty_equals(specialty)).order_by(Doctor.id.asc()).all()


def find_by_name_substring_and_specialty(db: Session, text: str, specialty: str) -> list[Doctor]:
    return db.query(Doctor).filter(
        _name_contains(text),
        _specialty_equals(specialty),
    ).order_by(Doctor.id.asc()).all()
